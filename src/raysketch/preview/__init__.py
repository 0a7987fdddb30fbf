"""Drawing contexts, styles, display and export.

The SVG and export modules are imported from their own submodules so that
geometry-only users do not pull in Taichi or svgwrite.
"""

from raysketch.preview.context import DrawingContext, draw_shape
from raysketch.preview.display import (
    ToneMapMethod,
    apply_gamma,
    process_image_for_display,
    show_comparison,
    show_preview,
    tone_map_exposure,
    tone_map_reinhard,
)
from raysketch.preview.style import (
    BLACK,
    BLUE,
    DEFAULT_STYLE,
    GREEN,
    RED,
    WHITE,
    Color,
    DrawingStyle,
    color_to_hex,
    parse_color,
)

__all__ = [
    "BLACK",
    "BLUE",
    "Color",
    "DEFAULT_STYLE",
    "DrawingContext",
    "DrawingStyle",
    "GREEN",
    "RED",
    "ToneMapMethod",
    "WHITE",
    "apply_gamma",
    "color_to_hex",
    "draw_shape",
    "parse_color",
    "process_image_for_display",
    "show_comparison",
    "show_preview",
    "tone_map_exposure",
    "tone_map_reinhard",
]
