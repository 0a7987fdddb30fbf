"""Drawing styles shared by every drawing context.

Colors are RGB tuples of floats in [0, 1], the same convention the raster
canvas stores. Named and hex colors are resolved through Matplotlib.

Example:
    >>> from raysketch.preview.style import DrawingStyle, color_to_hex, parse_color
    >>> color_to_hex(parse_color("red"))
    '#ff0000'
    >>> DrawingStyle(stroke=(0.0, 1.0, 0.0), opacity=0.33).stroke_hex
    '#00ff00'
"""

from __future__ import annotations

from dataclasses import dataclass, replace

# RGB triple, each component in [0, 1]
Color = tuple[float, float, float]

BLACK: Color = (0.0, 0.0, 0.0)
WHITE: Color = (1.0, 1.0, 1.0)
RED: Color = (1.0, 0.0, 0.0)
GREEN: Color = (0.0, 1.0, 0.0)
BLUE: Color = (0.0, 0.0, 1.0)


def parse_color(value: str | tuple[float, ...]) -> Color:
    """Resolve a color name, hex string or RGB(A) tuple to an RGB tuple.

    Raises:
        ValueError: If the value is not a recognised color.
    """
    from matplotlib.colors import to_rgb

    try:
        r, g, b = to_rgb(value)
    except ValueError as exc:
        raise ValueError(f"Unknown color: {value!r}") from exc
    return (float(r), float(g), float(b))


def color_to_hex(color: Color) -> str:
    """Format an RGB float tuple as ``#rrggbb``."""
    channels = (round(min(max(c, 0.0), 1.0) * 255) for c in color)
    return "#" + "".join(f"{c:02x}" for c in channels)


@dataclass(frozen=True)
class DrawingStyle:
    """Stroke and fill settings for one draw call.

    Attributes:
        stroke: Outline color, or None for no outline.
        fill: Fill color, or None for no fill.
        stroke_width: Outline width in canvas units.
        opacity: Opacity in [0, 1] applied to stroke and fill.
    """

    stroke: Color | None = BLACK
    fill: Color | None = None
    stroke_width: float = 1.0
    opacity: float = 1.0

    def __post_init__(self) -> None:
        if self.stroke_width < 0:
            raise ValueError(f"stroke_width must be non-negative, got {self.stroke_width}")
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"opacity must be in [0, 1], got {self.opacity}")

    @property
    def stroke_hex(self) -> str:
        return color_to_hex(self.stroke) if self.stroke is not None else "none"

    @property
    def fill_hex(self) -> str:
        return color_to_hex(self.fill) if self.fill is not None else "none"

    def with_stroke(self, stroke: Color | None) -> DrawingStyle:
        return replace(self, stroke=stroke)

    def with_fill(self, fill: Color | None) -> DrawingStyle:
        return replace(self, fill=fill)


DEFAULT_STYLE = DrawingStyle()
