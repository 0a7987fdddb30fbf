"""SVG drawing context built on svgwrite.

Shapes map to SVG elements as follows:

    Circle     -> <circle cx cy r>
    Rectangle  -> <rect x y width height> with a rotate() transform if rotated
    Line       -> <line x1 y1 x2 y2>
    BezierPath -> <path d="M ... C ... L ...">
    Vector     -> small filled <circle>

Elements are added to the active layer (an SVG group). Coordinates are used
as-is: the SVG y axis points down, like the sketch plane.

Example:
    >>> from raysketch.geometry.circle import Circle
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.preview.svg import SVGContext
    >>> context = SVGContext(200, 200)
    >>> context.circle(Circle(Vector(100, 100), 50))
    >>> "<circle" in context.tostring()
    True
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import svgwrite

from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath
from raysketch.geometry.circle import Circle
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import Rectangle
from raysketch.preview.style import DEFAULT_STYLE, Color, DrawingStyle, color_to_hex

logger = logging.getLogger(__name__)

DEFAULT_LAYER = "shapes"


class SVGContext:
    """Drawing context that accumulates an SVG document.

    Attributes:
        width: Document width in user units.
        height: Document height in user units.
        dwg: The underlying ``svgwrite.Drawing``.
    """

    def __init__(self, width: int, height: int, background: Color | None = None):
        """Create an empty document.

        Args:
            width: Document width, positive.
            height: Document height, positive.
            background: Optional background color filling the whole page.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"SVG size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.dwg = svgwrite.Drawing(size=(width, height), profile="full")
        self.dwg.viewbox(0, 0, width, height)

        if background is not None:
            self.dwg.add(
                self.dwg.rect(insert=(0, 0), size=(width, height), fill=color_to_hex(background))
            )

        self._layers: dict[str, Any] = {}
        self._target = self.use_layer(DEFAULT_LAYER)

    # =========================================================================
    # Layers
    # =========================================================================

    def use_layer(self, name: str) -> Any:
        """Make ``name`` the active layer, creating the group if needed."""
        if name not in self._layers:
            self._layers[name] = self.dwg.add(self.dwg.g(id=f"layer-{name}"))
        self._target = self._layers[name]
        return self._target

    @property
    def layer_names(self) -> list[str]:
        return list(self._layers)

    def _style_attributes(self, style: DrawingStyle, filled: bool = True) -> dict[str, Any]:
        attributes: dict[str, Any] = {
            "stroke": style.stroke_hex,
            "stroke_width": style.stroke_width,
            "fill": style.fill_hex if filled else "none",
        }
        if style.opacity < 1.0:
            attributes["opacity"] = style.opacity
        return attributes

    # =========================================================================
    # Drawing
    # =========================================================================

    def line(self, line: Line, style: DrawingStyle = DEFAULT_STYLE) -> None:
        self._target.add(
            self.dwg.line(
                start=line.start.to_tuple(),
                end=line.end.to_tuple(),
                **self._style_attributes(style, filled=False),
            )
        )

    def lines(self, lines: Iterable[Line], style: DrawingStyle = DEFAULT_STYLE) -> None:
        for line in lines:
            self.line(line, style)

    def circle(self, circle: Circle, style: DrawingStyle = DEFAULT_STYLE) -> None:
        self._target.add(
            self.dwg.circle(
                center=circle.center.to_tuple(),
                r=circle.radius,
                **self._style_attributes(style),
            )
        )

    def rectangle(self, rect: Rectangle, style: DrawingStyle = DEFAULT_STYLE) -> None:
        attributes = self._style_attributes(style)
        if rect.is_rotated:
            center = rect.center
            attributes["transform"] = (
                f"rotate({math.degrees(rect.rotation)} {center.x} {center.y})"
            )
        self._target.add(
            self.dwg.rect(insert=(rect.x, rect.y), size=(rect.width, rect.height), **attributes)
        )

    def path(self, path: BezierPath, style: DrawingStyle = DEFAULT_STYLE) -> None:
        self._target.add(self.dwg.path(d=path.to_svg_d(), **self._style_attributes(style)))

    def point(self, point: Vector, style: DrawingStyle = DEFAULT_STYLE) -> None:
        """Draw a dot of radius ``stroke_width`` filled with the stroke color."""
        color = style.stroke_hex if style.stroke is not None else style.fill_hex
        attributes: dict[str, Any] = {"fill": color, "stroke": "none"}
        if style.opacity < 1.0:
            attributes["opacity"] = style.opacity
        self._target.add(
            self.dwg.circle(center=point.to_tuple(), r=max(style.stroke_width, 0.5), **attributes)
        )

    # =========================================================================
    # Output
    # =========================================================================

    def tostring(self) -> str:
        return self.dwg.tostring()

    def save(self, filepath: str | Path) -> Path:
        """Write the document to ``filepath`` and return the path."""
        path = Path(filepath)
        self.dwg.saveas(str(path))
        logger.info("Saved SVG %s (%dx%d)", path, self.width, self.height)
        return path
