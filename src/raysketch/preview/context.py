"""Drawing context protocol and shape dispatch.

A drawing context is passed explicitly to every draw call; there is no
process-wide current context. Both the raster canvas and the SVG context
implement this protocol.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath
from raysketch.geometry.circle import Circle
from raysketch.geometry.intersection import Shape
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import Rectangle
from raysketch.preview.style import DEFAULT_STYLE, DrawingStyle


class DrawingContext(Protocol):
    """Target that geometry is drawn into."""

    width: int
    height: int

    def line(self, line: Line, style: DrawingStyle = DEFAULT_STYLE) -> None: ...

    def lines(self, lines: Iterable[Line], style: DrawingStyle = DEFAULT_STYLE) -> None: ...

    def circle(self, circle: Circle, style: DrawingStyle = DEFAULT_STYLE) -> None: ...

    def rectangle(self, rect: Rectangle, style: DrawingStyle = DEFAULT_STYLE) -> None: ...

    def path(self, path: BezierPath, style: DrawingStyle = DEFAULT_STYLE) -> None: ...

    def point(self, point: Vector, style: DrawingStyle = DEFAULT_STYLE) -> None: ...


def draw_shape(
    context: DrawingContext, shape: Shape, style: DrawingStyle = DEFAULT_STYLE
) -> None:
    """Draw any supported shape with the matching context call.

    Raises:
        TypeError: If ``shape`` is not a supported shape.
    """
    if isinstance(shape, Line):
        context.line(shape, style)
    elif isinstance(shape, Circle):
        context.circle(shape, style)
    elif isinstance(shape, Rectangle):
        context.rectangle(shape, style)
    elif isinstance(shape, BezierPath):
        context.path(shape, style)
    elif isinstance(shape, Vector):
        context.point(shape, style)
    else:
        raise TypeError(f"Cannot draw {type(shape).__name__}")
