"""Hatch fills: parallel lines clipped to a shape.

A square with side equal to the diagonal of the shape's bounding box is
centred on the shape, so it covers the shape at any rotation. Horizontal lines
every ``spacing`` units across the square are rotated by ``angle`` around its
center and clipped to the shape; a line is kept only when it crosses the
outline exactly twice.

:class:`OverflowHatch` clips the unrotated rows first and rotates the clipped
segments afterwards, so its lines can run past the outline.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.circle import Circle
    >>> from raysketch.geometry.hatch import HatchFill
    >>> hatch = HatchFill(Circle(Vector(50, 50), 40), angle=0.0, spacing=10.0)
    >>> len(hatch.lines()) > 0
    True
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from raysketch.core.vector import Vector
from raysketch.geometry.intersection import Shape, intersections
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import Rectangle


def _shape_center(shape: Shape) -> Vector:
    center = getattr(shape, "center", None)
    if isinstance(center, Vector):
        return center
    return shape.bounding_box.center


@dataclass(frozen=True)
class HatchFill:
    """Parallel hatch lines across a shape.

    Attributes:
        shape: Shape to fill. Must not be a Line.
        angle: Rotation of the hatch lines in radians.
        spacing: Distance between neighbouring lines, positive.
    """

    shape: Shape
    angle: float = 0.0
    spacing: float = 5.0

    def __post_init__(self) -> None:
        if self.spacing <= 0:
            raise ValueError(f"Hatch spacing must be positive, got {self.spacing}")
        if isinstance(self.shape, Line):
            raise ValueError("Cannot hatch a Line")

    def covering_box(self) -> Rectangle:
        """Square around the shape large enough for any hatch angle."""
        bounds = self.shape.bounding_box
        side = math.hypot(bounds.width, bounds.height)
        return Rectangle.from_center(_shape_center(self.shape), side, side)

    def _rows(self, box: Rectangle) -> np.ndarray:
        return np.arange(box.min_y, box.max_y + self.spacing / 2, self.spacing)

    def full_lines(self) -> list[Line]:
        """Unclipped hatch lines spanning the covering box."""
        box = self.covering_box()
        pivot = box.center
        lines = []
        for y in self._rows(box):
            start = Vector(box.min_x, float(y)).rotated_around(self.angle, pivot)
            end = Vector(box.max_x, float(y)).rotated_around(self.angle, pivot)
            lines.append(Line(start, end))
        return lines

    def lines(self) -> list[Line]:
        """Hatch lines clipped to the shape outline."""
        clipped = []
        for full_line in self.full_lines():
            points = intersections(self.shape, full_line)
            if len(points) != 2:
                continue
            first, second = sorted(points, key=full_line.start.dist)
            clipped.append(Line(first, second))
        return clipped


# Extra width of the overflow box so the end rows still cross the outline
OVERFLOW_MARGIN = 10.0


class OverflowHatch(HatchFill):
    """Hatch lines clipped before rotation, so they may overflow the shape.

    The horizontal rows are clipped to the unrotated shape and the resulting
    segments are then rotated by ``angle`` around the box center. For shapes
    that are not rotationally symmetric the segments stick out past the
    outline, giving a looser, sketchier fill than :class:`HatchFill`.
    """

    def covering_box(self) -> Rectangle:
        """The shape's bounding box, slightly wider."""
        bounds = self.shape.bounding_box
        return Rectangle.from_center(
            _shape_center(self.shape), bounds.width + OVERFLOW_MARGIN, bounds.height
        )

    def full_lines(self) -> list[Line]:
        """Unrotated rows spanning the covering box."""
        box = self.covering_box()
        return [
            Line(Vector(box.min_x, float(y)), Vector(box.max_x, float(y)))
            for y in self._rows(box)
        ]

    def lines(self) -> list[Line]:
        pivot = self.covering_box().center
        return [
            Line(
                line.start.rotated_around(self.angle, pivot),
                line.end.rotated_around(self.angle, pivot),
            )
            for line in super().lines()
        ]
