"""Line segment primitive with ray intersection.

A Line is an immutable pair of end points. Its normal is the unit vector
perpendicular to ``end - start`` (rotated a quarter turn counter-clockwise in
maths orientation), which Fresnel lines use as their collimation axis.

The ray-segment test solves the ray ``O + t D`` against the segment
``A + s (B - A)`` with 2D cross products:

    v1 = O - A, v2 = B - A, v3 = perpendicular(D)
    t = cross(v2, v1) / (v2 . v3)
    s = (v1 . v3) / (v2 . v3)

and reports a hit when ``t > 0`` and ``0 <= s <= 1``.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.line import Line
    >>> line = Line.from_coords(0, 0, 100, 100)
    >>> line.ray_hit(Vector(0, 100), Vector(1, -1))
    Vector(x=50.0, y=50.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from raysketch.config import DEFAULT_HIT_PRECISION, EPSILON
from raysketch.core.vector import Vector, lerp

if TYPE_CHECKING:
    from raysketch.geometry.rectangle import Rectangle


@dataclass(frozen=True)
class Line:
    """A straight segment from ``start`` to ``end``.

    Attributes:
        start: First end point.
        end: Second end point.
    """

    start: Vector
    end: Vector

    @classmethod
    def from_coords(cls, x1: float, y1: float, x2: float, y2: float) -> Line:
        return cls(Vector(x1, y1), Vector(x2, y2))

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def delta(self) -> Vector:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.start.dist(self.end)

    @property
    def center(self) -> Vector:
        """Midpoint of the segment."""
        return lerp(0.5, self.start, self.end)

    @property
    def normal(self) -> Vector:
        """Unit vector perpendicular to the segment, ``(-dy, dx)``."""
        return self.delta.normalized().perpendicular()

    @property
    def slope(self) -> float | None:
        """Rise over run, or None for a vertical line."""
        dx = self.end.x - self.start.x
        if abs(dx) < EPSILON:
            return None
        return (self.end.y - self.start.y) / dx

    @property
    def angle(self) -> float:
        """Heading of ``end - start`` in radians."""
        return self.delta.heading

    @property
    def bounding_box(self) -> Rectangle:
        from raysketch.geometry.rectangle import Rectangle

        return Rectangle(
            x=min(self.start.x, self.end.x),
            y=min(self.start.y, self.end.y),
            width=abs(self.end.x - self.start.x),
            height=abs(self.end.y - self.start.y),
        )

    def lerp(self, percent: float) -> Vector:
        return lerp(percent, self.start, self.end)

    def point_at_distance(self, distance: float) -> Vector:
        """Point ``distance`` units from ``start`` toward ``end``."""
        return self.start + self.delta.normalized() * distance

    def contains(self, point: Vector, tolerance: float = 1e-6) -> bool:
        """Whether ``point`` lies on the segment."""
        detour = self.start.dist(point) + point.dist(self.end) - self.length
        return abs(detour) <= tolerance

    def reversed(self) -> Line:
        return Line(self.end, self.start)

    def surface_normal(self, point: Vector) -> Vector:
        """Normal at a point on the segment; the same everywhere."""
        return self.normal

    # =========================================================================
    # Ray intersection
    # =========================================================================

    def ray_hit(
        self,
        origin: Vector,
        direction: Vector,
        precision: int = DEFAULT_HIT_PRECISION,
    ) -> Vector | None:
        """Nearest forward intersection of a ray with the segment.

        Args:
            origin: Ray origin.
            direction: Ray direction (need not be normalized).
            precision: Decimal places the ray parameter is rounded to before
                it must be strictly positive.

        Returns:
            The hit point, or None if the ray misses, runs parallel to the
            segment, or the segment has zero length.
        """
        v1 = origin - self.start
        v2 = self.delta
        v3 = direction.perpendicular()

        denominator = v2.dot(v3)
        if abs(denominator) < EPSILON:
            return None

        t = v2.cross_2d(v1) / denominator
        s = v1.dot(v3) / denominator

        if round(t, precision) <= 0.0:
            return None
        if s < 0.0 or s > 1.0:
            return None

        return origin + direction * t


def line_from_angle(origin: Vector, theta: float, length: float) -> Line:
    """Segment of ``length`` starting at ``origin`` at ``theta`` radians."""
    return Line(origin, origin + Vector(math.cos(theta), math.sin(theta)) * length)
