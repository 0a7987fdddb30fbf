"""Circle primitive with robust ray-circle intersection.

The ray-circle hit solves

    |origin + t * direction - center|^2 = radius^2

as ``a t^2 + 2 h t + c = 0`` with ``a = d.d``, ``h = d.(o - c)`` and
``c = |o - c|^2 - r^2``, using the cancellation-free form of the quadratic
formula (``q = -(h + sign(h) sqrt(h^2 - ac))``, roots ``q/a`` and ``c/q``).

Arcs are approximated with cubic Beziers no wider than 90 degrees each, using
Joe Cridge's control point construction.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.circle import Circle
    >>> circle = Circle(Vector(0, 0), 10)
    >>> circle.ray_hit(Vector(-20, 0), Vector(1, 0))
    Vector(x=-10.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from raysketch.config import DEFAULT_HIT_PRECISION, EPSILON
from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath, BezierPoint

if TYPE_CHECKING:
    from raysketch.geometry.rectangle import Rectangle

# Widest arc a single cubic segment approximates
MAX_ACUTE_ARC = math.pi / 2


def _solve_quadratic_robust(
    h: float, a: float, c: float, sqrt_d: float
) -> tuple[float, float]:
    """Solve ``a t^2 + 2 h t + c = 0`` without catastrophic cancellation.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of the discriminant ``h^2 - a c``.

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-10:
        # Fall back to the standard formula (h and the discriminant both ~0)
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(frozen=True)
class Circle:
    """A circle defined by center point and radius.

    Attributes:
        center: Center of the circle.
        radius: Radius, zero or positive. A zero radius circle is degenerate
            and never intersects anything.
        radius_offset: Added to the radius for shape-shape intersections, so
            plotted strokes of a given pen width meet exactly.
    """

    center: Vector
    radius: float
    radius_offset: float = 0.0

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Circle radius must be non-negative, got {self.radius}")

    @classmethod
    def from_coords(cls, x: float, y: float, radius: float) -> Circle:
        return cls(Vector(x, y), radius)

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def offset_radius(self) -> float:
        return self.radius + self.radius_offset

    @property
    def diameter(self) -> float:
        return self.radius * 2

    @property
    def circumference(self) -> float:
        return 2 * math.pi * self.radius

    @property
    def bounding_box(self) -> Rectangle:
        from raysketch.geometry.rectangle import Rectangle

        return Rectangle.from_center(self.center, self.diameter, self.diameter)

    def point_at(self, angle: float) -> Vector:
        """Point on the circle at ``angle`` radians from the +x axis."""
        return Vector(
            self.center.x + self.radius * math.cos(angle),
            self.center.y + self.radius * math.sin(angle),
        )

    def angle_of(self, point: Vector) -> float:
        """Angle of ``point`` around the center (atan2)."""
        return (point - self.center).heading

    def contains(self, point: Vector) -> bool:
        """Whether ``point`` lies strictly inside the circle."""
        return point.dist(self.center) < self.radius

    def points_distributed(self, every_degrees: float) -> list[Vector]:
        """Perimeter points every ``every_degrees``, starting at angle zero."""
        if every_degrees <= 0:
            return []
        return [
            self.point_at(math.radians(float(angle)))
            for angle in np.arange(0.0, 360.0, every_degrees)
        ]

    def surface_normal(self, point: Vector) -> Vector:
        """Outward unit normal at a point on the circle."""
        return (point - self.center).normalized()

    # =========================================================================
    # Arcs
    # =========================================================================

    def acute_arc(self, start: float, size: float) -> BezierPath:
        """Cubic Bezier for an arc of at most 90 degrees.

        Args:
            start: Start angle in radians.
            size: Angular extent in radians; negative sweeps clockwise.

        Returns:
            A single-segment BezierPath from ``point_at(start)`` to
            ``point_at(start + size)``.
        """
        point_a = self.point_at(start)
        point_d = self.point_at(start + size)
        if abs(size) < EPSILON:
            return BezierPath(start=point_a, points=(BezierPoint(point_d),))

        alpha = size / 2
        cos_alpha = math.cos(alpha)
        sin_alpha = math.sin(alpha)
        cot_alpha = 1 / math.tan(alpha)

        phi = start + alpha
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)

        lam = (4 - cos_alpha) / 3
        mu = sin_alpha + (cos_alpha - lam) * cot_alpha

        point_b = (
            Vector(lam * cos_phi + mu * sin_phi, lam * sin_phi - mu * cos_phi)
            * self.radius
            + self.center
        )
        point_c = (
            Vector(lam * cos_phi - mu * sin_phi, lam * sin_phi + mu * cos_phi)
            * self.radius
            + self.center
        )

        return BezierPath(
            start=point_a,
            points=(BezierPoint(point_d, control1=point_b, control2=point_c),),
        )

    def arc(self, start: float, end: float) -> BezierPath:
        """Arc from ``start`` to ``end`` radians as chained acute arcs."""
        sweep = end - start
        pieces = max(1, math.ceil(abs(sweep) / MAX_ACUTE_ARC - 1e-9))
        step = sweep / pieces

        anchors: list[BezierPoint] = []
        for i in range(pieces):
            anchors.extend(self.acute_arc(start + i * step, step).points)
        return BezierPath(start=self.point_at(start), points=tuple(anchors))

    def perimeter_path(self) -> BezierPath:
        """The full circle as four quarter arcs."""
        return self.arc(0.0, 2 * math.pi)

    # =========================================================================
    # Ray intersection
    # =========================================================================

    def ray_hit(
        self,
        origin: Vector,
        direction: Vector,
        precision: int = DEFAULT_HIT_PRECISION,
    ) -> Vector | None:
        """Nearest forward intersection of a ray with the circle.

        Roots whose ray parameter rounds to zero or below are discarded, so a
        ray leaving the surface does not hit it again at its own origin.

        Args:
            origin: Ray origin.
            direction: Ray direction (need not be normalized).
            precision: Decimal places the ray parameter is rounded to.

        Returns:
            The hit point, or None. Tangent rays (zero discriminant) miss.
        """
        a = direction.mag_sq
        if a < EPSILON or self.radius == 0:
            return None

        oc = origin - self.center
        h = direction.dot(oc)
        c = oc.mag_sq - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant <= 0.0:
            return None

        t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))
        forward = [t for t in (t0, t1) if round(t, precision) > 0]
        if not forward:
            return None

        return origin + direction * min(forward)
