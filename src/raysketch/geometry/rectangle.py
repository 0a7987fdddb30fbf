"""Rectangle primitive with slab-method ray intersection.

A Rectangle is stored as its top-left corner and size, plus an optional
rotation (radians) about its center. Corners, edges and containment are
derived from the rotated four-corner polygon; ray hits are computed in the
rectangle's local frame, where it is axis aligned.

Slab method, per axis:

    t1 = (min - origin) / direction
    t2 = (max - origin) / direction
    tmin = max(tmin, min(t1, t2)), tmax = min(tmax, max(t1, t2))

The ray enters at ``tmin`` and leaves at ``tmax``. When the origin is inside
the box ``tmin`` is negative and the exit point ``tmax`` is the hit.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.rectangle import Rectangle
    >>> rect = Rectangle(x=0, y=0, width=100, height=50)
    >>> rect.ray_hit(Vector(50, 25), Vector(1, 0))
    Vector(x=100.0, y=25.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from raysketch.config import DEFAULT_HIT_PRECISION, EPSILON
from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath
from raysketch.geometry.line import Line
from raysketch.geometry.polygon import contains_point

# Default margin between a canvas edge and its bounding box
DEFAULT_BOUNDING_INSET = 100.0


@dataclass(frozen=True)
class Rectangle:
    """An optionally rotated rectangle.

    Attributes:
        x: Left edge before rotation.
        y: Top edge before rotation.
        width: Horizontal size, non-negative.
        height: Vertical size, non-negative.
        rotation: Rotation about the center in radians.
    """

    x: float
    y: float
    width: float
    height: float
    rotation: float = 0.0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"Rectangle size must be non-negative, got {self.width}x{self.height}"
            )

    @classmethod
    def from_center(
        cls,
        center: Vector,
        width: float,
        height: float,
        rotation: float = 0.0,
    ) -> Rectangle:
        return cls(
            x=center.x - width / 2,
            y=center.y - height / 2,
            width=width,
            height=height,
            rotation=rotation,
        )

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def center(self) -> Vector:
        return Vector(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def is_rotated(self) -> bool:
        return abs(self.rotation) > EPSILON

    @property
    def corners(self) -> tuple[Vector, Vector, Vector, Vector]:
        """Corners in order top-left, top-right, bottom-right, bottom-left."""
        corners = (
            Vector(self.x, self.y),
            Vector(self.x + self.width, self.y),
            Vector(self.x + self.width, self.y + self.height),
            Vector(self.x, self.y + self.height),
        )
        if not self.is_rotated:
            return corners

        pivot = self.center
        top_left, top_right, bottom_right, bottom_left = (
            corner.rotated_around(self.rotation, pivot) for corner in corners
        )
        return top_left, top_right, bottom_right, bottom_left

    @property
    def edges(self) -> tuple[Line, Line, Line, Line]:
        """Edges in order top, right, bottom, left, following the corners."""
        tl, tr, br, bl = self.corners
        return Line(tl, tr), Line(tr, br), Line(br, bl), Line(bl, tl)

    @property
    def min_x(self) -> float:
        return min(c.x for c in self.corners)

    @property
    def max_x(self) -> float:
        return max(c.x for c in self.corners)

    @property
    def min_y(self) -> float:
        return min(c.y for c in self.corners)

    @property
    def max_y(self) -> float:
        return max(c.y for c in self.corners)

    @property
    def bounding_box(self) -> Rectangle:
        """Axis-aligned box around the (possibly rotated) rectangle."""
        if not self.is_rotated:
            return self
        return Rectangle(
            x=self.min_x,
            y=self.min_y,
            width=self.max_x - self.min_x,
            height=self.max_y - self.min_y,
        )

    @property
    def area(self) -> float:
        return self.width * self.height

    def contains(self, point: Vector) -> bool:
        """Whether ``point`` lies strictly inside the rectangle."""
        if self.is_rotated:
            return contains_point(self.corners, point)
        return (
            self.x < point.x < self.x + self.width
            and self.y < point.y < self.y + self.height
        )

    def _to_local(self, point: Vector) -> Vector:
        return (point - self.center).rotated(-self.rotation)

    def point_at(self, angle: float) -> Vector:
        """Boundary point in the direction ``angle`` from the center."""
        half_w = self.width / 2
        half_h = self.height / 2
        local = Vector.from_angle(angle - self.rotation)

        limits = []
        if abs(local.x) > EPSILON:
            limits.append(half_w / abs(local.x))
        if abs(local.y) > EPSILON:
            limits.append(half_h / abs(local.y))
        distance = min(limits) if limits else 0.0

        return self.center + Vector.from_angle(angle, distance)

    def angle_of(self, point: Vector) -> float:
        return (point - self.center).heading

    def surface_normal(self, point: Vector) -> Vector:
        """Outward unit normal of the edge closest to ``point``."""
        local = self._to_local(point)
        gap_x = abs(abs(local.x) - self.width / 2)
        gap_y = abs(abs(local.y) - self.height / 2)
        if gap_x < gap_y:
            normal = Vector(math.copysign(1.0, local.x), 0.0)
        else:
            normal = Vector(0.0, math.copysign(1.0, local.y))
        return normal.rotated(self.rotation)

    def perimeter_path(self) -> BezierPath:
        """Closed polyline through the corners, starting top-left."""
        corners = self.corners
        return BezierPath.polyline([*corners, corners[0]])

    # =========================================================================
    # Ray intersection
    # =========================================================================

    def ray_hit(
        self,
        origin: Vector,
        direction: Vector,
        precision: int = DEFAULT_HIT_PRECISION,
    ) -> Vector | None:
        """Nearest forward intersection of a ray with the rectangle outline.

        A zero direction component never divides: the ray is parallel to
        that slab and hits only if its origin already lies within it.

        Args:
            origin: Ray origin.
            direction: Ray direction (need not be normalized).
            precision: Decimal places the ray parameter is rounded to before
                it must be strictly positive.

        Returns:
            The hit point, or None.
        """
        if direction.mag_sq < EPSILON:
            return None

        local_origin = self._to_local(origin)
        local_direction = direction.rotated(-self.rotation)
        half_w = self.width / 2
        half_h = self.height / 2

        t_min = -math.inf
        t_max = math.inf
        for o, d, low, high in (
            (local_origin.x, local_direction.x, -half_w, half_w),
            (local_origin.y, local_direction.y, -half_h, half_h),
        ):
            if abs(d) < EPSILON:
                if o < low or o > high:
                    return None
                continue

            inv_d = 1.0 / d
            t1 = (low - o) * inv_d
            t2 = (high - o) * inv_d
            if t1 > t2:
                t1, t2 = t2, t1
            t_min = max(t_min, t1)
            t_max = min(t_max, t2)

        if t_min > t_max:
            return None

        t = t_min if round(t_min, precision) > 0 else t_max
        if round(t, precision) <= 0:
            return None

        return origin + direction * t


@dataclass(frozen=True)
class BoundingBox(Rectangle):
    """A Rectangle inset from the canvas edges that absorbs every ray."""

    @classmethod
    def from_canvas(
        cls,
        width: float,
        height: float,
        inset: float = DEFAULT_BOUNDING_INSET,
    ) -> BoundingBox:
        """Box ``inset`` units inside a ``width`` x ``height`` canvas.

        Raises:
            ValueError: If the inset leaves no room.
        """
        inner_w = width - inset * 2
        inner_h = height - inset * 2
        if inner_w < 0 or inner_h < 0:
            raise ValueError(
                f"Inset {inset} is too large for a {width}x{height} canvas"
            )
        return cls(x=inset, y=inset, width=inner_w, height=inner_h)
