"""Boolean operations on circles and rectangles by angular sweep.

The outline of the primary shape is parametrized by angle around its center.
All points where it crosses the other shapes are converted to angles and
sorted; each interval between consecutive angles is then either entirely
inside or entirely outside every other shape, which is decided by testing the
interval's midpoint.

    UNION          keep intervals inside none of the others
    UNION_CLIPPED  as UNION, and inside the clip rectangle
    INTERSECT      keep intervals inside at least one other
    INTERSECT_ALL  keep intervals inside all others

Only star-shaped primaries whose angle-from-center parametrization is
monotonic are supported: circles and (rotated) rectangles.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.boolean import BooleanOperation, boolean_operation
    >>> from raysketch.geometry.circle import Circle
    >>> a = Circle(Vector(0, 0), 10)
    >>> b = Circle(Vector(10, 0), 10)
    >>> paths = boolean_operation(a, [a, b], BooleanOperation.UNION)
    >>> len(paths)
    1
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import Enum

from raysketch.config import EPSILON
from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath, BezierPoint
from raysketch.geometry.circle import Circle
from raysketch.geometry.intersection import Shape, intersections
from raysketch.geometry.rectangle import Rectangle

TWO_PI = 2 * math.pi

# Intersection angles closer than this are treated as one
ANGLE_TOLERANCE = 1e-9

Primary = Circle | Rectangle


class BooleanOperation(Enum):
    """Which angular intervals of the primary outline to keep."""

    UNION = "union"
    UNION_CLIPPED = "union_clipped"
    INTERSECT = "intersect"
    INTERSECT_ALL = "intersect_all"


def _contains(shape: Shape, point: Vector) -> bool:
    # Circles are cut at their offset radius, so test against the same boundary
    if isinstance(shape, Circle):
        return point.dist(shape.center) < shape.offset_radius
    contains = getattr(shape, "contains", None)
    return bool(contains(point)) if contains is not None else False


def _keeps(
    operation: BooleanOperation,
    inside: list[bool],
    inside_clip: bool,
) -> bool:
    if operation is BooleanOperation.UNION:
        return not any(inside)
    if operation is BooleanOperation.UNION_CLIPPED:
        return not any(inside) and inside_clip
    if operation is BooleanOperation.INTERSECT:
        return any(inside)
    return bool(inside) and all(inside)


def _rectangle_span(rect: Rectangle, start: float, end: float) -> BezierPath:
    """Outline of ``rect`` from angle ``start`` to ``end``, through any corners."""
    corner_angles = []
    for corner in rect.corners:
        angle = rect.angle_of(corner)
        while angle < start:
            angle += TWO_PI
        if angle < end:
            corner_angles.append((angle, corner))
    corner_angles.sort(key=lambda item: item[0])

    points = [BezierPoint(corner) for _, corner in corner_angles]
    points.append(BezierPoint(rect.point_at(end)))
    return BezierPath(start=rect.point_at(start), points=tuple(points))


def _boundary_point(shape: Primary, angle: float) -> Vector:
    if isinstance(shape, Circle):
        return shape.center + Vector.from_angle(angle) * shape.offset_radius
    return shape.point_at(angle)


def outline_span(shape: Primary, start: float, end: float) -> BezierPath:
    """Boundary of ``shape`` between two angles around its center."""
    if isinstance(shape, Circle):
        return shape.arc(start, end)
    return _rectangle_span(shape, start, end)


def sweep_angles(shape: Primary, points: Sequence[Vector]) -> list[float]:
    """Sorted, de-duplicated angles of ``points``, closed with ``first + 2 pi``."""
    angles: list[float] = []
    for angle in sorted(shape.angle_of(p) for p in points):
        if not angles or angle - angles[-1] > ANGLE_TOLERANCE:
            angles.append(angle)
    if angles:
        angles.append(angles[0] + TWO_PI)
    return angles


def boolean_operation(
    primary: Primary,
    others: Sequence[Shape],
    operation: BooleanOperation,
    clip: Rectangle | None = None,
) -> list[BezierPath]:
    """Outline pieces of ``primary`` selected by ``operation``.

    Args:
        primary: Circle or Rectangle whose outline is cut.
        others: Shapes to combine with. ``primary`` itself is skipped if
            present (by identity).
        operation: Which intervals to keep.
        clip: Clip rectangle, required for ``UNION_CLIPPED``.

    Returns:
        Paths for the kept pieces, with touching pieces joined. With fewer
        than two intersection points the full outline of ``primary`` is
        returned unchanged.

    Raises:
        TypeError: If ``primary`` is not a Circle or Rectangle.
        ValueError: If ``UNION_CLIPPED`` is requested without ``clip``.
    """
    if not isinstance(primary, (Circle, Rectangle)):
        raise TypeError(
            f"Boolean operations need a Circle or Rectangle, got {type(primary).__name__}"
        )
    if operation is BooleanOperation.UNION_CLIPPED and clip is None:
        raise ValueError("UNION_CLIPPED requires a clip rectangle")

    remaining = [shape for shape in others if shape is not primary]

    points: list[Vector] = []
    for other in remaining:
        points.extend(intersections(primary, other))
    if operation is BooleanOperation.UNION_CLIPPED and clip is not None:
        points.extend(intersections(primary, clip))

    if len(points) < 2:
        return [primary.perimeter_path()]

    angles = sweep_angles(primary, points)

    kept: list[tuple[float, float]] = []
    for start, end in zip(angles, angles[1:]):
        if end - start < EPSILON:
            continue
        midpoint = _boundary_point(primary, (start + end) / 2)
        inside = [_contains(other, midpoint) for other in remaining]
        inside_clip = clip is not None and clip.contains(midpoint)
        if not _keeps(operation, inside, inside_clip):
            continue

        if kept and abs(kept[-1][1] - start) < ANGLE_TOLERANCE:
            kept[-1] = (kept[-1][0], end)
        else:
            kept.append((start, end))

    # Join the piece that ends at the closing angle with the opening piece
    if len(kept) > 1 and abs(kept[-1][1] - TWO_PI - kept[0][0]) < ANGLE_TOLERANCE:
        last_start, _ = kept.pop()
        kept[0] = (last_start, kept[0][1] + TWO_PI)

    return [outline_span(primary, start, end) for start, end in kept]
