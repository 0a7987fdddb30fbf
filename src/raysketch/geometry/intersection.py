"""Pairwise shape intersections.

Every supported pair of shape kinds has a closed-form solver; rectangles and
Bezier paths reduce to their edges and flattened segments. The public entry
point :func:`intersections` dispatches on the ``(kind, kind)`` pair, swapping
the arguments for the symmetric half of the table.

Degenerate inputs (parallel lines, zero-length segments, zero radius,
concentric circles) produce an empty list, never an exception or NaN.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.circle import Circle
    >>> from raysketch.geometry.line import Line
    >>> from raysketch.geometry.intersection import intersections
    >>> len(intersections(Circle(Vector(100, 100), 100), Line.from_coords(0, 0, 200, 200)))
    2
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any

from raysketch.config import EPSILON
from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath
from raysketch.geometry.circle import Circle
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import Rectangle

# Closed set of shape kinds taking part in intersections
Shape = Line | Circle | Rectangle | BezierPath

# Points closer than this are reported once
MERGE_TOLERANCE = 1e-7

# Order matters: BoundingBox resolves to Rectangle via isinstance
SHAPE_KINDS: tuple[type, ...] = (Line, Circle, Rectangle, BezierPath)


def _unique(points: Sequence[Vector]) -> list[Vector]:
    result: list[Vector] = []
    for point in points:
        if not any(point.is_close(seen, MERGE_TOLERANCE) for seen in result):
            result.append(point)
    return result


# =============================================================================
# Closed-form solvers
# =============================================================================


def line_line(line: Line, other: Line) -> list[Vector]:
    """Intersection of two segments.

    Solves ``line.start + t s1 = other.start + s s2``; a point exists only
    when both ``s`` and ``t`` lie in [0, 1].
    """
    s1 = line.delta
    s2 = other.delta
    denominator = -s2.x * s1.y + s1.x * s2.y
    if abs(denominator) < EPSILON:
        return []

    offset = line.start - other.start
    s = (-s1.y * offset.x + s1.x * offset.y) / denominator
    t = (s2.x * offset.y - s2.y * offset.x) / denominator

    if 0.0 <= s <= 1.0 and 0.0 <= t <= 1.0:
        return [line.start + s1 * t]
    return []


def line_circle(line: Line, circle: Circle) -> list[Vector]:
    """Points where a segment crosses a circle.

    Substitutes ``start + mu (end - start)`` into the circle equation and
    keeps real roots with ``mu`` in [0, 1]. Uses the circle's offset radius.
    """
    delta = line.delta
    radius = circle.offset_radius
    a = delta.mag_sq
    if a < EPSILON or radius <= 0:
        return []

    start_offset = line.start - circle.center
    b = 2 * delta.dot(start_offset)
    c = start_offset.mag_sq - radius * radius

    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return []

    sqrt_d = math.sqrt(discriminant)
    if sqrt_d < EPSILON:
        roots = [-b / (2 * a)]
    else:
        roots = [(-b + sqrt_d) / (2 * a), (-b - sqrt_d) / (2 * a)]

    return _unique([line.start + delta * mu for mu in roots if 0.0 <= mu <= 1.0])


def circle_circle(circle: Circle, other: Circle) -> list[Vector]:
    """The two crossing points of two circles.

    No points when the circles are apart (``d >= r1 + r2``) or one contains
    the other (``d <= |r1 - r2|``), which includes concentric circles.
    """
    r1 = circle.offset_radius
    r2 = other.offset_radius
    delta = other.center - circle.center
    dist = math.hypot(delta.x, delta.y)

    if dist >= r1 + r2:
        return []
    if dist <= abs(r1 - r2):
        return []

    # Distance from circle.center to the chord through both points
    a_dist = (r1 * r1 - r2 * r2 + dist * dist) / (2.0 * dist)
    chord_point = circle.center + delta * (a_dist / dist)
    h_dist = math.sqrt(max(r1 * r1 - a_dist * a_dist, 0.0))

    offset = Vector(-delta.y * (h_dist / dist), delta.x * (h_dist / dist))
    return [chord_point + offset, chord_point - offset]


def _edges_against(rect: Rectangle, other: Any) -> list[Vector]:
    points: list[Vector] = []
    for edge in rect.edges:
        points.extend(intersections(edge, other))
    return _unique(points)


def _segments_against(path: BezierPath, other: Any) -> list[Vector]:
    points: list[Vector] = []
    for segment in path.to_lines():
        points.extend(intersections(segment, other))
    return _unique(points)


_SOLVERS: dict[tuple[type, type], Callable[[Any, Any], list[Vector]]] = {
    (Line, Line): line_line,
    (Line, Circle): line_circle,
    (Circle, Circle): circle_circle,
    (Rectangle, Line): _edges_against,
    (Rectangle, Circle): _edges_against,
    (Rectangle, Rectangle): _edges_against,
    (BezierPath, Line): _segments_against,
    (BezierPath, Circle): _segments_against,
    (BezierPath, Rectangle): _segments_against,
    (BezierPath, BezierPath): _segments_against,
}


def shape_kind(shape: Any) -> type:
    """The shape kind used for dispatch.

    Raises:
        TypeError: If ``shape`` is not one of the supported kinds.
    """
    for kind in SHAPE_KINDS:
        if isinstance(shape, kind):
            return kind
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


def intersections(shape: Shape, other: Shape) -> list[Vector]:
    """Intersection points between two shapes.

    Raises:
        TypeError: If either argument is not a supported shape.
    """
    key = (shape_kind(shape), shape_kind(other))
    solver = _SOLVERS.get(key)
    if solver is not None:
        return solver(shape, other)
    return _SOLVERS[(key[1], key[0])](other, shape)


def line_segments(shape: Shape, line: Line, first_only: bool = False) -> list[Line]:
    """Split ``line`` at its intersections with ``shape``.

    The intersection points, together with the line's end points, are sorted
    by distance from ``line.start`` and joined pairwise into consecutive
    segments.

    Args:
        shape: Shape to cut the line with.
        line: Line to split.
        first_only: Return only the segment from ``line.start`` to the
            closest intersection.

    Returns:
        The segments, or an empty list when the line does not cross ``shape``.
    """
    points = intersections(shape, line)
    if not points:
        return []

    ordered = sorted([line.start, *points, line.end], key=line.start.dist)
    segments = [Line(a, b) for a, b in zip(ordered, ordered[1:])]
    return segments[:1] if first_only else segments
