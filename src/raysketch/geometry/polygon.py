"""Point-in-polygon tests on closed vertex lists.

Implements the winding number test from Dan Sunday ("Inclusion of a Point in
a Polygon"): a point is inside when the polygon winds around it a non-zero
number of times. Works for convex, concave and self-intersecting polygons.
"""

from collections.abc import Sequence

from raysketch.core.vector import Vector


def is_left(a: Vector, b: Vector, point: Vector) -> float:
    """Test whether ``point`` is left of, on, or right of the line a->b.

    Returns:
        > 0 if left, 0 if on the line, < 0 if right.
    """
    return (b.x - a.x) * (point.y - a.y) - (point.x - a.x) * (b.y - a.y)


def winding_number(point: Vector, vertices: Sequence[Vector]) -> int:
    """Winding number of a closed polygon around ``point``.

    The polygon is closed implicitly; ``vertices`` should not repeat the first
    vertex at the end.
    """
    wn = 0
    count = len(vertices)
    for i in range(count):
        a = vertices[i]
        b = vertices[(i + 1) % count]
        if a.y <= point.y:
            if b.y > point.y and is_left(a, b, point) > 0:
                wn += 1
        elif b.y <= point.y and is_left(a, b, point) < 0:
            wn -= 1
    return wn


def contains_point(vertices: Sequence[Vector], point: Vector) -> bool:
    """Whether ``point`` lies inside the polygon. Fewer than 3 vertices never contain."""
    if len(vertices) < 3:
        return False
    return winding_number(point, vertices) != 0


def polygon_area(vertices: Sequence[Vector]) -> float:
    """Signed shoelace area; positive when vertices run counter-clockwise in maths orientation."""
    count = len(vertices)
    total = 0.0
    for i in range(count):
        a = vertices[i]
        b = vertices[(i + 1) % count]
        total += a.x * b.y - b.x * a.y
    return total / 2.0
