"""Scene-level ray intersection testing.

This module dispatches ray hits and surface normals over the closed set of
shape kinds and finds the closest hit among the objects of a scene. Any
object with ``ray_hit`` and ``modify_ray`` methods takes part (scene objects
and circular emitters alike).

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.geometry.rectangle import BoundingBox
    >>> from raysketch.scene.intersection import find_nearest_hit
    >>> from raysketch.scene.objects import SceneObject
    >>> box = SceneObject.with_default_material(BoundingBox.from_canvas(1000, 1000))
    >>> hit = find_nearest_hit(Vector(500, 500), Vector(1, 0), [box])
    >>> hit.point
    Vector(x=900.0, y=500.0, z=0.0)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from raysketch.config import DEFAULT_HIT_PRECISION
from raysketch.core.vector import Vector
from raysketch.geometry.bezier import BezierPath
from raysketch.geometry.circle import Circle
from raysketch.geometry.intersection import Shape
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import Rectangle

if TYPE_CHECKING:
    from raysketch.core.ray import Ray


class Traceable(Protocol):
    """Anything a ray can hit and be modified by."""

    def ray_hit(
        self, origin: Vector, direction: Vector, precision: int = DEFAULT_HIT_PRECISION
    ) -> Vector | None: ...

    def modify_ray(self, ray: Ray) -> None: ...


@dataclass(frozen=True)
class Hit:
    """Record of a ray-scene intersection.

    Attributes:
        point: Where the ray meets the object.
        distance: Distance from the ray origin to ``point``.
        target: The object that was hit.
    """

    point: Vector
    distance: float
    target: Traceable


def _bezier_ray_hit(
    path: BezierPath, origin: Vector, direction: Vector, precision: int
) -> Vector | None:
    best: Vector | None = None
    best_distance = float("inf")
    for segment in path.to_lines():
        point = segment.ray_hit(origin, direction, precision)
        if point is None:
            continue
        distance = point.dist(origin)
        if distance < best_distance:
            best, best_distance = point, distance
    return best


def shape_ray_hit(
    shape: Shape,
    origin: Vector,
    direction: Vector,
    precision: int = DEFAULT_HIT_PRECISION,
) -> Vector | None:
    """Nearest forward hit of a ray on any supported shape.

    Raises:
        TypeError: If ``shape`` is not a supported shape.
    """
    if isinstance(shape, (Line, Circle, Rectangle)):
        return shape.ray_hit(origin, direction, precision)
    if isinstance(shape, BezierPath):
        return _bezier_ray_hit(shape, origin, direction, precision)
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


def shape_surface_normal(shape: Shape, point: Vector) -> Vector:
    """Unit surface normal of ``shape`` at a boundary ``point``.

    For Bezier paths this is the normal of the nearest flattened segment.

    Raises:
        TypeError: If ``shape`` is not a supported shape.
    """
    if isinstance(shape, (Line, Circle, Rectangle)):
        return shape.surface_normal(point)
    if isinstance(shape, BezierPath):
        segments = shape.to_lines()
        nearest = min(
            segments,
            key=lambda s: abs(s.start.dist(point) + point.dist(s.end) - s.length),
        )
        return nearest.normal
    raise TypeError(f"Unsupported shape type: {type(shape).__name__}")


def find_nearest_hit(
    origin: Vector,
    direction: Vector,
    objects: Iterable[Traceable],
    precision: int = DEFAULT_HIT_PRECISION,
) -> Hit | None:
    """Closest hit among ``objects`` for a ray.

    Ties keep the object that comes first.

    Returns:
        The closest Hit, or None when no object is hit.
    """
    closest: Hit | None = None
    for target in objects:
        point = target.ray_hit(origin, direction, precision)
        if point is None:
            continue
        distance = point.dist(origin)
        if closest is None or distance < closest.distance:
            closest = Hit(point=point, distance=distance, target=target)
    return closest
