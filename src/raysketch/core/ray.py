"""Ray accumulator used by the propagation loop.

A Ray carries its current origin and direction and records every segment it
travels as a :class:`~raysketch.geometry.line.Line`. Unlike shapes, rays are
mutable: the tracer advances the origin and rewrites the direction at each
hit.

Example:
    >>> from raysketch.core.ray import Ray
    >>> from raysketch.core.vector import Vector
    >>> ray = Ray.from_angle(Vector(0.0, 100.0), -45.0)
    >>> ray.at(10.0)
    Vector(x=7.0710678118654755, y=92.92893218813452, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raysketch.config import DEFAULT_MAX_ITERATIONS
from raysketch.core.vector import Vector
from raysketch.geometry.line import Line


@dataclass
class Ray:
    """A ray with an origin, a direction and the path travelled so far.

    Attributes:
        origin: Current start point. Moves to each hit point.
        direction: Travel direction, normalized on construction.
        path: Segments travelled, in order. Each segment starts where the
            previous one ended.
        is_terminated: True once the ray was absorbed, escaped or capped.
        is_capped: True if the tracer force-terminated the ray at the
            iteration cap rather than the ray being absorbed or escaping.
        iteration_count: Number of propagation steps taken.
        max_iterations: Step count after which the ray is force-terminated.
    """

    origin: Vector
    direction: Vector
    path: list[Line] = field(default_factory=list)
    is_terminated: bool = False
    is_capped: bool = False
    iteration_count: int = 0
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self) -> None:
        self.direction = self.direction.normalized()

    @classmethod
    def from_angle(
        cls,
        origin: Vector,
        degrees: float,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ) -> Ray:
        """Create a ray pointing at an angle given in degrees."""
        return cls(
            origin=origin,
            direction=Vector.from_angle(math.radians(degrees)),
            max_iterations=max_iterations,
        )

    def at(self, t: float) -> Vector:
        """Point at distance ``t`` along the current direction."""
        return self.origin + self.direction * t

    def advance_to(self, point: Vector) -> None:
        """Record the segment to ``point`` and move the origin there."""
        self.path.append(Line(self.origin, point))
        self.origin = point

    def set_direction(self, direction: Vector) -> None:
        self.direction = direction.normalized()

    def terminate(self) -> None:
        self.is_terminated = True

    @property
    def end_points(self) -> list[Vector]:
        """End point of every travelled segment."""
        return [segment.end for segment in self.path]

    @property
    def length(self) -> float:
        """Total distance travelled."""
        return sum(segment.length for segment in self.path)
