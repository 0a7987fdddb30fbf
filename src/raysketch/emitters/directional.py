"""Emitter casting a single ray."""

from __future__ import annotations

import math
from typing import Any

from raysketch.config import TraceSettings
from raysketch.core.ray import Ray
from raysketch.core.vector import Vector
from raysketch.emitters.base import Emitter, RayTraceStyle
from raysketch.preview.style import DEFAULT_STYLE, DrawingStyle


class DirectionalEmitter(Emitter):
    """One ray from ``origin`` along ``direction``.

    Example:
        >>> emitter = DirectionalEmitter.from_angle(Vector(0, 100), -45.0)
        >>> emitter.direction.is_close(Vector(1, -1).normalized())
        True
    """

    kind = "directional"

    def __init__(
        self,
        origin: Vector,
        direction: Vector,
        style: RayTraceStyle = RayTraceStyle.LINE,
        draw_style: DrawingStyle = DEFAULT_STYLE,
        name: str = "",
    ):
        if direction.mag_sq == 0.0:
            raise ValueError("Emitter direction must be non-zero")
        super().__init__(style=style, draw_style=draw_style, name=name)
        self.origin = origin
        self.direction = direction.normalized()

    @classmethod
    def from_angle(cls, origin: Vector, degrees: float, **kwargs: Any) -> DirectionalEmitter:
        return cls(origin, Vector.from_angle(math.radians(degrees)), **kwargs)

    def cast_rays(self, settings: TraceSettings) -> list[Ray]:
        return [Ray(self.origin, self.direction, max_iterations=settings.max_iterations)]

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "origin": [self.origin.x, self.origin.y],
            "direction": [self.direction.x, self.direction.y],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DirectionalEmitter:
        return cls(
            Vector(*data["origin"]),
            Vector(*data["direction"]),
            **cls._base_kwargs(data),
        )
