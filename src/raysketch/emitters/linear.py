"""Linear emitter: parallel rays along a segment.

Rays start every ``ray_step`` units of distance along the line and travel
along the negated line normal. The stride is expressed as a fraction of the
line length, ``ray_step / length``, and stepped from 0 up to and including
1, so the last ray may sit past the end point when the length is not a
multiple of the step.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from raysketch.config import TraceSettings
from raysketch.core.ray import Ray
from raysketch.core.vector import Vector, lerp
from raysketch.emitters.base import Emitter, RayTraceStyle
from raysketch.geometry.line import Line
from raysketch.preview.style import DEFAULT_STYLE, DrawingStyle

if TYPE_CHECKING:
    from raysketch.geometry.intersection import Shape


class LinearEmitter(Emitter):
    """Rays cast perpendicular to a line, ``ray_step`` units apart.

    Example:
        >>> emitter = LinearEmitter(Line.from_coords(0, 0, 100, 0), ray_step=25)
        >>> [ray.origin.x for ray in emitter.cast_rays(TraceSettings())]
        [0.0, 25.0, 50.0, 75.0, 100.0]
    """

    kind = "linear"

    def __init__(
        self,
        line: Line,
        ray_step: float = 10.0,
        style: RayTraceStyle = RayTraceStyle.LINE,
        draw_style: DrawingStyle = DEFAULT_STYLE,
        name: str = "",
    ):
        super().__init__(style=style, draw_style=draw_style, name=name)
        self.line = line
        self.ray_step = ray_step

    @property
    def direction(self) -> Vector:
        return -self.line.normal

    def fractions(self) -> list[float]:
        """Positions of the ray origins as fractions of the line length."""
        length = self.line.length
        if self.ray_step <= 0 or length == 0.0:
            return []
        percent_step = self.ray_step / length
        return [float(p) for p in np.arange(0.0, 1.0 + percent_step, percent_step)]

    def cast_rays(self, settings: TraceSettings) -> list[Ray]:
        direction = self.direction
        return [
            Ray(
                lerp(p, self.line.start, self.line.end),
                direction,
                max_iterations=settings.max_iterations,
            )
            for p in self.fractions()
        ]

    def outline(self) -> Shape:
        return self.line

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "start": [self.line.start.x, self.line.start.y],
            "end": [self.line.end.x, self.line.end.y],
            "ray_step": self.ray_step,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LinearEmitter:
        return cls(
            Line(Vector(*data["start"]), Vector(*data["end"])),
            data.get("ray_step", 10.0),
            **cls._base_kwargs(data),
        )
