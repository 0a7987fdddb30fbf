"""Common emitter behaviour: running rays and drawing their paths.

An emitter owns some geometry, builds its rays on every ``run`` and keeps the
traced rays until the next run. Drawing is a separate step so a scene can be
traced once and drawn into several contexts.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.emitters import DirectionalEmitter
    >>> from raysketch.scene.objects import bounding_box
    >>> emitter = DirectionalEmitter(Vector(50, 50), Vector(1, 0))
    >>> [len(ray.path) for ray in emitter.run([bounding_box(100, 100)])]
    [1]
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from raysketch.config import TraceSettings
from raysketch.core.ray import Ray
from raysketch.core.tracer import trace_rays
from raysketch.geometry.line import Line
from raysketch.preview.style import DEFAULT_STYLE, DrawingStyle

if TYPE_CHECKING:
    from raysketch.geometry.intersection import Shape
    from raysketch.preview.context import DrawingContext
    from raysketch.scene.intersection import Traceable

logger = logging.getLogger(__name__)


class RayTraceStyle(Enum):
    """How an emitter's ray paths are drawn."""

    # Every segment of every path
    LINE = "line"
    # Only the end point of each segment
    POINT = "point"


class Emitter(ABC):
    """Base class for objects that cast rays into a scene.

    Attributes:
        style: Whether paths are drawn as segments or end points.
        draw_style: Stroke settings used when the scene draws this emitter.
        name: Optional label for logs and serialized scenes.
        rays: Rays traced by the most recent ``run``.
    """

    kind: str = ""

    def __init__(
        self,
        style: RayTraceStyle = RayTraceStyle.LINE,
        draw_style: DrawingStyle = DEFAULT_STYLE,
        name: str = "",
    ):
        self.style = style
        self.draw_style = draw_style
        self.name = name
        self.rays: list[Ray] = []

    @abstractmethod
    def cast_rays(self, settings: TraceSettings) -> list[Ray]:
        """Build the untraced rays for one run."""

    def outline(self) -> Shape | None:
        """Geometry drawn for the emitter itself in LINE style."""
        return None

    def run(
        self,
        objects: Sequence[Traceable],
        settings: TraceSettings | None = None,
    ) -> list[Ray]:
        """Trace a fresh set of rays against ``objects``.

        The emitter itself is never a candidate for its own rays, so a scene
        can pass every traceable member, emitters included. Previous rays are
        replaced.

        Returns:
            The traced rays (also stored on ``self.rays``).
        """
        settings = settings or TraceSettings()
        candidates = [obj for obj in objects if obj is not self]
        self.rays = trace_rays(self.cast_rays(settings), candidates, settings)
        logger.debug(
            "%s cast %d rays, %d segments",
            self.label,
            len(self.rays),
            sum(len(ray.path) for ray in self.rays),
        )
        return self.rays

    @property
    def label(self) -> str:
        return self.name or type(self).__name__

    @property
    def paths(self) -> list[list[Line]]:
        """Path of every ray from the last run."""
        return [ray.path for ray in self.rays]

    @property
    def segments(self) -> list[Line]:
        """All path segments from the last run, flattened."""
        return [segment for ray in self.rays for segment in ray.path]

    def draw(self, context: DrawingContext, style: DrawingStyle | None = None) -> None:
        """Draw the emitter and the rays of its last run.

        Does not trace; call ``run`` first.
        """
        from raysketch.preview.context import draw_shape

        style = style or self.draw_style
        shape = self.outline()
        if self.style is RayTraceStyle.LINE and shape is not None:
            draw_shape(context, shape, style)
        self.draw_paths(context, style)

    def draw_paths(self, context: DrawingContext, style: DrawingStyle | None = None) -> None:
        style = style or self.draw_style
        segments = self.segments
        if self.style is RayTraceStyle.LINE:
            context.lines(segments, style)
        else:
            for segment in segments:
                context.point(segment.end, style)

    def _base_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind, "style": self.style.value}
        if self.name:
            data["name"] = self.name
        data["stroke"] = list(self.draw_style.stroke) if self.draw_style.stroke else None
        data["stroke_width"] = self.draw_style.stroke_width
        data["opacity"] = self.draw_style.opacity
        return data

    @staticmethod
    def _base_kwargs(data: dict[str, Any]) -> dict[str, Any]:
        stroke = data.get("stroke", DEFAULT_STYLE.stroke)
        return {
            "style": RayTraceStyle(data.get("style", "line")),
            "draw_style": DrawingStyle(
                stroke=tuple(stroke) if stroke is not None else None,
                stroke_width=data.get("stroke_width", DEFAULT_STYLE.stroke_width),
                opacity=data.get("opacity", DEFAULT_STYLE.opacity),
            ),
            "name": data.get("name", ""),
        }

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible description of the emitter."""
