"""Circular emitter: rays radiating from a circle's perimeter.

Rays leave the perimeter at every multiple of ``ray_step`` degrees,
``k * ray_step`` for ``k = 1 .. floor(360 / ray_step)``, pointing radially
outward. The emitter is itself a refractive circle for the rays of other
emitters, while its own rays never consider it.

Example:
    >>> from raysketch.geometry.circle import Circle
    >>> from raysketch.core.vector import Vector
    >>> emitter = CircleEmitter(Circle(Vector(600, 400), 50), ray_step=90)
    >>> len(emitter.cast_rays(TraceSettings()))
    4
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from raysketch.config import DEFAULT_HIT_PRECISION, TraceSettings
from raysketch.core.ray import Ray
from raysketch.core.vector import Vector
from raysketch.emitters.base import Emitter, RayTraceStyle
from raysketch.geometry.circle import Circle
from raysketch.materials import (
    Material,
    RefractiveMaterial,
    material_from_dict,
    material_to_dict,
)
from raysketch.preview.style import DEFAULT_STYLE, DrawingStyle
from raysketch.scene.objects import SceneObject

if TYPE_CHECKING:
    from raysketch.geometry.intersection import Shape


class CircleEmitter(Emitter):
    """Rays cast outward from a circle every ``ray_step`` degrees.

    Attributes:
        circle: Emitter body; rays start on its perimeter.
        ray_step: Angle between rays in degrees. Zero or negative casts
            nothing.
        material: How the body reacts to rays from other emitters.
    """

    kind = "circle"

    def __init__(
        self,
        circle: Circle,
        ray_step: float = 1.0,
        style: RayTraceStyle = RayTraceStyle.LINE,
        draw_style: DrawingStyle = DEFAULT_STYLE,
        name: str = "",
        material: Material | None = None,
    ):
        super().__init__(style=style, draw_style=draw_style, name=name)
        self.circle = circle
        self.ray_step = ray_step
        self.material = material or RefractiveMaterial()

    @classmethod
    def from_coords(
        cls, x: float, y: float, radius: float, ray_step: float = 1.0, **kwargs: Any
    ) -> CircleEmitter:
        return cls(Circle(Vector(x, y), radius), ray_step, **kwargs)

    def angles(self) -> list[float]:
        """Emission angles in degrees."""
        if self.ray_step <= 0:
            return []
        count = math.floor(360.0 / self.ray_step)
        return [k * self.ray_step for k in range(1, count + 1)]

    def cast_rays(self, settings: TraceSettings) -> list[Ray]:
        rays = []
        for degrees in self.angles():
            theta = math.radians(degrees)
            rays.append(
                Ray(
                    self.circle.point_at(theta),
                    Vector.from_angle(theta),
                    max_iterations=settings.max_iterations,
                )
            )
        return rays

    def outline(self) -> Shape:
        return self.circle

    # Traceable: other emitters' rays treat the body as a scene object

    def ray_hit(
        self, origin: Vector, direction: Vector, precision: int = DEFAULT_HIT_PRECISION
    ) -> Vector | None:
        return self.circle.ray_hit(origin, direction, precision)

    def modify_ray(self, ray: Ray) -> None:
        SceneObject(self.circle, self.material).modify_ray(ray)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._base_dict(),
            "center": [self.circle.center.x, self.circle.center.y],
            "radius": self.circle.radius,
            "ray_step": self.ray_step,
            "material": material_to_dict(self.material),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CircleEmitter:
        material = data.get("material")
        return cls(
            Circle(Vector(*data["center"]), data["radius"]),
            data.get("ray_step", 1.0),
            material=material_from_dict(material) if material else None,
            **cls._base_kwargs(data),
        )
