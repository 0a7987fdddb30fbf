"""Scene objects: a shape paired with the material rays react to.

Each supported shape kind has a default material:

    BoundingBox -> absorber (edge of the canvas)
    Circle      -> refractive lens
    Rectangle   -> mirror
    Line        -> mirror
    BezierPath  -> mirror

Example:
    >>> from raysketch.geometry.line import Line
    >>> from raysketch.scene.objects import SceneObject, fresnel_line
    >>> lens = fresnel_line(Line.from_coords(600, 700, 700, 500))
    >>> lens.material
    FresnelMaterial(reflection_angle=180.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from raysketch.config import DEFAULT_HIT_PRECISION
from raysketch.core.vector import Vector
from raysketch.geometry.circle import Circle
from raysketch.geometry.intersection import Shape
from raysketch.geometry.line import Line
from raysketch.geometry.rectangle import BoundingBox
from raysketch.materials import (
    AbsorberMaterial,
    FresnelMaterial,
    Material,
    MirrorMaterial,
    RefractiveMaterial,
    scatter,
)
from raysketch.scene.intersection import shape_ray_hit, shape_surface_normal

if TYPE_CHECKING:
    from raysketch.core.ray import Ray


def default_material(shape: Shape) -> Material:
    """Material used when an object is created without one."""
    if isinstance(shape, BoundingBox):
        return AbsorberMaterial()
    if isinstance(shape, Circle):
        return RefractiveMaterial()
    return MirrorMaterial()


@dataclass(eq=False)
class SceneObject:
    """A shape in the scene and the rule applied to rays that hit it.

    Objects compare by identity, so two objects with equal shapes are still
    distinct scene members.

    Attributes:
        shape: The geometry rays are tested against.
        material: What happens to a ray at a hit.
        name: Optional label used in logs and serialized scenes.
    """

    shape: Shape
    material: Material
    name: str = ""

    @classmethod
    def with_default_material(cls, shape: Shape, name: str = "") -> SceneObject:
        return cls(shape=shape, material=default_material(shape), name=name)

    def ray_hit(
        self,
        origin: Vector,
        direction: Vector,
        precision: int = DEFAULT_HIT_PRECISION,
    ) -> Vector | None:
        return shape_ray_hit(self.shape, origin, direction, precision)

    def surface_normal(self, point: Vector) -> Vector:
        return shape_surface_normal(self.shape, point)

    def modify_ray(self, ray: Ray) -> None:
        """Apply the material at the ray's current origin (the hit point)."""
        normal = self.surface_normal(ray.origin)
        direction = scatter(self.material, ray.direction, normal)
        if direction is None or direction.mag_sq == 0.0:
            ray.terminate()
        else:
            ray.set_direction(direction)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "shape": type(self.shape).__name__,
            "material": type(self.material).__name__,
        }


def fresnel_line(line: Line, reflection_angle: float = 180.0, name: str = "") -> SceneObject:
    """A Line that collimates rays along its normal."""
    return SceneObject(
        shape=line, material=FresnelMaterial(reflection_angle=reflection_angle), name=name
    )


def bounding_box(
    width: float, height: float, inset: float = 0.0, name: str = "bounds"
) -> SceneObject:
    """An absorbing box around the canvas."""
    return SceneObject(
        shape=BoundingBox.from_canvas(width, height, inset),
        material=AbsorberMaterial(),
        name=name,
    )
