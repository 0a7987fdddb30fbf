"""Material dispatch shared by the tracer and scene serialization.

Materials decide what happens to a ray at a hit point. The set is closed:
each MaterialType maps to one dataclass and one scatter function, and
:func:`scatter` dispatches on the material instance.

Scatter functions share the signature ``(incident_direction, normal, ...)``
and return the new direction, or None when the ray is absorbed.
"""

from dataclasses import asdict
from enum import IntEnum
from typing import Any

from raysketch.core.vector import Vector
from raysketch.materials.absorber import AbsorberMaterial, scatter_absorber
from raysketch.materials.fresnel import FresnelMaterial, scatter_fresnel
from raysketch.materials.mirror import MirrorMaterial, scatter_mirror
from raysketch.materials.refractive import RefractiveMaterial, scatter_refractive


class MaterialType(IntEnum):
    """Enumeration of supported ray interactions.

    Used to serialize scene objects and to pick a default per shape kind.
    """

    ABSORB = 0
    MIRROR = 1
    REFRACT = 2
    COLLIMATE = 3


Material = AbsorberMaterial | MirrorMaterial | RefractiveMaterial | FresnelMaterial

_MATERIAL_CLASSES: dict[MaterialType, type] = {
    MaterialType.ABSORB: AbsorberMaterial,
    MaterialType.MIRROR: MirrorMaterial,
    MaterialType.REFRACT: RefractiveMaterial,
    MaterialType.COLLIMATE: FresnelMaterial,
}


def material_type(material: Material) -> MaterialType:
    """The MaterialType of a material instance.

    Raises:
        TypeError: If ``material`` is not a known material.
    """
    for kind, cls in _MATERIAL_CLASSES.items():
        if isinstance(material, cls):
            return kind
    raise TypeError(f"Unknown material: {type(material).__name__}")


def make_material(kind: MaterialType, **params: Any) -> Material:
    """Create a material of the given type with optional parameters."""
    return _MATERIAL_CLASSES[MaterialType(kind)](**params)


def scatter(material: Material, incident_direction: Vector, normal: Vector) -> Vector | None:
    """Apply ``material`` to a ray hitting a surface with ``normal``.

    Returns:
        The new ray direction, or None if the ray is absorbed.
    """
    if isinstance(material, AbsorberMaterial):
        return scatter_absorber(incident_direction, normal)
    if isinstance(material, MirrorMaterial):
        return scatter_mirror(incident_direction, normal)
    if isinstance(material, RefractiveMaterial):
        return scatter_refractive(
            incident_direction, normal, material.ior, material.exterior_ior
        )
    if isinstance(material, FresnelMaterial):
        return scatter_fresnel(incident_direction, normal, material.reflection_angle)
    raise TypeError(f"Unknown material: {type(material).__name__}")


def material_to_dict(material: Material) -> dict[str, Any]:
    """Serialize a material as ``{"type": name, **params}``."""
    return {"type": material_type(material).name.lower(), **asdict(material)}


def material_from_dict(data: dict[str, Any]) -> Material:
    """Inverse of :func:`material_to_dict`.

    Raises:
        ValueError: If the type name is unknown.
    """
    params = dict(data)
    name = str(params.pop("type", "")).upper()
    if name not in MaterialType.__members__:
        raise ValueError(f"Unknown material type: {name.lower()}")
    return make_material(MaterialType[name], **params)
