"""Materials module: what happens to a ray when it hits an object.

Components:
    absorber: Terminates the ray (canvas edges)
    mirror: Specular reflection about the surface normal (default)
    refractive: Lens-style deflection through circles
    fresnel: Collimation along a line's normal, one-sided
    base: MaterialType enum, dispatch and (de)serialization

Each material provides a frozen dataclass of parameters and a scatter
function returning the new direction, or None when the ray is absorbed.
"""

from .absorber import AbsorberMaterial, scatter_absorber
from .base import (
    Material,
    MaterialType,
    make_material,
    material_from_dict,
    material_to_dict,
    material_type,
    scatter,
)
from .fresnel import FresnelMaterial, collimated_direction, scatter_fresnel
from .mirror import MirrorMaterial, scatter_mirror
from .refractive import (
    RefractiveMaterial,
    critical_angle,
    deflection_angle,
    scatter_refractive,
)

__all__ = [
    "AbsorberMaterial",
    "scatter_absorber",
    "MirrorMaterial",
    "scatter_mirror",
    "RefractiveMaterial",
    "scatter_refractive",
    "deflection_angle",
    "critical_angle",
    "FresnelMaterial",
    "scatter_fresnel",
    "collimated_direction",
    "Material",
    "MaterialType",
    "material_type",
    "make_material",
    "scatter",
    "material_to_dict",
    "material_from_dict",
]
