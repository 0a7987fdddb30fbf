"""Scene members, hit testing and scene management.

Only the lightweight modules are imported here; import
``raysketch.scene.manager`` and ``raysketch.scene.presets`` directly, since
they depend on the emitters package which in turn depends on this one.
"""

from raysketch.scene.intersection import (
    Hit,
    Traceable,
    find_nearest_hit,
    shape_ray_hit,
    shape_surface_normal,
)
from raysketch.scene.objects import (
    SceneObject,
    bounding_box,
    default_material,
    fresnel_line,
)

__all__ = [
    "Hit",
    "SceneObject",
    "Traceable",
    "bounding_box",
    "default_material",
    "find_nearest_hit",
    "fresnel_line",
    "shape_ray_hit",
    "shape_surface_normal",
]
