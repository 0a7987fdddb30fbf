"""Absorbing material: every ray that hits it stops.

Used for the canvas bounding box, which stands for the edge of the visible
drawing area.
"""

from dataclasses import dataclass

from raysketch.core.vector import Vector


@dataclass(frozen=True)
class AbsorberMaterial:
    """Material that terminates rays. Has no parameters."""


def scatter_absorber(incident_direction: Vector, normal: Vector) -> Vector | None:
    """Absorb the ray.

    Returns:
        Always None, meaning the ray is terminated.
    """
    return None
