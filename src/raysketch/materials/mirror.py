"""Mirror (specular reflective) material.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal at the hit
point. The sign of N does not matter. Objects without a more specific rule
reflect this way.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.materials.mirror import scatter_mirror
    >>> scatter_mirror(Vector(0.6, 0.8), Vector(0.0, -1.0))
    Vector(x=0.6, y=-0.8, z=0.0)
"""

from dataclasses import dataclass

from raysketch.core.vector import Vector, reflect


@dataclass(frozen=True)
class MirrorMaterial:
    """Perfect mirror. Has no parameters."""


def scatter_mirror(incident_direction: Vector, normal: Vector) -> Vector | None:
    """Reflect the incident direction about the surface normal.

    Args:
        incident_direction: The incoming ray direction.
        normal: The surface normal at the hit point (either orientation).

    Returns:
        The reflected direction, normalized.
    """
    return reflect(incident_direction, normal).normalized()
