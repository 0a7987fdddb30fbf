"""Refractive (lens) material.

Rays crossing the surface are bent by an angle derived from Snell's law
against the tangent interface at the hit point:

    theta = angle_between(incident, interface_normal)
    deflection = asin(n_exterior * sin(theta) / n)

and the incident direction is rotated by ``deflection``. The interface normal
is the inward surface normal, so the same rule bends rays entering and
leaving a circle in a consistent direction. This is a stylised lens model
rather than a physically exact refraction; it never reflects.

Key constants:
    - DEFAULT_IOR: 1.46 (fused quartz)
    - DEFAULT_EXTERIOR_IOR: 1.0 (air)

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.materials.refractive import scatter_refractive
    >>> scatter_refractive(Vector(-1.0, 0.0), Vector(1.0, 0.0))
    Vector(x=-1.0, y=0.0, z=0.0)
"""

import math
from dataclasses import dataclass

from raysketch.core.vector import Vector

DEFAULT_IOR = 1.46
DEFAULT_EXTERIOR_IOR = 1.0


@dataclass(frozen=True)
class RefractiveMaterial:
    """Lens material properties.

    Attributes:
        ior: Index of refraction of the object. Common values:
            - Water: 1.33
            - Fused quartz: 1.46
            - Glass: 1.5
        exterior_ior: Index of refraction of the surrounding medium.
    """

    ior: float = DEFAULT_IOR
    exterior_ior: float = DEFAULT_EXTERIOR_IOR

    def __post_init__(self) -> None:
        if self.ior <= 0 or self.exterior_ior <= 0:
            raise ValueError(
                f"Indices of refraction must be positive, got {self.ior} and {self.exterior_ior}"
            )


def critical_angle(ior: float, exterior_ior: float = DEFAULT_EXTERIOR_IOR) -> float:
    """Critical angle in radians for light leaving a medium of index ``ior``.

    Raises:
        ValueError: If ``exterior_ior`` is not smaller than ``ior``.
    """
    if exterior_ior >= ior:
        raise ValueError("Critical angle needs an exterior index below the interior one")
    return math.asin(exterior_ior / ior)


def deflection_angle(
    incident_direction: Vector,
    interface_normal: Vector,
    ior: float = DEFAULT_IOR,
    exterior_ior: float = DEFAULT_EXTERIOR_IOR,
) -> float:
    """Angle the incident direction is rotated by at the interface."""
    theta = incident_direction.angle_between(interface_normal)
    ratio = max(-1.0, min(1.0, exterior_ior * math.sin(theta) / ior))
    return math.asin(ratio)


def scatter_refractive(
    incident_direction: Vector,
    normal: Vector,
    ior: float = DEFAULT_IOR,
    exterior_ior: float = DEFAULT_EXTERIOR_IOR,
) -> Vector | None:
    """Bend the incident direction at the surface.

    Args:
        incident_direction: The incoming ray direction.
        normal: Outward surface normal at the hit point.
        ior: Index of refraction of the object.
        exterior_ior: Index of refraction of the surrounding medium.

    Returns:
        The deflected direction, normalized.
    """
    deflection = deflection_angle(incident_direction, -normal, ior, exterior_ior)
    return incident_direction.rotated(deflection).normalized()
