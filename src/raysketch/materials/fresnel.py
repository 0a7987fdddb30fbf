"""Fresnel lens material for line segments.

A Fresnel line collimates every ray that crosses it: the outgoing direction
is the line normal rotated by ``reflection_angle`` (180 degrees by default,
i.e. straight through the line along its back side). Only rays arriving from
the transmitting side pass; rays hitting the back are absorbed.

Example:
    >>> from raysketch.core.vector import Vector
    >>> from raysketch.materials.fresnel import scatter_fresnel
    >>> scatter_fresnel(Vector(0.0, 1.0), Vector(0.0, 1.0)) is None
    True
"""

import math
from dataclasses import dataclass

from raysketch.core.vector import Vector

DEFAULT_REFLECTION_ANGLE = 180.0


@dataclass(frozen=True)
class FresnelMaterial:
    """Fresnel collimator properties.

    Attributes:
        reflection_angle: Angle in degrees between the line normal and the
            outgoing direction.
    """

    reflection_angle: float = DEFAULT_REFLECTION_ANGLE


def collimated_direction(
    normal: Vector, reflection_angle: float = DEFAULT_REFLECTION_ANGLE
) -> Vector:
    """Direction every transmitted ray leaves the line with."""
    return Vector.from_angle(math.radians(reflection_angle) + normal.heading)


def scatter_fresnel(
    incident_direction: Vector,
    normal: Vector,
    reflection_angle: float = DEFAULT_REFLECTION_ANGLE,
) -> Vector | None:
    """Collimate a ray crossing a Fresnel line.

    Args:
        incident_direction: The incoming ray direction.
        normal: The line normal.
        reflection_angle: Angle in degrees from the normal to the output.

    Returns:
        The collimated direction, or None if the ray approaches from the
        absorbing side (moving against the output direction).
    """
    output = collimated_direction(normal, reflection_angle)
    if incident_direction.dot(output) <= 0:
        return None
    return output
