"""2D vector arithmetic used by every shape and ray in the package.

Vectors are immutable values: operations return new instances. The z
component defaults to 0.0 and only takes part in the 3D cross product.

Example:
    >>> from raysketch.core.vector import Vector, lerp
    >>> a = Vector(3.0, 4.0)
    >>> a.magnitude
    5.0
    >>> lerp(0.5, Vector(0, 0), Vector(10, 0))
    Vector(x=5.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """A point or direction in the sketch plane.

    Attributes:
        x: Horizontal component.
        y: Vertical component (screen space, y grows downward).
        z: Optional depth component, default 0.0.
    """

    x: float
    y: float
    z: float = 0.0

    # =========================================================================
    # Operators
    # =========================================================================

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    # =========================================================================
    # Measures
    # =========================================================================

    @property
    def mag_sq(self) -> float:
        """Squared length."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    @property
    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.mag_sq)

    @property
    def heading(self) -> float:
        """Angle of the vector in the xy plane, in radians (atan2)."""
        return math.atan2(self.y, self.x)

    def dist(self, other: Vector) -> float:
        """Distance between two points."""
        return (self - other).magnitude

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """3D cross product."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def cross_2d(self, other: Vector) -> float:
        """Z component of the cross product of the xy projections."""
        return self.x * other.y - self.y * other.x

    def angle_between(self, other: Vector) -> float:
        """Signed angle from this vector to ``other``.

        Uses the arccosine of the normalized dot product, clamped to [-1, 1],
        with the sign taken from the z component of the cross product.

        Returns:
            Angle in radians in [-pi, pi]. Zero if either vector has zero
            length.
        """
        denominator = self.magnitude * other.magnitude
        if denominator == 0.0:
            return 0.0

        cos_theta = max(-1.0, min(1.0, self.dot(other) / denominator))
        angle = math.acos(cos_theta)
        return -angle if self.cross_2d(other) < 0 else angle

    # =========================================================================
    # Derived vectors
    # =========================================================================

    def normalized(self) -> Vector:
        """Unit vector in the same direction; a zero vector is returned as-is."""
        length = self.magnitude
        if length == 0.0:
            return self
        return self / length

    def with_magnitude(self, length: float) -> Vector:
        return self.normalized() * length

    def rotated(self, theta: float) -> Vector:
        """Rotate about the origin by ``theta`` radians."""
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return Vector(
            self.x * cos_t - self.y * sin_t,
            self.x * sin_t + self.y * cos_t,
            self.z,
        )

    def rotated_around(self, theta: float, pivot: Vector) -> Vector:
        """Rotate about ``pivot`` by ``theta`` radians."""
        return (self - pivot).rotated(theta) + pivot

    def perpendicular(self) -> Vector:
        """The vector rotated a quarter turn, (-y, x)."""
        return Vector(-self.y, self.x, self.z)

    def is_close(self, other: Vector, tolerance: float = 1e-6) -> bool:
        return (
            abs(self.x - other.x) <= tolerance
            and abs(self.y - other.y) <= tolerance
            and abs(self.z - other.z) <= tolerance
        )

    # =========================================================================
    # Conversions
    # =========================================================================

    @classmethod
    def from_angle(cls, theta: float, length: float = 1.0) -> Vector:
        """Vector of the given length pointing at ``theta`` radians."""
        return cls(math.cos(theta) * length, math.sin(theta) * length)

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return ``[x, y, z]`` as a NumPy array."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)


def lerp(percent: float, start: Vector, end: Vector) -> Vector:
    """Linear interpolation between two points.

    The parameter is not clamped, so values outside [0, 1] extrapolate along
    the line through ``start`` and ``end``.
    """
    return start + (end - start) * percent


def reflect(direction: Vector, normal: Vector) -> Vector:
    """Reflect a direction about a surface normal.

    Computes ``d - 2 (d . n) n`` with the normal normalized first.
    """
    n = normal.normalized()
    return direction - n * (2.0 * direction.dot(n))
