"""Tests for the Vector value type and its helpers."""

import math

import numpy as np
import pytest


class TestVectorArithmetic:
    """Test operators on vectors."""

    def test_add_sub(self):
        from raysketch.core.vector import Vector

        assert Vector(1, 2) + Vector(3, 4) == Vector(4, 6)
        assert Vector(1, 2) - Vector(3, 4) == Vector(-2, -2)

    def test_scalar_multiply_both_sides(self):
        from raysketch.core.vector import Vector

        assert Vector(1, -2) * 3 == Vector(3, -6)
        assert 3 * Vector(1, -2) == Vector(3, -6)

    def test_divide_and_negate(self):
        from raysketch.core.vector import Vector

        assert Vector(4, 8) / 4 == Vector(1, 2)
        assert -Vector(1, -2) == Vector(-1, 2)

    def test_vectors_are_immutable(self):
        """Test that a Vector cannot be modified in place."""
        from dataclasses import FrozenInstanceError

        from raysketch.core.vector import Vector

        v = Vector(1, 2)
        with pytest.raises(FrozenInstanceError):
            v.x = 5  # type: ignore[misc]


class TestVectorMeasures:
    """Test magnitudes, angles and products."""

    def test_magnitude(self):
        from raysketch.core.vector import Vector

        v = Vector(3, 4)
        assert v.mag_sq == 25
        assert v.magnitude == 5

    def test_heading(self):
        from raysketch.core.vector import Vector

        assert Vector(0, 1).heading == pytest.approx(math.pi / 2)
        assert Vector(-1, 0).heading == pytest.approx(math.pi)

    def test_dist(self):
        from raysketch.core.vector import Vector

        assert Vector(0, 0).dist(Vector(3, 4)) == pytest.approx(5.0)

    def test_dot_and_cross(self):
        from raysketch.core.vector import Vector

        a = Vector(1, 0)
        b = Vector(0, 1)
        assert a.dot(b) == 0
        assert a.cross(b) == Vector(0, 0, 1)
        assert a.cross_2d(b) == 1

    def test_angle_between_is_signed(self):
        """Test that the sign follows the 2D cross product."""
        from raysketch.core.vector import Vector

        assert Vector(1, 0).angle_between(Vector(0, 1)) == pytest.approx(math.pi / 2)
        assert Vector(1, 0).angle_between(Vector(0, -1)) == pytest.approx(-math.pi / 2)

    def test_angle_between_zero_vector(self):
        from raysketch.core.vector import Vector

        assert Vector(0, 0).angle_between(Vector(1, 0)) == 0.0

    def test_angle_between_parallel_is_clamped(self):
        """Test that rounding above 1 in the cosine does not raise."""
        from raysketch.core.vector import Vector

        v = Vector(0.1, 0.7)
        assert v.angle_between(v * 3) == pytest.approx(0.0, abs=1e-6)


class TestVectorDerived:
    """Test derived vectors and conversions."""

    def test_normalized(self):
        from raysketch.core.vector import Vector

        assert Vector(3, 4).normalized().is_close(Vector(0.6, 0.8))

    def test_normalized_zero_vector(self):
        """Test that normalizing a zero vector does not divide by zero."""
        from raysketch.core.vector import Vector

        assert Vector(0, 0).normalized() == Vector(0, 0)

    def test_with_magnitude(self):
        from raysketch.core.vector import Vector

        assert Vector(0, 2).with_magnitude(5).is_close(Vector(0, 5))

    def test_rotated(self):
        from raysketch.core.vector import Vector

        assert Vector(1, 0).rotated(math.pi / 2).is_close(Vector(0, 1))

    def test_rotated_around(self):
        from raysketch.core.vector import Vector

        rotated = Vector(2, 1).rotated_around(math.pi, Vector(1, 1))
        assert rotated.is_close(Vector(0, 1))

    def test_perpendicular(self):
        from raysketch.core.vector import Vector

        assert Vector(1, 0).perpendicular() == Vector(0, 1)

    def test_from_angle(self):
        from raysketch.core.vector import Vector

        assert Vector.from_angle(math.pi / 2, 2.0).is_close(Vector(0, 2))

    def test_conversions(self):
        from raysketch.core.vector import Vector

        v = Vector(1.5, -2.0)
        assert v.to_tuple() == (1.5, -2.0)
        np.testing.assert_array_equal(v.to_array(), np.array([1.5, -2.0, 0.0]))


class TestVectorHelpers:
    """Test module level lerp and reflect."""

    def test_lerp(self):
        from raysketch.core.vector import Vector, lerp

        assert lerp(0.25, Vector(0, 0), Vector(100, 0)) == Vector(25, 0)

    def test_lerp_extrapolates(self):
        """Test that lerp is not clamped to [0, 1]."""
        from raysketch.core.vector import Vector, lerp

        assert lerp(1.5, Vector(0, 0), Vector(10, 0)).is_close(Vector(15, 0))

    def test_reflect(self):
        from raysketch.core.vector import Vector, reflect

        reflected = reflect(Vector(1, 1), Vector(0, -3))
        assert reflected.is_close(Vector(1, -1))
