"""Tests for Line segments and ray-line hits."""

import math

import pytest


class TestLineProperties:
    """Test derived line values."""

    def test_length_and_center(self):
        from raysketch.geometry.line import Line

        line = Line.from_coords(0, 0, 30, 40)
        assert line.length == pytest.approx(50.0)
        assert line.center.is_close(line.lerp(0.5))

    def test_normal_is_unit_and_perpendicular(self):
        from raysketch.geometry.line import Line

        line = Line.from_coords(10, 10, 60, 30)
        assert line.normal.magnitude == pytest.approx(1.0)
        assert line.normal.dot(line.delta) == pytest.approx(0.0, abs=1e-9)

    def test_slope(self):
        from raysketch.geometry.line import Line

        assert Line.from_coords(0, 0, 10, 5).slope == pytest.approx(0.5)
        assert Line.from_coords(3, 0, 3, 10).slope is None

    def test_point_at_distance(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        line = Line.from_coords(0, 0, 0, 10)
        assert line.point_at_distance(4).is_close(Vector(0, 4))

    def test_contains(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        line = Line.from_coords(0, 0, 10, 10)
        assert line.contains(Vector(5, 5))
        assert not line.contains(Vector(5, 6))
        assert not line.contains(Vector(11, 11))

    def test_bounding_box(self):
        from raysketch.geometry.line import Line

        box = Line.from_coords(10, 50, 30, 20).bounding_box
        assert (box.x, box.y, box.width, box.height) == (10, 20, 20, 30)

    def test_line_from_angle(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import line_from_angle

        line = line_from_angle(Vector(1, 1), math.pi / 2, 5)
        assert line.end.is_close(Vector(1, 6))


class TestLineRayHit:
    """Test ray intersection with a segment."""

    def test_ray_at_minus_45_degrees_hits_midpoint(self):
        """Test a ray from (0, 100) at -45 degrees meets y = x at (50, 50)."""
        from raysketch.core.ray import Ray
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        ray = Ray.from_angle(Vector(0, 100), -45.0)
        hit = Line.from_coords(0, 0, 100, 100).ray_hit(ray.origin, ray.direction)

        assert hit is not None
        assert hit.is_close(Vector(50, 50))

    def test_parallel_ray_misses(self):
        """Test a ray at +45 degrees runs parallel to y = x and misses."""
        from raysketch.core.ray import Ray
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        ray = Ray.from_angle(Vector(0, 100), 45.0)
        assert Line.from_coords(0, 0, 100, 100).ray_hit(ray.origin, ray.direction) is None

    def test_ray_behind_origin_misses(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        line = Line.from_coords(0, -10, 0, 10)
        assert line.ray_hit(Vector(5, 0), Vector(1, 0)) is None

    def test_ray_past_segment_end_misses(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        line = Line.from_coords(10, 0, 10, 10)
        assert line.ray_hit(Vector(0, 20), Vector(1, 0)) is None

    def test_ray_starting_on_line_does_not_hit_it(self):
        """Test that a hit at t = 0 is rejected."""
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        line = Line.from_coords(10, -10, 10, 10)
        assert line.ray_hit(Vector(10, 0), Vector(-1, 0)) is None

    def test_zero_length_segment_misses(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.line import Line

        line = Line.from_coords(10, 0, 10, 0)
        assert line.ray_hit(Vector(0, 0), Vector(1, 0)) is None
