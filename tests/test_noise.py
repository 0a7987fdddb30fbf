"""Tests for Perlin noise."""

import pytest


class TestPerlinNoise:
    """Test the multi-octave noise generator."""

    def test_same_seed_same_values(self):
        from raysketch.geometry.noise import PerlinNoise

        first = PerlinNoise(seed=3)
        second = PerlinNoise(seed=3)
        for x, y in [(0.1, 0.2), (5.5, 3.25), (120.0, 7.75)]:
            assert first(x, y) == second(x, y)

    def test_values_within_octave_weights(self):
        from raysketch.geometry.noise import PerlinNoise

        noise = PerlinNoise(octaves=3, amp_falloff=0.5, seed=11)
        limit = 0.5 + 0.25 + 0.125
        for i in range(200):
            value = noise(i * 0.37, i * 0.11, i * 0.05)
            assert 0.0 <= value <= limit

    def test_lattice_origin(self):
        """Test every octave samples the first table value at the origin."""
        from raysketch.geometry.noise import PerlinNoise

        noise = PerlinNoise(octaves=4, seed=5)
        assert noise(0.0) == pytest.approx(noise.lattice[0] * 0.9375)

    def test_single_octave_interpolates_lattice(self):
        from raysketch.geometry.noise import PerlinNoise

        noise = PerlinNoise(octaves=1, seed=5)
        assert noise(1.0) == pytest.approx(noise.lattice[1] * 0.5)
        assert noise(0.5) == pytest.approx((noise.lattice[0] + noise.lattice[1]) * 0.25)

    def test_symmetric_in_sign(self):
        from raysketch.geometry.noise import PerlinNoise

        noise = PerlinNoise(seed=2)
        assert noise(-2.3, -4.1) == noise(2.3, 4.1)

    def test_smooth(self):
        from raysketch.geometry.noise import PerlinNoise

        noise = PerlinNoise(seed=9)
        assert abs(noise(3.3, 1.2) - noise(3.3001, 1.2)) < 1e-3

    def test_noise_at_vector(self):
        from raysketch.core.vector import Vector
        from raysketch.geometry.noise import PerlinNoise

        noise = PerlinNoise(seed=4)
        assert noise.noise_at(Vector(1.5, 2.5, 0.5)) == noise(1.5, 2.5, 0.5)

    def test_invalid_settings(self):
        from raysketch.geometry.noise import PerlinNoise

        with pytest.raises(ValueError):
            PerlinNoise(octaves=0)
        with pytest.raises(ValueError):
            PerlinNoise(amp_falloff=1.5)
