"""Perlin noise for generative sketches.

Value noise in the style of Processing / p5.js ``noise()``: a table of random
values is interpolated with a cosine ease across a wrapped 3D lattice, and
several octaves are summed with falling amplitude. The result is never
negative and stays below the sum of the octave weights, which is under 1 for the
default settings. It changes smoothly with its coordinates and is
symmetric in the sign of each coordinate.

Octave ``k`` is sampled at twice the frequency of octave ``k - 1`` and weighted
by ``0.5 * amp_falloff ** k``.

Example:
    >>> from raysketch.geometry.noise import PerlinNoise
    >>> noise = PerlinNoise(seed=7)
    >>> 0.0 <= noise(0.3, 1.7) < 1.0
    True
"""

from __future__ import annotations

import math

import numpy as np

from raysketch.core.vector import Vector

# Lattice wrap in y and z, as bit shifts of the table offset
Y_WRAP_BITS = 4
Y_WRAP = 1 << Y_WRAP_BITS
Z_WRAP_BITS = 8
Z_WRAP = 1 << Z_WRAP_BITS

# Table index mask; the table holds PERLIN_SIZE + 1 values
PERLIN_SIZE = 4095

DEFAULT_OCTAVES = 4
DEFAULT_AMP_FALLOFF = 0.5


def scaled_cosine(value: float) -> float:
    """Cosine ease from 0 at ``value == 0`` to 1 at ``value == 1``."""
    return 0.5 * (1.0 - math.cos(value * math.pi))


class PerlinNoise:
    """Seedable multi-octave noise generator.

    Args:
        octaves: Number of noise layers summed together, at least 1.
        amp_falloff: Amplitude factor between successive octaves, in [0, 1].
        seed: Seed for the lattice values. None draws fresh entropy.

    Raises:
        ValueError: If ``octaves`` or ``amp_falloff`` is out of range.
    """

    def __init__(
        self,
        octaves: int = DEFAULT_OCTAVES,
        amp_falloff: float = DEFAULT_AMP_FALLOFF,
        seed: int | None = None,
    ):
        if octaves < 1:
            raise ValueError(f"octaves must be at least 1, got {octaves}")
        if not 0.0 <= amp_falloff <= 1.0:
            raise ValueError(f"amp_falloff must be in [0, 1], got {amp_falloff}")

        self.octaves = octaves
        self.amp_falloff = amp_falloff
        self.lattice = np.random.default_rng(seed).random(PERLIN_SIZE + 1)

    def _at(self, offset: int) -> float:
        return float(self.lattice[offset & PERLIN_SIZE])

    def noise(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        """Noise value at a point."""
        x, y, z = abs(x), abs(y), abs(z)
        xi, yi, zi = int(math.floor(x)), int(math.floor(y)), int(math.floor(z))
        xf, yf, zf = x - xi, y - yi, z - zi

        total = 0.0
        amplitude = 0.5
        for _ in range(self.octaves):
            offset = xi + (yi << Y_WRAP_BITS) + (zi << Z_WRAP_BITS)
            rxf = scaled_cosine(xf)
            ryf = scaled_cosine(yf)

            n1 = self._at(offset)
            n1 += rxf * (self._at(offset + 1) - n1)
            n2 = self._at(offset + Y_WRAP)
            n2 += rxf * (self._at(offset + Y_WRAP + 1) - n2)
            n1 += ryf * (n2 - n1)

            offset += Z_WRAP
            n2 = self._at(offset)
            n2 += rxf * (self._at(offset + 1) - n2)
            n3 = self._at(offset + Y_WRAP)
            n3 += rxf * (self._at(offset + Y_WRAP + 1) - n3)
            n2 += ryf * (n3 - n2)

            n1 += scaled_cosine(zf) * (n2 - n1)

            total += n1 * amplitude
            amplitude *= self.amp_falloff

            # Next octave at double frequency
            xi, xf = _double(xi, xf)
            yi, yf = _double(yi, yf)
            zi, zf = _double(zi, zf)

        return total

    __call__ = noise

    def noise_at(self, point: Vector) -> float:
        """Noise value at a vector's coordinates."""
        return self.noise(point.x, point.y, point.z)


def _double(whole: int, fraction: float) -> tuple[int, float]:
    whole <<= 1
    fraction *= 2
    if fraction >= 1.0:
        whole += 1
        fraction -= 1.0
    return whole, fraction
