"""Core module: vectors, rays and the propagation loop.

Components:
    vector: Immutable 2D/3D vector arithmetic, lerp and reflection
    ray: Mutable ray accumulator (origin, direction, travelled path)
    tracer: Nearest-hit search loop that drives a ray through a scene
"""

from .vector import Vector, lerp, reflect

# Note: ray and tracer are NOT imported here; they depend on geometry, which
# itself imports core.vector. Import them from raysketch.core.ray and
# raysketch.core.tracer directly.

__all__ = [
    "Vector",
    "lerp",
    "reflect",
]
