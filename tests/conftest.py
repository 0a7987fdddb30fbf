"""Pytest configuration for raysketch tests.

Taichi must be initialized once per session before any RasterCanvas
allocates its pixel field. Scene fixtures build small, fully bounded scenes
that the propagation and emitter tests share.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def bounds():
    """Absorbing box exactly covering a 1000 x 1000 canvas."""
    from raysketch.scene.objects import bounding_box

    return bounding_box(1000, 1000)


@pytest.fixture
def small_bounds():
    """Absorbing box exactly covering a 100 x 100 canvas."""
    from raysketch.scene.objects import bounding_box

    return bounding_box(100, 100)
