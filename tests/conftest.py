"""Pytest configuration for path tracer tests.

Provides seeded random generators and a few small scenes shared by the
test modules.
"""

import random

import pytest

from pathtracer.core.vector import Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.renderer.scene import Scene, sky_background


@pytest.fixture
def rng():
    """Deterministic generator so sampled assertions are reproducible."""
    return random.Random(1234)


@pytest.fixture
def grey():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


@pytest.fixture
def sky_scene(grey):
    """A single grey unit sphere under a sky gradient, no lights."""
    world = HittableList([Sphere(Vector3(0, 0, 0), 1.0, grey)])
    return Scene(world, sky_background())


def assert_vec_close(actual, expected, tol=1e-9):
    """Compare two Vector3 component-wise."""
    assert abs(actual.x - expected.x) < tol, f"{actual!r} != {expected!r}"
    assert abs(actual.y - expected.y) < tol, f"{actual!r} != {expected!r}"
    assert abs(actual.z - expected.z) < tol, f"{actual!r} != {expected!r}"
