"""Pytest configuration for renderer tests.

Shared fixtures for building small scenes and deterministic random streams.
"""

import math
import random

import pytest

from core.ray import Ray
from core.scene_data import SceneData
from core.vector import Vector3, rgb
from materials.lambertian import Lambert
from materials.material import Albedo, Material


class FixedRandom:
    """Stand-in for random.Random that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def make_ray(origin, direction, t_min=1e-3, t_max=math.inf) -> Ray:
    return Ray(Vector3(*origin), Vector3(*direction).normalize(), t_min, t_max)


def assert_vec_close(actual: Vector3, expected, tol: float = 1e-9) -> None:
    expected = Vector3(*expected)
    assert actual.x == pytest.approx(expected.x, abs=tol)
    assert actual.y == pytest.approx(expected.y, abs=tol)
    assert actual.z == pytest.approx(expected.z, abs=tol)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def fixed_rng():
    return FixedRandom(0.5)


@pytest.fixture
def diffuse_scene_data():
    """Scene tables with two matte materials (ids 0 and 1)."""
    return SceneData(materials=[
        Material(Lambert(), Albedo(rgb(0.8, 0.8, 0.0))),
        Material(Lambert(), Albedo(rgb(0.1, 0.2, 0.5))),
    ])
