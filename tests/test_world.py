"""Unit tests for the linear hittable list."""

import math

import pytest

from conftest import make_ray
from core.aabb import AABB
from core.vector import Vector3
from geometry.bvh import Bvh
from geometry.sphere import Sphere
from geometry.world import HittableList


class TestHittableList:
    def test_returns_closest_hit(self):
        world = HittableList([
            Sphere(Vector3(0, 0, -10), 1.0, material=0),
            Sphere(Vector3(0, 0, -4), 1.0, material=1),
            Sphere(Vector3(0, 0, -7), 1.0, material=2),
        ])
        hit = world.hit(make_ray((0, 0, 0), (0, 0, -1)), None)
        assert hit is not None
        assert hit.material == 1
        assert hit.t == pytest.approx(3.0)

    def test_empty_list_misses(self):
        assert HittableList().hit(make_ray((0, 0, 0), (0, 0, -1)), None) is None

    @pytest.mark.parametrize("order", [(0, 1), (1, 0)])
    def test_tie_keeps_first_member(self, order):
        world = HittableList(Sphere(Vector3(0, 0, -5), 1.0, material=m) for m in order)
        hit = world.hit(make_ray((0, 0, 0), (0, 0, -1)), None)
        assert hit.material == order[0]

    def test_callers_ray_is_not_modified(self):
        world = HittableList([Sphere(Vector3(0, 0, -5), 1.0, material=0)])
        ray = make_ray((0, 0, 0), (0, 0, -1))
        world.hit(ray, None)
        assert ray.t_max == math.inf

    def test_bounding_box_covers_members(self):
        world = HittableList()
        world.add(Sphere(Vector3(-2, 0, 0), 1.0, material=0))
        world.add(Sphere(Vector3(3, 1, -1), 0.5, material=0))
        assert world.bounding_box(None) == AABB(Vector3(-3, -1, -1.5), Vector3(3.5, 1.5, 1))
        assert len(world) == 2

    def test_empty_bounding_box(self):
        assert HittableList().bounding_box(None) == AABB.empty()

    def test_build_bvh_leaves_list_untouched(self):
        spheres = [Sphere(Vector3(i, 0, -5), 0.4, material=i) for i in range(4)]
        world = HittableList(spheres)
        bvh = world.build_bvh(None)
        assert isinstance(bvh, Bvh)
        assert world.objects == spheres
        assert bvh.hit(make_ray((2, 0, 0), (0, 0, -1)), None).material == 2
