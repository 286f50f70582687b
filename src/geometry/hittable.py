# geometry/hittable.py
import math
from typing import Optional
from core.vector import Vector3
from core.uv import UV
from core.ray import Ray
from core.aabb import AABB


def spherical_uv(n: Vector3) -> UV:
    """
    Texture coordinate of a unit direction on the sphere.
    """
    return UV(0.5 - math.atan2(n.z, n.x) / math.tau, math.asin(max(-1.0, min(1.0, n.y))) / math.pi + 0.5)


class Hit:
    """
    Records details of a ray-object intersection. The normal is the outward
    geometric normal; material is filled in by the aggregate that owns the
    primitive.
    """
    __slots__ = ("t", "position", "normal", "uv", "material")

    def __init__(self, t: float, position: Vector3, normal: Vector3, uv: UV, material: Optional[int] = None):
        self.t = t
        self.position = position
        self.normal = normal
        self.uv = uv
        self.material = material

    @staticmethod
    def at_infinity(direction: Vector3) -> "Hit":
        """
        A pseudo-hit used to evaluate backgrounds for rays leaving the scene.
        """
        direction = direction.normalize()
        return Hit(math.inf, direction, direction, spherical_uv(direction))

    def __repr__(self) -> str:
        return f"Hit(t={self.t}, position={self.position}, material={self.material})"


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    The set of variants is closed: Sphere, TriangleRef, HittableList and Bvh.
    """
    def hit(self, ray: Ray, scene_data) -> Optional[Hit]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, scene_data) -> AABB:
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
