# geometry/sphere.py
import math
from typing import Optional
from core.vector import Vector3
from core.ray import Ray
from core.aabb import AABB
from geometry.hittable import Hittable, Hit, spherical_uv


def hit_sphere(center: Vector3, radius: float, ray: Ray) -> Optional[Hit]:
    """
    Nearest intersection with t inside [ray.t_min, ray.t_max]. Tangent rays miss.
    """
    oc = ray.origin - center
    a = ray.direction.dot(ray.direction)
    half_b = oc.dot(ray.direction)
    c = oc.dot(oc) - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant <= 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Try the closer root first, then the farther one
    root = (-half_b - sqrt_disc) / a
    if root < ray.t_min or root > ray.t_max:
        root = (-half_b + sqrt_disc) / a
        if root < ray.t_min or root > ray.t_max:
            return None

    position = ray.at(root)
    normal = (position - center).normalize()
    return Hit(root, position, normal, spherical_uv(normal))


def bounding_box_sphere(center: Vector3, radius: float) -> AABB:
    offset = Vector3(radius, radius, radius)
    return AABB(center - offset, center + offset)


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material id.
    """
    def __init__(self, center: Vector3, radius: float, material: int):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, scene_data=None) -> Optional[Hit]:
        rec = hit_sphere(self.center, self.radius, ray)
        if rec is not None:
            rec.material = self.material
        return rec

    def bounding_box(self, scene_data=None) -> AABB:
        return bounding_box_sphere(self.center, self.radius)

    def __repr__(self) -> str:
        return f"Sphere({self.center}, {self.radius}, material={self.material})"
