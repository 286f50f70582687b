# src/geometry/world.py
from typing import Iterable, List, Optional
from core.aabb import AABB
from core.ray import Ray
from geometry.hittable import Hittable, Hit
from geometry.bvh import Bvh


class HittableList(Hittable):
    """
    An unordered collection scanned linearly. The ray's t_max shrinks to the
    closest hit found so far; a later member only wins when it is strictly
    closer, so ties keep the earliest member.
    """
    def __init__(self, objects: Iterable[Hittable] = ()):
        self.objects: List[Hittable] = list(objects)

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def hit(self, ray: Ray, scene_data) -> Optional[Hit]:
        hit_record = None
        ray = ray.copy()
        for obj in self.objects:
            rec = obj.hit(ray, scene_data)
            if rec is not None and (hit_record is None or rec.t < hit_record.t):
                ray.t_max = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, scene_data) -> AABB:
        if not self.objects:
            return AABB.empty()
        box = self.objects[0].bounding_box(scene_data)
        for obj in self.objects[1:]:
            box = AABB.surrounding_box(box, obj.bounding_box(scene_data))
        return box

    def build_bvh(self, scene_data) -> Bvh:
        """Wraps the members in a Bvh; the list itself is left untouched."""
        return Bvh(list(self.objects), scene_data)
