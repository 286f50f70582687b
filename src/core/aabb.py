# src/core/aabb.py
from numba import njit
from core.vector import Vector3


@njit(nogil=True)
def _slab_collide(min_x, min_y, min_z, max_x, max_y, max_z,
                  o_x, o_y, o_z, inv_x, inv_y, inv_z,
                  t_min, t_max):
    # Hot path. A NaN crossing (0 * inf) means the ray runs parallel to that
    # slab with its origin on one of the faces; the axis is skipped.
    t0 = (min_x - o_x) * inv_x
    t1 = (max_x - o_x) * inv_x
    if t0 == t0 and t1 == t1:
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > t_min:
            t_min = t0
        if t1 < t_max:
            t_max = t1

    t0 = (min_y - o_y) * inv_y
    t1 = (max_y - o_y) * inv_y
    if t0 == t0 and t1 == t1:
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > t_min:
            t_min = t0
        if t1 < t_max:
            t_max = t1

    t0 = (min_z - o_z) * inv_z
    t1 = (max_z - o_z) * inv_z
    if t0 == t0 and t1 == t1:
        if t0 > t1:
            t0, t1 = t1, t0
        if t0 > t_min:
            t_min = t0
        if t1 < t_max:
            t_max = t1

    return t_max > t_min


class AABB:
    """
    Axis-aligned bounding box. Invariant: minimum[i] <= maximum[i] on every axis.
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, minimum: Vector3, maximum: Vector3):
        self.minimum = minimum
        self.maximum = maximum

    def collide(self, ray) -> bool:
        """
        Slab test against a RayExpanded, folded with the ray's own [t_min, t_max].
        """
        lo = self.minimum
        hi = self.maximum
        o = ray.inner.origin
        inv = ray.inv_direction
        return _slab_collide(lo.x, lo.y, lo.z, hi.x, hi.y, hi.z,
                             o.x, o.y, o.z, inv.x, inv.y, inv.z,
                             ray.inner.t_min, ray.inner.t_max)

    def union(self, other: "AABB") -> "AABB":
        return AABB.surrounding_box(self, other)

    def centroid(self, axis: int) -> float:
        return 0.5 * (self.minimum[axis] + self.maximum[axis])

    def contains(self, other: "AABB") -> bool:
        return all(self.minimum[a] <= other.minimum[a] and other.maximum[a] <= self.maximum[a]
                   for a in range(3))

    def surface_area(self) -> float:
        d = self.maximum - self.minimum
        return 2 * (d.x * d.y + d.x * d.z + d.y * d.z)

    def is_valid(self) -> bool:
        return all(self.minimum[a] <= self.maximum[a] for a in range(3))

    def __eq__(self, other) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return self.minimum == other.minimum and self.maximum == other.maximum

    def __repr__(self) -> str:
        return f"AABB({self.minimum}, {self.maximum})"

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        small = Vector3(
            min(box0.minimum.x, box1.minimum.x),
            min(box0.minimum.y, box1.minimum.y),
            min(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            max(box0.maximum.x, box1.maximum.x),
            max(box0.maximum.y, box1.maximum.y),
            max(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

    @staticmethod
    def empty() -> "AABB":
        origin = Vector3(0.0, 0.0, 0.0)
        return AABB(origin, origin)
