# core/ray.py
import math
from core.vector import Vector3

# Nudge the start of secondary rays to avoid self-intersection
RAY_EPSILON = 1e-3


def reciprocal(x: float) -> float:
    """
    IEEE-754 reciprocal: 1/0 gives a signed infinity instead of raising.
    """
    if x == 0.0:
        return math.copysign(math.inf, x)
    return 1.0 / x


class Ray:
    """
    A segment origin + t * direction with t restricted to [t_min, t_max].
    The direction is kept normalized.
    """
    __slots__ = ("origin", "direction", "t_min", "t_max")

    def __init__(self, origin: Vector3, direction: Vector3,
                 t_min: float = RAY_EPSILON, t_max: float = math.inf):
        self.origin = origin
        self.direction = direction
        self.t_min = t_min
        self.t_max = t_max

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self.origin + self.direction * t

    def copy(self) -> "Ray":
        return Ray(self.origin, self.direction, self.t_min, self.t_max)

    def expand(self) -> "RayExpanded":
        return RayExpanded(self)

    def __repr__(self) -> str:
        return f"Ray({self.origin}, {self.direction}, [{self.t_min}, {self.t_max}])"


class RayExpanded:
    """
    A ray with its reciprocal direction cached for slab tests.

    Only inner.t_max changes during a traversal; the direction never does,
    so the cache stays valid across copies.
    """
    __slots__ = ("inner", "inv_direction")

    def __init__(self, inner: Ray, inv_direction: Vector3 = None):
        self.inner = inner
        if inv_direction is None:
            d = inner.direction
            inv_direction = Vector3(reciprocal(d.x), reciprocal(d.y), reciprocal(d.z))
        self.inv_direction = inv_direction

    def copy(self) -> "RayExpanded":
        return RayExpanded(self.inner.copy(), self.inv_direction)
