# core/utils.py
import math
import random
from typing import Optional
from core.vector import Vector3


def random_in_unit_disk(rng: random.Random) -> Vector3:
    """
    Returns a random point inside the unit disk (z = 0).
    """
    while True:
        x = 2.0 * rng.random() - 1.0
        y = 2.0 * rng.random() - 1.0
        if x * x + y * y < 1.0:
            return Vector3(x, y, 0.0)


def random_in_unit_ball(rng: random.Random) -> Vector3:
    """
    Returns a random point inside the unit ball.
    """
    while True:
        p = Vector3(2.0 * rng.random() - 1.0,
                    2.0 * rng.random() - 1.0,
                    2.0 * rng.random() - 1.0)
        if p.dot(p) < 1.0:
            return p


def random_on_unit_sphere(rng: random.Random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere),
    using Marsaglia's disk method.
    """
    while True:
        x = 2.0 * rng.random() - 1.0
        y = 2.0 * rng.random() - 1.0
        s = x * x + y * y
        if s < 1.0:
            n = 2.0 * math.sqrt(1.0 - s)
            return Vector3(x * n, y * n, 1.0 - 2.0 * s)


def bernoulli(rng: random.Random, p: float) -> bool:
    """
    True with probability p.
    """
    return rng.random() < p


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the unit normal n. The result has the length of v.
    """
    return v - n * (2 * v.dot(n))


def refract(v: Vector3, n: Vector3, eta: float) -> Optional[Vector3]:
    """
    Refracts the unit vector v through a surface with unit normal n facing v.
    Returns None on total internal reflection.
    """
    cos_theta = n.dot(v)
    k = 1.0 - eta * eta * (1.0 - cos_theta * cos_theta)
    if k < 0.0:
        return None
    return v * eta - n * (eta * cos_theta + math.sqrt(k))
