# renderer/path_tracer.py
"""
Depth-bounded Monte Carlo estimate of the radiance carried along a ray.
"""
import random
from typing import Callable
from core.ray import Ray
from core.vector import Color, BLACK
from geometry.hittable import Hittable, Hit

Background = Callable[[Ray], Color]

# Keeps the recursion well below the interpreter's recursion limit
MAX_DEPTH_LIMIT = 256


def solid_background(color: Color) -> Background:
    def background(ray: Ray) -> Color:
        return color
    return background


def emission_background(emit, scene_data) -> Background:
    """
    Evaluates an emission behaviour as if the ray hit a point at infinity.
    """
    def background(ray: Ray) -> Color:
        return emit.evaluate(ray, Hit.at_infinity(ray.direction), scene_data, None)
    return background


def trace(root: Hittable, ray: Ray, depth: int, scene_data, rng: random.Random,
          background: Background) -> Color:
    if depth <= 0:
        # This ray did not reach any light
        return BLACK

    hit = root.hit(ray, scene_data)
    if hit is None:
        return background(ray)

    material = scene_data.material(hit.material)
    output = material.evaluate(ray, hit, scene_data, rng)
    if output.scatter is None:
        # Absorbed
        return output.emit
    incoming = trace(root, output.scatter, depth - 1, scene_data, rng, background)
    return output.emit + output.absorb * incoming
