# materials/lambertian.py
from typing import Optional
from core.ray import Ray
from core.utils import random_on_unit_sphere
from geometry.hittable import Hit
from materials.material import Scatter


class Lambert(Scatter):
    """
    Ideal diffuse reflection: the normal plus a uniform unit vector gives a
    cosine-weighted direction. Hits from behind the surface are absorbed.
    """
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Optional[Ray]:
        if hit.normal.dot(incident.direction) > 0.0:
            return None

        scatter_direction = (hit.normal + random_on_unit_sphere(rng)).normalize()

        # The sample can cancel the normal exactly
        if scatter_direction.length_squared() == 0.0:
            scatter_direction = hit.normal

        return Ray(hit.position, scatter_direction)
