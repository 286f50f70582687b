# src/materials/dielectric.py
import math
from typing import Optional
from core.ray import Ray
from core.utils import reflect, refract, bernoulli
from geometry.hittable import Hit
from materials.material import Scatter


def schlick(cos_theta: float, eta: float) -> float:
    """
    Schlick's approximation of the Fresnel reflectance.
    """
    r0 = (1.0 - eta) / (1.0 + eta)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow(1.0 - cos_theta, 5)


class Dielectric(Scatter):
    """
    Glass-like surface. Reflects or refracts at random with the Fresnel
    reflectance as the reflection probability; total internal reflection
    always reflects.
    """
    def __init__(self, refraction_index: float):
        self.refraction_index = refraction_index

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Optional[Ray]:
        if hit.normal.dot(incident.direction) > 0.0:
            # Leaving the medium
            eta = self.refraction_index
            normal = -hit.normal
        else:
            eta = 1.0 / self.refraction_index
            normal = hit.normal

        direction = incident.direction
        cos_theta = min(-normal.dot(direction), 1.0)
        reflectance = schlick(cos_theta, eta)

        if bernoulli(rng, reflectance):
            bounce = reflect(direction, normal)
        else:
            bounce = refract(direction, normal, eta)
            if bounce is None:
                bounce = reflect(direction, normal)
        return Ray(hit.position, bounce)
