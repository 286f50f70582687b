# materials/metal.py
from typing import Optional
from core.ray import Ray
from core.utils import reflect, random_in_unit_ball
from geometry.hittable import Hit
from materials.material import Scatter


class Metal(Scatter):
    """
    Mirror reflection perturbed by a fuzz-scaled sample of the unit ball.
    """
    def __init__(self, fuzziness: float = 0.0):
        self.fuzziness = min(fuzziness, 1.0)

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Optional[Ray]:
        if hit.normal.dot(incident.direction) > 0.0:
            return None

        reflected = (reflect(incident.direction, hit.normal)
                     + random_in_unit_ball(rng) * self.fuzziness).normalize()

        # Absorb the ray if the fuzz pushed it below the surface
        if hit.normal.dot(reflected) < 0.0:
            return None

        return Ray(hit.position, reflected)
