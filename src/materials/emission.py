# materials/emission.py
from core.ray import Ray
from core.vector import Color, rgb, BLACK, WHITE
from geometry.hittable import Hit

SKY_ZENITH = rgb(0.5, 0.7, 1.0)


class Emit:
    """Base class of emission behaviours."""
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        raise NotImplementedError("evaluate() must be implemented by subclasses.")


class NoEmission(Emit):
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return BLACK


class NormalEmission(Emit):
    """Debug view: the surface normal as a color."""
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return hit.normal


class Emission(Emit):
    """
    Emissive surface that provides constant radiance.
    """
    def __init__(self, color: Color):
        self.color = color

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return self.color


class SkyBackground(Emit):
    """Vertical white-to-blue gradient on the ray direction."""
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        t = 0.5 * (incident.direction.normalize().y + 1.0)
        return WHITE * (1.0 - t) + SKY_ZENITH * t


class EnvironmentMap(Emit):
    """
    Texture lookup at the spherical coordinate of the ray direction. Meant for
    backgrounds, where the hit is a point at infinity.
    """
    def __init__(self, texture: int):
        self.texture = texture

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return scene_data.texture(self.texture).sample(incident, hit, scene_data, rng)
