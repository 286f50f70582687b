# materials/material.py
"""
A material is the aggregate of three independent behaviours evaluated at a hit:

- scatter: the next ray, or None when the path is absorbed
- absorb: the color multiplying the light carried by the scattered ray
- emit: light given off by the surface itself
"""
from typing import Optional
from core.ray import Ray
from core.vector import Color, BLACK, WHITE
from geometry.hittable import Hit
from materials.emission import Emit, NoEmission


class Scatter:
    """Base class of scattering behaviours."""
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Optional[Ray]:
        raise NotImplementedError("evaluate() must be implemented by subclasses.")


class NoScatter(Scatter):
    """Never scatters. Used for purely emissive and debug surfaces."""
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Optional[Ray]:
        return None


class Absorb:
    """Base class of absorption behaviours."""
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        raise NotImplementedError("evaluate() must be implemented by subclasses.")


class BlackBody(Absorb):
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return BLACK


class WhiteBody(Absorb):
    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return WHITE


class Albedo(Absorb):
    def __init__(self, color: Color):
        self.color = color

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return self.color


class AlbedoMap(Absorb):
    """Albedo looked up in the texture table."""
    def __init__(self, texture: int):
        self.texture = texture

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> Color:
        return scene_data.texture(self.texture).sample(incident, hit, scene_data, rng)


class MaterialOutput:
    __slots__ = ("scatter", "absorb", "emit")

    def __init__(self, scatter: Optional[Ray], absorb: Color, emit: Color):
        self.scatter = scatter
        self.absorb = absorb
        self.emit = emit


class Material:
    def __init__(self, scatter: Scatter, absorb: Absorb, emit: Optional[Emit] = None):
        self.scatter = scatter
        self.absorb = absorb
        self.emit = emit if emit is not None else NoEmission()

    def evaluate(self, incident: Ray, hit: Hit, scene_data, rng) -> MaterialOutput:
        scatter = self.scatter.evaluate(incident, hit, scene_data, rng)
        absorb = self.absorb.evaluate(incident, hit, scene_data, rng)
        emit = self.emit.evaluate(incident, hit, scene_data, rng)
        return MaterialOutput(scatter, absorb, emit)

    def __repr__(self) -> str:
        return (f"Material({type(self.scatter).__name__}, {type(self.absorb).__name__}, "
                f"{type(self.emit).__name__})")
