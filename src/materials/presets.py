# materials/presets.py
from core.vector import Vector3
from materials.material import Material, Albedo, WhiteBody, BlackBody, NoScatter
from materials.lambertian import Lambert
from materials.metal import Metal
from materials.dielectric import Dielectric
from materials.emission import Emission


def metal(albedo: Vector3, fuzz: float) -> Material:
    return Material(Metal(fuzz), Albedo(albedo))


def glass(refraction_index: float) -> Material:
    # Glass does not tint the light it lets through
    return Material(Dielectric(refraction_index), WhiteBody())


def light(color: Vector3) -> Material:
    return Material(NoScatter(), BlackBody(), Emission(color))


class MetalPresets:
    """Predefined metal materials with realistic properties."""

    @staticmethod
    def gold() -> Material:
        return metal(Vector3(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Material:
        return metal(Vector3(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Material:
        return metal(Vector3(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def chrome() -> Material:
        return metal(Vector3(0.9, 0.9, 0.9), fuzz=0.05)

    @staticmethod
    def mirror() -> Material:
        return metal(Vector3(0.8, 0.6, 0.2), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Material:
        return metal(Vector3(0.8, 0.8, 0.8), fuzz=0.3)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Material:
        return glass(1.5)

    @staticmethod
    def water() -> Material:
        return glass(1.33)

    @staticmethod
    def diamond() -> Material:
        return glass(2.42)


class LightPresets:
    """Predefined light sources with different colors and intensities."""

    @staticmethod
    def warm_light(intensity: float = 1.0) -> Material:
        return light(Vector3(1.0, 0.95, 0.9) * intensity)

    @staticmethod
    def daylight(intensity: float = 1.0) -> Material:
        return light(Vector3(1.0, 1.0, 1.0) * intensity)


class ColorPresets:
    """Common color presets for materials."""

    RED = Vector3(0.9, 0.2, 0.2)
    YELLOW = Vector3(0.8, 0.8, 0.0)
    BLUE = Vector3(0.1, 0.2, 0.5)
    GREEN = Vector3(0.2, 0.8, 0.2)
    WHITE = Vector3(0.9, 0.9, 0.9)
    GRAY = Vector3(0.5, 0.5, 0.5)

    @staticmethod
    def matte(color: Vector3) -> Material:
        """Create a matte material with the given color."""
        return Material(Lambert(), Albedo(color))
