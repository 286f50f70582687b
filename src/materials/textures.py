# materials/textures.py
import math
import numpy as np
from core import noise
from core.vector import Vector3, Color, rgb, BLACK


class Texture:
    """Base class for all textures."""
    def sample(self, incident, hit, scene_data, rng) -> Color:
        """Sample the texture at a hit."""
        raise NotImplementedError("sample() must be implemented by texture subclasses.")


class MissingTexture(Texture):
    """Placeholder slot in the texture table. Samples black."""
    def sample(self, incident, hit, scene_data, rng) -> Color:
        return BLACK


class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Color):
        self.color = color

    def sample(self, incident, hit, scene_data, rng) -> Color:
        return self.color


class CheckerTexture(Texture):
    """
    A 3D checker pattern on the unit lattice of the hit position. Both cells
    refer to other textures in the table.
    """
    def __init__(self, odd: int, even: int):
        self.odd = odd
        self.even = even

    def sample(self, incident, hit, scene_data, rng) -> Color:
        p = hit.position
        if (math.floor(p.x) + math.floor(p.y) + math.floor(p.z)) % 2 == 0:
            return scene_data.texture(self.even).sample(incident, hit, scene_data, rng)
        return scene_data.texture(self.odd).sample(incident, hit, scene_data, rng)


class NoiseTexture(Texture):
    """Value noise: one hashed gray level per unit lattice cell."""
    def __init__(self, seed: int):
        self.seed = seed

    def sample(self, incident, hit, scene_data, rng) -> Color:
        p = hit.position
        x = noise.real(math.floor(p.x), math.floor(p.y), math.floor(p.z), self.seed)
        x = 0.5 * x + 0.5
        return rgb(x, x, x)


def _grad_dot(p: Vector3, cx: int, cy: int, cz: int, seed: int) -> float:
    gx = noise.real(cx, cy, cz, seed + 1)
    gy = noise.real(cx, cy, cz, seed + 2)
    gz = noise.real(cx, cy, cz, seed + 3)
    return (p.x - cx) * gx + (p.y - cy) * gy + (p.z - cz) * gz


def _mix(a: float, b: float, t: float) -> float:
    return (b - a) * t + a


def _smootherstep(t: float) -> float:
    return (t * (t * 6.0 - 15.0) + 10.0) * t * t * t


class PerlinTexture(Texture):
    """
    Gradient noise. Corner gradients come from the lattice hash, so no
    permutation table is stored.
    """
    def __init__(self, seed: int):
        self.seed = seed

    def sample(self, incident, hit, scene_data, rng) -> Color:
        p = hit.position
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        cx, cy, cz = fx + 1, fy + 1, fz + 1
        seed = self.seed

        k1 = _grad_dot(p, fx, fy, fz, seed)
        k2 = _grad_dot(p, cx, fy, fz, seed)
        k3 = _grad_dot(p, fx, cy, fz, seed)
        k4 = _grad_dot(p, cx, cy, fz, seed)
        k5 = _grad_dot(p, fx, fy, cz, seed)
        k6 = _grad_dot(p, cx, fy, cz, seed)
        k7 = _grad_dot(p, fx, cy, cz, seed)
        k8 = _grad_dot(p, cx, cy, cz, seed)

        tx = _smootherstep(p.x - fx)
        ty = _smootherstep(p.y - fy)
        tz = _smootherstep(p.z - fz)

        # Trilinear interpolation
        k12 = _mix(k1, k2, tx)
        k34 = _mix(k3, k4, tx)
        k56 = _mix(k5, k6, tx)
        k78 = _mix(k7, k8, tx)
        k1234 = _mix(k12, k34, ty)
        k5678 = _mix(k56, k78, ty)
        x = 0.5 * _mix(k1234, k5678, tz) + 0.5
        return rgb(x, x, x)


class ImageTexture(Texture):
    """A texture backed by a float image array of shape (height, width, 3) in [0, 1]."""
    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] < 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"Image texture data must have shape (height, width, 3), got {data.shape}")
        self.data = data[:, :, :3]
        self.height, self.width = data.shape[0], data.shape[1]

    def sample(self, incident, hit, scene_data, rng) -> Color:
        # Flip V so that v = 1 is the top row
        uv = hit.uv.wrapped()
        u = uv.u
        v = 1.0 - uv.v

        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(color[0], color[1], color[2])
