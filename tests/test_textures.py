"""Unit tests for procedural and image textures."""

import numpy as np
import pytest
from PIL import Image

from conftest import FixedRandom
from core import noise
from core.errors import InvalidIndexError
from core.scene_data import SceneData
from core.uv import UV
from core.vector import BLACK, Vector3, rgb
from geometry.hittable import Hit
from materials.texture_loader import load_texture
from materials.textures import (CheckerTexture, ImageTexture, MissingTexture, NoiseTexture,
                                PerlinTexture, SolidTexture)

RED = rgb(1, 0, 0)
BLUE = rgb(0, 0, 1)


def hit_at(position=(0, 0, 0), uv=(0.0, 0.0)):
    return Hit(1.0, Vector3(*position), Vector3(0, 1, 0), UV(*uv))


def sample(texture, hit, scene_data=None):
    return texture.sample(None, hit, scene_data, FixedRandom(0.5))


@pytest.fixture
def checker_scene():
    return SceneData(textures=[SolidTexture(RED), SolidTexture(BLUE), CheckerTexture(odd=0, even=1)])


class TestNoiseHash:
    def test_deterministic(self):
        assert noise.integer(3, -7, 12, 42) == noise.integer(3, -7, 12, 42)

    def test_seed_changes_value(self):
        assert noise.integer(3, -7, 12, 42) != noise.integer(3, -7, 12, 43)

    def test_fits_in_signed_64_bits(self):
        for x in range(-20, 20):
            h = noise.integer(x, 2 * x, -x, 9)
            assert -(1 << 63) <= h < (1 << 63)

    def test_real_range(self):
        values = [noise.real(x, y, 0, 1) for x in range(-10, 10) for y in range(-10, 10)]
        assert all(-1.0 <= v <= 1.0 for v in values)
        # Not constant
        assert len(set(values)) > 100


class TestProceduralTextures:
    def test_solid(self):
        assert sample(SolidTexture(RED), hit_at()) == RED

    def test_missing_is_black(self):
        assert sample(MissingTexture(), hit_at()) == BLACK

    @pytest.mark.parametrize("position, expected", [
        ((0.5, 0.5, 0.5), BLUE),
        ((1.5, 0.5, 0.5), RED),
        ((1.5, 1.5, 0.5), BLUE),
        ((-0.5, 0.5, 0.5), RED),
        ((-0.5, -0.5, 0.5), BLUE),
    ])
    def test_checker_parity(self, checker_scene, position, expected):
        assert sample(checker_scene.texture(2), hit_at(position), checker_scene) == expected

    def test_checker_with_invalid_cell_texture(self):
        scene_data = SceneData(textures=[CheckerTexture(odd=5, even=6)])
        with pytest.raises(InvalidIndexError):
            sample(scene_data.texture(0), hit_at((0.5, 0.5, 0.5)), scene_data)

    def test_noise_is_constant_within_a_cell(self):
        texture = NoiseTexture(seed=3)
        a = sample(texture, hit_at((2.1, 3.2, -0.7)))
        b = sample(texture, hit_at((2.9, 3.8, -0.1)))
        assert a == b
        assert a.x == a.y == a.z
        assert 0.0 <= a.x <= 1.0

    def test_noise_depends_on_seed(self):
        hit = hit_at((2.5, 3.5, 4.5))
        assert sample(NoiseTexture(1), hit) != sample(NoiseTexture(2), hit)

    @pytest.mark.parametrize("point", [(0, 0, 0), (3, -2, 5), (-4, 7, 1)])
    def test_perlin_is_mid_gray_on_lattice(self, point):
        color = sample(PerlinTexture(seed=11), hit_at(point))
        assert color.x == pytest.approx(0.5)

    def test_perlin_is_smooth(self):
        texture = PerlinTexture(seed=11)
        a = sample(texture, hit_at((1.3, 2.7, 0.4)))
        b = sample(texture, hit_at((1.3 + 1e-6, 2.7, 0.4)))
        assert abs(a.x - b.x) < 1e-4

    def test_perlin_is_deterministic(self):
        hit = hit_at((0.3, 1.7, -2.2))
        assert sample(PerlinTexture(5), hit) == sample(PerlinTexture(5), hit)


class TestImageTexture:
    @pytest.fixture
    def quadrants(self):
        # Row 0 is the top of the image
        data = np.array([[[1, 0, 0], [0, 1, 0]],
                         [[0, 0, 1], [1, 1, 1]]], dtype=np.float64)
        return ImageTexture(data)

    @pytest.mark.parametrize("uv, expected", [
        ((0.25, 0.75), (1, 0, 0)),
        ((0.75, 0.75), (0, 1, 0)),
        ((0.25, 0.25), (0, 0, 1)),
        ((0.75, 0.25), (1, 1, 1)),
        ((1.25, 0.75), (1, 0, 0)),
        ((-0.25, -0.75), (1, 1, 1)),
    ])
    def test_sampling(self, quadrants, uv, expected):
        assert sample(quadrants, hit_at(uv=uv)) == Vector3(*expected)

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            ImageTexture(np.zeros((4, 4)))

    def test_load_png(self, tmp_path):
        path = tmp_path / "tex.png"
        pixels = np.zeros((2, 3, 3), dtype=np.uint8)
        pixels[0, 0] = (255, 0, 0)
        Image.fromarray(pixels).save(path)
        texture = load_texture(str(path))
        assert (texture.width, texture.height) == (3, 2)
        assert sample(texture, hit_at(uv=(0.1, 0.9))) == Vector3(1, 0, 0)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_texture(str(tmp_path / "nope.png"))

    def test_load_garbage(self, tmp_path):
        path = tmp_path / "garbage.png"
        path.write_bytes(b"not an image")
        with pytest.raises(ValueError):
            load_texture(str(path))
