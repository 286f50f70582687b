"""Tests for the tile-parallel renderer.

Tests cover:
- Settings validation and per-pixel sample placement
- Determinism across runs and worker counts
- Worker failures surfacing as RenderError
- Final image assembly and the 8-bit encode
"""

import math

import numpy as np
import pytest

from camera.camera import Camera
from core.errors import RenderError
from core.scene_data import SceneData
from core.vector import rgb
from geometry.hittable import Hittable
from geometry.world import HittableList
from materials.emission import SkyBackground
from renderer.path_tracer import emission_background, solid_background
from renderer.raytracer import Renderer, RenderSettings, assemble, pixel_samples, render_tile, tile_rng
from renderer.tiles import Tile, split_in_tiles
from renderer.tone_mapping import encode_srgb
from scenes.example_scenes import three_balls


def small_settings(**overrides):
    values = dict(width=8, height=6, samples_per_pixel=4, max_depth=3,
                  tile_width=4, tile_height=4, workers=1, seed=7)
    values.update(overrides)
    return RenderSettings(**values)


def render_scene(settings):
    scene = three_balls(settings.aspect_ratio)
    return Renderer(settings).render(scene.root, scene.scene_data, scene.camera, scene.background)


class Exploding(Hittable):
    def hit(self, ray, scene_data):
        raise ZeroDivisionError("boom")

    def bounding_box(self, scene_data):
        raise ZeroDivisionError("boom")


class TestRenderSettings:
    def test_defaults_are_valid(self):
        RenderSettings().validate()

    @pytest.mark.parametrize("overrides", [
        {"width": 0},
        {"height": -3},
        {"samples_per_pixel": 0},
        {"samples_per_pixel": 1.5},
        {"max_depth": 0},
        {"max_depth": 10000},
        {"tile_width": 0},
        {"workers": 0},
        {"gamma": 0.0},
    ])
    def test_invalid_settings(self, overrides):
        with pytest.raises(ValueError):
            Renderer(small_settings(**overrides))

    def test_aspect_ratio(self):
        assert small_settings().aspect_ratio == pytest.approx(8 / 6)


class TestTileRng:
    def test_same_pair_repeats(self):
        a = [tile_rng(3, 7).random() for _ in range(5)]
        b = [tile_rng(3, 7).random() for _ in range(5)]
        assert a == b

    @pytest.mark.parametrize("first, second", [((1, 0), (0, 1)), ((0, 2), (1, 1)), ((10, 1), (1, 10))])
    def test_seed_and_index_do_not_collide(self, first, second):
        assert tile_rng(*first).random() != tile_rng(*second).random()


class TestPixelSamples:
    def test_square_count_is_stratified(self, rng):
        samples = list(pixel_samples(4, rng))
        assert len(samples) == 4
        cells = {(int(dx * 2), int(dy * 2)) for dx, dy in samples}
        assert cells == {(0, 0), (1, 0), (0, 1), (1, 1)}

    @pytest.mark.parametrize("count", [1, 3, 7])
    def test_other_counts(self, rng, count):
        samples = list(pixel_samples(count, rng))
        assert len(samples) == count
        assert all(0.0 <= dx < 1.0 and 0.0 <= dy < 1.0 for dx, dy in samples)


class TestEncode:
    def test_srgb_encode(self):
        linear = np.array([[[0.0, 1.0, 0.5], [-1.0, 2.0, math.nan]]])
        out = encode_srgb(linear)
        assert out.dtype == np.uint8
        assert out.shape == (1, 2, 4)
        assert out[0, 0].tolist() == [0, 255, int(255 * 0.5 ** (1 / 2.2)), 255]
        assert out[0, 1].tolist() == [0, 255, 0, 255]

    def test_linear_encode(self):
        out = encode_srgb(np.full((1, 1, 3), 0.5), gamma=1.0)
        assert out[0, 0].tolist() == [127, 127, 127, 255]

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            encode_srgb(np.zeros((2, 2, 4)))


class TestAssemble:
    def test_tiles_land_at_their_offsets(self):
        tiles = split_in_tiles(5, 3, 2, 2)
        for tile in tiles:
            tile.pixels = np.full((tile.height, tile.width, 4), tile.index, dtype=np.uint8)
        image = assemble(list(reversed(tiles)), 5, 3)
        assert image.shape == (3, 5, 4)
        assert image[0, 0, 0] == 0
        assert image[0, 4, 0] == 2
        assert image[2, 0, 0] == 3
        assert image[2, 4, 0] == 5

    def test_unrendered_tile(self):
        with pytest.raises(RenderError):
            assemble([Tile(0, 0, 0, 2, 2)], 2, 2)


class TestRenderer:
    def test_image_shape_and_alpha(self):
        image = render_scene(small_settings())
        assert image.shape == (6, 8, 4)
        assert image.dtype == np.uint8
        assert (image[:, :, 3] == 255).all()

    def test_same_seed_same_image(self):
        assert np.array_equal(render_scene(small_settings()), render_scene(small_settings()))

    def test_worker_count_does_not_change_image(self):
        single = render_scene(small_settings(workers=1))
        several = render_scene(small_settings(workers=4))
        assert np.array_equal(single, several)

    def test_seed_changes_image(self):
        assert not np.array_equal(render_scene(small_settings(seed=1)), render_scene(small_settings(seed=2)))

    def test_every_tile_comes_back(self):
        settings = small_settings(workers=3, width=9, height=7)
        scene = three_balls(settings.aspect_ratio)
        tiles = Renderer(settings).render_tiles(scene.root, scene.scene_data, scene.camera, scene.background)
        assert sorted(t.index for t in tiles) == list(range(len(split_in_tiles(9, 7, 4, 4))))
        assert all(t.pixels.shape == (t.height, t.width, 4) for t in tiles)

    def test_single_worker_takes_tiles_from_the_top_of_the_stack(self):
        settings = small_settings()
        scene = three_balls(settings.aspect_ratio)
        tiles = Renderer(settings).render_tiles(scene.root, scene.scene_data, scene.camera, scene.background)
        assert [t.index for t in tiles] == [3, 2, 1, 0]

    def test_solid_background(self):
        settings = small_settings(workers=2)
        background = solid_background(rgb(0.25, 0.25, 0.25))
        image = Renderer(settings).render(HittableList(), SceneData(), Camera(settings.aspect_ratio, 1.0),
                                          background)
        expected = int(255 * 0.25 ** (1 / 2.2))
        assert (image[:, :, :3] == expected).all()

    def test_first_row_is_top_of_image(self):
        settings = small_settings()
        scene_data = SceneData()
        background = emission_background(SkyBackground(), scene_data)
        image = Renderer(settings).render(HittableList(), scene_data, Camera(settings.aspect_ratio, math.pi / 2),
                                          background)
        # The sky is bluer overhead, so red falls towards the top
        assert image[0, :, 0].max() < image[-1, :, 0].min()

    @pytest.mark.parametrize("workers", [1, 3])
    def test_worker_failure_raises_render_error(self, workers):
        settings = small_settings(workers=workers)
        with pytest.raises(RenderError) as excinfo:
            Renderer(settings).render(Exploding(), SceneData(), Camera(settings.aspect_ratio, 1.0),
                                      solid_background(rgb(0, 0, 0)))
        assert isinstance(excinfo.value.__cause__, ZeroDivisionError)

    def test_render_tile_uses_tile_seed(self):
        settings = small_settings()
        scene = three_balls(settings.aspect_ratio)
        first = render_tile(split_in_tiles(8, 6, 4, 4)[2], scene.root, scene.scene_data, scene.camera,
                            scene.background, settings)
        second = render_tile(split_in_tiles(8, 6, 4, 4)[2], scene.root, scene.scene_data, scene.camera,
                             scene.background, settings)
        assert np.array_equal(first.pixels, second.pixels)
        assert first.pixels.shape == (2, 4, 4)
