# renderer/raytracer.py
"""
Tile-parallel renderer.

The image is split into tiles that sit in a lock-protected stack. A fixed
pool of worker threads pops tiles, renders each one with its own random
generator and pushes the finished tile into a lock-protected result list.
Once every worker has returned, the tiles are copied into the final image
on the calling thread.

Each tile's generator is seeded with the (seed, tile index) pair, so the
image depends only on the scene and the seed, never on which worker took
which tile.
"""
import logging
import math
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, List, Tuple
import numpy as np
from core.errors import RenderError
from renderer.path_tracer import MAX_DEPTH_LIMIT, Background, trace
from renderer.tiles import Tile, split_in_tiles
from renderer.tone_mapping import encode_srgb

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration of one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Paths averaged per pixel.
        max_depth: Maximum number of path segments.
        tile_width: Tile width in pixels.
        tile_height: Tile height in pixels.
        workers: Number of render threads.
        seed: Base seed, combined with each tile index.
        gamma: Gamma of the final 8-bit encode.
    """

    width: int = 400
    height: int = 300
    samples_per_pixel: int = 16
    max_depth: int = 8
    tile_width: int = 32
    tile_height: int = 32
    workers: int = 4
    seed: int = 0
    gamma: float = 2.2

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def validate(self) -> None:
        for name in ("width", "height", "samples_per_pixel", "max_depth", "tile_width", "tile_height", "workers"):
            value = getattr(self, name)
            if not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if self.max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(f"max_depth must be at most {MAX_DEPTH_LIMIT}, got {self.max_depth}")
        if self.gamma <= 0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")


def tile_rng(seed: int, index: int) -> random.Random:
    """
    Generator for one tile. The pair is hashed as a string, so seed 1 tile 0
    and seed 0 tile 1 get different streams.
    """
    return random.Random(f"{seed}:{index}")


def pixel_samples(samples: int, rng: random.Random) -> Iterator[Tuple[float, float]]:
    """
    Sub-pixel offsets in [0, 1)^2. A square sample count is stratified on a
    k x k grid with one jittered sample per cell.
    """
    k = math.isqrt(samples)
    if k * k == samples:
        for sy in range(k):
            for sx in range(k):
                yield (sx + rng.random()) / k, (sy + rng.random()) / k
    else:
        for _ in range(samples):
            yield rng.random(), rng.random()


def render_tile(tile: Tile, root, scene_data, camera, background: Background,
                settings: RenderSettings) -> Tile:
    """
    Renders every pixel of a tile and stores the encoded RGBA pixels on it.
    """
    rng = tile_rng(settings.seed, tile.index)
    spp = settings.samples_per_pixel
    linear = np.zeros((tile.height, tile.width, 3), dtype=np.float64)

    for j in range(tile.height):
        row = tile.offset_j + j
        for i in range(tile.width):
            column = tile.offset_i + i
            r = g = b = 0.0
            for dx, dy in pixel_samples(spp, rng):
                u = (column + dx) / settings.width
                # Row 0 is the top of the image
                v = 1.0 - (row + dy) / settings.height
                ray = camera.get_ray(u, v, rng)
                color = trace(root, ray, settings.max_depth, scene_data, rng, background)
                r += color.x
                g += color.y
                b += color.z
            linear[j, i, 0] = r / spp
            linear[j, i, 1] = g / spp
            linear[j, i, 2] = b / spp

    tile.pixels = encode_srgb(linear, settings.gamma)
    return tile


def assemble(tiles: List[Tile], width: int, height: int) -> np.ndarray:
    """
    Copies every finished tile into a (height, width, 4) RGBA image.
    """
    image = np.zeros((height, width, 4), dtype=np.uint8)
    for tile in tiles:
        if tile.pixels is None:
            raise RenderError(f"{tile} was never rendered")
        image[tile.offset_j:tile.offset_j + tile.height,
              tile.offset_i:tile.offset_i + tile.width] = tile.pixels
    return image


class Renderer:
    def __init__(self, settings: RenderSettings):
        settings.validate()
        self.settings = settings

    def _worker(self, worker_id: int, pending: List[Tile], pending_lock: threading.Lock,
                finished: List[Tile], finished_lock: threading.Lock,
                root, scene_data, camera, background: Background) -> int:
        rendered = 0
        while True:
            with pending_lock:
                if not pending:
                    break
                tile = pending.pop()

            render_tile(tile, root, scene_data, camera, background, self.settings)

            with finished_lock:
                finished.append(tile)
            rendered += 1
            logger.debug("Worker %d finished %s", worker_id, tile)
        return rendered

    def render_tiles(self, root, scene_data, camera, background: Background) -> List[Tile]:
        """
        Renders all tiles with the worker pool and returns them in completion order.

        Raises:
            RenderError: a worker raised, or a tile did not come back.
        """
        s = self.settings
        tiles = split_in_tiles(s.width, s.height, s.tile_width, s.tile_height)
        pending = list(tiles)
        finished: List[Tile] = []
        pending_lock = threading.Lock()
        finished_lock = threading.Lock()
        workers = min(s.workers, len(tiles))

        logger.info("Rendering %dx%d, %d spp, depth %d: %d tiles on %d workers",
                    s.width, s.height, s.samples_per_pixel, s.max_depth, len(tiles), workers)
        start = time.perf_counter()

        errors = []
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render") as pool:
            futures = [pool.submit(self._worker, n, pending, pending_lock, finished, finished_lock,
                                   root, scene_data, camera, background)
                       for n in range(workers)]
            for future in futures:
                exc = future.exception()
                if exc is not None:
                    errors.append(exc)

        if errors:
            logger.error("%d render worker(s) failed", len(errors))
            raise RenderError(f"Render worker failed: {errors[0]!r}") from errors[0]
        if len(finished) != len(tiles):
            raise RenderError(f"Only {len(finished)} of {len(tiles)} tiles were rendered")

        logger.info("Rendered %d tiles in %.2fs", len(finished), time.perf_counter() - start)
        return finished

    def render(self, root, scene_data, camera, background: Background) -> np.ndarray:
        """Renders the scene and returns a (height, width, 4) uint8 RGBA image."""
        tiles = self.render_tiles(root, scene_data, camera, background)
        return assemble(tiles, self.settings.width, self.settings.height)
