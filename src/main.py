# main.py
import argparse
import logging
import os
import sys
from typing import List, Optional
from renderer.image_io import save_image
from renderer.raytracer import Renderer, RenderSettings
from scenes.example_scenes import SCENES

logger = logging.getLogger("main")

QUALITY_LEVELS = {
    "interactive": {"samples": 1, "bounces": 2},
    "balanced": {"samples": 16, "bounces": 8},
    "high_quality": {"samples": 100, "bounces": 16},
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render an example scene with the tile-parallel path tracer.")
    parser.add_argument("--scene", choices=sorted(SCENES), default="three_balls")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default="balanced")
    parser.add_argument("--width", type=int, default=320)
    parser.add_argument("--height", type=int, default=240)
    parser.add_argument("--spp", type=int, help="samples per pixel (overrides --quality)")
    parser.add_argument("--depth", type=int, help="maximum path depth (overrides --quality)")
    parser.add_argument("--tile", type=int, default=32, help="tile edge in pixels")
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--mesh", help="OBJ file for the mesh scene")
    parser.add_argument("--output", default="output.png")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every finished tile")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> RenderSettings:
    quality = QUALITY_LEVELS[args.quality]
    return RenderSettings(
        width=args.width,
        height=args.height,
        samples_per_pixel=args.spp if args.spp is not None else quality["samples"],
        max_depth=args.depth if args.depth is not None else quality["bounces"],
        tile_width=args.tile,
        tile_height=args.tile,
        workers=args.workers,
        seed=args.seed,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(asctime)s] [%(threadName)s] %(message)s")

    settings = settings_from_args(args)
    try:
        settings.validate()
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return 2

    if args.scene == "mesh":
        scene = SCENES["mesh"](settings.aspect_ratio, path=args.mesh)
    else:
        scene = SCENES[args.scene](settings.aspect_ratio)

    image = Renderer(settings).render(scene.root, scene.scene_data, scene.camera, scene.background)
    save_image(image, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
