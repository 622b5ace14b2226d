# main.py
import argparse
import logging
import random
import sys
from pathtracer.renderer.raytracer import render
from pathtracer.renderer.scene import RenderSettings
from pathtracer.renderer.tone_mapping import TONE_MAPPERS, save_image
from pathtracer.scenes import SCENES

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Offline CPU path tracer")
    parser.add_argument("--scene", choices=sorted(SCENES), default="cornell_box",
                        help="Scene to render")
    parser.add_argument("--output", default="image.png", help="Output image path")
    parser.add_argument("--width", type=int, default=400, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=None,
                        help="Image height in pixels (default: square for Cornell scenes, 16:9 otherwise)")
    parser.add_argument("--samples", type=int, default=100, help="Samples per pixel")
    parser.add_argument("--max-depth", type=int, default=50, help="Maximum bounces per path")
    parser.add_argument("--seed", type=int, default=0, help="Seed for scene and sampling")
    parser.add_argument("--workers", type=int, default=None, help="Number of render threads")
    parser.add_argument("--tone-mapper", choices=sorted(TONE_MAPPERS), default="gamma")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log per-row progress")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    height = args.height
    if height is None:
        height = args.width if args.scene.startswith("cornell") else int(args.width * 9 / 16)

    options = dict(width=args.width, height=height, samples_per_pixel=args.samples,
                   max_depth=args.max_depth, seed=args.seed)
    if args.workers is not None:
        options["workers"] = args.workers
    try:
        settings = RenderSettings(**options)
    except ValueError as e:
        logger.error(str(e))
        return 2

    scene, camera = SCENES[args.scene](settings.aspect_ratio, random.Random(args.seed))
    framebuffer = render(scene, camera, settings)
    save_image(framebuffer, args.output, args.tone_mapper)
    return 0


if __name__ == "__main__":
    sys.exit(main())
