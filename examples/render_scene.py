#!/usr/bin/env python3
"""Render a scene with the scanline path tracer.

Renders either the built-in demo scene or a JSON render job and writes the
result as an image (BMP, PNG, ... chosen by the output extension).

Usage:
    python -m examples.render_scene [options]

Options:
    --scene PATH        JSON render job (default: built-in demo scene)
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 240)
    --pixel-size SIZE   World units per pixel (default: 2 / height)
    --samples N         Pixel samples per axis, N^2 per pixel (default: 4)
    --depth DEPTH       Maximum trace depth (default: 8)
    --threads N         Render threads (default: number of cores)
    --seed SEED         Seed for reproducible renders
    --output OUTPUT     Output file path (default: image.bmp)
    --gamma GAMMA       Output gamma (default: 1.0)
    --quiet             Only log warnings and errors
    --verbose           Log per-row progress

Options given on the command line override the renderer section of a JSON
render job.

Example:
    python -m examples.render_scene --width 640 --height 480 --samples 8 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np
import taichi as ti

logger = logging.getLogger("render_scene")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the scanline path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON render job (default: built-in demo scene)",
    )
    parser.add_argument("--width", type=int, default=None, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=None, help="Image height in pixels (default: 240)")
    parser.add_argument(
        "--pixel-size",
        type=float,
        default=None,
        help="World units per pixel (default: 2 / height)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Pixel samples per axis, N^2 per pixel (default: 4)",
    )
    parser.add_argument("--depth", type=int, default=None, help="Maximum trace depth (default: 8)")
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Render threads (default: number of cores)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible renders")
    parser.add_argument(
        "--output",
        type=str,
        default="image.bmp",
        help="Output file path (default: image.bmp)",
    )
    parser.add_argument("--gamma", type=float, default=1.0, help="Output gamma (default: 1.0)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    verbosity.add_argument("--verbose", action="store_true", help="Log per-row progress")
    return parser.parse_args(argv)


def build_job(args: argparse.Namespace):
    """Build the render job from the scene file or the demo scene."""
    # Lazy imports to allow Taichi initialization first
    from src.pathtracer.core.renderer import RendererConfig
    from src.pathtracer.core.sampler import jittered
    from src.pathtracer.scene.config import RenderJob, load_render_job
    from src.pathtracer.scene.demo import SKY_COLOR, DemoSceneParams, create_demo_scene

    if args.scene is not None:
        job = load_render_job(args.scene)
        base = job.config
    else:
        scene, camera = create_demo_scene(DemoSceneParams(seed=args.seed))
        job = None
        base = None

    if args.width is not None:
        width = args.width
    else:
        width = base.image_width if base else 320
    if args.height is not None:
        height = args.height
    else:
        height = base.image_height if base else 240
    if args.pixel_size is not None:
        pixel_size = args.pixel_size
    elif base is not None and args.height is None:
        pixel_size = base.pixel_size
    else:
        # Non-positive heights are rejected by RendererConfig
        pixel_size = 2.0 / max(height, 1)

    if args.samples is not None:
        pixel_sampler = jittered(args.samples, rng=np.random.default_rng(args.seed))
    elif base is not None:
        pixel_sampler = base.pixel_sampler
    else:
        pixel_sampler = jittered(4, rng=np.random.default_rng(args.seed))

    config = RendererConfig(
        image_width=width,
        image_height=height,
        pixel_size=pixel_size,
        pixel_sampler=pixel_sampler,
        max_trace_depth=args.depth if args.depth is not None else (base.max_trace_depth if base else 8),
        ambient_color=base.ambient_color if base else SKY_COLOR,
        num_render_threads=args.threads if args.threads is not None else (base.num_render_threads if base else None),
        seed=args.seed if args.seed is not None else (base.seed if base else None),
    )

    if job is None:
        return RenderJob(scene=scene, camera=camera, config=config)
    return RenderJob(scene=job.scene, camera=job.camera, config=config)


def render_scene(args: argparse.Namespace) -> Path:
    """Render the selected scene and save it.

    Returns:
        Path to the saved image file.

    Raises:
        RuntimeError: If the image could not be written.
    """
    from src.pathtracer.core.renderer import Renderer
    from src.pathtracer.preview.export import save_image

    job = build_job(args)
    renderer = Renderer(job.config)

    start_time = time.time()
    report_every = max(1, job.config.image_height // 10)

    def progress_callback(rows: int, total: int) -> None:
        if rows % report_every == 0 or rows == total:
            logger.info("Progress: %d/%d rows (%.1f%%)", rows, total, 100.0 * rows / total)

    renderer.render(job.camera, job.scene, callback=progress_callback)

    output_file = Path(args.output)
    if not save_image(renderer.image, output_file, gamma=args.gamma):
        raise RuntimeError(f"Cannot write image {output_file}")

    logger.info("Saved to: %s", output_file.absolute())
    logger.info("Total time: %.2fs", time.time() - start_time)
    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.quiet:
        level = logging.WARNING
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Sample tables are built on the CPU backend in double precision
    ti.init(arch=ti.cpu, default_fp=ti.f64)

    try:
        render_scene(args)
        return 0
    except Exception:
        logger.exception("Render failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
