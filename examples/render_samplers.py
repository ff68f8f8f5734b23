#!/usr/bin/env python3
"""Visualize the sample tables.

Draws a grid of boxes. Each column uses a cosine-power exponent of 1, 10,
100 and 1000; the first row shows regular tables and the second row
jittered ones. In every box the unit-square samples are plotted in white,
and the hemisphere directions derived from the same grid are projected
onto the xy plane (red) and the xz plane (green).

Usage:
    python -m examples.render_samplers [--size SIZE] [--samples N] [--output PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np
import taichi as ti

logger = logging.getLogger("render_samplers")

NUM_BOXES = 4
GRID_COLOR = (0.2, 0.2, 0.2, 1.0)
SQUARE_COLOR = (1.0, 1.0, 1.0, 1.0)
XY_COLOR = (1.0, 0.0, 0.0, 1.0)
XZ_COLOR = (0.0, 1.0, 0.0, 1.0)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Visualize the sample tables.")
    parser.add_argument("--size", type=int, default=520, help="Image size in pixels (default: 520)")
    parser.add_argument("--samples", type=int, default=8, help="Samples per axis (default: 8)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the jittered tables")
    parser.add_argument(
        "--output",
        type=str,
        default="samplers.bmp",
        help="Output file path (default: samplers.bmp)",
    )
    return parser.parse_args(argv)


def draw_line(buffer, x0: int, y0: int, x1: int, y1: int, color=GRID_COLOR) -> None:
    """Draw a line with Bresenham's algorithm (end point excluded)."""
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    x, y = x0, y0

    while (x, y) != (x1, y1):
        buffer.set_pixel(x, y, color)
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


def _box_coord(value: float, dim: int) -> int:
    return min(int(value * dim), dim - 1)


def plot_square_samples(buffer, offset_x: int, offset_y: int, dim: int, samples) -> None:
    for sx, sy in samples.set_at(0):
        buffer.set_pixel(offset_x + _box_coord(sx, dim), offset_y + _box_coord(sy, dim), SQUARE_COLOR)


def plot_hemisphere_samples(buffer, offset_x: int, offset_y: int, dim: int, samples) -> None:
    for vx, vy, vz in samples.set_at(0):
        x = _box_coord(0.5 * (vx + 1.0), dim)
        y = _box_coord(0.5 * (vy + 1.0), dim)
        z = _box_coord(0.5 * (vz + 1.0), dim)
        buffer.set_pixel(offset_x + x, offset_y + y, XY_COLOR)
        buffer.set_pixel(offset_x + x, offset_y + z, XZ_COLOR)


def render_samplers(size: int, n: int, rng: np.random.Generator):
    """Render the sampler grid into a FrameBuffer."""
    # Lazy imports to allow Taichi initialization first
    from src.pathtracer.core import sampler
    from src.pathtracer.core.framebuffer import FrameBuffer

    box = size // NUM_BOXES
    buffer = FrameBuffer(size, size)

    for i in range(1, NUM_BOXES):
        draw_line(buffer, 0, box * i, size - 1, box * i)
        draw_line(buffer, box * i, 0, box * i, size - 1)

    for column in range(NUM_BOXES):
        e = 10.0**column
        x = box * column

        plot_square_samples(buffer, x, 0, box, sampler.regular(n, num_sets=1))
        plot_hemisphere_samples(buffer, x, 0, box, sampler.hemisphere_regular(n, e, num_sets=1))

        square = sampler.jittered(n, num_sets=1, rng=rng)
        plot_square_samples(buffer, x, box, box, square)
        plot_hemisphere_samples(buffer, x, box, box, sampler.hemisphere(square, e, num_sets=1))

    return buffer


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    ti.init(arch=ti.cpu, default_fp=ti.f64)

    from src.pathtracer.preview.export import save_image

    buffer = render_samplers(args.size, args.samples, np.random.default_rng(args.seed))
    if not save_image(buffer.to_numpy(), args.output):
        return 1
    logger.info("Saved to: %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
