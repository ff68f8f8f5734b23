"""Path tracing integrator for Monte Carlo light transport.

This module implements the per-path transport loop and the per-scanline
pixel estimator that the renderer distributes across worker threads.

A path is a small state machine. Starting at depth 0 with a camera ray:

    - no hit                          -> terminate with the ambient color
    - hit at depth >= max_depth       -> terminate with black
    - hit, material absorbs the ray   -> terminate with black
    - hit, material scatters the ray  -> multiply the running attenuation
                                         and continue at depth + 1

The recursion radiance(ray) = attenuation * radiance(scattered) is evaluated
as a loop over a running attenuation product, so the stack depth stays
constant for any max_depth.

Each pixel is the box-filtered average of one set of the pixel sampler.
Random per-row and per-pixel offsets into the shuffled sample sets
decorrelate neighbouring pixels and successive bounces; the offsets are
carried to materials through a TraceContext.

Example:
    >>> from src.pathtracer.core.integrator import PathTracer
    >>> tracer = PathTracer(config, camera, scene.objects)
    >>> row = tracer.trace_row(0, np.random.default_rng(7))  # (width, 4)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from src.pathtracer.core.color import BLACK, Color, as_color
from src.pathtracer.core.ray import Ray, is_finite
from src.pathtracer.scene.intersection import intersect_scene

if TYPE_CHECKING:
    from src.pathtracer.camera.base import Camera
    from src.pathtracer.core.renderer import RendererConfig
    from src.pathtracer.geometry.hitable import Hitable

logger = logging.getLogger(__name__)

# Upper bound for the random per-row and per-pixel sample offsets
MAX_SAMPLE_OFFSET = 2**31


@dataclass(frozen=True)
class TraceContext:
    """Selects which precomputed sample a bounce consumes.

    Attributes:
        set_index: Which shuffled set of a sample table to use.
        sample_index: Which sample within that set to use.
    """

    set_index: int
    sample_index: int

    def bounce(self) -> TraceContext:
        """Context for the next bounce along the same path."""
        return TraceContext(self.set_index + 1, self.sample_index)


def trace_path(
    ray: Ray,
    context: TraceContext,
    objects: Sequence[Hitable],
    max_depth: int,
    ambient: Color,
) -> Color:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The primary (or any) ray to follow.
        context: Sample selection for the first bounce.
        objects: The scene primitives.
        max_depth: Number of scatter events allowed before a hit is
            terminated as black. With 0 every hit returns black.
        ambient: Color returned by rays that leave the scene.

    Returns:
        The RGBA radiance estimate.
    """
    throughput = np.ones(4, dtype=np.float64)
    depth = 0

    while True:
        hit = intersect_scene(objects, ray)
        if hit is None:
            return throughput * ambient
        if depth >= max_depth:
            return throughput * BLACK

        result = hit.material.scatter(context, ray, hit)
        if result is None:
            return throughput * BLACK

        scattered = result.scattered
        if not (is_finite(scattered.origin) and is_finite(scattered.direction)):
            return throughput * BLACK

        throughput = throughput * result.attenuation
        ray = scattered
        context = context.bounce()
        depth += 1


class PathTracer:
    """Renders scanlines of one camera view of a fixed primitive list.

    A PathTracer only reads its inputs, so a single instance is shared by
    every render thread. The random generator is passed per call.
    """

    def __init__(
        self,
        config: RendererConfig,
        camera: Camera,
        objects: Sequence[Hitable],
    ) -> None:
        self.width = config.image_width
        self.height = config.image_height
        self.pixel_size = config.pixel_size
        self.pixel_sampler = config.pixel_sampler
        self.max_depth = config.max_trace_depth
        self.ambient = as_color(config.ambient_color)
        self.camera = camera
        self.objects = tuple(objects)

    def trace_pixel(
        self,
        x: int,
        y: int,
        set_index: int,
        sample_offset: int,
    ) -> Color:
        """Average the radiance over one pixel-sampler set.

        Args:
            x: Pixel column.
            y: Pixel row, 0 at the top of the image.
            set_index: Which pixel-sampler set to use; also the starting
                set for material samples.
            sample_offset: Starting sample index for material samples.
        """
        half_extent = 0.5 * np.array([self.width, self.height], dtype=np.float64)
        corner = self.pixel_size * (np.array([x, y], dtype=np.float64) - half_extent - 0.5)
        samples = self.pixel_sampler.set_at(set_index)

        total = np.zeros(4, dtype=np.float64)
        for idx, sample in enumerate(samples):
            pos = corner + self.pixel_size * sample[:2]
            # Film y grows downward with the row index, camera dy grows upward
            ray = self.camera.generate_ray(pos[0], -pos[1])
            context = TraceContext(set_index, sample_offset + idx)
            total += trace_path(ray, context, self.objects, self.max_depth, self.ambient)

        return total / len(samples)

    def trace_row(self, y: int, rng: np.random.Generator) -> npt.NDArray[np.float64]:
        """Render one scanline into a private array of shape (width, 4)."""
        out = np.empty((self.width, 4), dtype=np.float64)
        set_offset = int(rng.integers(MAX_SAMPLE_OFFSET))

        for x in range(self.width):
            sample_offset = int(rng.integers(MAX_SAMPLE_OFFSET))
            set_offset += 1
            out[x] = self.trace_pixel(x, y, set_offset, sample_offset)

        logger.debug("Traced row %d", y)
        return out
