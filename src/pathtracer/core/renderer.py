"""Multi-threaded scanline renderer.

The Renderer owns the FrameBuffer and distributes scanlines over a fixed
pool of worker threads created for each render() call:

    - A shared row counter hands out the next unclaimed row; a worker that
      draws a row index >= image height exits. Fast rows simply make their
      worker come back for more, so the load balances itself.
    - Each row is traced into a private array and handed to the buffer with
      a single locked set_row() call.
    - The scene, camera and sample tables are only read during a render.

A failure in any worker is fatal to the render: all threads are joined,
then RenderError is raised with the first worker exception as its cause,
and the image is no longer available.

Example:
    >>> from src.pathtracer.core.renderer import Renderer, RendererConfig
    >>> from src.pathtracer.core.sampler import regular
    >>> config = RendererConfig(
    ...     image_width=320,
    ...     image_height=240,
    ...     pixel_size=0.01,
    ...     pixel_sampler=regular(4),
    ...     max_trace_depth=8,
    ...     ambient_color=(0.5, 0.7, 1.0, 1.0),
    ... )
    >>> renderer = Renderer(config)
    >>> renderer.render(camera, scene)
    >>> pixels = renderer.image  # (240, 320, 4)
"""

from __future__ import annotations

import itertools
import logging
import os
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.pathtracer.camera.base import Camera
from src.pathtracer.core.color import Color, as_color
from src.pathtracer.core.framebuffer import FrameBuffer
from src.pathtracer.core.integrator import PathTracer
from src.pathtracer.core.sampler import SampleSet
from src.pathtracer.scene.manager import Scene

logger = logging.getLogger(__name__)

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]


class RenderError(RuntimeError):
    """Raised when a render worker fails."""


@dataclass
class RendererConfig:
    """Render settings.

    Attributes:
        image_width: Image width in pixels.
        image_height: Image height in pixels.
        pixel_size: World units covered by one pixel on the film plane.
        pixel_sampler: Anti-aliasing sample table over the unit square.
        max_trace_depth: Number of scatter events a path may take.
        ambient_color: RGBA color of rays that leave the scene.
        num_render_threads: Worker count, None for the host core count.
        seed: Seed for reproducible renders, None for OS entropy.
    """

    image_width: int
    image_height: int
    pixel_size: float
    pixel_sampler: SampleSet
    max_trace_depth: int = 8
    ambient_color: Sequence[float] | Color = (0.0, 0.0, 0.0, 1.0)
    num_render_threads: int | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.image_width <= 0 or self.image_height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.image_width}x{self.image_height}"
            )
        if not self.pixel_size > 0.0:
            raise ValueError(f"pixel_size must be positive, got {self.pixel_size}")
        if not isinstance(self.pixel_sampler, SampleSet):
            raise ValueError("pixel_sampler must be a SampleSet")
        if self.pixel_sampler.dim != 2:
            raise ValueError(
                f"pixel_sampler must hold 2D unit-square samples, got dim={self.pixel_sampler.dim}"
            )
        if self.max_trace_depth < 0:
            raise ValueError(f"max_trace_depth must be non-negative, got {self.max_trace_depth}")
        if self.num_render_threads is not None and self.num_render_threads < 1:
            raise ValueError(
                f"num_render_threads must be positive, got {self.num_render_threads}"
            )
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"seed must be non-negative, got {self.seed}")
        self.ambient_color = as_color(self.ambient_color)

    @property
    def thread_count(self) -> int:
        """The number of worker threads a render will start."""
        if self.num_render_threads is not None:
            return self.num_render_threads
        return os.cpu_count() or 1


class Renderer:
    """Renders a scene through a camera into an owned FrameBuffer.

    Attributes:
        config: The render settings.
    """

    def __init__(self, config: RendererConfig) -> None:
        self.config = config
        self._buffer = FrameBuffer(config.image_width, config.image_height)
        self._completed = False

    @property
    def width(self) -> int:
        return self.config.image_width

    @property
    def height(self) -> int:
        return self.config.image_height

    @property
    def frame_buffer(self) -> FrameBuffer:
        return self._buffer

    @property
    def image(self) -> npt.NDArray[np.float64]:
        """The rendered pixel grid, shape (height, width, 4), read-only.

        Raises:
            RuntimeError: If no render has completed successfully.
        """
        if not self._completed:
            raise RuntimeError("No completed render. Call render() first.")
        pixels = self._buffer.to_numpy()
        pixels.setflags(write=False)
        return pixels

    def render(
        self,
        camera: Camera,
        scene: Scene,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render every scanline, blocking until all workers have joined.

        Args:
            camera: Generates the primary rays.
            scene: The primitives to render; snapshotted for the render.
            callback: Optional callback invoked from worker threads after
                each completed row with (rows_completed, total_rows).

        Raises:
            RenderError: If any worker failed. The first failure is the cause.
        """
        config = self.config
        tracer = PathTracer(config, camera, scene.objects)
        num_threads = config.thread_count

        self._completed = False
        self._buffer.reset()

        next_row = itertools.count()
        counter_lock = threading.Lock()
        errors: list[BaseException] = []
        rows_done = itertools.count(1)

        def claim_row() -> int:
            with counter_lock:
                return next(next_row)

        def worker() -> None:
            worker_rng = np.random.default_rng() if config.seed is None else None
            try:
                while True:
                    y = claim_row()
                    if y >= config.image_height:
                        return
                    if worker_rng is None:
                        rng = np.random.default_rng([config.seed, y])
                    else:
                        rng = worker_rng
                    self._buffer.set_row(y, tracer.trace_row(y, rng))
                    if callback is not None:
                        with counter_lock:
                            done = next(rows_done)
                        callback(done, config.image_height)
            except Exception as exc:
                logger.exception("Render worker %s failed", threading.current_thread().name)
                with counter_lock:
                    errors.append(exc)

        logger.info(
            "Rendering %dx%d, %d samples/pixel, depth %d, %d threads",
            config.image_width,
            config.image_height,
            config.pixel_sampler.set_size,
            config.max_trace_depth,
            num_threads,
        )
        start = time.perf_counter()

        threads = [
            threading.Thread(target=worker, name=f"render-{i}", daemon=True)
            for i in range(num_threads)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        if errors:
            raise RenderError(f"Render failed in {len(errors)} worker(s)") from errors[0]
        if not self._buffer.is_complete:
            raise RenderError("Render finished with unwritten rows")

        self._completed = True
        logger.info("Render finished in %.2fs", time.perf_counter() - start)
