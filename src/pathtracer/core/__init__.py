"""Core rendering module.

Components:
    ray: Vector helpers and the Ray type
    color: RGBA colors and 32-bit packing
    sampler: Precomputed unit-square, hemisphere and unit-ball sample tables
    integrator: TraceContext, path transport and per-scanline tracing
    framebuffer: Shared RGBA pixel grid
    renderer: RendererConfig and the multi-threaded Renderer

Sample-table construction runs as Taichi kernels; per-ray work uses NumPy.
"""

from .color import BLACK, TRANSPARENT, WHITE, Color, as_color, color, to_rgba32
from .framebuffer import FrameBuffer
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    build_onb_from_normal,
    cross,
    dot,
    is_finite,
    length,
    length_squared,
    local_to_world,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    rotation_matrix,
    vec3,
)
from .sampler import DEFAULT_NUM_SETS, SampleSet

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from src.pathtracer.core.integrator or src.pathtracer.core.renderer.

__all__ = [
    "Ray",
    "Vec3",
    "vec3",
    "as_vec3",
    "ray_at",
    "make_ray",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "near_zero",
    "is_finite",
    "build_onb_from_normal",
    "local_to_world",
    "rotation_matrix",
    "Color",
    "color",
    "as_color",
    "to_rgba32",
    "BLACK",
    "WHITE",
    "TRANSPARENT",
    "SampleSet",
    "DEFAULT_NUM_SETS",
    "FrameBuffer",
]
