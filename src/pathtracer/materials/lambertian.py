"""Lambertian (ideal diffuse) material implementation.

This module implements diffuse reflection driven by a precomputed
hemisphere sample table. With a cosine-power exponent of 1 the table is
cosine-weighted, which is the importance-sampling distribution of the
Lambertian BRDF:

    f_r = albedo / pi,  pdf = cos(theta) / pi

so the per-bounce weight (f_r * cos(theta) / pdf) reduces to the albedo.

Example:
    >>> from src.pathtracer.core.sampler import hemisphere_jittered
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> material = Lambertian(hemisphere_jittered(8, 1.0), albedo=(0.8, 0.3, 0.3))
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.color import Color, as_color
from src.pathtracer.core.ray import (
    Ray,
    build_onb_from_normal,
    is_finite,
    local_to_world,
    near_zero,
    normalize,
)
from src.pathtracer.core.sampler import SampleSet
from src.pathtracer.materials.material import SCATTER_OFFSET, Material, ScatterResult

if TYPE_CHECKING:
    from src.pathtracer.core.integrator import TraceContext
    from src.pathtracer.geometry.hitable import Intersection


class Lambertian(Material):
    """Diffuse material.

    Attributes:
        samples: Hemisphere sample table (z-up local directions).
        albedo: The diffuse reflectance color (RGBA).
    """

    def __init__(self, samples: SampleSet, albedo: Sequence[float] | Color) -> None:
        if samples.dim != 3:
            raise ValueError(f"Lambertian needs a 3D hemisphere sample set, got dim={samples.dim}")
        self.samples = samples
        self.albedo = as_color(albedo)
        self.albedo.setflags(write=False)

    def scatter(
        self,
        context: TraceContext,
        ray: Ray,
        intersection: Intersection,
    ) -> ScatterResult | None:
        """Scatter into the hemisphere around the surface normal.

        Always scatters unless the sampled direction degenerates.
        """
        tangent, bitangent, normal = build_onb_from_normal(intersection.normal)
        local_dir = self.samples.sample(context.set_index, context.sample_index)

        direction = local_to_world(local_dir, tangent, bitangent, normal)
        if near_zero(direction):
            return None
        direction = normalize(direction)
        if not is_finite(direction):
            return None

        scattered = Ray(origin=intersection.point + SCATTER_OFFSET * normal, direction=direction)
        return ScatterResult(attenuation=self.albedo, scattered=scattered)

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo.tolist()}, samples={self.samples!r})"
