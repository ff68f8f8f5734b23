"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness.
Perfect metals (fuzziness=0) produce mirror-like reflections, while fuzzier
metals scatter the reflected ray within a ball around the mirror direction.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal. The fuzz
offset comes from a precomputed unit-ball sample table scaled by the
fuzziness.

Example:
    >>> from src.pathtracer.core.sampler import sphere_random
    >>> from src.pathtracer.materials.metal import Metal
    >>> material = Metal(sphere_random(64), albedo=(0.8, 0.6, 0.2), fuzziness=0.3)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.color import Color, as_color
from src.pathtracer.core.ray import Ray, dot, is_finite, normalize, reflect
from src.pathtracer.core.sampler import SampleSet
from src.pathtracer.materials.material import Material, ScatterResult

if TYPE_CHECKING:
    from src.pathtracer.core.integrator import TraceContext
    from src.pathtracer.geometry.hitable import Intersection


class Metal(Material):
    """Specular material.

    Attributes:
        samples: Unit-ball sample table used for the fuzz offset.
        albedo: The reflective color (RGBA).
        fuzziness: Scale of the fuzz offset. 0 = perfect mirror.
    """

    def __init__(
        self,
        samples: SampleSet,
        albedo: Sequence[float] | Color,
        fuzziness: float = 0.0,
    ) -> None:
        if samples.dim != 3:
            raise ValueError(f"Metal needs a 3D unit-ball sample set, got dim={samples.dim}")
        if fuzziness < 0.0:
            raise ValueError(f"Fuzziness must be non-negative, got {fuzziness}")
        self.samples = samples
        self.albedo = as_color(albedo)
        self.albedo.setflags(write=False)
        self.fuzziness = float(fuzziness)

    def scatter(
        self,
        context: TraceContext,
        ray: Ray,
        intersection: Intersection,
    ) -> ScatterResult | None:
        """Reflect about the normal, perturbed by the fuzz offset.

        The ray is absorbed if the scattered direction does not point away
        from the surface.
        """
        offset = self.samples.sample(context.set_index, context.sample_index)
        direction = normalize(reflect(ray.direction, intersection.normal) + self.fuzziness * offset)

        if not is_finite(direction) or dot(direction, intersection.normal) <= 0.0:
            return None

        scattered = Ray(origin=intersection.point, direction=direction)
        return ScatterResult(attenuation=self.albedo, scattered=scattered)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo.tolist()}, fuzziness={self.fuzziness})"
