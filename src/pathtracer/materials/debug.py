"""Debug materials for bootstrapping and visualization.

NullMaterial absorbs every ray, so surfaces render black. NormalMaterial
encodes the absolute surface normal as the attenuation color, which makes
geometry orientation visible without any lighting model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.pathtracer.core.color import color
from src.pathtracer.core.ray import Ray
from src.pathtracer.materials.material import SCATTER_OFFSET, Material, ScatterResult

if TYPE_CHECKING:
    from src.pathtracer.core.integrator import TraceContext
    from src.pathtracer.geometry.hitable import Intersection


class NullMaterial(Material):
    """Absorbs every ray."""

    def scatter(
        self,
        context: TraceContext,
        ray: Ray,
        intersection: Intersection,
    ) -> ScatterResult | None:
        return None

    def __repr__(self) -> str:
        return "NullMaterial()"


class NormalMaterial(Material):
    """Scatters along the normal with the absolute normal as color."""

    def scatter(
        self,
        context: TraceContext,
        ray: Ray,
        intersection: Intersection,
    ) -> ScatterResult | None:
        n = intersection.normal
        scattered = Ray(origin=intersection.point + SCATTER_OFFSET * n, direction=n)
        attenuation = color(abs(n[0]), abs(n[1]), abs(n[2]))
        return ScatterResult(attenuation=attenuation, scattered=scattered)

    def __repr__(self) -> str:
        return "NormalMaterial()"
