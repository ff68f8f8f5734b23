"""Base material interface.

A material decides what happens to a ray that hits its surface: it either
scatters the ray (returning the outgoing ray and the attenuation applied to
whatever radiance that ray gathers) or absorbs it (returning None), which
terminates the path.

Materials are immutable once the scene is built and are shared read-only
by every render thread. Any randomness they need comes from their own
precomputed sample tables, indexed through the TraceContext of the path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.pathtracer.core.color import Color
from src.pathtracer.core.ray import Ray

if TYPE_CHECKING:
    from src.pathtracer.core.integrator import TraceContext
    from src.pathtracer.geometry.hitable import Intersection

# Distance the outgoing ray origin is moved off the surface
SCATTER_OFFSET = 0.01


@dataclass(frozen=True)
class ScatterResult:
    """Outcome of a successful scatter.

    Attributes:
        attenuation: Color multiplier for the radiance along scattered.
        scattered: The outgoing ray.
    """

    attenuation: Color
    scattered: Ray


class Material(ABC):
    """Scattering behavior attached to geometry."""

    @abstractmethod
    def scatter(
        self,
        context: TraceContext,
        ray: Ray,
        intersection: Intersection,
    ) -> ScatterResult | None:
        """Scatter an incoming ray at an intersection.

        Args:
            context: Selects which precomputed sample this bounce uses.
            ray: The incoming ray.
            intersection: The hit being shaded.

        Returns:
            The ScatterResult, or None if the ray is absorbed.
        """
