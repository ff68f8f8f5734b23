"""Common interface for ray-intersectable primitives.

Every primitive owns (a shared reference to) its material and answers a
single query: the nearest forward intersection with a ray. Forward means
strictly beyond T_MIN, which keeps a ray that just left a surface from
hitting that same surface again because of rounding ("shadow acne").
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray, Vec3

if TYPE_CHECKING:
    from src.pathtracer.materials.material import Material

# Minimum hit distance accepted by every primitive
T_MIN = 1e-4


@dataclass(frozen=True)
class Intersection:
    """Record of a ray-primitive intersection.

    Attributes:
        t: The ray parameter of the hit.
        point: The world-space hit point.
        normal: The unit surface normal at the hit point.
        material: The material of the primitive that was hit.
    """

    t: float
    point: Vec3
    normal: Vec3
    material: Material


class Hitable(ABC):
    """A primitive that can be intersected by rays.

    Attributes:
        material: The material shared by every hit on this primitive.
    """

    material: Material

    @abstractmethod
    def intersect(self, ray: Ray) -> Intersection | None:
        """Find the nearest intersection with t > T_MIN.

        Args:
            ray: The ray to test.

        Returns:
            The Intersection, or None if the ray misses.
        """
