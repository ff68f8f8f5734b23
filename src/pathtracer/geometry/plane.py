"""Infinite plane primitive.

A plane is given by a point on it and its normal. The intersection solves
    t = dot(point - origin, normal) / dot(direction, normal)

A ray parallel to the plane has no solution; such rays (and any t that is
not finite) are reported as misses.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray, Vec3, as_vec3, dot, is_finite, normalize, ray_at
from src.pathtracer.geometry.hitable import T_MIN, Hitable, Intersection

if TYPE_CHECKING:
    from src.pathtracer.materials.material import Material

# Denominators below this magnitude are treated as parallel rays
PARALLEL_EPSILON = 1e-12


class Plane(Hitable):
    """An infinite plane.

    Attributes:
        point: Any point on the plane.
        normal: The unit plane normal (normalized at construction).
        material: The material of the plane.
    """

    def __init__(
        self,
        point: Sequence[float] | Vec3,
        normal: Sequence[float] | Vec3,
        material: Material,
    ) -> None:
        n = normalize(as_vec3(normal))
        if not is_finite(n):
            raise ValueError("Plane normal must be a non-zero vector")
        self.point = as_vec3(point)
        self.normal = n
        self.material = material

    def intersect(self, ray: Ray) -> Intersection | None:
        denom = dot(ray.direction, self.normal)
        if abs(denom) < PARALLEL_EPSILON:
            return None

        t = dot(self.point - ray.origin, self.normal) / denom
        if not math.isfinite(t) or t <= T_MIN:
            return None

        return Intersection(t=t, point=ray_at(ray, t), normal=self.normal, material=self.material)

    def __repr__(self) -> str:
        return f"Plane(point={self.point.tolist()}, normal={self.normal.tolist()})"
