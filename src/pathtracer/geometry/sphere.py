"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray_origin + t * ray_direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + b*t + c = 0

where:
    a = dot(direction, direction)
    b = 2 * dot(direction, oc)
    c = dot(oc, oc) - radius^2
    oc = origin - center

The smaller root beyond T_MIN wins, otherwise the larger one (the ray
starts inside the sphere), otherwise the ray misses.

Example:
    >>> from src.pathtracer.core.ray import make_ray
    >>> from src.pathtracer.geometry.sphere import Sphere
    >>> from src.pathtracer.materials.debug import NullMaterial
    >>> sphere = Sphere((2.0, 0.0, 0.0), 1.0, NullMaterial())
    >>> hit = sphere.intersect(make_ray((0, 0, 0), (1, 0, 0)))
    >>> hit.t
    1.0
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray, Vec3, as_vec3, dot, ray_at
from src.pathtracer.geometry.hitable import T_MIN, Hitable, Intersection

if TYPE_CHECKING:
    from src.pathtracer.materials.material import Material


class Sphere(Hitable):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
        material: The material of the sphere.
    """

    def __init__(self, center: Sequence[float] | Vec3, radius: float, material: Material) -> None:
        if not radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = as_vec3(center)
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray: Ray) -> Intersection | None:
        oc = ray.origin - self.center

        a = dot(ray.direction, ray.direction)
        b = 2.0 * dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius
        discriminant = b * b - 4.0 * a * c

        if discriminant < 0.0:
            return None

        e = math.sqrt(discriminant)
        denom = 2.0 * a
        t1 = (-b - e) / denom
        t2 = (-b + e) / denom

        if t1 > T_MIN:
            t = t1
        elif t2 > T_MIN:
            t = t2
        else:
            return None

        point = ray_at(ray, t)
        # Outward normal: points from center to hit point
        normal = (point - self.center) / self.radius

        return Intersection(t=t, point=point, normal=normal, material=self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center.tolist()}, radius={self.radius})"
