"""Oriented box primitive with slab intersection.

The box is described by its center and three half-extent axes u, v, w
(each axis points from the center to the middle of a face, and its length
is the half size along that direction). The intersection uses the slab
method: for every axis the ray enters and leaves the pair of parallel
faces at two distances, and the box is hit where all three intervals
overlap.

For each slab the near distance may raise the running tmin and the far
distance may lower the running tmax; the face normal belonging to the
current tmin/tmax is tracked alongside. The face normal of the slab along
u is v x w (and cyclically), which stays correct for rotated boxes.

Example:
    >>> from src.pathtracer.geometry.box import Box
    >>> from src.pathtracer.materials.debug import NullMaterial
    >>> box = Box.from_size((0, 0, 0), (2, 2, 2), (0.0, 0.7, 0.0), NullMaterial())
"""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    length,
    normalize,
    ray_at,
    rotation_matrix,
)
from src.pathtracer.geometry.hitable import T_MIN, Hitable, Intersection

if TYPE_CHECKING:
    from src.pathtracer.materials.material import Material


class Box(Hitable):
    """An oriented box.

    Attributes:
        center: The center of the box.
        u: First half-extent axis.
        v: Second half-extent axis.
        w: Third half-extent axis.
        material: The material of the box.
    """

    def __init__(
        self,
        center: Sequence[float] | Vec3,
        u: Sequence[float] | Vec3,
        v: Sequence[float] | Vec3,
        w: Sequence[float] | Vec3,
        material: Material,
    ) -> None:
        self.center = as_vec3(center)
        self.u = as_vec3(u)
        self.v = as_vec3(v)
        self.w = as_vec3(w)
        self.material = material

        for name, axis in (("u", self.u), ("v", self.v), ("w", self.w)):
            if length(axis) == 0.0:
                raise ValueError(f"Box half-extent axis {name} must be non-zero")

        # (unit axis, half length, face normal) per slab
        self._slabs = [
            (normalize(self.u), length(self.u), normalize(cross(self.v, self.w))),
            (normalize(self.v), length(self.v), normalize(cross(self.w, self.u))),
            (normalize(self.w), length(self.w), normalize(cross(self.u, self.v))),
        ]

    @classmethod
    def from_size(
        cls,
        center: Sequence[float] | Vec3,
        size: Sequence[float] | Vec3,
        rotation: Sequence[float] | Vec3,
        material: Material,
    ) -> Box:
        """Create a box from its full size and Euler rotation.

        Args:
            center: The center of the box.
            size: Full extents along the local x, y, z axes.
            rotation: Rotation angles (radians) about x, y and z.
            material: The material of the box.
        """
        sx, sy, sz = as_vec3(size)
        m = rotation_matrix(*as_vec3(rotation))
        return cls(
            center,
            m @ as_vec3((sx * 0.5, 0.0, 0.0)),
            m @ as_vec3((0.0, sy * 0.5, 0.0)),
            m @ as_vec3((0.0, 0.0, sz * 0.5)),
            material,
        )

    def intersection_with_normal(self, ray: Ray) -> tuple[float, Vec3] | None:
        """Slab test returning the hit distance and the face normal.

        The normal is flipped to oppose the ray direction.
        """
        tmin = -math.inf
        tmax = math.inf
        nmin = None
        nmax = None
        p = self.center - ray.origin

        for axis, half, face_normal in self._slabs:
            e = dot(axis, p)
            f = dot(axis, ray.direction)

            if abs(f) > sys.float_info.epsilon:
                t1 = (e + half) / f
                t2 = (e - half) / f
                if t1 > t2:
                    t1, t2 = t2, t1
                if t1 > tmin:
                    tmin = t1
                    nmin = face_normal
                if t2 < tmax:
                    tmax = t2
                    nmax = face_normal
                if tmin > tmax or tmax < 0.0:
                    return None
            elif abs(e) > half:
                # Parallel to this slab pair and outside of it
                return None

        if tmin > T_MIN and nmin is not None:
            t, normal = tmin, nmin
        elif tmax > T_MIN and nmax is not None:
            t, normal = tmax, nmax
        else:
            return None

        if dot(ray.direction, normal) > 0.0:
            normal = -normal
        return t, normal

    def intersect(self, ray: Ray) -> Intersection | None:
        found = self.intersection_with_normal(ray)
        if found is None:
            return None

        t, normal = found
        # Pull the point back so it sits just in front of the face
        return Intersection(t=t, point=ray_at(ray, t - T_MIN), normal=normal, material=self.material)

    def __repr__(self) -> str:
        return (
            f"Box(center={self.center.tolist()}, u={self.u.tolist()}, "
            f"v={self.v.tolist()}, w={self.w.tolist()})"
        )
