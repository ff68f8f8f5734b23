"""Geometry module for ray-intersectable primitives.

Components:
    hitable: Hitable interface, Intersection record and the T_MIN epsilon
    sphere: Sphere primitive (quadratic solve)
    plane: Infinite plane primitive
    box: Oriented box primitive (slab test)

Every primitive answers intersect(ray) with the nearest intersection
beyond T_MIN, or None.
"""

from .box import Box
from .hitable import T_MIN, Hitable, Intersection
from .plane import Plane
from .sphere import Sphere

__all__ = [
    "Hitable",
    "Intersection",
    "T_MIN",
    "Sphere",
    "Plane",
    "Box",
]
