"""Scene-level nearest-hit resolution.

Every primitive is tested (there is no acceleration structure) and the
intersection with the smallest t wins. On equal distances the primitive
that comes first in scene order is kept.

Example:
    >>> from src.pathtracer.scene.intersection import intersect_scene
    >>> hit = intersect_scene(scene.objects, ray)
"""

from __future__ import annotations

from collections.abc import Iterable

from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.hitable import Hitable, Intersection


def intersect_scene(objects: Iterable[Hitable], ray: Ray) -> Intersection | None:
    """Find the closest intersection of a ray with any primitive.

    Args:
        objects: The primitives to test, in scene order.
        ray: The ray to trace.

    Returns:
        The nearest Intersection, or None if every primitive is missed.
    """
    closest = None
    for obj in objects:
        hit = obj.intersect(ray)
        if hit is not None and (closest is None or hit.t < closest.t):
            closest = hit
    return closest

