"""Scene container coordinating primitives and their materials.

A Scene is an ordered collection of primitives, each bound to a material
instance. Scenes are built up front and then handed to the renderer, which
takes an immutable snapshot of the primitive list for the duration of a
render; materials and primitives are never modified by rendering.

Example:
    >>> from src.pathtracer.core.sampler import hemisphere_jittered
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> from src.pathtracer.scene.manager import Scene
    >>> scene = Scene()
    >>> red = Lambertian(hemisphere_jittered(8, 1.0), albedo=(0.8, 0.3, 0.3))
    >>> scene.add_sphere(center=(0, 0, -1), radius=0.5, material=red)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from src.pathtracer.core.ray import Ray, Vec3
from src.pathtracer.geometry.box import Box
from src.pathtracer.geometry.hitable import Hitable, Intersection
from src.pathtracer.geometry.plane import Plane
from src.pathtracer.geometry.sphere import Sphere
from src.pathtracer.materials.material import Material
from src.pathtracer.scene.intersection import intersect_scene


class Scene:
    """Ordered collection of primitives."""

    def __init__(self, objects: Iterable[Hitable] = ()) -> None:
        self._objects: list[Hitable] = []
        for obj in objects:
            self.add(obj)

    def add(self, obj: Hitable) -> int:
        """Add a primitive.

        Returns:
            The index of the primitive in scene order.

        Raises:
            TypeError: If obj is not a Hitable.
        """
        if not isinstance(obj, Hitable):
            raise TypeError(f"Scene objects must be Hitable, got {type(obj).__name__}")
        self._objects.append(obj)
        return len(self._objects) - 1

    def add_sphere(
        self,
        center: Sequence[float] | Vec3,
        radius: float,
        material: Material,
    ) -> Sphere:
        """Add a sphere with the given material."""
        sphere = Sphere(center, radius, material)
        self.add(sphere)
        return sphere

    def add_plane(
        self,
        point: Sequence[float] | Vec3,
        normal: Sequence[float] | Vec3,
        material: Material,
    ) -> Plane:
        """Add an infinite plane with the given material."""
        plane = Plane(point, normal, material)
        self.add(plane)
        return plane

    def add_box(
        self,
        center: Sequence[float] | Vec3,
        size: Sequence[float] | Vec3,
        material: Material,
        rotation: Sequence[float] | Vec3 = (0.0, 0.0, 0.0),
    ) -> Box:
        """Add a box from its full size and Euler rotation (radians)."""
        box = Box.from_size(center, size, rotation, material)
        self.add(box)
        return box

    @property
    def objects(self) -> tuple[Hitable, ...]:
        """Snapshot of the primitives in scene order."""
        return tuple(self._objects)

    def clear(self) -> None:
        """Remove all primitives."""
        self._objects.clear()

    def intersect(self, ray: Ray) -> Intersection | None:
        """Find the nearest intersection of a ray with the scene."""
        return intersect_scene(self._objects, ray)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Hitable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._objects)})"
