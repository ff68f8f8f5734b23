"""Orthographic camera: parallel rays over a planar film.

Every ray shares the view direction; the film offset only moves the ray
origin inside the plane spanned by the camera's right and up vectors.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.pathtracer.camera.base import Camera
from src.pathtracer.core.ray import Ray, Vec3, normalize


class OrthographicCamera(Camera):
    """Parallel projection camera.

    Attributes:
        direction: The shared unit view direction.
    """

    def __init__(
        self,
        eye: Sequence[float] | Vec3,
        lookat: Sequence[float] | Vec3,
        up: Sequence[float] | Vec3,
    ) -> None:
        super().__init__(eye, lookat, up)
        self.direction = normalize(self.lookat - self.eye)

    def generate_ray(self, dx: float, dy: float) -> Ray:
        return Ray(origin=self.eye + dx * self.u + dy * self.v, direction=self.direction)

    def __repr__(self) -> str:
        return f"OrthographicCamera(eye={self.eye.tolist()}, lookat={self.lookat.tolist()})"
