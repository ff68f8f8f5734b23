"""Pinhole camera model for perspective projection ray generation.

This module implements a pinhole camera that generates primary rays for
rendering. All rays start at the eye point. The film plane sits at
focal_distance in front of the eye, so the ray through film offset
(dx, dy) has direction:

    normalize(dx * u + dy * v - focal_distance * w)

where (u, v, w) is the camera basis (see camera.base). A longer focal
distance narrows the field of view for the same film size.

Example:
    >>> from src.pathtracer.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(
    ...     eye=(0.0, 0.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     up=(0.0, 1.0, 0.0),
    ...     focal_distance=2.0,
    ... )
    >>> ray = camera.generate_ray(0.0, 0.0)  # Ray through image center
"""

from __future__ import annotations

from collections.abc import Sequence

from src.pathtracer.camera.base import Camera
from src.pathtracer.core.ray import Ray, Vec3, normalize


class PinholeCamera(Camera):
    """Perspective camera with a single center of projection.

    Attributes:
        focal_distance: Distance from the eye to the film plane.
    """

    def __init__(
        self,
        eye: Sequence[float] | Vec3,
        lookat: Sequence[float] | Vec3,
        up: Sequence[float] | Vec3,
        focal_distance: float,
    ) -> None:
        """Initialize the camera basis.

        Args:
            eye: Camera position in world space.
            lookat: Point the camera is looking at.
            up: Up direction for camera orientation (typically (0, 1, 0)).
            focal_distance: Distance to the film plane (positive).

        Raises:
            ValueError: If focal_distance is not positive or the view
                parameters are degenerate.
        """
        if not focal_distance > 0.0:
            raise ValueError(f"focal_distance must be positive, got {focal_distance}")
        super().__init__(eye, lookat, up)
        self.focal_distance = float(focal_distance)

    def generate_ray(self, dx: float, dy: float) -> Ray:
        direction = normalize(dx * self.u + dy * self.v - self.focal_distance * self.w)
        return Ray(origin=self.eye, direction=direction)

    def __repr__(self) -> str:
        return (
            f"PinholeCamera(eye={self.eye.tolist()}, lookat={self.lookat.tolist()}, "
            f"focal_distance={self.focal_distance})"
        )
