"""Base camera interface and view basis computation.

Cameras map a film-plane offset (dx, dy), measured in scene units from the
image center, to a world-space ray. Both camera models build the same
orthonormal basis (u, v, w) from the view parameters:

- w: points from lookat toward eye (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from src.pathtracer.core.ray import Ray, Vec3, as_vec3, cross, is_finite, near_zero, normalize


def compute_uvw(
    eye: Sequence[float] | Vec3,
    lookat: Sequence[float] | Vec3,
    up: Sequence[float] | Vec3,
) -> tuple[Vec3, Vec3, Vec3]:
    """Compute the camera basis.

        w = normalize(eye - lookat)
        u = normalize(up x w)
        v = w x u

    Raises:
        ValueError: If eye equals lookat or up is parallel to the view
            direction.
    """
    view = as_vec3(eye) - as_vec3(lookat)
    if near_zero(view):
        raise ValueError("Camera eye and lookat must be distinct points")
    w = normalize(view)

    side = cross(as_vec3(up), w)
    if near_zero(side):
        raise ValueError("Camera up vector must not be parallel to the view direction")
    u = normalize(side)
    v = cross(w, u)

    if not (is_finite(u) and is_finite(v) and is_finite(w)):
        raise ValueError("Camera basis is degenerate")
    return u, v, w


class Camera(ABC):
    """Generates primary rays from film-plane offsets.

    Attributes:
        eye: Camera position in world space.
        u: Right direction.
        v: Up direction.
        w: Backward direction (opposite view direction).
    """

    def __init__(
        self,
        eye: Sequence[float] | Vec3,
        lookat: Sequence[float] | Vec3,
        up: Sequence[float] | Vec3,
    ) -> None:
        self.eye = as_vec3(eye)
        self.lookat = as_vec3(lookat)
        self.u, self.v, self.w = compute_uvw(self.eye, self.lookat, up)

    @property
    def basis(self) -> tuple[Vec3, Vec3, Vec3]:
        """The (u, v, w) orthonormal basis."""
        return self.u, self.v, self.w

    @abstractmethod
    def generate_ray(self, dx: float, dy: float) -> Ray:
        """Generate the ray through film offset (dx, dy).

        Args:
            dx: Horizontal offset from the image center (right is positive).
            dy: Vertical offset from the image center (up is positive).
        """
