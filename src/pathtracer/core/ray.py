"""Ray data structure and vector utilities for CPU path tracing.

This module provides the fundamental Ray dataclass and the vector helpers
used throughout the tracer. Vectors are plain NumPy float64 arrays of
shape (3,), which keeps the per-ray arithmetic simple and lets the sample
tables produced by the Taichi kernels be consumed directly.

Example:
    >>> from src.pathtracer.core.ray import Ray, ray_at, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

Vec3 = npt.NDArray[np.float64]


def vec3(x: float, y: float, z: float) -> Vec3:
    """Create a 3D vector."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: Sequence[float] | Vec3) -> Vec3:
    """Convert any 3-sequence to a float64 vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    v = np.asarray(value, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {v.shape}")
    return v


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Camera rays and scattered
            rays are normalized, but this is not enforced.
    """

    origin: Vec3
    direction: Vec3


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


def make_ray(origin: Sequence[float] | Vec3, direction: Sequence[float] | Vec3) -> Ray:
    """Create a ray from any pair of 3-sequences."""
    return Ray(origin=as_vec3(origin), direction=as_vec3(direction))


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product of two vectors."""
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector."""
    return dot(v, v)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    A zero-length input produces non-finite components instead of raising;
    use is_finite() to detect the degenerate case.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return v / length(v)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a unit normal.

    Computes R = I - 2(I . N)N.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def near_zero(v: Vec3, eps: float = 1e-8) -> bool:
    """Check if a vector is near zero in all components."""
    return bool(abs(v[0]) < eps and abs(v[1]) < eps and abs(v[2]) < eps)


def is_finite(v: npt.NDArray[np.float64]) -> bool:
    """Check that every component is a finite float."""
    return bool(np.isfinite(v).all())


def build_onb_from_normal(normal: Vec3) -> tuple[Vec3, Vec3, Vec3]:
    """Build an orthonormal basis from a normal vector.

    Creates a local coordinate frame where the normal is the z-axis.

    Args:
        normal: The surface normal (should be normalized).

    Returns:
        A tuple (tangent, bitangent, normal) forming an orthonormal basis.
    """
    # Choose a helper axis that is not parallel to the normal
    a = vec3(1.0, 0.0, 0.0)
    if abs(normal[0]) > 0.9:
        a = vec3(0.0, 1.0, 0.0)
    tangent = normalize(cross(a, normal))
    bitangent = cross(normal, tangent)
    return tangent, bitangent, normal


def local_to_world(local_dir: Vec3, tangent: Vec3, bitangent: Vec3, normal: Vec3) -> Vec3:
    """Transform a direction from a local z-up frame to world coordinates."""
    return local_dir[0] * tangent + local_dir[1] * bitangent + local_dir[2] * normal


def rotation_matrix(rx: float, ry: float, rz: float) -> npt.NDArray[np.float64]:
    """Build the rotation Rx(rx) @ Ry(ry) @ Rz(rz) from Euler angles in radians."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)

    rot_x = np.array(((1.0, 0.0, 0.0), (0.0, cx, -sx), (0.0, sx, cx)))
    rot_y = np.array(((cy, 0.0, sy), (0.0, 1.0, 0.0), (-sy, 0.0, cy)))
    rot_z = np.array(((cz, -sz, 0.0), (sz, cz, 0.0), (0.0, 0.0, 1.0)))
    return rot_x @ rot_y @ rot_z
