"""Camera module for view and ray generation.

This module provides camera models for generating primary rays:

Components:
    base: Base camera interface and (u, v, w) basis computation
    orthographic: Parallel projection camera
    pinhole: Simple pinhole (perspective) camera model

Ray generation uses film-plane offsets in scene units:
    dx: right of the image center is positive
    dy: above the image center is positive
"""

from .base import Camera, compute_uvw
from .orthographic import OrthographicCamera
from .pinhole import PinholeCamera

__all__ = [
    "Camera",
    "compute_uvw",
    "OrthographicCamera",
    "PinholeCamera",
]
