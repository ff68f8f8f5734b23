"""Preview module for image output.

Components:
    export: 8-bit conversion and Pillow-based image writing

Example:
    >>> from src.pathtracer.preview import save_image
    >>> save_image(renderer.image, "output.png", gamma=2.2)
"""

from src.pathtracer.preview.export import compute_rmse, pixels_to_rgba8, save_image

__all__ = [
    "save_image",
    "pixels_to_rgba8",
    "compute_rmse",
]
