"""Image export utilities for rendered pixel grids.

The renderer produces linear RGBA float pixels of shape (H, W, 4). This
module turns them into 8-bit images and writes them with Pillow; the file
format follows the extension.

Supported formats:
    - BMP (written as 24-bit RGB, alpha dropped)
    - PNG (RGBA)
    - Anything else Pillow can write; formats without alpha get RGB

Example:
    >>> from src.pathtracer.preview.export import save_image
    >>> renderer.render(camera, scene)
    >>> save_image(renderer.image, "output.bmp", gamma=2.2)
    True
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)

# Formats written with an alpha channel, everything else is flattened to RGB
ALPHA_FORMATS = frozenset({".png", ".tga", ".tif", ".tiff", ".webp"})


def pixels_to_rgba8(
    pixels: npt.ArrayLike,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert linear float pixels to 8-bit RGBA.

    Channels are clamped to [0, 1], the color channels are raised to
    1/gamma, and the result is scaled by 255 and truncated (the same
    packing as core.color.to_rgba32).

    Args:
        pixels: Array of shape (H, W, 4) or (H, W, 3). RGB input gets
            an opaque alpha channel.
        gamma: Display gamma. 1.0 leaves the values linear.

    Returns:
        Array of shape (H, W, 4) with dtype uint8.

    Raises:
        ValueError: If the array shape or gamma is invalid.
    """
    image = np.asarray(pixels, dtype=np.float64)
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected pixels of shape (H, W, 3|4), got {image.shape}")
    if not gamma > 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    if image.shape[2] == 3:
        alpha = np.ones(image.shape[:2] + (1,), dtype=np.float64)
        image = np.concatenate([image, alpha], axis=2)

    image = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 1.0)
    if gamma != 1.0:
        image[..., :3] = np.power(image[..., :3], 1.0 / gamma)

    return (image * 255.0).astype(np.uint8)


def save_image(
    pixels: npt.ArrayLike,
    path: str | Path,
    gamma: float = 1.0,
) -> bool:
    """Write a pixel grid to an image file.

    Args:
        pixels: Linear pixels of shape (H, W, 4) or (H, W, 3).
        path: Output path; the extension selects the format.
        gamma: Display gamma applied before quantization.

    Returns:
        True on success, False if the file could not be written.

    Raises:
        ValueError: If the pixel array or gamma is invalid.
    """
    path = Path(path)
    rgba = pixels_to_rgba8(pixels, gamma=gamma)

    image = PILImage.fromarray(rgba)
    if path.suffix.lower() not in ALPHA_FORMATS:
        image = image.convert("RGB")

    try:
        image.save(path)
    except (OSError, ValueError) as exc:
        logger.error("Failed to write image %s: %s", path, exc)
        return False

    logger.info("Wrote %dx%d image to %s", rgba.shape[1], rgba.shape[0], path)
    return True


def compute_rmse(
    image_a: npt.ArrayLike,
    image_b: npt.ArrayLike,
) -> float:
    """Root mean squared error between two images.

    Raises:
        ValueError: If image shapes don't match.
    """
    a = np.asarray(image_a, dtype=np.float64)
    b = np.asarray(image_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Image shapes must match: {a.shape} vs {b.shape}")
    return float(np.sqrt(np.mean((a - b) ** 2)))
