"""RGBA color representation.

Colors are float64 NumPy arrays of shape (4,) holding linear (r, g, b, a)
values. Arithmetic is component-wise, alpha included, so attenuation
products along a path multiply every channel.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

Color = npt.NDArray[np.float64]


def color(r: float, g: float, b: float, a: float = 1.0) -> Color:
    """Create an RGBA color."""
    return np.array((r, g, b, a), dtype=np.float64)


def as_color(value) -> Color:
    """Convert an RGB or RGBA sequence to a color.

    RGB input gets an opaque alpha.

    Raises:
        ValueError: If the value has neither 3 nor 4 components.
    """
    c = np.asarray(value, dtype=np.float64)
    if c.shape == (3,):
        return np.append(c, 1.0)
    if c.shape != (4,):
        raise ValueError(f"Expected an RGB or RGBA color, got shape {c.shape}")
    return c.copy()


BLACK = color(0.0, 0.0, 0.0)
WHITE = color(1.0, 1.0, 1.0)
TRANSPARENT = color(0.0, 0.0, 0.0, 0.0)

for _constant in (BLACK, WHITE, TRANSPARENT):
    _constant.setflags(write=False)


def to_rgba32(value: Color) -> int:
    """Pack a color into a 32-bit integer as r | g<<8 | b<<16 | a<<24.

    Each channel is clamped to [0, 1] and truncated to 8 bits.
    """
    r, g, b, a = (int(c * 255.0) for c in np.clip(value, 0.0, 1.0))
    return r | (g << 8) | (b << 16) | (a << 24)
