"""Shared RGBA pixel grid written by the render workers.

The x coordinate goes from 0 to width (exclusive), left to right; the y
coordinate goes from 0 to height (exclusive), top to bottom. The backing
store is a (height, width, 4) float64 array.

Workers compute whole scanlines privately and hand them over with
set_row(), which is the only synchronized operation: one short lock
acquisition per row. The buffer also tracks which rows have been written
since the last reset so a caller can tell a finished image from a partial
one.
"""

from __future__ import annotations

import threading

import numpy as np
import numpy.typing as npt

from src.pathtracer.core.color import Color


class FrameBuffer:
    """A width x height grid of RGBA colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a transparent-black buffer.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"FrameBuffer dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self._pixels = np.zeros((self._height, self._width, 4), dtype=np.float64)
        self._rows_written = np.zeros(self._height, dtype=bool)
        self._lock = threading.Lock()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width) of the pixel grid."""
        return self._height, self._width

    def _check_x(self, x: int) -> None:
        if not 0 <= x < self._width:
            raise IndexError(f"x={x} outside [0, {self._width})")

    def _check_y(self, y: int) -> None:
        if not 0 <= y < self._height:
            raise IndexError(f"y={y} outside [0, {self._height})")

    def set_pixel(self, x: int, y: int, value: Color) -> None:
        """Write a single pixel."""
        self._check_x(x)
        self._check_y(y)
        with self._lock:
            self._pixels[y, x] = value

    def get_pixel(self, x: int, y: int) -> Color:
        """Read a single pixel (copy)."""
        self._check_x(x)
        self._check_y(y)
        return self._pixels[y, x].copy()

    def set_row(self, y: int, row: npt.ArrayLike) -> None:
        """Write a complete scanline.

        Args:
            y: Row index.
            row: Colors for the row, shape (width, 4).

        Raises:
            IndexError: If y is out of range.
            ValueError: If the row does not have shape (width, 4).
        """
        self._check_y(y)
        values = np.asarray(row, dtype=np.float64)
        if values.shape != (self._width, 4):
            raise ValueError(f"Row must have shape ({self._width}, 4), got {values.shape}")
        with self._lock:
            self._pixels[y] = values
            self._rows_written[y] = True

    @property
    def rows_written(self) -> int:
        """Number of distinct rows written by set_row() since the last reset."""
        with self._lock:
            return int(self._rows_written.sum())

    @property
    def is_complete(self) -> bool:
        """Whether every row has been written since the last reset."""
        with self._lock:
            return bool(self._rows_written.all())

    def reset(self) -> None:
        """Clear all pixels to transparent black and forget written rows."""
        with self._lock:
            self._pixels.fill(0.0)
            self._rows_written.fill(False)

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Copy of the pixel grid, shape (height, width, 4)."""
        with self._lock:
            return self._pixels.copy()

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self._width}, height={self._height})"
