"""
Calibration Patterns

Print-width bitmaps for checking a printer: alignment, bit order,
edge coverage and heating energy. Each builder returns a Bitmap.
"""

from typing import Callable, Dict

import numpy as np

from ..core.bitmap import Bitmap, PRINT_WIDTH, BYTES_PER_ROW


def _from_rows(rows: np.ndarray) -> Bitmap:
    rows = np.asarray(rows, dtype=np.uint8)
    return Bitmap.from_packed(PRINT_WIDTH, rows.shape[0], rows.tobytes())


def vertical_stripes(height: int = 100) -> Bitmap:
    """One-pixel vertical stripes (0xAA in every byte)."""
    return _from_rows(np.full((height, BYTES_PER_ROW), 0xAA))


def horizontal_stripes(height: int = 100) -> Bitmap:
    """Alternating black and white rows."""
    rows = np.zeros((height, BYTES_PER_ROW))
    rows[::2] = 0xFF
    return _from_rows(rows)


def checkerboard(height: int = 128, cell_size: int = 8) -> Bitmap:
    """Checkerboard of ``cell_size`` pixel squares, top-left cell black."""
    ys, xs = np.mgrid[0:height, 0:PRINT_WIDTH]
    pixels = ((ys // cell_size) % 2) == ((xs // cell_size) % 2)
    return Bitmap(PRINT_WIDTH, height, pixels)


def left_border(height: int = 100, border: int = 32) -> Bitmap:
    """Solid band along the left edge."""
    pixels = np.zeros((height, PRINT_WIDTH), dtype=np.uint8)
    pixels[:, :border] = 1
    return Bitmap(PRINT_WIDTH, height, pixels)


def right_border(height: int = 100, border: int = 32) -> Bitmap:
    """Solid band along the right edge."""
    pixels = np.zeros((height, PRINT_WIDTH), dtype=np.uint8)
    pixels[:, PRINT_WIDTH - border:] = 1
    return Bitmap(PRINT_WIDTH, height, pixels)


def gradient_columns(height: int = 50) -> Bitmap:
    """Bands whose byte density rises from left to right, five rows on, five off."""
    density = (np.arange(BYTES_PER_ROW) * 255) // BYTES_PER_ROW
    rows = np.zeros((height, BYTES_PER_ROW))
    rows[np.arange(height) % 10 < 5] = density
    return _from_rows(rows)


PATTERNS: Dict[str, Callable[..., Bitmap]] = {
    'vertical_stripes': vertical_stripes,
    'horizontal_stripes': horizontal_stripes,
    'checkerboard': checkerboard,
    'left_border': left_border,
    'right_border': right_border,
    'gradient_columns': gradient_columns,
}
