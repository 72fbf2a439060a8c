"""
Bitmap Module

1-bit packed raster handed to the thermal printer.

Packing format:
- Pixels are stored left-to-right, top-to-bottom
- 8 pixels per byte, LSB first (bit 0 is the leftmost pixel of the byte)
- A set bit is black (printed), a clear bit is white (blank)
- Every row starts on a byte boundary; unused trailing bits of a row are 0
"""

from typing import Sequence, Union

import numpy as np


PRINT_WIDTH = 384
BYTES_PER_ROW = PRINT_WIDTH // 8


class BitmapError(ValueError):
    """Base class for bitmap construction errors."""


class InvalidDimensions(BitmapError):
    """Width or height is not a positive integer."""

    def __init__(self, width: int, height: int):
        super().__init__(f"Invalid bitmap size {width}x{height}: both dimensions must be positive")
        self.width = width
        self.height = height


class SizeMismatch(BitmapError):
    """The amount of pixel data does not match the dimensions."""

    def __init__(self, expected: int, actual: int, unit: str = "pixels"):
        super().__init__(f"Expected {expected} {unit}, got {actual}")
        self.expected = expected
        self.actual = actual


def bytes_per_row_for(width: int) -> int:
    """Number of packed bytes needed for one row of ``width`` pixels."""
    return (width + 7) // 8


class Bitmap:
    """
    Immutable 1-bit bitmap.

    Built from one value per pixel (non-zero = black) or, with
    ``from_packed``, from bytes already in the packing format above.
    """

    __slots__ = ('_width', '_height', '_bytes_per_row', '_data')

    def __init__(self, width: int, height: int,
                 pixels: Union[Sequence[int], np.ndarray]):
        _check_dimensions(width, height)
        flat = np.asarray(pixels).ravel()
        if flat.size != width * height:
            raise SizeMismatch(width * height, flat.size)

        rows = (flat != 0).reshape(height, width)
        packed = np.packbits(rows, axis=1, bitorder='little')

        self._width = width
        self._height = height
        self._bytes_per_row = packed.shape[1]
        self._data = packed.tobytes()

    @classmethod
    def from_packed(cls, width: int, height: int, data: bytes) -> 'Bitmap':
        """Create a bitmap from already packed row data."""
        _check_dimensions(width, height)
        row_bytes = bytes_per_row_for(width)
        if len(data) != height * row_bytes:
            raise SizeMismatch(height * row_bytes, len(data), unit="bytes")

        # Round-trip through the pixels so padding bits are always clear
        packed = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, row_bytes)
        pixels = np.unpackbits(packed, axis=1, count=width, bitorder='little')
        return cls(width, height, pixels)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def bytes_per_row(self) -> int:
        return self._bytes_per_row

    @property
    def data(self) -> bytes:
        """Packed pixel data, ``height * bytes_per_row`` bytes."""
        return self._data

    @property
    def pixel_count(self) -> int:
        return self._width * self._height

    @property
    def black_pixel_count(self) -> int:
        return int(np.unpackbits(np.frombuffer(self._data, dtype=np.uint8)).sum())

    def pixel_at(self, x: int, y: int) -> bool:
        """Return True if the pixel at (x, y) is black."""
        if not (0 <= x < self._width) or not (0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} bitmap")
        byte = self._data[y * self._bytes_per_row + x // 8]
        return bool(byte & (1 << (x % 8)))

    def row(self, y: int) -> bytes:
        """Return the packed bytes of row ``y``."""
        if not 0 <= y < self._height:
            raise IndexError(f"Row {y} outside bitmap of height {self._height}")
        start = y * self._bytes_per_row
        return self._data[start:start + self._bytes_per_row]

    def unpack(self) -> np.ndarray:
        """Return a (height, width) uint8 array of 0/1 values, 1 = black."""
        packed = np.frombuffer(self._data, dtype=np.uint8).reshape(self._height, self._bytes_per_row)
        return np.unpackbits(packed, axis=1, count=self._width, bitorder='little')

    def __eq__(self, other):
        if not isinstance(other, Bitmap):
            return NotImplemented
        return (self._width == other._width and
                self._height == other._height and
                self._data == other._data)

    def __hash__(self):
        return hash((self._width, self._height, self._data))

    def __repr__(self):
        return f"Bitmap(width={self._width}, height={self._height})"


def _check_dimensions(width: int, height: int):
    if width <= 0 or height <= 0:
        raise InvalidDimensions(width, height)
