"""
Image Dithering Module

Implements the dithering algorithms that reduce an intensity buffer
(0 = black, 255 = white) to a binary buffer (1 = print, 0 = blank).

Every algorithm is a pure function ``(pixels, width, height) -> ndarray``
over flat, row-major buffers. Error diffusion scans left-to-right,
top-to-bottom and only pushes error to pixels not yet visited, so the
output is fully determined by the input.
"""

from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from ..core.settings import DitherAlgorithm

Ditherer = Callable[[np.ndarray, int, int], np.ndarray]

# (dx, dy, weight) error distribution taps
Kernel = Sequence[Tuple[int, int, float]]

THRESHOLD = 128

FLOYD_STEINBERG_KERNEL: Kernel = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16), (0, 1, 5 / 16), (1, 1, 1 / 16),
)

JARVIS_JUDICE_NINKE_KERNEL: Kernel = (
    (1, 0, 7 / 48), (2, 0, 5 / 48),
    (-2, 1, 3 / 48), (-1, 1, 5 / 48), (0, 1, 7 / 48), (1, 1, 5 / 48), (2, 1, 3 / 48),
    (-2, 2, 1 / 48), (-1, 2, 3 / 48), (0, 2, 5 / 48), (1, 2, 3 / 48), (2, 2, 1 / 48),
)

STUCKI_KERNEL: Kernel = (
    (1, 0, 8 / 42), (2, 0, 4 / 42),
    (-2, 1, 2 / 42), (-1, 1, 4 / 42), (0, 1, 8 / 42), (1, 1, 4 / 42), (2, 1, 2 / 42),
    (-2, 2, 1 / 42), (-1, 2, 2 / 42), (0, 2, 4 / 42), (1, 2, 2 / 42), (2, 2, 1 / 42),
)

# Only 6/8 of the error is passed on; dark and light areas saturate
ATKINSON_KERNEL: Kernel = (
    (1, 0, 1 / 8), (2, 0, 1 / 8),
    (-1, 1, 1 / 8), (0, 1, 1 / 8), (1, 1, 1 / 8),
    (0, 2, 1 / 8),
)

BAYER_8X8 = np.array([
    [0, 32, 8, 40, 2, 34, 10, 42],
    [48, 16, 56, 24, 50, 18, 58, 26],
    [12, 44, 4, 36, 14, 46, 6, 38],
    [60, 28, 52, 20, 62, 30, 54, 22],
    [3, 35, 11, 43, 1, 33, 9, 41],
    [51, 19, 59, 27, 49, 17, 57, 25],
    [15, 47, 7, 39, 13, 45, 5, 37],
    [63, 31, 55, 23, 61, 29, 53, 21],
], dtype=np.float64)

# Thresholds centred in each of the 64 equal steps of linear light
BAYER_8X8_LINEAR = (BAYER_8X8 + 0.5) / 64.0


def _build_srgb_to_linear() -> np.ndarray:
    x = np.arange(256, dtype=np.float64) / 255.0
    return np.where(x <= 0.04045, x / 12.92, np.power((x + 0.055) / 1.055, 2.4))


# sRGB byte -> linear light (0.0-1.0)
SRGB_TO_LINEAR = _build_srgb_to_linear()


def srgb_to_linear(pixels: np.ndarray) -> np.ndarray:
    """Convert sRGB-encoded bytes to linear light values in [0, 1]."""
    return SRGB_TO_LINEAR[np.asarray(pixels, dtype=np.uint8)]


def _check_buffer(pixels, width: int, height: int) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")
    flat = np.asarray(pixels, dtype=np.uint8).ravel()
    if flat.size != width * height:
        raise ValueError(f"Expected {width * height} pixels, got {flat.size}")
    return flat


def _error_diffuse(values: List[float], width: int, height: int,
                   kernel: Kernel, threshold: float, white: float) -> np.ndarray:
    """Quantize ``values`` in place, spreading the error over ``kernel``."""
    result = [0] * (width * height)

    for y in range(height):
        row = y * width
        for x in range(width):
            index = row + x
            old_pixel = values[index]
            if old_pixel >= threshold:
                error = old_pixel - white
            else:
                result[index] = 1
                error = old_pixel

            if error == 0:
                continue

            for dx, dy, weight in kernel:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and ny < height:
                    values[ny * width + nx] += error * weight

    return np.array(result, dtype=np.uint8)


def threshold_dither(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Print every pixel darker than mid-gray. Fast, harsh, good for line art."""
    flat = _check_buffer(pixels, width, height)
    return (flat < THRESHOLD).astype(np.uint8)


def ordered_dither(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """8x8 Bayer dithering, compared in linear light."""
    flat = _check_buffer(pixels, width, height)
    linear = srgb_to_linear(flat).reshape(height, width)

    tiles_y = -(-height // 8)
    tiles_x = -(-width // 8)
    thresholds = np.tile(BAYER_8X8_LINEAR, (tiles_y, tiles_x))[:height, :width]

    return (linear < thresholds).astype(np.uint8).ravel()


def _linear_error_diffuse(pixels, width: int, height: int, kernel: Kernel) -> np.ndarray:
    flat = _check_buffer(pixels, width, height)
    values = srgb_to_linear(flat).tolist()
    return _error_diffuse(values, width, height, kernel, 0.5, 1.0)


def floyd_steinberg_dither(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Floyd-Steinberg error diffusion in linear light. Best for photos."""
    return _linear_error_diffuse(pixels, width, height, FLOYD_STEINBERG_KERNEL)


def jarvis_judice_ninke_dither(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Jarvis-Judice-Ninke error diffusion in linear light. Smoother gradients."""
    return _linear_error_diffuse(pixels, width, height, JARVIS_JUDICE_NINKE_KERNEL)


def stucki_dither(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    return _linear_error_diffuse(pixels, width, height, STUCKI_KERNEL)


def atkinson_dither(pixels: np.ndarray, width: int, height: int) -> np.ndarray:
    """Atkinson dithering. High contrast vintage look that uses less ink."""
    flat = _check_buffer(pixels, width, height)
    values = flat.astype(np.float64).tolist()
    return _error_diffuse(values, width, height, ATKINSON_KERNEL, THRESHOLD, 255.0)


_DITHERERS: Dict[DitherAlgorithm, Ditherer] = {
    DitherAlgorithm.THRESHOLD: threshold_dither,
    DitherAlgorithm.FLOYD_STEINBERG: floyd_steinberg_dither,
    DitherAlgorithm.ATKINSON: atkinson_dither,
    DitherAlgorithm.ORDERED: ordered_dither,
    DitherAlgorithm.JARVIS_JUDICE_NINKE: jarvis_judice_ninke_dither,
    DitherAlgorithm.STUCKI: stucki_dither,
}


def get_ditherer(algorithm: DitherAlgorithm) -> Ditherer:
    """Return the dithering function for ``algorithm``."""
    try:
        return _DITHERERS[DitherAlgorithm(algorithm)]
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown dithering algorithm: {algorithm!r}") from e


def dither(pixels: np.ndarray, width: int, height: int,
           algorithm: DitherAlgorithm = DitherAlgorithm.FLOYD_STEINBERG) -> np.ndarray:
    """Dither an intensity buffer with the selected algorithm."""
    return get_ditherer(algorithm)(pixels, width, height)
