"""
Tone Adjustment

Lookup-table based adjustments of an intensity buffer (0 = black,
255 = white). None of these functions fail on a well-formed buffer and
none modify their input.
"""

import numpy as np

# Parameter ranges accepted by the adjustments; values outside are clamped.
# Brightness is not clamped: large offsets saturate to black or white.
CONTRAST_RANGE = (0.5, 2.0)
GAMMA_RANGE = (0.8, 2.0)
CLIP_PERCENT_RANGE = (0.0, 5.0)

MID_GRAY = 128.0

_LEVELS = np.arange(256, dtype=np.float64)


def _clamp(value: float, bounds) -> float:
    low, high = bounds
    return max(low, min(high, float(value)))


def _apply_table(pixels: np.ndarray, table: np.ndarray) -> np.ndarray:
    table = np.clip(np.rint(table), 0, 255).astype(np.uint8)
    return table[np.asarray(pixels, dtype=np.uint8)]


def adjust_brightness_contrast(pixels: np.ndarray, brightness: float = 0.0,
                               contrast: float = 1.0) -> np.ndarray:
    """
    Apply contrast around mid-gray, then a brightness offset.

    ``out = clamp((in - 128) * contrast + 128 + brightness * 255, 0, 255)``

    Args:
        pixels: uint8 intensity buffer
        brightness: Offset, nominally -1.0 (black) to 1.0 (white)
        contrast: Multiplier from 0.5 (flat) to 2.0 (punchy)
    """
    pixels = np.asarray(pixels, dtype=np.uint8)
    brightness = float(brightness)
    contrast = _clamp(contrast, CONTRAST_RANGE)

    if brightness == 0.0 and contrast == 1.0:
        return pixels.copy()

    table = (_LEVELS - MID_GRAY) * contrast + MID_GRAY + brightness * 255.0
    return _apply_table(pixels, table)


def apply_gamma(pixels: np.ndarray, gamma: float = 1.0) -> np.ndarray:
    """Brighten mid-tones with ``255 * (in / 255) ** (1 / gamma)``."""
    pixels = np.asarray(pixels, dtype=np.uint8)
    gamma = _clamp(gamma, GAMMA_RANGE)
    if gamma == 1.0:
        return pixels.copy()

    table = 255.0 * np.power(_LEVELS / 255.0, 1.0 / gamma)
    return _apply_table(pixels, table)


def stretch_histogram(pixels: np.ndarray, clip_percent: float = 1.0) -> np.ndarray:
    """
    Auto levels: map the darkest and lightest ``clip_percent`` of pixels to
    pure black and white and spread the rest linearly in between.

    Uniform images are returned unchanged.
    """
    pixels = np.asarray(pixels, dtype=np.uint8)
    if pixels.size == 0:
        return pixels.copy()

    clip_percent = _clamp(clip_percent, CLIP_PERCENT_RANGE)
    clip_count = int(pixels.size * clip_percent / 100.0)

    histogram = np.bincount(pixels.ravel(), minlength=256)
    black_point = int(np.argmax(np.cumsum(histogram) > clip_count))
    white_point = 255 - int(np.argmax(np.cumsum(histogram[::-1]) > clip_count))

    if black_point >= white_point:
        return pixels.copy()

    table = (_LEVELS - black_point) * 255.0 / (white_point - black_point)
    return _apply_table(pixels, table)
