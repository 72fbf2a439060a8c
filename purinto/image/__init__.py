"""
Purinto Image Processing Module

Contains the print pipeline stages:
- Orientation normalizing, resizing and grayscale extraction
- Tone adjustment (brightness/contrast, gamma, auto levels)
- Dithering algorithms for 1-bit output
- ImageProcessor orchestrating the stages on a worker thread
- Calibration patterns
"""

from .normalizer import normalize
from .resizer import resize_to_width, fit_within
from .grayscale import extract_intensity
from .tone import adjust_brightness_contrast, apply_gamma, stretch_histogram
from .dithering import dither, get_ditherer, srgb_to_linear
from .processor import (
    ImageProcessor, DitheredImage, run_stages, pack,
    render_binary, render_bitmap, DEFAULT_PREVIEW_WIDTH
)
from .patterns import PATTERNS

__all__ = [
    'normalize',
    'resize_to_width',
    'fit_within',
    'extract_intensity',
    'adjust_brightness_contrast',
    'apply_gamma',
    'stretch_histogram',
    'dither',
    'get_ditherer',
    'srgb_to_linear',
    'ImageProcessor',
    'DitheredImage',
    'run_stages',
    'pack',
    'render_binary',
    'render_bitmap',
    'DEFAULT_PREVIEW_WIDTH',
    'PATTERNS',
]
