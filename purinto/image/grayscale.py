"""
Grayscale Extractor

Reduces a colour image to one intensity byte per pixel
(0 = black, 255 = white) using the ITU-R BT.601 luma weights.
"""

from typing import Union

import numpy as np
from PIL import Image

from ..core.errors import GrayscaleConversionFailed

# ITU-R BT.601 luma coefficients for R, G, B
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

# Modes whose pixels are already 8-bit gray or RGB(A) samples
SUPPORTED_MODES = ('1', 'L', 'RGB', 'RGBA', 'RGBX')


def extract_intensity(image: Union[Image.Image, np.ndarray]) -> np.ndarray:
    """
    Convert an image to a flat, row-major intensity buffer.

    Accepts a PIL image or an array shaped (h, w), (h, w, 1), (h, w, 3)
    or (h, w, 4). A fourth (alpha) channel is ignored.

    Returns:
        uint8 array of length width * height
    """
    if isinstance(image, Image.Image) and image.mode not in SUPPORTED_MODES:
        raise GrayscaleConversionFailed(f"Unsupported image mode {image.mode}")

    try:
        pixels = np.asarray(image)
    except (OSError, ValueError, TypeError) as e:
        raise GrayscaleConversionFailed(f"Could not read pixel data: {e}") from e

    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[..., 0]

    if pixels.ndim == 2:
        gray = pixels.astype(np.float64)
    elif pixels.ndim == 3 and pixels.shape[2] in (3, 4):
        gray = np.dot(pixels[..., :3].astype(np.float64), LUMA_WEIGHTS)
    else:
        raise GrayscaleConversionFailed(f"Unsupported pixel layout {pixels.shape}")

    if gray.size == 0:
        raise GrayscaleConversionFailed("Image has no pixels")

    if pixels.dtype == np.bool_:
        gray *= 255

    return np.clip(np.rint(gray), 0, 255).astype(np.uint8).ravel()
