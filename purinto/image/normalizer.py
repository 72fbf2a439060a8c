"""
Orientation Normalizer

Decodes the source photo and bakes its EXIF orientation into the pixel
data, so later stages can assume an upright, top-left-origin RGB image.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from ..core.errors import NormalizationFailed

logger = logging.getLogger(__name__)

ImageSource = Union[str, Path, bytes, BinaryIO, Image.Image]

# Transparent areas are left blank on paper
PAPER_COLOR = (255, 255, 255)


def normalize(source: ImageSource) -> Image.Image:
    """
    Load an image and return an upright RGB copy.

    Args:
        source: File path, encoded bytes, binary file object or PIL image

    Returns:
        New PIL image in RGB mode with orientation applied

    Raises:
        NormalizationFailed: If the image cannot be decoded or converted
    """
    try:
        img = _open(source)
        img.load()
        if img.width <= 0 or img.height <= 0:
            raise NormalizationFailed(f"Image has no pixels ({img.width}x{img.height})")

        upright = ImageOps.exif_transpose(img)
        rgb = _to_rgb(upright)
    except NormalizationFailed:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError,
            OSError, ValueError, TypeError) as e:
        logger.warning("Could not normalize image: %s", e)
        raise NormalizationFailed(f"Could not decode image: {e}") from e

    logger.debug("Normalized image to %dx%d RGB", rgb.width, rgb.height)
    return rgb


def _open(source: ImageSource) -> Image.Image:
    if isinstance(source, Image.Image):
        return source
    if isinstance(source, (bytes, bytearray)):
        return Image.open(io.BytesIO(source))
    if isinstance(source, (str, Path)) or hasattr(source, 'read'):
        return Image.open(source)
    raise TypeError(f"Unsupported image source: {type(source).__name__}")


def _to_rgb(img: Image.Image) -> Image.Image:
    """Convert any supported mode to RGB, flattening alpha onto white."""
    if img.mode == 'P' and 'transparency' in img.info:
        img = img.convert('RGBA')

    if img.mode in ('RGBA', 'LA', 'PA'):
        rgba = img.convert('RGBA')
        background = Image.new('RGB', rgba.size, PAPER_COLOR)
        background.paste(rgba, mask=rgba.getchannel('A'))
        return background

    if img.mode == 'RGB':
        # Always hand back a copy; the caller's image is never modified
        return img.copy()

    if img.mode in ('I;16', 'I;16B', 'I;16L', 'I'):
        # 16-bit gray: scale down to 8 bits before widening to RGB
        wide = np.asarray(img).astype(np.float64) / 257.0
        gray = np.clip(np.rint(wide), 0, 255).astype(np.uint8)
        return Image.fromarray(gray).convert('RGB')

    return img.convert('RGB')
