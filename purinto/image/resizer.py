"""
Image Resizer

Scales upright images to the printer width (or a smaller preview width)
while keeping the aspect ratio.
"""

import logging
from typing import Tuple

from PIL import Image

from ..core.bitmap import PRINT_WIDTH
from ..core.errors import ResizeFailed

logger = logging.getLogger(__name__)

# Resampling filter for every resize
RESAMPLE = Image.Resampling.LANCZOS


def scaled_height(width: int, height: int, target_width: int) -> int:
    """Height matching ``target_width`` at the same aspect ratio, rounded half up."""
    return (2 * height * target_width + width) // (2 * width)


def resize_to_width(image: Image.Image, target_width: int = PRINT_WIDTH) -> Image.Image:
    """
    Resize an image to an exact width.

    Args:
        image: Upright source image
        target_width: Output width in pixels

    Returns:
        Image ``target_width`` wide, height scaled proportionally

    Raises:
        ResizeFailed: For a non-positive target width, a degenerate source
            or a result that would be less than one pixel tall
    """
    if target_width <= 0:
        raise ResizeFailed(f"Target width must be positive, got {target_width}")

    width, height = image.size
    if width <= 0 or height <= 0:
        raise ResizeFailed(f"Cannot resize a {width}x{height} image")

    if width == target_width:
        return image

    target_height = scaled_height(width, height, target_width)
    if target_height <= 0:
        raise ResizeFailed(
            f"Image {width}x{height} is too flat to scale to width {target_width}"
        )

    try:
        resized = image.resize((target_width, target_height), RESAMPLE)
    except (OSError, ValueError) as e:
        raise ResizeFailed(f"Resampling failed: {e}") from e

    logger.debug("Resized %dx%d -> %dx%d", width, height, target_width, target_height)
    return resized


def fit_within(image: Image.Image, max_size: Tuple[int, int]) -> Image.Image:
    """
    Downscale an image to fit inside ``max_size``, keeping its aspect ratio.

    Images that already fit are returned unchanged; nothing is upscaled.
    """
    max_width, max_height = max_size
    if max_width <= 0 or max_height <= 0:
        raise ResizeFailed(f"Preview size must be positive, got {max_width}x{max_height}")

    width, height = image.size
    if width <= max_width and height <= max_height:
        return image

    scale = min(max_width / width, max_height / height)
    new_size = (max(1, int(width * scale)), max(1, int(height * scale)))

    try:
        return image.resize(new_size, RESAMPLE)
    except (OSError, ValueError) as e:
        raise ResizeFailed(f"Resampling failed: {e}") from e
