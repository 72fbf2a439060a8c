"""
Purinto

Photo to thermal printer conversion: a fixed pipeline that turns any
photo into a 384-dot wide 1-bit bitmap, plus previews of the result.
"""

__version__ = "0.1.0"

from .core import (
    Bitmap, DitherAlgorithm, PipelineSettings, PrinterQuality, PrinterSettings,
    ProcessingError, PRINT_WIDTH
)
from .image import ImageProcessor

__all__ = [
    'Bitmap', 'DitherAlgorithm', 'PipelineSettings', 'PrinterQuality',
    'PrinterSettings', 'ProcessingError', 'PRINT_WIDTH', 'ImageProcessor',
]
