"""
Purinto Core Module

Contains the core data types:
- Bitmap: 1-bit packed raster for the printer
- Settings: pipeline and printer settings
- Errors: one exception per pipeline stage
"""

from .bitmap import (
    Bitmap, BitmapError, InvalidDimensions, SizeMismatch,
    PRINT_WIDTH, BYTES_PER_ROW, bytes_per_row_for
)
from .settings import (
    DitherAlgorithm, PipelineSettings, PrinterQuality, PrinterSettings,
    DEFAULT_PIPELINE_SETTINGS, DEFAULT_PRINTER_SETTINGS,
    energy_percent_to_byte
)
from .errors import (
    ProcessingError, NormalizationFailed, ResizeFailed,
    GrayscaleConversionFailed, DitherFailed, PackingFailed,
    ConversionFailed, Cancelled
)

__all__ = [
    # Bitmap
    'Bitmap', 'BitmapError', 'InvalidDimensions', 'SizeMismatch',
    'PRINT_WIDTH', 'BYTES_PER_ROW', 'bytes_per_row_for',
    # Settings
    'DitherAlgorithm', 'PipelineSettings', 'PrinterQuality', 'PrinterSettings',
    'DEFAULT_PIPELINE_SETTINGS', 'DEFAULT_PRINTER_SETTINGS',
    'energy_percent_to_byte',
    # Errors
    'ProcessingError', 'NormalizationFailed', 'ResizeFailed',
    'GrayscaleConversionFailed', 'DitherFailed', 'PackingFailed',
    'ConversionFailed', 'Cancelled',
]
