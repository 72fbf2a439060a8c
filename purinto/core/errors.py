"""
Processing Errors

One exception type per pipeline stage. Each carries a short message that a
user interface can show instead of the internal stage name.
"""


class ProcessingError(Exception):
    """Base class for all image pipeline failures."""

    user_message = "The image could not be processed."

    def __init__(self, message: str = ""):
        super().__init__(message or self.user_message)


class NormalizationFailed(ProcessingError):
    """The source image could not be decoded or turned upright."""
    user_message = "Could not read the photo."


class ResizeFailed(ProcessingError):
    """The image could not be scaled to the requested width."""
    user_message = "Could not scale the photo to the printer width."


class GrayscaleConversionFailed(ProcessingError):
    """The colour buffer could not be reduced to a single channel."""
    user_message = "Could not convert the photo to black and white."


class DitherFailed(ProcessingError):
    """The dithering stage failed or returned a buffer of the wrong size."""
    user_message = "Could not apply the dithering style."


class PackingFailed(ProcessingError):
    """The dithered pixels could not be packed into a bitmap."""
    user_message = "The printer image is too large to process."


class ConversionFailed(ProcessingError):
    """A pixel buffer could not be rendered into a displayable image."""
    user_message = "Could not build the preview."


class Cancelled(ProcessingError):
    """The caller abandoned the request before it ran."""
    user_message = "Cancelled."
