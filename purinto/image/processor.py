"""
Image Processor

Runs the print pipeline:

1. Normalize orientation
2. Resize to printer width (384px) or a preview width
3. Convert to grayscale
4. Adjust tone (auto levels, gamma, brightness/contrast)
5. Dither
6. Pack into a Bitmap, or render straight to a preview image

Each processor owns one worker thread. Requests are queued and run one at
a time in the order they were made; separate processors run in parallel.
"""

import asyncio
import logging
import queue
import threading
from concurrent.futures import CancelledError, Future
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

import numpy as np
from PIL import Image

from ..core.bitmap import Bitmap, BitmapError, PRINT_WIDTH
from ..core.errors import (
    Cancelled, ConversionFailed, DitherFailed, PackingFailed, ProcessingError
)
from ..core.settings import PipelineSettings
from .dithering import get_ditherer
from .grayscale import extract_intensity
from .normalizer import ImageSource, normalize
from .resizer import fit_within, resize_to_width
from .tone import adjust_brightness_contrast, apply_gamma, stretch_histogram

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_WIDTH = 192


@dataclass
class DitheredImage:
    """Binary buffer plus its dimensions."""
    pixels: np.ndarray
    width: int
    height: int


@dataclass
class _Job:
    func: Callable[..., Any]
    args: Tuple[Any, ...]
    future: Future = field(default_factory=Future)


def run_stages(image: ImageSource, settings: PipelineSettings,
               target_width: int = PRINT_WIDTH) -> DitheredImage:
    """
    Run every stage up to and including dithering.

    Raises:
        ProcessingError: Subclass naming the stage that failed
    """
    upright = normalize(image)
    resized = resize_to_width(upright, target_width)
    width, height = resized.size

    pixels = extract_intensity(resized)
    if settings.auto_levels:
        pixels = stretch_histogram(pixels)
    pixels = apply_gamma(pixels, settings.gamma)
    pixels = adjust_brightness_contrast(pixels, settings.brightness, settings.contrast)

    try:
        ditherer = get_ditherer(settings.algorithm)
        binary = np.asarray(ditherer(pixels, width, height), dtype=np.uint8).ravel()
    except Exception as e:
        # Any fault inside an algorithm is reported as a dithering failure
        raise DitherFailed(f"Dithering with {settings.algorithm} failed: {e}") from e

    if binary.size != width * height:
        raise DitherFailed(
            f"Dithering returned {binary.size} pixels, expected {width * height}"
        )

    logger.debug("Dithered %dx%d image with %s", width, height, settings.algorithm)
    return DitheredImage(binary, width, height)


def pack(dithered: DitheredImage) -> Bitmap:
    """Pack a binary buffer into a Bitmap."""
    try:
        return Bitmap(dithered.width, dithered.height, dithered.pixels)
    except BitmapError as e:
        raise PackingFailed(str(e)) from e


def render_binary(pixels: np.ndarray, width: int, height: int) -> Image.Image:
    """Render a binary buffer (1 = print) as a grayscale image (black = 0)."""
    pixels = np.asarray(pixels)
    if width <= 0 or height <= 0 or pixels.size != width * height:
        raise ConversionFailed(
            f"Cannot render {pixels.size} pixels as a {width}x{height} image"
        )
    gray = np.where(pixels.reshape(height, width) != 0, 0, 255).astype(np.uint8)
    try:
        return Image.fromarray(gray)
    except (TypeError, ValueError) as e:
        raise ConversionFailed(str(e)) from e


def render_bitmap(bitmap: Bitmap) -> Image.Image:
    """Render a packed Bitmap for display."""
    return render_binary(bitmap.unpack(), bitmap.width, bitmap.height)


class ImageProcessor:
    """
    Converts photos into printer bitmaps and previews.

    Features:
    - Serialized execution on a private worker thread
    - Blocking, Future-based and asyncio entry points
    - Cancellation of requests that have not started yet
    """

    def __init__(self, name: str = "purinto-processor"):
        self.name = name
        self._jobs: "queue.Queue[Optional[_Job]]" = queue.Queue()
        self._lock = threading.Lock()
        self._running = False
        self._worker_thread: Optional[threading.Thread] = None

    # -- Future based API --------------------------------------------------

    def submit_process(self, image: ImageSource, settings: PipelineSettings) -> Future:
        """Queue a print conversion; the Future resolves to a Bitmap."""
        return self._submit(self._process, image, settings)

    def submit_preview(self, image: ImageSource, settings: PipelineSettings,
                       target_size: Tuple[int, int]) -> Future:
        """Queue a full-resolution preview; the Future resolves to a PIL image."""
        return self._submit(self._preview, image, settings, target_size)

    def submit_quick_preview(self, image: ImageSource, settings: PipelineSettings,
                             preview_width: int = DEFAULT_PREVIEW_WIDTH) -> Future:
        """Queue a reduced-resolution preview; the Future resolves to a PIL image."""
        return self._submit(self._quick_preview, image, settings, preview_width)

    # -- Blocking API ------------------------------------------------------

    def process(self, image: ImageSource, settings: PipelineSettings) -> Bitmap:
        """
        Convert an image into a printer bitmap.

        Args:
            image: Photo to print
            settings: Brightness, contrast and dithering algorithm

        Returns:
            Bitmap exactly PRINT_WIDTH pixels wide

        Raises:
            ProcessingError: If any stage fails
        """
        return self.wait_for_result(self.submit_process(image, settings))

    def preview(self, image: ImageSource, settings: PipelineSettings,
                target_size: Tuple[int, int]) -> Image.Image:
        """Render what the print will look like, scaled down to fit target_size."""
        return self.wait_for_result(self.submit_preview(image, settings, target_size))

    def quick_preview(self, image: ImageSource, settings: PipelineSettings,
                      preview_width: int = DEFAULT_PREVIEW_WIDTH) -> Image.Image:
        """Cheap preview at preview_width, for live settings changes."""
        return self.wait_for_result(self.submit_quick_preview(image, settings, preview_width))

    # -- asyncio API -------------------------------------------------------

    async def process_async(self, image: ImageSource, settings: PipelineSettings) -> Bitmap:
        return await self._await(self.submit_process(image, settings))

    async def preview_async(self, image: ImageSource, settings: PipelineSettings,
                            target_size: Tuple[int, int]) -> Image.Image:
        return await self._await(self.submit_preview(image, settings, target_size))

    async def quick_preview_async(self, image: ImageSource, settings: PipelineSettings,
                                  preview_width: int = DEFAULT_PREVIEW_WIDTH) -> Image.Image:
        return await self._await(self.submit_quick_preview(image, settings, preview_width))

    # -- Pipeline (worker thread only) -------------------------------------

    def _process(self, image: ImageSource, settings: PipelineSettings) -> Bitmap:
        bitmap = pack(run_stages(image, settings, PRINT_WIDTH))
        logger.info("Processed image into %dx%d bitmap", bitmap.width, bitmap.height)
        return bitmap

    def _preview(self, image: ImageSource, settings: PipelineSettings,
                 target_size: Tuple[int, int]) -> Image.Image:
        rendered = render_bitmap(self._process(image, settings))
        return fit_within(rendered, target_size)

    def _quick_preview(self, image: ImageSource, settings: PipelineSettings,
                       preview_width: int) -> Image.Image:
        dithered = run_stages(image, settings, preview_width)
        return render_binary(dithered.pixels, dithered.width, dithered.height)

    # -- Worker ------------------------------------------------------------

    def _submit(self, func: Callable[..., Any], *args) -> Future:
        job = _Job(func, args)
        with self._lock:
            self._jobs.put(job)
            if not self._running:
                self._start_worker()
        return job.future

    def _start_worker(self):
        """Start the worker thread."""
        previous = self._worker_thread
        self._running = True
        self._worker_thread = threading.Thread(
            target=self._worker_loop, args=(previous,), name=self.name, daemon=True
        )
        self._worker_thread.start()

    def _worker_loop(self, previous: Optional[threading.Thread]):
        """Run queued jobs one at a time until the shutdown sentinel."""
        # A worker stopped without waiting may still be draining the queue
        if previous is not None:
            previous.join()

        while True:
            job = self._jobs.get()
            if job is None:
                break
            self._execute_job(job)

    def _execute_job(self, job: _Job):
        if not job.future.set_running_or_notify_cancel():
            logger.debug("Skipping cancelled request")
            return

        try:
            result = job.func(*job.args)
        except ProcessingError as e:
            logger.warning("Image processing failed: %s", e)
            job.future.set_exception(e)
        except Exception as e:
            logger.exception("Unexpected error in image pipeline")
            job.future.set_exception(e)
        else:
            job.future.set_result(result)

    @staticmethod
    def wait_for_result(future: Future):
        """Block until ``future`` resolves; a cancelled request raises Cancelled."""
        try:
            return future.result()
        except CancelledError as e:
            raise Cancelled() from e

    @staticmethod
    async def _await(future: Future):
        try:
            return await asyncio.wrap_future(future)
        except asyncio.CancelledError as e:
            if future.cancelled():
                raise Cancelled() from e
            raise

    def shutdown(self, wait: bool = True):
        """
        Stop the worker after the queued requests have run.

        Requests made afterwards start a new worker on the same queue. It
        waits for the old one to finish, so order and one-at-a-time
        execution are kept even with ``wait=False``.
        """
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._jobs.put(None)
            worker = self._worker_thread

        if wait and worker is not None:
            worker.join()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
