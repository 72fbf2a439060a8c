#!/usr/bin/env python3
"""
Purinto - Command-line Entry Point

Converts a photo into a thermal printer bitmap and/or a preview image.
Run with: python -m purinto.main PHOTO --output photo.bin --preview photo.png
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from .core.bitmap import Bitmap
from .core.errors import ProcessingError
from .core.settings import (
    DitherAlgorithm, PrinterQuality,
    DEFAULT_PIPELINE_SETTINGS, DEFAULT_PRINTER_SETTINGS
)
from .image.patterns import PATTERNS
from .image.processor import ImageProcessor, DEFAULT_PREVIEW_WIDTH, render_bitmap
from .image.resizer import fit_within
from .io.settings_io import load_settings
from .logging_config import setup_logging

logger = logging.getLogger("purinto")


def _size(value: str) -> Tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from e
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="purinto",
        description="Convert photos into 1-bit bitmaps for 384-dot thermal printers",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("image", nargs="?", help="Photo to convert (PNG, JPEG, ...)")
    source.add_argument("--pattern", choices=sorted(PATTERNS),
                        help="Emit a calibration pattern instead of a photo")

    parser.add_argument("--settings", type=Path, help="JSON settings file")
    parser.add_argument("--algorithm", choices=[a.value for a in DitherAlgorithm],
                        help="Dithering algorithm")
    parser.add_argument("--brightness", type=float, help="Brightness offset, -1.0 to 1.0")
    parser.add_argument("--contrast", type=float, help="Contrast factor, 0.5 to 2.0")
    parser.add_argument("--gamma", type=float, help="Gamma correction, 0.8 to 2.0")
    parser.add_argument("--auto-levels", action="store_true", default=None,
                        help="Stretch the histogram before adjusting")
    parser.add_argument("--quality", choices=[q.value for q in PrinterQuality],
                        help="Printer density")
    parser.add_argument("--energy", type=int, help="Printer energy, 0-100 percent")

    parser.add_argument("-o", "--output", type=Path,
                        help="Write packed bitmap rows (48 bytes per row) to this file")
    parser.add_argument("-p", "--preview", type=Path, help="Write a PNG preview to this file")
    parser.add_argument("--quick", action="store_true",
                        help="Render the preview at reduced resolution")
    parser.add_argument("--preview-width", type=int, default=DEFAULT_PREVIEW_WIDTH,
                        help="Width of the quick preview (default: %(default)s)")
    parser.add_argument("--preview-size", type=_size,
                        help="Fit the full preview inside WIDTHxHEIGHT")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _resolve_settings(args):
    if args.settings:
        pipeline, printer = load_settings(args.settings)
    else:
        pipeline, printer = DEFAULT_PIPELINE_SETTINGS, DEFAULT_PRINTER_SETTINGS

    overrides = {
        'brightness': args.brightness,
        'contrast': args.contrast,
        'gamma': args.gamma,
        'auto_levels': args.auto_levels,
        'algorithm': DitherAlgorithm(args.algorithm) if args.algorithm else None,
    }
    pipeline = pipeline.with_changes(**{k: v for k, v in overrides.items() if v is not None})

    if args.quality:
        printer = replace(printer, quality=PrinterQuality(args.quality))
    if args.energy is not None:
        printer = replace(printer, energy_percent=args.energy)

    is_valid, error = printer.validate()
    if not is_valid:
        raise ValueError(error)

    return pipeline, printer


def _write_bitmap(bitmap: Bitmap, path: Path):
    path.write_bytes(bitmap.data)
    logger.info("Wrote %dx%d bitmap (%d bytes) to %s",
                bitmap.width, bitmap.height, len(bitmap.data), path)


def run(args) -> int:
    pipeline, printer = _resolve_settings(args)
    logger.info("Printer: %s quality, energy %d%% (byte 0x%02X)",
                printer.quality.display_name, printer.energy_percent, printer.energy_byte)

    if args.pattern:
        bitmap = PATTERNS[args.pattern]()
        if args.output:
            _write_bitmap(bitmap, args.output)
        if args.preview:
            preview = render_bitmap(bitmap)
            if args.preview_size:
                preview = fit_within(preview, args.preview_size)
            preview.save(args.preview)
        return 0

    with ImageProcessor() as processor:
        if args.output or (args.preview and not args.quick):
            bitmap = processor.process(args.image, pipeline)
            if args.output:
                _write_bitmap(bitmap, args.output)

        if args.preview:
            if args.quick:
                preview = processor.quick_preview(args.image, pipeline, args.preview_width)
            else:
                preview = render_bitmap(bitmap)
                if args.preview_size:
                    preview = fit_within(preview, args.preview_size)
            preview.save(args.preview)
            logger.info("Wrote %dx%d preview to %s", preview.width, preview.height, args.preview)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the purinto command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    if not args.output and not args.preview:
        parser.error("nothing to do: pass --output and/or --preview")

    try:
        return run(args)
    except ProcessingError as e:
        logger.error("%s", e.user_message)
        logger.debug("Pipeline failure", exc_info=True)
        return 1
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
