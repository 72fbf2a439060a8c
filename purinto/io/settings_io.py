"""
Settings File I/O for Purinto

Reads and writes pipeline and printer settings as JSON:

    {
      "pipeline": {"brightness": 0.05, "contrast": 1.1, "algorithm": "atkinson"},
      "printer": {"quality": "dark", "energy_percent": 60}
    }

Missing sections or keys fall back to the defaults.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from ..core.settings import (
    PipelineSettings, PrinterSettings,
    DEFAULT_PIPELINE_SETTINGS, DEFAULT_PRINTER_SETTINGS
)

logger = logging.getLogger(__name__)

SETTINGS_VERSION = '1.0'


def settings_to_dict(pipeline: PipelineSettings, printer: PrinterSettings) -> Dict[str, Any]:
    """Convert both settings objects to one dictionary."""
    return {
        'version': SETTINGS_VERSION,
        'pipeline': pipeline.to_dict(),
        'printer': printer.to_dict(),
    }


def dict_to_settings(data: Dict[str, Any]) -> Tuple[PipelineSettings, PrinterSettings]:
    """Convert a dictionary back to settings objects."""
    if not isinstance(data, dict):
        raise ValueError("Settings must be a JSON object")

    pipeline_data = data.get('pipeline') or {}
    printer_data = data.get('printer') or {}
    if not isinstance(pipeline_data, dict) or not isinstance(printer_data, dict):
        raise ValueError("'pipeline' and 'printer' must be JSON objects")

    pipeline = PipelineSettings.from_dict(pipeline_data) if pipeline_data else DEFAULT_PIPELINE_SETTINGS
    printer = PrinterSettings.from_dict(printer_data) if printer_data else DEFAULT_PRINTER_SETTINGS

    is_valid, error = printer.validate()
    if not is_valid:
        raise ValueError(error)

    return pipeline, printer


def load_settings(filepath: Union[str, Path]) -> Tuple[PipelineSettings, PrinterSettings]:
    """
    Load settings from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid settings JSON
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{filepath} is not valid JSON: {e}") from e

    pipeline, printer = dict_to_settings(data)
    logger.debug("Loaded settings from %s", filepath)
    return pipeline, printer


def save_settings(filepath: Union[str, Path], pipeline: PipelineSettings,
                  printer: PrinterSettings):
    """Write settings to a JSON file."""
    data = settings_to_dict(pipeline, printer)
    data['saved_at'] = datetime.now().isoformat()

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    logger.debug("Saved settings to %s", filepath)
