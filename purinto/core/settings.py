"""
Settings Module

Value types passed into the image pipeline and to the printer transport.
Both are immutable; callers build a new instance for every change.
"""

from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Dict, Tuple


class DitherAlgorithm(Enum):
    """Available dithering algorithms."""
    THRESHOLD = "threshold"
    FLOYD_STEINBERG = "floyd_steinberg"
    ATKINSON = "atkinson"
    ORDERED = "ordered"
    JARVIS_JUDICE_NINKE = "jarvis_judice_ninke"
    STUCKI = "stucki"


class PrinterQuality(Enum):
    """Print density selected on the printer."""
    LIGHT = "light"
    NORMAL = "normal"
    DARK = "dark"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class PipelineSettings:
    """Per-run image adjustments."""
    brightness: float = 0.05     # Offset, -1.0 to 1.0 (scaled by 255)
    contrast: float = 1.1        # Factor around mid-gray, 0.5 to 2.0
    algorithm: DitherAlgorithm = DitherAlgorithm.FLOYD_STEINBERG

    # Optional tone steps, off by default
    gamma: float = 1.0           # 0.8 to 2.0, 1.0 = no correction
    auto_levels: bool = False    # Stretch the histogram before adjusting

    def with_changes(self, **changes) -> 'PipelineSettings':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['algorithm'] = self.algorithm.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PipelineSettings':
        """Build settings from a dictionary; missing keys keep their defaults."""
        defaults = DEFAULT_PIPELINE_SETTINGS
        try:
            return cls(
                brightness=float(data.get('brightness', defaults.brightness)),
                contrast=float(data.get('contrast', defaults.contrast)),
                algorithm=DitherAlgorithm(data.get('algorithm', defaults.algorithm.value)),
                gamma=float(data.get('gamma', defaults.gamma)),
                auto_levels=bool(data.get('auto_levels', defaults.auto_levels)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid pipeline settings: {e}") from e


DEFAULT_PIPELINE_SETTINGS = PipelineSettings()


@dataclass(frozen=True)
class PrinterSettings:
    """Printer hardware settings."""
    quality: PrinterQuality = PrinterQuality.NORMAL
    energy_percent: int = 37     # Heating energy, 0-100

    @property
    def energy_byte(self) -> int:
        """Energy as the single byte sent to the printer (37% -> 94)."""
        return energy_percent_to_byte(self.energy_percent)

    def validate(self) -> Tuple[bool, str]:
        """Validate printer settings."""
        if not 0 <= self.energy_percent <= 100:
            return False, "Energy must be between 0 and 100 percent"
        return True, ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'quality': self.quality.value,
            'energy_percent': self.energy_percent,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PrinterSettings':
        """Build settings from a dictionary; missing keys keep their defaults."""
        defaults = DEFAULT_PRINTER_SETTINGS
        try:
            return cls(
                quality=PrinterQuality(data.get('quality', defaults.quality.value)),
                energy_percent=int(data.get('energy_percent', defaults.energy_percent)),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid printer settings: {e}") from e


DEFAULT_PRINTER_SETTINGS = PrinterSettings()


def energy_percent_to_byte(percent: int) -> int:
    """Map 0-100 percent to 0-255, rounding half up and clamping."""
    value = (int(percent) * 255 + 50) // 100
    return max(0, min(255, value))
