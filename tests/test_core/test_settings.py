"""
Tests for pipeline and printer settings.
"""

import dataclasses
import unittest

from purinto.core.settings import (
    DitherAlgorithm, PipelineSettings, PrinterQuality, PrinterSettings,
    DEFAULT_PIPELINE_SETTINGS, energy_percent_to_byte
)


class TestEnergyByte(unittest.TestCase):
    """Test the energy percent to byte conversion."""

    def test_default_energy(self):
        """Test the default energy byte."""
        self.assertEqual(PrinterSettings(energy_percent=37).energy_byte, 94)

    def test_full_energy(self):
        """Test full energy maps to 255."""
        self.assertEqual(PrinterSettings(energy_percent=100).energy_byte, 255)

    def test_zero_energy(self):
        """Test zero energy maps to 0."""
        self.assertEqual(energy_percent_to_byte(0), 0)

    def test_rounds_half_up(self):
        """Test that halves round up."""
        # 10 * 255 / 100 = 25.5
        self.assertEqual(energy_percent_to_byte(10), 26)
        # 30 * 255 / 100 = 76.5
        self.assertEqual(energy_percent_to_byte(30), 77)

    def test_clamped(self):
        """Test clamping of out-of-range percentages."""
        self.assertEqual(energy_percent_to_byte(150), 255)
        self.assertEqual(energy_percent_to_byte(-5), 0)

    def test_monotonic(self):
        """Test that more energy never gives a smaller byte."""
        values = [energy_percent_to_byte(p) for p in range(101)]
        self.assertEqual(values, sorted(values))


class TestPrinterSettings(unittest.TestCase):

    def test_defaults(self):
        """Test default printer settings."""
        settings = PrinterSettings()
        self.assertEqual(settings.quality, PrinterQuality.NORMAL)
        self.assertEqual(settings.energy_percent, 37)

    def test_validate(self):
        """Test printer settings validation."""
        self.assertEqual(PrinterSettings(energy_percent=50).validate(), (True, ""))
        is_valid, error = PrinterSettings(energy_percent=101).validate()
        self.assertFalse(is_valid)
        self.assertIn("energy", error.lower())

    def test_dict_round_trip(self):
        """Test printer settings dictionary round trip."""
        settings = PrinterSettings(PrinterQuality.DARK, 80)
        self.assertEqual(PrinterSettings.from_dict(settings.to_dict()), settings)

    def test_from_dict_bad_quality(self):
        """Test that an unknown quality is rejected."""
        with self.assertRaises(ValueError):
            PrinterSettings.from_dict({'quality': 'extra-dark'})

    def test_display_name(self):
        """Test quality display names."""
        self.assertEqual(PrinterQuality.LIGHT.display_name, "Light")


class TestPipelineSettings(unittest.TestCase):

    def test_default_settings(self):
        """Test the default pipeline settings."""
        self.assertEqual(DEFAULT_PIPELINE_SETTINGS.brightness, 0.05)
        self.assertEqual(DEFAULT_PIPELINE_SETTINGS.contrast, 1.1)
        self.assertEqual(DEFAULT_PIPELINE_SETTINGS.algorithm, DitherAlgorithm.FLOYD_STEINBERG)
        self.assertEqual(DEFAULT_PIPELINE_SETTINGS.gamma, 1.0)
        self.assertFalse(DEFAULT_PIPELINE_SETTINGS.auto_levels)

    def test_bare_constructor_matches_defaults(self):
        """Test that PipelineSettings() is the documented default settings."""
        self.assertEqual(PipelineSettings(), DEFAULT_PIPELINE_SETTINGS)
        self.assertEqual(PipelineSettings.from_dict({}), PipelineSettings())

    def test_frozen(self):
        """Test that pipeline settings are immutable."""
        with self.assertRaises(dataclasses.FrozenInstanceError):
            DEFAULT_PIPELINE_SETTINGS.brightness = 0.5

    def test_with_changes(self):
        """Test copying settings with changed fields."""
        changed = DEFAULT_PIPELINE_SETTINGS.with_changes(algorithm=DitherAlgorithm.ATKINSON)
        self.assertEqual(changed.algorithm, DitherAlgorithm.ATKINSON)
        self.assertEqual(changed.contrast, DEFAULT_PIPELINE_SETTINGS.contrast)
        self.assertEqual(DEFAULT_PIPELINE_SETTINGS.algorithm, DitherAlgorithm.FLOYD_STEINBERG)

    def test_dict_round_trip(self):
        """Test pipeline settings dictionary round trip."""
        settings = PipelineSettings(-0.2, 1.5, DitherAlgorithm.ORDERED, gamma=1.4, auto_levels=True)
        data = settings.to_dict()
        self.assertEqual(data['algorithm'], 'ordered')
        self.assertEqual(PipelineSettings.from_dict(data), settings)

    def test_from_dict_fills_defaults(self):
        """Test that missing keys take default values."""
        settings = PipelineSettings.from_dict({'algorithm': 'stucki'})
        self.assertEqual(settings.algorithm, DitherAlgorithm.STUCKI)
        self.assertEqual(settings.brightness, DEFAULT_PIPELINE_SETTINGS.brightness)

    def test_from_dict_bad_values(self):
        """Test that malformed values raise ValueError."""
        with self.assertRaises(ValueError):
            PipelineSettings.from_dict({'algorithm': 'sierra'})
        with self.assertRaises(ValueError):
            PipelineSettings.from_dict({'contrast': 'high'})


if __name__ == '__main__':
    unittest.main()
