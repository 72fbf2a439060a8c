"""
Tests for the dithering algorithms.
"""

import unittest

import numpy as np

from purinto.core.settings import DitherAlgorithm
from purinto.image.dithering import (
    SRGB_TO_LINEAR, atkinson_dither, dither, floyd_steinberg_dither, get_ditherer,
    jarvis_judice_ninke_dither, ordered_dither, stucki_dither, threshold_dither
)

WIDTH, HEIGHT = 100, 100


def uniform(value, width=WIDTH, height=HEIGHT):
    return np.full(width * height, value, dtype=np.uint8)


class TestAllAlgorithms(unittest.TestCase):
    """Behaviour every algorithm shares."""

    def test_white_prints_nothing(self):
        """Test that white paper stays blank."""
        for algorithm in DitherAlgorithm:
            with self.subTest(algorithm=algorithm):
                result = dither(uniform(255), WIDTH, HEIGHT, algorithm)
                self.assertEqual(int(result.sum()), 0)

    def test_black_prints_everything(self):
        """Test that black prints every pixel."""
        for algorithm in DitherAlgorithm:
            with self.subTest(algorithm=algorithm):
                result = dither(uniform(0), WIDTH, HEIGHT, algorithm)
                self.assertEqual(int(result.sum()), WIDTH * HEIGHT)

    def test_binary_output(self):
        """Test that output is a flat buffer of 0 and 1."""
        pixels = np.random.default_rng(7).integers(0, 256, WIDTH * HEIGHT, dtype=np.uint8)
        for algorithm in DitherAlgorithm:
            with self.subTest(algorithm=algorithm):
                result = dither(pixels, WIDTH, HEIGHT, algorithm)
                self.assertEqual(result.dtype, np.uint8)
                self.assertEqual(result.shape, (WIDTH * HEIGHT,))
                self.assertTrue(set(np.unique(result)) <= {0, 1})

    def test_deterministic(self):
        """Test that the same input gives the same output."""
        pixels = np.random.default_rng(42).integers(0, 256, 64 * 48, dtype=np.uint8)
        for algorithm in DitherAlgorithm:
            with self.subTest(algorithm=algorithm):
                first = dither(pixels, 64, 48, algorithm)
                second = dither(pixels.copy(), 64, 48, algorithm)
                np.testing.assert_array_equal(first, second)

    def test_input_not_modified(self):
        """Test that the input buffer is left untouched."""
        pixels = np.random.default_rng(3).integers(0, 256, 32 * 32, dtype=np.uint8)
        original = pixels.copy()
        for algorithm in DitherAlgorithm:
            dither(pixels, 32, 32, algorithm)
        np.testing.assert_array_equal(pixels, original)

    def test_wrong_length(self):
        """Test that a buffer of the wrong length is rejected."""
        for algorithm in DitherAlgorithm:
            with self.subTest(algorithm=algorithm):
                with self.assertRaises(ValueError):
                    dither(uniform(128, 10, 10), 10, 11, algorithm)

    def test_invalid_dimensions(self):
        """Test that zero dimensions are rejected."""
        with self.assertRaises(ValueError):
            floyd_steinberg_dither(np.array([], dtype=np.uint8), 0, 0)


class TestThreshold(unittest.TestCase):

    def test_cutoff(self):
        """Test the mid-gray cutoff."""
        result = threshold_dither(np.array([0, 127, 128, 255], dtype=np.uint8), 4, 1)
        np.testing.assert_array_equal(result, [1, 1, 0, 0])


class TestErrorDiffusion(unittest.TestCase):
    """Error diffusion keeps the average darkness of the input in linear light."""

    def assertInkFraction(self, ditherer, pixels, width, height, tolerance=0.02):
        expected = 1.0 - float(SRGB_TO_LINEAR[pixels].mean())
        ink = float(ditherer(pixels, width, height).mean())
        self.assertAlmostEqual(ink, expected, delta=tolerance)

    def test_mid_gray_conserved(self):
        """Test ink coverage of a uniform mid-gray."""
        pixels = uniform(128, 128, 128)
        for ditherer in (floyd_steinberg_dither, jarvis_judice_ninke_dither, stucki_dither):
            with self.subTest(ditherer=ditherer.__name__):
                self.assertInkFraction(ditherer, pixels, 128, 128)

    def test_gradient_conserved(self):
        """Test ink coverage of a horizontal gradient."""
        pixels = np.tile(np.arange(256, dtype=np.uint8), 64)
        for ditherer in (floyd_steinberg_dither, jarvis_judice_ninke_dither, stucki_dither):
            with self.subTest(ditherer=ditherer.__name__):
                self.assertInkFraction(ditherer, pixels, 256, 64)

    def test_mid_gray_mixes_dots(self):
        """Test that mid-gray produces a dot mixture."""
        result = floyd_steinberg_dither(uniform(128), WIDTH, HEIGHT)
        self.assertTrue(0 < result.sum() < WIDTH * HEIGHT)

    def test_single_pixel(self):
        """Test a one-pixel image."""
        np.testing.assert_array_equal(floyd_steinberg_dither(uniform(30, 1, 1), 1, 1), [1])
        np.testing.assert_array_equal(floyd_steinberg_dither(uniform(250, 1, 1), 1, 1), [0])


class TestAtkinson(unittest.TestCase):

    def test_mid_gray_has_both_values(self):
        """Test that mid-gray produces both values."""
        result = atkinson_dither(uniform(128), WIDTH, HEIGHT)
        self.assertIn(0, result)
        self.assertIn(1, result)

    def test_lighter_than_floyd_steinberg_on_light_gray(self):
        """Atkinson drops part of the error, so light tones wash out."""
        pixels = uniform(230)
        self.assertLess(atkinson_dither(pixels, WIDTH, HEIGHT).sum(),
                        floyd_steinberg_dither(pixels, WIDTH, HEIGHT).sum())


class TestOrdered(unittest.TestCase):

    def test_mid_gray_density(self):
        """Test the exact Bayer density of mid-gray."""
        # Linear light of 128 is ~0.216; 50 of the 64 Bayer thresholds lie above it
        result = ordered_dither(uniform(128, 64, 64), 64, 64)
        self.assertEqual(int(result.sum()), 50 * 64)

    def test_pattern_repeats(self):
        """Test that the Bayer pattern tiles every 8 pixels."""
        result = ordered_dither(uniform(128, 16, 16), 16, 16).reshape(16, 16)
        np.testing.assert_array_equal(result[:8, :8], result[8:, 8:])

    def test_partial_tiles(self):
        """Test sizes that are not multiples of 8."""
        result = ordered_dither(uniform(100, 13, 5), 13, 5)
        self.assertEqual(result.shape, (65,))


class TestGetDitherer(unittest.TestCase):

    def test_every_algorithm_registered(self):
        """Test that every algorithm has a ditherer."""
        for algorithm in DitherAlgorithm:
            self.assertTrue(callable(get_ditherer(algorithm)))

    def test_accepts_value(self):
        """Test lookup by enum value."""
        self.assertIs(get_ditherer('atkinson'), atkinson_dither)

    def test_unknown(self):
        """Test that an unknown name raises ValueError."""
        with self.assertRaises(ValueError):
            get_ditherer('halftone')


if __name__ == '__main__':
    unittest.main()
