# -*- coding: utf-8 -*-
"""
Brightness Correction Tests - Retinex, auto levels, and gamma correction.

Dependencies
------------
pytest

Author
------
GIAL Developers

License
-------
MIT License
Copyright (c) 2026 GIAL Developers
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import pytest
import numpy as np

from gial.buffer import PixelBuffer
from gial.exceptions import UninitializedBufferError, ValidationError
from gial.image_processing.correction import (
    AutoLevels,
    GammaCorrection,
    NormalizedAutoLevels,
    SingleScaleRetinex,
    correct_image,
    gamma_table,
    stretch_levels,
)
from gial.vocabulary import CorrectorType


class TestLevels:
    """Test range stretching correctors."""

    def test_stretch(self):
        result = AutoLevels().apply(PixelBuffer.from_array(np.array([[0, 85, 170]])))
        np.testing.assert_array_equal(result.data, [[0, 127, 255]])

    def test_full_range_copied(self):
        buf = PixelBuffer.from_array(np.array([[0, 255, 7]]))
        assert AutoLevels().apply(buf) == buf

    def test_degenerate_range(self):
        pixels = np.full((2, 2), 40, dtype=np.uint8)
        np.testing.assert_array_equal(stretch_levels(pixels, 40, 40), pixels)

    def test_normalized_flat_unchanged(self, flat_buffer):
        """Zero deviation leaves nothing to stretch."""
        assert NormalizedAutoLevels().apply(flat_buffer) == flat_buffer

    def test_normalized_widens_narrow_histogram(self):
        rng = np.random.default_rng(7)
        narrow = PixelBuffer.from_array(rng.integers(100, 121, (16, 16)))
        result = NormalizedAutoLevels().apply(narrow)
        assert int(result.data.max()) - int(result.data.min()) > 20


class TestGamma:
    """Test power-law correction."""

    def test_table_endpoints(self):
        table = gamma_table()
        assert table[0] == 0
        assert table[255] == 255
        assert np.all(np.diff(table.astype(int)) >= 0)

    def test_brightens_midtones(self):
        buf = PixelBuffer.from_array(np.full((2, 2), 128))
        assert GammaCorrection().apply(buf)[0, 0] > 128


class TestRetinex:
    """Test single-scale Retinex."""

    def test_black_stays_black(self, square_buffer):
        result = SingleScaleRetinex().apply(square_buffer)
        assert result.shape == square_buffer.shape
        np.testing.assert_array_equal(result.data[square_buffer.data == 0], 0)

    def test_all_zero(self):
        result = SingleScaleRetinex().apply(PixelBuffer(8, 8))
        np.testing.assert_array_equal(result.data, 0)

    def test_small_sigma_rejected(self):
        with pytest.raises(ValidationError, match="minimum"):
            SingleScaleRetinex(sigma=0.5)


class TestCorrectImage:
    """Test the correct_image dispatcher."""

    def test_dispatch(self, random_buffer):
        assert correct_image(random_buffer, CorrectorType.GAMMA) == \
            GammaCorrection().apply(random_buffer)
        assert correct_image(random_buffer, CorrectorType.AUTO_LEVELS) == \
            AutoLevels().apply(random_buffer)

    def test_unknown_type_raises(self, random_buffer):
        with pytest.raises(ValidationError, match="corrector"):
            correct_image(random_buffer, 'gamma')

    def test_uninitialized_raises(self):
        with pytest.raises(UninitializedBufferError):
            correct_image(PixelBuffer(), CorrectorType.NORM_AUTO_LEVELS)
