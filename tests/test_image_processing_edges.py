# -*- coding: utf-8 -*-
"""
Edge Detection Tests - Sobel, Scharr, and the Canny pipeline stages.

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
from gial.exceptions import ProcessorError, UninitializedBufferError, ValidationError
from gial.image_processing.edges import (
    CannyDetector,
    Gradient,
    ScharrDetector,
    SobelDetector,
    canny,
    detect_borders,
    edge_strength,
    hypot_table,
    operator_kernel,
    quantize_direction,
)
from gial.image_processing.edges.canny import (
    _suppression_neighbours,
    double_threshold,
    resolve_ambiguities,
    suppress_non_maxima,
)
from gial.vocabulary import DetectorType, OperatorType


# ---------------------------------------------------------------------------
# Gradient operators
# ---------------------------------------------------------------------------

class TestOperators:
    """Test Sobel and Scharr operators."""

    def test_unknown_operator_raises(self):
        """Canny has no 3x3 operator pair."""
        with pytest.raises(ValidationError, match="operator"):
            operator_kernel(DetectorType.CANNY, OperatorType.HORIZONTAL)

    def test_flat_has_no_edges(self, flat_buffer):
        result = SobelDetector().apply(flat_buffer)
        np.testing.assert_array_equal(result.data, 0)

    @pytest.mark.parametrize('detector', [SobelDetector, ScharrDetector])
    def test_vertical_step(self, step_buffer, detector):
        """A bright-to-dark step saturates the two columns beside it."""
        result = detector().apply(step_buffer)
        expected = np.zeros((20, 20), dtype=np.uint8)
        expected[:, 9:11] = 255
        np.testing.assert_array_equal(result.data, expected)

    def test_hypot_table(self):
        """Lookup table holds rounded, clamped magnitudes and is read-only."""
        table = hypot_table()
        assert table.shape == (256, 256)
        assert table[3, 4] == 5
        assert table[255, 255] == 255
        with pytest.raises(ValueError):
            table[0, 0] = 1

    def test_edge_strength_mismatch(self):
        result = edge_strength(PixelBuffer(2, 2), PixelBuffer(3, 2))
        assert not result.is_initialized


# ---------------------------------------------------------------------------
# Canny stages
# ---------------------------------------------------------------------------

class TestGradient:
    """Test direction quantization and per-pixel gradients."""

    @pytest.mark.parametrize('h, v, expected', [
        (10, 1, 0),
        (0, 5, 90),
        (0, 0, 90),
        (3, 3, 45),
        (-3, -3, 45),
        (-3, 3, 135),
        (1, 10, 90),
    ])
    def test_quantize_direction(self, h, v, expected):
        assert quantize_direction(h, v) == expected

    def test_from_components(self):
        assert Gradient.from_components(3, 4) == Gradient(5, 45)
        assert Gradient.from_components(300, 0).magnitude == 255


class TestSuppression:
    """Test non-maximum suppression."""

    def test_keeps_ridge_peak(self):
        """Along direction 0 only the column maximum survives."""
        magnitude = np.zeros((5, 5), dtype=np.uint8)
        magnitude[:, 2] = [10, 50, 100, 50, 10]
        direction = np.zeros((5, 5), dtype=int)
        result = suppress_non_maxima(magnitude, direction)
        expected = np.zeros((5, 5), dtype=np.uint8)
        expected[2, 2] = 100
        np.testing.assert_array_equal(result, expected)

    def test_input_not_modified(self):
        magnitude = np.array([[10, 50, 10]], dtype=np.uint8)
        suppress_non_maxima(magnitude, np.full((1, 3), 90))
        np.testing.assert_array_equal(magnitude, [[10, 50, 10]])

    def test_unquantized_direction_raises(self):
        with pytest.raises(ProcessorError, match="quantized"):
            _suppression_neighbours(30, 2, 2, 5, 5)


class TestThresholds:
    """Test double threshold and ambiguity resolution."""

    def test_double_threshold(self):
        result = double_threshold(np.array([[10, 50, 100]], dtype=np.uint8), 20, 90)
        np.testing.assert_array_equal(result, [[0, 50, 255]])

    def test_ambiguous_next_to_edge_promoted(self):
        magnitude = np.zeros((3, 3), dtype=np.uint8)
        magnitude[1, 1] = 50
        magnitude[0, 0] = 255
        result = resolve_ambiguities(magnitude)
        assert result[1, 1] == 255

    def test_isolated_ambiguous_discarded(self):
        magnitude = np.zeros((3, 3), dtype=np.uint8)
        magnitude[1, 1] = 50
        np.testing.assert_array_equal(resolve_ambiguities(magnitude), 0)

    def test_crowded_group_discarded(self):
        """A group touching max_closer confirmed pixels stays suppressed."""
        magnitude = np.full((3, 3), 255, dtype=np.uint8)
        magnitude[1, 1] = 50
        result = resolve_ambiguities(magnitude, max_closer=8)
        assert result[1, 1] == 0


class TestCanny:
    """Test the full Canny pipeline."""

    def test_flat_has_no_edges(self, flat_buffer):
        np.testing.assert_array_equal(canny(flat_buffer).data, 0)

    def test_binary_output(self, square_buffer):
        result = canny(square_buffer)
        assert result.shape == square_buffer.shape
        assert set(np.unique(result.data)) == {0, 255}

    def test_detector_matches_function(self, square_buffer):
        assert CannyDetector().apply(square_buffer) == canny(square_buffer)

    def test_inverted_thresholds_raise(self):
        with pytest.raises(ValidationError, match="exceeds"):
            CannyDetector(threshold_min=100, threshold_max=50)

    def test_threshold_range_validated(self):
        with pytest.raises(ValidationError, match="maximum"):
            CannyDetector(threshold_max=300)


class TestDetectBorders:
    """Test the detect_borders dispatcher."""

    def test_sobel(self, step_buffer):
        assert detect_borders(step_buffer, DetectorType.SOBEL) == \
            SobelDetector().apply(step_buffer)

    def test_canny_thresholds_forwarded(self, square_buffer):
        assert detect_borders(square_buffer, DetectorType.CANNY, 30, 120) == \
            canny(square_buffer, 30, 120)

    def test_unknown_type(self, step_buffer):
        assert not detect_borders(step_buffer, 'sobel').is_initialized

    def test_invalid_thresholds(self, step_buffer):
        assert not detect_borders(step_buffer, DetectorType.CANNY, 90, 20).is_initialized

    def test_uninitialized_raises(self):
        with pytest.raises(UninitializedBufferError):
            detect_borders(PixelBuffer(), DetectorType.SOBEL)
