# -*- coding: utf-8 -*-
"""
PixelBuffer Tests - Construction, reflection, access, and whole-buffer ops.

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

from gial.buffer import (
    PixelBuffer,
    clamp_pixel_value,
    clamp_pixels,
    reflect_coordinate,
    reflect_indices,
    truncating_divide,
)
from gial.exceptions import UninitializedBufferError, ValidationError
from gial.vocabulary import BufferLayout, ScaleType


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    """Test clamping, truncating division, and reflection helpers."""

    def test_clamp_pixel_value(self):
        """Out-of-range values clamp, in-range values pass through."""
        assert clamp_pixel_value(-5) == 0
        assert clamp_pixel_value(300) == 255
        assert clamp_pixel_value(17.5) == 17.5

    def test_clamp_pixels_truncates(self):
        """Array clamping produces uint8 with truncation."""
        result = clamp_pixels(np.array([-3.0, 12.9, 400.0]))
        assert result.dtype == np.uint8
        np.testing.assert_array_equal(result, [0, 12, 255])

    def test_truncating_divide(self):
        """Quotients round toward zero."""
        assert int(truncating_divide(-7, 2)) == -3
        assert int(truncating_divide(7, -2)) == -3
        assert int(truncating_divide(7, 2)) == 3
        np.testing.assert_array_equal(
            truncating_divide(np.array([-9, 9, -1]), 4), [-2, 2, 0])

    def test_reflect_coordinate(self):
        """Single reflection about the nearest edge."""
        assert reflect_coordinate(-1, 10) == 1
        assert reflect_coordinate(-3, 10) == 3
        assert reflect_coordinate(10, 10) == 8
        assert reflect_coordinate(0, 10) == 0

    def test_reflect_indices_matches_scalar(self):
        """Vectorized reflection agrees wherever one reflection suffices."""
        coords = np.arange(-9, 19)
        expected = [reflect_coordinate(int(c), 10) for c in coords]
        np.testing.assert_array_equal(reflect_indices(coords, 10), expected)

    def test_reflect_indices_large_offsets(self):
        """Offsets wider than the axis keep reflecting."""
        np.testing.assert_array_equal(
            reflect_indices(np.arange(-4, 7), 3),
            [0, 1, 2, 1, 0, 1, 2, 1, 0, 1, 2])

    def test_reflect_indices_single_pixel_axis(self):
        """A one-pixel axis maps everything to 0."""
        np.testing.assert_array_equal(reflect_indices([-2, 0, 3], 1), [0, 0, 0])


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    """Test buffer construction and initialization state."""

    def test_default_uninitialized(self):
        """Default buffer is -1 x -1 and uninitialized."""
        buf = PixelBuffer()
        assert not buf.is_initialized
        assert buf.shape == (-1, -1)

    def test_non_positive_dimensions(self):
        """Non-positive dimensions give an uninitialized buffer."""
        assert not PixelBuffer(0, 5).is_initialized
        assert not PixelBuffer(4, -2).is_initialized

    def test_zero_filled(self):
        """New buffers are zero-filled."""
        buf = PixelBuffer(3, 4)
        assert buf.shape == (3, 4)
        np.testing.assert_array_equal(buf.data, np.zeros((3, 4)))

    def test_from_grayscale_bytes(self):
        """Grayscale bytes are read row-major."""
        buf = PixelBuffer.from_buffer(2, 3, bytes(range(6)))
        np.testing.assert_array_equal(buf.data, [[0, 1, 2], [3, 4, 5]])

    def test_from_rgb_bytes(self):
        """RGB triples are averaged with integer division."""
        raw = bytes([10, 20, 30, 255, 255, 254])
        buf = PixelBuffer.from_buffer(1, 2, raw, BufferLayout.RGB)
        np.testing.assert_array_equal(buf.data, [[20, 254]])

    def test_short_buffer_raises(self):
        """Too few samples raise ValidationError."""
        with pytest.raises(ValidationError, match="needs 6"):
            PixelBuffer.from_buffer(2, 3, bytes(4))

    def test_from_buffer_non_positive(self):
        """Non-positive dimensions give an uninitialized buffer."""
        assert not PixelBuffer.from_buffer(0, 5, b'').is_initialized

    def test_from_array_rgb(self):
        """A (rows, cols, 3) array is averaged per pixel."""
        rgb = np.zeros((2, 2, 3), dtype=np.uint8)
        rgb[..., 0] = 90
        buf = PixelBuffer.from_array(rgb)
        np.testing.assert_array_equal(buf.data, np.full((2, 2), 30))

    def test_from_array_clamps(self):
        """Out-of-range array values are clamped."""
        buf = PixelBuffer.from_array(np.array([[-10, 300]]))
        np.testing.assert_array_equal(buf.data, [[0, 255]])

    def test_from_array_bad_shape(self):
        """1D arrays are rejected."""
        with pytest.raises(ValidationError, match="2D"):
            PixelBuffer.from_array(np.arange(5))


# ---------------------------------------------------------------------------
# Sample access
# ---------------------------------------------------------------------------

class TestAccess:
    """Test pixel access, clamping, and coordinate correction."""

    def test_set_clamps(self):
        """Stored values are clamped to [0, 255]."""
        buf = PixelBuffer(3, 3)
        buf[1, 2] = 300
        buf[0, 0] = -4
        assert buf[1, 2] == 255
        assert buf[0, 0] == 0

    def test_out_of_range_raises(self):
        """Access outside the buffer raises IndexError."""
        buf = PixelBuffer(3, 3)
        with pytest.raises(IndexError):
            buf.get_pixel(3, 0)
        with pytest.raises(IndexError):
            buf[0, -1] = 5

    def test_uninitialized_data_raises(self):
        """Uninitialized buffers refuse data access."""
        with pytest.raises(UninitializedBufferError, match="initialized"):
            PixelBuffer().data

    def test_correct_coordinates(self):
        """Coordinates reflect into a 10x20 buffer."""
        buf = PixelBuffer(10, 20)
        assert buf.correct_coordinates(-1, 20) == (1, 18)
        assert buf.correct_coordinates(10, -5) == (8, 5)
        assert buf.correct_coordinates(4, 5) == (4, 5)

    def test_valid_coordinates(self):
        """Coordinate predicates are complementary."""
        buf = PixelBuffer(10, 20)
        assert buf.is_valid_coordinates(9, 19)
        assert buf.is_invalid_coordinates(10, 0)


# ---------------------------------------------------------------------------
# Whole-buffer operations
# ---------------------------------------------------------------------------

class TestOperations:
    """Test resize, difference, scale, copy, and equality."""

    def test_resize_expands_with_reflection(self):
        """Expanding by one pixel reflects the border."""
        arr = np.arange(9, dtype=np.uint8).reshape(3, 3)
        buf = PixelBuffer.from_array(arr)
        expanded = buf.resize(-1, -1, 3, 3)
        idx = [1, 0, 1, 2, 1]
        np.testing.assert_array_equal(expanded.data, arr[np.ix_(idx, idx)])

    def test_resize_crop(self):
        """An interior rectangle is a plain crop."""
        arr = np.arange(9, dtype=np.uint8).reshape(3, 3)
        cropped = PixelBuffer.from_array(arr).resize(1, 0, 2, 1)
        np.testing.assert_array_equal(cropped.data, arr[0:2, 1:3])

    def test_resize_inverted(self):
        """An inverted rectangle gives an uninitialized buffer."""
        assert not PixelBuffer(3, 3).resize(2, 0, 1, 2).is_initialized

    def test_difference(self):
        """Difference is the per-pixel absolute difference."""
        a = PixelBuffer.from_array(np.array([[10, 200]]))
        b = PixelBuffer.from_array(np.array([[50, 100]]))
        np.testing.assert_array_equal(a.difference(b).data, [[40, 100]])
        assert (a - b) == a.difference(b)

    def test_difference_size_mismatch(self):
        """Mismatched sizes give an uninitialized buffer."""
        assert not PixelBuffer(2, 2).difference(PixelBuffer(2, 3)).is_initialized

    def test_upscale(self):
        """Upscaling replicates samples into blocks."""
        buf = PixelBuffer.from_array(np.array([[1, 2]]))
        up = buf.scale(2, 2, ScaleType.UPSCALE)
        np.testing.assert_array_equal(up.data, [[1, 1, 2, 2], [1, 1, 2, 2]])

    def test_downscale(self):
        """Downscaling averages blocks with truncation."""
        buf = PixelBuffer.from_array(np.arange(16).reshape(4, 4))
        down = buf.scale(2, 2, ScaleType.DOWNSCALE)
        np.testing.assert_array_equal(down.data, [[2, 4], [10, 12]])

    def test_scale_factor_one(self):
        """Factors not greater than 1 give an uninitialized buffer."""
        assert not PixelBuffer(4, 4).scale(1, 2, ScaleType.UPSCALE).is_initialized

    def test_copy_is_deep(self):
        """Copies do not share samples."""
        buf = PixelBuffer(2, 2)
        dup = buf.copy()
        dup[0, 0] = 9
        assert buf[0, 0] == 0
        assert buf != dup

    def test_uninitialized_equality(self):
        """Uninitialized buffers compare equal to each other only."""
        assert PixelBuffer() == PixelBuffer()
        assert PixelBuffer() != PixelBuffer(1, 1)

    def test_tobytes(self):
        """Samples serialize row-major."""
        buf = PixelBuffer.from_buffer(2, 2, bytes([1, 2, 3, 4]))
        assert buf.tobytes() == bytes([1, 2, 3, 4])
