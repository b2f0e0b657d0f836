# -*- coding: utf-8 -*-
"""
Image Combination Tests - Combiner result codes, strategies, and forms.

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

from gial.analysis.statistics import local_entropy_map
from gial.buffer import PixelBuffer
from gial.combination import (
    ImageCombiner,
    MorphologicalForm,
    brightness_step,
    differences_adding,
    find_forms,
    informative_priority,
)
from gial.combination.forms import row_runs
from gial.exceptions import UninitializedBufferError, ValidationError
from gial.vocabulary import CombinationResult, CombineType


# ---------------------------------------------------------------------------
# Result codes
# ---------------------------------------------------------------------------

class TestCombinerChecks:
    """Test preconditions and failure results."""

    def test_few_images(self, flat_buffer):
        result, fused = ImageCombiner([flat_buffer]).combine(CombineType.INFORM_PRIORITY)
        assert result is CombinationResult.FEW_IMAGES
        assert not fused.is_initialized

    def test_not_same_images(self):
        combiner = ImageCombiner([PixelBuffer(4, 4), PixelBuffer(4, 5)])
        result, fused = combiner.combine(CombineType.LOCAL_ENTROPY)
        assert result is CombinationResult.NOT_SAME_IMAGES
        assert not fused.is_initialized

    @pytest.mark.parametrize('combine_type', [
        CombineType.DIFFERENCES_ADDING, CombineType.CALC_DIFF,
    ])
    def test_many_images(self, flat_buffer, combine_type):
        """Two-image strategies reject a third image."""
        combiner = ImageCombiner([flat_buffer] * 3)
        result, fused = combiner.combine(combine_type)
        assert result is CombinationResult.MANY_IMAGES
        assert not fused.is_initialized

    def test_many_images_checked_first(self):
        """Image count is checked before sizes for two-image strategies."""
        combiner = ImageCombiner([PixelBuffer(2, 2), PixelBuffer(2, 2),
                                  PixelBuffer(3, 3)])
        result, _ = combiner.combine(CombineType.CALC_DIFF)
        assert result is CombinationResult.MANY_IMAGES

    def test_unknown_type(self, flat_buffer):
        result, _ = ImageCombiner([flat_buffer] * 2).combine('calc_diff')
        assert result is CombinationResult.INCORRECT_COMBINER_TYPE

    def test_add_uninitialized_raises(self):
        with pytest.raises(UninitializedBufferError):
            ImageCombiner().add_image(PixelBuffer())

    def test_clear_images(self, flat_buffer):
        combiner = ImageCombiner([flat_buffer, flat_buffer])
        combiner.clear_images()
        assert combiner.images == ()
        assert combiner.can_combine() is CombinationResult.FEW_IMAGES

    def test_bad_num_mods_raises(self, flat_buffer):
        combiner = ImageCombiner([flat_buffer, flat_buffer])
        with pytest.raises(ValidationError, match="num_mods"):
            combiner.combine(CombineType.MORPHOLOGICAL, num_mods=0)


class TestSorting:
    """Test entropy ranking of the sources."""

    def test_sorted_by_entropy(self, flat_buffer, random_buffer):
        flat = PixelBuffer.from_array(np.full((24, 24), 100))
        combiner = ImageCombiner([flat, random_buffer])
        assert combiner.form_sorted_images()[0] is random_buffer
        assert combiner.form_sorted_images(need_sort=False)[0] is flat

    def test_stable_for_equal_entropy(self, flat_buffer):
        other = flat_buffer.copy()
        combiner = ImageCombiner([flat_buffer, other])
        sorted_images = combiner.form_sorted_images()
        assert sorted_images[0] is flat_buffer
        assert sorted_images[1] is other


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class TestStrategies:
    """Test each fusion strategy on small synthetic inputs."""

    def test_calc_diff(self, random_buffer, flat_buffer):
        flat = PixelBuffer.from_array(np.full((24, 24), 100))
        result, fused = ImageCombiner([random_buffer, flat]).combine(
            CombineType.CALC_DIFF)
        assert result is CombinationResult.SUCCESS
        assert fused == random_buffer.difference(flat)

    def test_informative_priority_flat_detail(self, random_buffer):
        """A constant image has no detail to add."""
        flat = PixelBuffer.from_array(np.full((24, 24), 100))
        result, fused = ImageCombiner([flat, random_buffer]).combine(
            CombineType.INFORM_PRIORITY)
        assert result is CombinationResult.SUCCESS
        assert fused == random_buffer

    def test_informative_priority_values(self):
        base = np.array([[10, 20]], dtype=np.uint8)
        other = np.array([[0, 10]], dtype=np.uint8)
        np.testing.assert_array_equal(informative_priority([base, other]), [[5, 25]])

    def test_informative_priority_fractional_mean(self):
        """Mean and residual both truncate, so a mean of 0.5 adds raw detail."""
        base = np.array([[100, 100]], dtype=np.uint8)
        other = np.array([[0, 1]], dtype=np.uint8)
        np.testing.assert_array_equal(informative_priority([base, other]),
                                      [[100, 101]])

    def test_informative_priority_residual_truncates(self):
        """Residual division drops the remainder."""
        base = np.array([[50, 50, 50]], dtype=np.uint8)
        other = np.array([[3, 3, 4]], dtype=np.uint8)
        # A = 3, detail = [0, 0, 1], dA = 1 // 3 = 0
        np.testing.assert_array_equal(informative_priority([base, other]),
                                      [[50, 50, 51]])

    def test_local_entropy_selection(self, random_buffer):
        """Pixels come from the noisy image wherever it carries entropy."""
        flat = PixelBuffer.from_array(np.full((24, 24), 100))
        result, fused = ImageCombiner([flat, random_buffer]).combine(
            CombineType.LOCAL_ENTROPY)
        assert result is CombinationResult.SUCCESS
        expected = np.where(local_entropy_map(random_buffer) > 0,
                            random_buffer.data, flat.data)
        np.testing.assert_array_equal(fused.data, expected)

    def test_local_entropy_permuted_window_tie(self):
        """Windows holding the same samples in another order tie, first wins."""
        first = np.full((6, 6), 50, dtype=np.uint8)
        second = first.copy()
        first[2:4, 2:4] = [[10, 20], [30, 40]]
        second[2:4, 2:4] = [[40, 30], [20, 10]]
        x = PixelBuffer.from_array(first)
        y = PixelBuffer.from_array(second)
        np.testing.assert_array_equal(local_entropy_map(x)[2:4, 2:4],
                                      local_entropy_map(y)[2:4, 2:4])
        result, fused = ImageCombiner([x, y]).combine(CombineType.LOCAL_ENTROPY)
        assert result is CombinationResult.SUCCESS
        np.testing.assert_array_equal(fused.data[2:4, 2:4], first[2:4, 2:4])

    def test_local_entropy_identical(self, random_buffer):
        _, fused = ImageCombiner([random_buffer, random_buffer.copy()]).combine(
            CombineType.LOCAL_ENTROPY)
        assert fused == random_buffer

    def test_differences_adding_values(self):
        """Small differences keep the first image, large ones take the second."""
        first = np.array([[100, 100, 100]], dtype=np.uint8)
        second = np.array([[100, 80, 0]], dtype=np.uint8)
        np.testing.assert_array_equal(differences_adding(first, second),
                                      [[100, 89, 0]])

    def test_differences_adding_identical(self, random_buffer):
        result, fused = ImageCombiner([random_buffer, random_buffer.copy()]).combine(
            CombineType.DIFFERENCES_ADDING)
        assert result is CombinationResult.SUCCESS
        assert fused == random_buffer

    def test_morphological_flat_pair(self, flat_buffer):
        """Projection of a flat image is itself, so the result halves it."""
        result, fused = ImageCombiner([flat_buffer, flat_buffer.copy()]).combine(
            CombineType.MORPHOLOGICAL)
        assert result is CombinationResult.SUCCESS
        np.testing.assert_array_equal(fused.data, 50)

    def test_morphological_shape(self, random_buffer, square_buffer):
        result, fused = ImageCombiner([random_buffer, square_buffer]).combine(
            CombineType.MORPHOLOGICAL, num_mods=8)
        assert result is CombinationResult.SUCCESS
        assert fused.shape == random_buffer.shape


# ---------------------------------------------------------------------------
# Morphological forms
# ---------------------------------------------------------------------------

class TestForms:
    """Test brightness banding and scanline form extraction."""

    def test_brightness_step(self):
        assert brightness_step(16) == 17
        assert brightness_step(1) == 257

    def test_row_runs(self):
        assert row_runs(np.array([1, 1, 2, 2, 2, 1])) == [
            (0, 1, 1), (2, 4, 2), (5, 5, 1)]

    def test_form_pixels(self):
        form = MorphologicalForm()
        form.append_run(3, 1, 4)
        form.append(0, 5)
        assert len(form) == 5
        assert list(form)[0] == (1, 3)
        ys, xs = form.coordinates()
        np.testing.assert_array_equal(ys, [3, 3, 3, 3, 5])
        np.testing.assert_array_equal(xs, [1, 2, 3, 4, 0])

    def test_find_forms_links_rows(self):
        bands = np.array([[0, 0, 1], [1, 0, 1]])
        forms = find_forms(bands, 2)
        assert [len(f) for f in forms] == [3, 2, 1]

    def test_find_forms_merges_branches(self):
        """A U-shape joins its two arms into one form."""
        bands = np.array([[0, 1, 0], [0, 0, 0]])
        forms = find_forms(bands, 1)
        assert len(forms) == 1
        assert len(forms[0]) == 5
