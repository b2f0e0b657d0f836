# -*- coding: utf-8 -*-
"""
Image Combiner - Fusion of several equally sized buffers into one.

``ImageCombiner`` holds references to the source buffers and fuses them
with one of five strategies selected by ``CombineType``:

- ``INFORM_PRIORITY``: the base image shifted by the zero-mean detail of
  every other image.
- ``MORPHOLOGICAL``: the base image is cut into brightness bands and
  connected regions; every other image is flattened to its mean over each
  region, and each output pixel averages the base pixel with its absolute
  differences from these projections.
- ``LOCAL_ENTROPY``: each output pixel comes from the image with the
  largest local entropy around it.
- ``DIFFERENCES_ADDING``: two images blended according to how strongly
  they differ at each pixel.
- ``CALC_DIFF``: absolute difference of two images.

When ranking is requested, the informative-priority, morphological and
differences-adding strategies order the images by descending global
entropy and use the first as the base; otherwise the insertion order is
kept. Expected failures are returned as a ``CombinationResult`` together
with an uninitialized buffer.

Dependencies
------------
numpy

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

# Standard library
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

# Third-party
import numpy as np

# GIAL internal
from gial.analysis.statistics import (
    LOCAL_ENTROPY_APERTURE,
    NUM_LEVELS,
    entropy,
    local_entropy_map,
)
from gial.buffer import PixelBuffer, clamp_pixels, truncating_divide
from gial.combination.forms import MorphologicalForm, find_forms
from gial.exceptions import ValidationError
from gial.vocabulary import CombinationResult, CombineType

logger = logging.getLogger(__name__)

DEFAULT_NUM_MODS = 16

# Denominator of the differences-adding band coefficients (4 * 255).
_BAND_SCALE = 1020.0

CombineOutcome = Tuple[CombinationResult, PixelBuffer]

_PAIR_STRATEGIES = (CombineType.DIFFERENCES_ADDING, CombineType.CALC_DIFF)
_RANKED_STRATEGIES = (
    CombineType.INFORM_PRIORITY,
    CombineType.MORPHOLOGICAL,
    CombineType.DIFFERENCES_ADDING,
)


# =====================================================================
# Strategy kernels (arrays in, uint8 array out)
# =====================================================================

def informative_priority(images: Sequence[np.ndarray]) -> np.ndarray:
    """Add the zero-mean detail of every non-base image to the base.

    For each further image with truncated mean ``A`` and integer residual
    ``dA = sum(pixel - A) // count`` every accumulator pixel becomes
    ``clamp(acc + (pixel - A) - dA)``.
    """
    acc = images[0].astype(np.int64)
    for image in images[1:]:
        mean = int(image.mean())
        detail = image.astype(np.int64) - mean
        residual = int(truncating_divide(int(detail.sum()), detail.size))
        acc = clamp_pixels(acc + detail - residual).astype(np.int64)
    return acc.astype(np.uint8)


def brightness_step(num_mods: int) -> int:
    """Smallest band width ``d`` with ``256 // d < num_mods``."""
    if num_mods < 1:
        raise ValidationError(f"num_mods must be >= 1, got {num_mods}")
    step = 1
    while NUM_LEVELS // step >= num_mods:
        step += 1
    return step


def segment(base: np.ndarray, num_mods: int) -> np.ndarray:
    """Band index ``pixel // brightness_step(num_mods)`` of every pixel."""
    return base // brightness_step(num_mods)


def project_to_forms(
    forms: Sequence[MorphologicalForm], image: np.ndarray,
) -> np.ndarray:
    """Replace every form's pixels by the truncated mean of *image* there."""
    projection = np.zeros_like(image)
    for form in forms:
        ys, xs = form.coordinates()
        projection[ys, xs] = int(image[ys, xs].mean())
    return projection


def morphological(
    images: Sequence[np.ndarray], num_mods: int = DEFAULT_NUM_MODS,
) -> np.ndarray:
    """Region-wise fusion of the base image with per-region projections."""
    base = images[0]
    forms = find_forms(segment(base, num_mods), num_mods)
    logger.debug("Morphological fusion: %d forms in %d bands", len(forms), num_mods)
    base_values = base.astype(np.int64)
    total = base_values.copy()
    for image in images[1:]:
        total += np.abs(base_values - project_to_forms(forms, image))
    return clamp_pixels(total // len(images))


def local_entropy_selection(
    buffers: Sequence[PixelBuffer], aperture: int = LOCAL_ENTROPY_APERTURE,
) -> np.ndarray:
    """Per pixel, the sample of the image with the largest local entropy.

    Ties keep the earliest image.
    """
    entropies = np.stack([local_entropy_map(b, aperture) for b in buffers])
    choice = np.argmax(entropies, axis=0)
    stack = np.stack([b.data for b in buffers])
    return np.take_along_axis(stack, choice[None], axis=0)[0]


def differences_adding(first: np.ndarray, second: np.ndarray) -> np.ndarray:
    """Blend two images by the magnitude of their difference.

    With ``D = |first - second|`` and the band
    ``b1 = Dmin + k1 (Dmax - Dmin)``, ``b2 = Dmin + k2 (Dmax - Dmin)``
    (``k1 = (Dmax + 3 Dmin) / 1020``, ``k2 = (3 Dmax + Dmin) / 1020``, both
    truncated to bytes), pixels with ``D <= b1`` take *first*, pixels with
    ``D >= b2`` take *second*, and pixels in between take
    ``first + (b1 - D) (first - second) / (b2 - b1)``.
    """
    a = first.astype(np.int64)
    b = second.astype(np.int64)
    diff = np.abs(a - b)
    d_min, d_max = int(diff.min()), int(diff.max())
    k1 = (d_max + 3 * d_min) / _BAND_SCALE
    k2 = (3 * d_max + d_min) / _BAND_SCALE
    b1 = int(d_min + k1 * (d_max - d_min))
    b2 = int(d_min + k2 * (d_max - d_min))
    logger.debug("Differences adding: D in [%d, %d], band (%d, %d)",
                 d_min, d_max, b1, b2)

    result = np.where(diff <= b1, a, b)
    between = (diff > b1) & (diff < b2)
    if np.any(between):
        blend = a + truncating_divide((b1 - diff) * (a - b), b2 - b1)
        result = np.where(between, blend, result)
    return clamp_pixels(result)


# =====================================================================
# ImageCombiner
# =====================================================================

class ImageCombiner:
    """Fuses a set of equally sized buffers.

    The combiner keeps references to the added buffers; call
    ``clear_images`` between unrelated combinations.

    Parameters
    ----------
    images : Iterable[PixelBuffer], optional
        Initial source buffers.

    Examples
    --------
    >>> combiner = ImageCombiner([day, night])
    >>> result, fused = combiner.combine(CombineType.LOCAL_ENTROPY)
    >>> result
    <CombinationResult.SUCCESS: 'success'>
    """

    def __init__(self, images: Optional[Iterable[PixelBuffer]] = None) -> None:
        self._images: List[PixelBuffer] = []
        for image in images or ():
            self.add_image(image)

    @property
    def images(self) -> Tuple[PixelBuffer, ...]:
        return tuple(self._images)

    def add_image(self, image: PixelBuffer) -> None:
        """Append a source buffer.

        Raises
        ------
        UninitializedBufferError
            If *image* is uninitialized.
        """
        image.require_initialized('add_image')
        self._images.append(image)

    def clear_images(self) -> None:
        self._images.clear()

    def can_combine(self) -> CombinationResult:
        """``FEW_IMAGES``, ``NOT_SAME_IMAGES`` or ``SUCCESS``."""
        if len(self._images) < 2:
            return CombinationResult.FEW_IMAGES
        shape = self._images[0].shape
        if any(image.shape != shape for image in self._images[1:]):
            return CombinationResult.NOT_SAME_IMAGES
        return CombinationResult.SUCCESS

    def form_sorted_images(self, need_sort: bool = True) -> List[PixelBuffer]:
        """Sources by descending entropy (stable), or in insertion order."""
        if not need_sort:
            return list(self._images)
        return sorted(self._images, key=entropy, reverse=True)

    def combine(
        self,
        combine_type: CombineType,
        need_sort: bool = True,
        num_mods: int = DEFAULT_NUM_MODS,
    ) -> CombineOutcome:
        """Fuse the source buffers.

        Parameters
        ----------
        combine_type : CombineType
            Fusion strategy.
        need_sort : bool
            Rank by entropy before choosing the base image. Only used by
            the informative-priority, morphological and differences-adding
            strategies.
        num_mods : int
            Number of brightness bands of the morphological strategy.

        Returns
        -------
        Tuple[CombinationResult, PixelBuffer]
            ``INCORRECT_COMBINER_TYPE`` for an unknown strategy,
            ``MANY_IMAGES`` when a two-image strategy gets more than two,
            otherwise the ``can_combine`` verdict. The buffer is
            uninitialized unless the result is ``SUCCESS``.

        Raises
        ------
        ValidationError
            If *num_mods* is below 1.
        """
        if not isinstance(combine_type, CombineType):
            return self._failure(CombinationResult.INCORRECT_COMBINER_TYPE)
        if combine_type in _PAIR_STRATEGIES and len(self._images) > 2:
            return self._failure(CombinationResult.MANY_IMAGES)
        status = self.can_combine()
        if status is not CombinationResult.SUCCESS:
            return self._failure(status)

        ordered = self.form_sorted_images(
            need_sort and combine_type in _RANKED_STRATEGIES)
        arrays = [image.data for image in ordered]
        logger.debug("Combining %d images of %dx%d with %s",
                     len(arrays), ordered[0].height, ordered[0].width,
                     combine_type.name)

        if combine_type is CombineType.INFORM_PRIORITY:
            fused = informative_priority(arrays)
        elif combine_type is CombineType.MORPHOLOGICAL:
            fused = morphological(arrays, num_mods)
        elif combine_type is CombineType.LOCAL_ENTROPY:
            fused = local_entropy_selection(ordered)
        elif combine_type is CombineType.DIFFERENCES_ADDING:
            fused = differences_adding(arrays[0], arrays[1])
        else:
            fused = ordered[0].difference(ordered[1]).data
        return CombinationResult.SUCCESS, PixelBuffer._wrap(fused)

    @staticmethod
    def _failure(result: CombinationResult) -> CombineOutcome:
        logger.debug("Combination failed with %s", result.name)
        return result, PixelBuffer()
