# -*- coding: utf-8 -*-
"""
Filter Bank - Result-coded entry points over the filter processors.

``filter_image`` and ``adaptive_threshold`` never raise for expected
failures. They build the matching processor, translate its validation
errors into a ``FiltrationResult`` and always return a
``(result, buffer)`` pair; the buffer is uninitialized unless the result is
``SUCCESS``.

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
from typing import Tuple, Union

# GIAL internal
from gial.buffer import PixelBuffer
from gial.exceptions import ValidationError
from gial.image_processing.base import ImageTransform
from gial.image_processing.filters._validation import MIN_SIGMA
from gial.image_processing.filters.linear import (
    GaussianFilter,
    SeparableGaussianFilter,
    SharpenFilter,
)
from gial.image_processing.filters.rank import MedianFilter
from gial.image_processing.filters.recursive import RecursiveGaussianFilter
from gial.image_processing.filters.threshold import AdaptiveThreshold
from gial.vocabulary import FilterType, FiltrationResult, ThresholdType

logger = logging.getLogger(__name__)

DEFAULT_FILTER_SIZE = 3

#: Window sizes per sigma when a recursive Gaussian is selected by size.
IIR_SIZE_PER_SIGMA = 6.0

_SIZED_FILTERS = {
    FilterType.MEDIAN: MedianFilter,
    FilterType.GAUSSIAN: GaussianFilter,
    FilterType.SEP_GAUSSIAN: SeparableGaussianFilter,
}

FilterOutcome = Tuple[FiltrationResult, PixelBuffer]


def _failure(result: FiltrationResult, reason: str) -> FilterOutcome:
    logger.debug("Filtering failed with %s: %s", result.name, reason)
    return result, PixelBuffer()


def _run(processor: ImageTransform, source: PixelBuffer) -> FilterOutcome:
    result = processor.apply(source)
    logger.debug("%s finished on %dx%d buffer", type(processor).__name__,
                 source.height, source.width)
    return FiltrationResult.SUCCESS, result


def filter_image(
    source: PixelBuffer,
    filter_type: FilterType,
    filter_size: Union[int, float] = DEFAULT_FILTER_SIZE,
) -> FilterOutcome:
    """Filter *source* with the filter selected by *filter_type*.

    Parameters
    ----------
    source : PixelBuffer
        Buffer to filter.
    filter_type : FilterType
        Filter to run.
    filter_size : int
        Window side for the median and Gaussian filters. The recursive
        Gaussian uses ``sigma = filter_size / 6``. Ignored by sharpen.

    Returns
    -------
    Tuple[FiltrationResult, PixelBuffer]
        ``INCORRECT_FILTER_TYPE`` for an unknown type, ``INTERNAL_ERROR``
        for an uninitialized source, ``INCORRECT_FILTER_SIZE`` for an even
        or non-positive size, ``FILTER_SIZE_TOO_SMALL`` when the recursive
        Gaussian sigma is below 1.

    Examples
    --------
    >>> result, blurred = filter_image(buf, FilterType.GAUSSIAN, 5)
    >>> result
    <FiltrationResult.SUCCESS: 'success'>
    """
    if not isinstance(filter_type, FilterType):
        return _failure(FiltrationResult.INCORRECT_FILTER_TYPE,
                        f"unknown filter type {filter_type!r}")
    if not source.is_initialized:
        return _failure(FiltrationResult.INTERNAL_ERROR,
                        "source buffer is uninitialized")

    if filter_type is FilterType.SHARPEN:
        return _run(SharpenFilter(), source)

    if filter_type is FilterType.IIR_GAUSSIAN:
        if isinstance(filter_size, bool) or not isinstance(filter_size, (int, float)) \
                or filter_size <= 0:
            return _failure(FiltrationResult.INCORRECT_FILTER_SIZE,
                            f"filter size {filter_size!r}")
        sigma = filter_size / IIR_SIZE_PER_SIGMA
        if sigma < MIN_SIGMA:
            return _failure(FiltrationResult.FILTER_SIZE_TOO_SMALL,
                            f"sigma {sigma:.3f} below {MIN_SIGMA}")
        return _run(RecursiveGaussianFilter(sigma=sigma), source)

    try:
        processor = _SIZED_FILTERS[filter_type](kernel_size=filter_size)
    except ValidationError as exc:
        return _failure(FiltrationResult.INCORRECT_FILTER_SIZE, str(exc))
    return _run(processor, source)


def adaptive_threshold(
    source: PixelBuffer,
    filter_size: int,
    threshold: Union[int, float],
    threshold_type: ThresholdType = ThresholdType.MAX_MORE_THRESHOLD,
) -> FilterOutcome:
    """Binarize *source* against its local window means.

    Returns
    -------
    Tuple[FiltrationResult, PixelBuffer]
        ``INCORRECT_FILTER_TYPE`` for an unknown threshold type,
        ``INTERNAL_ERROR`` for an uninitialized source,
        ``INCORRECT_FILTER_SIZE`` for an even or non-positive size.
    """
    if not isinstance(threshold_type, ThresholdType):
        return _failure(FiltrationResult.INCORRECT_FILTER_TYPE,
                        f"unknown threshold type {threshold_type!r}")
    if not source.is_initialized:
        return _failure(FiltrationResult.INTERNAL_ERROR,
                        "source buffer is uninitialized")
    try:
        processor = AdaptiveThreshold(filter_size, threshold, threshold_type)
    except ValidationError as exc:
        return _failure(FiltrationResult.INCORRECT_FILTER_SIZE, str(exc))
    return _run(processor, source)
