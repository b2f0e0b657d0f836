# -*- coding: utf-8 -*-
"""
Adaptive Threshold - Binarization against the local window mean.

A pixel exceeds the threshold when ``pixel - local_mean > threshold``,
where ``local_mean`` is the mean of the odd ``k x k`` window around it
(borders reflected). Exceeding pixels become 255 and the rest 0 under
``ThresholdType.MAX_MORE_THRESHOLD``; ``MIN_MORE_THRESHOLD`` swaps the two
extremes.

Dependencies
------------
scipy

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
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy.ndimage import uniform_filter

# GIAL internal
from gial.buffer import PIXEL_MAX, PIXEL_MIN
from gial.exceptions import ValidationError
from gial.image_processing.base import BufferTransformMixin, ImageTransform
from gial.image_processing.params import Desc, OddSize, Options, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.image_processing.filters._validation import validate_kernel_size
from gial.vocabulary import ProcessorCategory, ThresholdType


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.THRESHOLD)
class AdaptiveThreshold(BufferTransformMixin, ImageTransform):
    """Local-mean adaptive threshold producing a binary buffer.

    Parameters
    ----------
    kernel_size : int
        Odd side of the averaging window. Default 3.
    threshold : int or float
        Offset above the local mean a pixel must exceed. Default 0.
    threshold_type : ThresholdType
        Which extreme exceeding pixels map to.
    """

    kernel_size: Annotated[int, Range(min=1), OddSize(),
                           Desc('Averaging window side (odd)')] = 3
    threshold: Annotated[float,
                         Desc('Offset above the local mean')] = 0
    threshold_type: Annotated[ThresholdType, Options(*ThresholdType),
                              Desc('Extreme assigned to exceeding pixels')] = \
        ThresholdType.MAX_MORE_THRESHOLD

    def __init__(
        self,
        kernel_size: int = 3,
        threshold: float = 0,
        threshold_type: ThresholdType = ThresholdType.MAX_MORE_THRESHOLD,
    ) -> None:
        validate_kernel_size(kernel_size)
        if not isinstance(threshold_type, ThresholdType):
            raise ValidationError(
                f"threshold_type must be a ThresholdType, got {threshold_type!r}"
            )
        self.kernel_size = kernel_size
        self.threshold = threshold
        self.threshold_type = threshold_type

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        samples = pixels.astype(np.float64)
        local_mean = uniform_filter(samples, size=params['kernel_size'],
                                    mode='mirror')
        exceeds = samples - local_mean > params['threshold']
        if params['threshold_type'] is ThresholdType.MAX_MORE_THRESHOLD:
            high, low = PIXEL_MAX, PIXEL_MIN
        else:
            high, low = PIXEL_MIN, PIXEL_MAX
        return np.where(exceeds, high, low).astype(np.uint8)
