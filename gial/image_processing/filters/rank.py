# -*- coding: utf-8 -*-
"""
Rank Filters - Median filter with reflected borders.

Backed by ``scipy.ndimage.median_filter`` in ``'mirror'`` mode, which
reflects about the edge sample without repeating it, the same border rule
as ``PixelBuffer.correct_coordinates``. For an odd window of ``k x k``
samples the output is the ``k * k // 2``-th smallest window sample.

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
from scipy.ndimage import median_filter

# GIAL internal
from gial.image_processing.base import BufferTransformMixin, ImageTransform
from gial.image_processing.params import Desc, OddSize, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.image_processing.filters._validation import validate_kernel_size
from gial.vocabulary import ProcessorCategory


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS)
class MedianFilter(BufferTransformMixin, ImageTransform):
    """Spatial median filter for noise removal.

    Parameters
    ----------
    kernel_size : int
        Square window side length. Must be odd. Default is 3.

    Examples
    --------
    >>> from gial.image_processing.filters import MedianFilter
    >>> denoised = MedianFilter(kernel_size=5).apply(noisy_buffer)
    """

    kernel_size: Annotated[int, Range(min=1), OddSize(),
                           Desc('Square window side length (odd)')] = 3

    def __init__(self, kernel_size: int = 3) -> None:
        validate_kernel_size(kernel_size)
        self.kernel_size = kernel_size

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        return median_filter(pixels, size=params['kernel_size'], mode='mirror')
