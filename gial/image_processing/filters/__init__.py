# -*- coding: utf-8 -*-
"""
Filter Bank - Smoothing, sharpening, and thresholding filters.

All filters are ``ImageTransform`` processors applied to a ``PixelBuffer``.

Linear Filters
    ``GaussianFilter`` -- direct integerized Gaussian (convolution engine)
    ``SeparableGaussianFilter`` -- row pass then column pass
    ``SharpenFilter`` -- fixed 3x3 center-weighted kernel

Rank Filters
    ``MedianFilter`` -- window median

Recursive Filters
    ``RecursiveGaussianFilter`` -- IIR Gaussian approximation, sigma >= 1

Threshold Filters
    ``AdaptiveThreshold`` -- local-mean binarization

Entry points returning a ``FiltrationResult``: ``filter_image``,
``adaptive_threshold``.

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

from gial.image_processing.filters.linear import (
    GaussianFilter,
    SeparableGaussianFilter,
    SharpenFilter,
    gaussian_kernel,
    gaussian_sigma,
)
from gial.image_processing.filters.rank import MedianFilter
from gial.image_processing.filters.recursive import (
    RecursiveGaussianFilter,
    iir_coefficients,
)
from gial.image_processing.filters.threshold import AdaptiveThreshold
from gial.image_processing.filters.bank import (
    DEFAULT_FILTER_SIZE,
    adaptive_threshold,
    filter_image,
)

__all__ = [
    'GaussianFilter',
    'SeparableGaussianFilter',
    'SharpenFilter',
    'MedianFilter',
    'RecursiveGaussianFilter',
    'AdaptiveThreshold',
    'gaussian_kernel',
    'gaussian_sigma',
    'iir_coefficients',
    'filter_image',
    'adaptive_threshold',
    'DEFAULT_FILTER_SIZE',
]
