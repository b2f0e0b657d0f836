# -*- coding: utf-8 -*-
"""
Image Processing Module - Filters, edge detectors, and corrections.

All processors inherit from ``ImageProcessor``, which provides version
checking and tunable parameter validation.

Sub-modules
-----------
filters/
    Gaussian (direct, separable, recursive), median, sharpen, and adaptive
    threshold filters, plus the ``filter_image`` dispatcher.
edges/
    Sobel and Scharr operators, the Canny pipeline, and the
    ``detect_borders`` dispatcher.
correction.py
    Single-scale Retinex, auto levels, and gamma correction.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
params.py
    ``Range``, ``Options``, ``OddSize``, ``Desc`` constraint markers for
    tunable parameters via ``Annotated`` type hints.

Usage
-----
    >>> from gial import DetectorType, FilterType
    >>> from gial.image_processing import filter_image, detect_borders
    >>> result, blurred = filter_image(buf, FilterType.GAUSSIAN, 5)
    >>> edges = detect_borders(blurred, DetectorType.CANNY)

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

from gial.image_processing.base import (
    BufferTransformMixin,
    ImageProcessor,
    ImageTransform,
)
from gial.image_processing.params import Desc, OddSize, Options, ParamSpec, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.image_processing.filters import (
    AdaptiveThreshold,
    GaussianFilter,
    MedianFilter,
    RecursiveGaussianFilter,
    SeparableGaussianFilter,
    SharpenFilter,
    adaptive_threshold,
    filter_image,
)
from gial.image_processing.edges import (
    CannyDetector,
    ScharrDetector,
    SobelDetector,
    detect_borders,
)
from gial.image_processing.correction import (
    AutoLevels,
    GammaCorrection,
    NormalizedAutoLevels,
    SingleScaleRetinex,
    correct_image,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'BufferTransformMixin',
    'Range',
    'Options',
    'OddSize',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
    'GaussianFilter',
    'SeparableGaussianFilter',
    'RecursiveGaussianFilter',
    'SharpenFilter',
    'MedianFilter',
    'AdaptiveThreshold',
    'filter_image',
    'adaptive_threshold',
    'SobelDetector',
    'ScharrDetector',
    'CannyDetector',
    'detect_borders',
    'SingleScaleRetinex',
    'AutoLevels',
    'NormalizedAutoLevels',
    'GammaCorrection',
    'correct_image',
]
