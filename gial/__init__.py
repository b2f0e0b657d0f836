# -*- coding: utf-8 -*-
"""
GIAL - Grayscale Image Analysis Library.

Building blocks for 8-bit grayscale image analysis: a reflective-border
pixel buffer, kernel convolution, smoothing and sharpening filters, edge
detectors, multi-image fusion, global and local statistics, and Hu moment
invariants.

Dependencies
------------
numpy
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

__version__ = "0.1.0"
__author__ = "GIAL Developers"

from gial.exceptions import (
    GialError,
    ValidationError,
    UninitializedBufferError,
    ProcessorError,
)
from gial.vocabulary import (
    BufferLayout,
    CombinationResult,
    CombineType,
    ConvolutionStrategy,
    CorrectorType,
    DetectorType,
    FilterType,
    FiltrationResult,
    OperatorType,
    ProcessorCategory,
    ScaleType,
    ThresholdType,
)
from gial.buffer import PixelBuffer
from gial.convolution import Kernel, convolve

__all__ = [
    'GialError',
    'ValidationError',
    'UninitializedBufferError',
    'ProcessorError',
    'BufferLayout',
    'CombinationResult',
    'CombineType',
    'ConvolutionStrategy',
    'CorrectorType',
    'DetectorType',
    'FilterType',
    'FiltrationResult',
    'OperatorType',
    'ProcessorCategory',
    'ScaleType',
    'ThresholdType',
    'PixelBuffer',
    'Kernel',
    'convolve',
]
