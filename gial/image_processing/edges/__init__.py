# -*- coding: utf-8 -*-
"""
Edge Detection - Gradient operators and the Canny pipeline.

Operators
    ``SobelDetector``, ``ScharrDetector`` -- edge strength of a 3x3
    horizontal/vertical operator pair
    ``operator_convolution`` -- one directional gradient buffer
    ``edge_strength`` -- magnitude of two directional buffers

Canny
    ``CannyDetector`` / ``canny`` -- binary edge map

``detect_borders`` selects a detector by ``DetectorType``.

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

from gial.image_processing.edges.operators import (
    ScharrDetector,
    SobelDetector,
    edge_strength,
    hypot_table,
    operator_convolution,
    operator_kernel,
)
from gial.image_processing.edges.canny import (
    DEFAULT_THRESHOLD_MAX,
    DEFAULT_THRESHOLD_MIN,
    CannyDetector,
    Gradient,
    canny,
    quantize_direction,
)
from gial.image_processing.edges.detection import detect_borders

__all__ = [
    'SobelDetector',
    'ScharrDetector',
    'CannyDetector',
    'Gradient',
    'canny',
    'detect_borders',
    'edge_strength',
    'hypot_table',
    'operator_convolution',
    'operator_kernel',
    'quantize_direction',
    'DEFAULT_THRESHOLD_MIN',
    'DEFAULT_THRESHOLD_MAX',
]
