# -*- coding: utf-8 -*-
"""
Border Detection - Single entry point over the Sobel, Scharr and Canny detectors.

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

# GIAL internal
from gial.buffer import PixelBuffer
from gial.exceptions import ProcessorError, ValidationError
from gial.image_processing.edges.canny import (
    DEFAULT_THRESHOLD_MAX,
    DEFAULT_THRESHOLD_MIN,
    CannyDetector,
)
from gial.image_processing.edges.operators import ScharrDetector, SobelDetector
from gial.vocabulary import DetectorType

logger = logging.getLogger(__name__)


def detect_borders(
    source: PixelBuffer,
    detector_type: DetectorType,
    threshold_min: int = DEFAULT_THRESHOLD_MIN,
    threshold_max: int = DEFAULT_THRESHOLD_MAX,
) -> PixelBuffer:
    """Run the detector selected by *detector_type* on *source*.

    The thresholds only apply to ``DetectorType.CANNY``.

    Returns
    -------
    PixelBuffer
        The edge buffer, or an uninitialized buffer when the detector type
        is unknown, the thresholds are invalid, or detection fails.

    Raises
    ------
    UninitializedBufferError
        If *source* is uninitialized.
    """
    source.require_initialized('detect_borders')
    try:
        if detector_type is DetectorType.CANNY:
            detector = CannyDetector(threshold_min=threshold_min,
                                     threshold_max=threshold_max)
        elif detector_type is DetectorType.SOBEL:
            detector = SobelDetector()
        elif detector_type is DetectorType.SCHARR:
            detector = ScharrDetector()
        else:
            raise ValidationError(f"Unknown detector type {detector_type!r}")
        return detector.apply(source)
    except (ValidationError, ProcessorError) as exc:
        logger.debug("Border detection failed: %s", exc)
        return PixelBuffer()
