# -*- coding: utf-8 -*-
"""
Gradient Operators - Sobel and Scharr kernels and edge strength.

Each operator exposes a horizontal and a vertical 3x3 kernel. The
horizontal kernel responds to changes between rows, the vertical kernel
to changes between columns. ``operator_convolution`` returns one clamped
directional response; ``edge_strength`` combines two directional
responses into ``round(hypot(h, v))`` clamped to a byte, looked up in a
256 x 256 table built on first use.

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
import functools
import logging
from typing import Any, Tuple

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import PixelBuffer, clamp_pixels
from gial.convolution import Kernel, convolve, convolve_raw
from gial.exceptions import ValidationError
from gial.image_processing.base import ImageTransform
from gial.image_processing.versioning import processor_tags, processor_version
from gial.vocabulary import DetectorType, OperatorType, ProcessorCategory

logger = logging.getLogger(__name__)

OPERATOR_WEIGHTS = {
    DetectorType.SOBEL: {
        OperatorType.HORIZONTAL: ((1, 2, 1), (0, 0, 0), (-1, -2, -1)),
        OperatorType.VERTICAL: ((1, 0, -1), (2, 0, -2), (1, 0, -1)),
    },
    DetectorType.SCHARR: {
        OperatorType.HORIZONTAL: ((3, 10, 3), (0, 0, 0), (-3, -10, -3)),
        OperatorType.VERTICAL: ((3, 0, -3), (10, 0, -10), (3, 0, -3)),
    },
}


def operator_kernel(detector_type: DetectorType, operator_type: OperatorType) -> Kernel:
    """Kernel of one directional gradient operator.

    Raises
    ------
    ValidationError
        If *detector_type* has no 3x3 operator (``CANNY``) or either
        argument is not a member of its enum.
    """
    try:
        weights = OPERATOR_WEIGHTS[detector_type][operator_type]
    except (KeyError, TypeError):
        raise ValidationError(
            f"No gradient operator for {detector_type!r} / {operator_type!r}"
        ) from None
    return Kernel.from_values(weights, divisor=1)


def operator_convolution(
    source: PixelBuffer,
    detector_type: DetectorType,
    operator_type: OperatorType,
) -> PixelBuffer:
    """Directional gradient buffer, responses clamped to ``[0, 255]``."""
    return convolve(source, operator_kernel(detector_type, operator_type))


def gradient_components(
    source: PixelBuffer,
    detector_type: DetectorType = DetectorType.SOBEL,
) -> Tuple[np.ndarray, np.ndarray]:
    """Signed ``(horizontal, vertical)`` gradient responses as ``int64``."""
    return (
        convolve_raw(source, operator_kernel(detector_type, OperatorType.HORIZONTAL)),
        convolve_raw(source, operator_kernel(detector_type, OperatorType.VERTICAL)),
    )


@functools.lru_cache(maxsize=None)
def hypot_table() -> np.ndarray:
    """Read-only ``(256, 256)`` table of ``round(hypot(i, j))`` clamped."""
    levels = np.arange(256, dtype=np.float64)
    table = clamp_pixels(np.rint(np.hypot(levels[:, None], levels[None, :])))
    table.setflags(write=False)
    return table


def gradient_magnitude(horizontal: np.ndarray, vertical: np.ndarray) -> np.ndarray:
    """``round(hypot(h, v))`` clamped to bytes for signed components."""
    return clamp_pixels(np.rint(np.hypot(horizontal, vertical)))


def edge_strength(horizontal: PixelBuffer, vertical: PixelBuffer) -> PixelBuffer:
    """Combine two directional byte buffers into a magnitude buffer.

    Returns
    -------
    PixelBuffer
        Uninitialized when the buffers differ in size.
    """
    if horizontal.shape != vertical.shape:
        logger.debug("edge_strength: size mismatch %s vs %s",
                     horizontal.shape, vertical.shape)
        return PixelBuffer()
    return PixelBuffer._wrap(hypot_table()[horizontal.data, vertical.data])


class _OperatorDetector(ImageTransform):
    """Edge strength of one gradient operator pair."""

    detector_type: DetectorType

    def apply(self, source: PixelBuffer, **kwargs: Any) -> PixelBuffer:
        logger.debug("%s edge strength on %dx%d buffer",
                     self.detector_type.name, source.height, source.width)
        return edge_strength(
            operator_convolution(source, self.detector_type, OperatorType.HORIZONTAL),
            operator_convolution(source, self.detector_type, OperatorType.VERTICAL),
        )


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES)
class SobelDetector(_OperatorDetector):
    """Sobel edge strength."""

    detector_type = DetectorType.SOBEL


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES)
class ScharrDetector(_OperatorDetector):
    """Scharr edge strength."""

    detector_type = DetectorType.SCHARR
