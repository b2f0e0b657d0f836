# -*- coding: utf-8 -*-
"""
Linear Filters - Gaussian blur and sharpening through the convolution engine.

- ``GaussianFilter``: direct 2D Gaussian with an integerized kernel
- ``SeparableGaussianFilter``: the same blur as a row pass and a column pass
- ``SharpenFilter``: fixed 3x3 center-weighted Laplacian kernel

Both Gaussian variants derive sigma from the window size as
``sigma = (size / 2 - 1) * 0.3 + 0.8``. The direct kernel samples the 2D
density, divides every tap by the corner (smallest) tap, truncates to an
integer, and uses the tap sum as divisor. The separable variant uses the
normalized floating 1D density and rounds once at the end, so it matches
the direct variant to within the integerization error of the kernel.

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

# Standard library
import logging
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy.ndimage import correlate1d

# GIAL internal
from gial.buffer import PixelBuffer, clamp_pixels
from gial.convolution import Kernel, convolve
from gial.image_processing.base import BufferTransformMixin, ImageTransform
from gial.image_processing.params import Desc, OddSize, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.image_processing.filters._validation import validate_kernel_size
from gial.vocabulary import ConvolutionStrategy, ProcessorCategory

logger = logging.getLogger(__name__)

#: Center-weighted 3x3 sharpening kernel; taps sum to 1.
SHARPEN_WEIGHTS = np.array([
    [-1, -1, -1],
    [-1, 9, -1],
    [-1, -1, -1],
], dtype=np.int64)


def gaussian_sigma(size: int) -> float:
    """Sigma used for a Gaussian window of side *size*."""
    return (size / 2.0 - 1.0) * 0.3 + 0.8


def gaussian_kernel(size: int) -> Kernel:
    """Integerized 2D Gaussian kernel of side *size*.

    Taps are ``int(g(r, c) / g(a, a))`` where ``g`` is the 2D Gaussian
    density and ``(a, a)`` the corner offset; the divisor is the tap sum.

    Parameters
    ----------
    size : int
        Odd window side.

    Returns
    -------
    Kernel
        Integer kernel with corner taps equal to 1.
    """
    validate_kernel_size(size, 'size')
    sigma = gaussian_sigma(size)
    a = size // 2
    offsets = np.arange(-a, a + 1)
    dist2 = offsets[:, None] ** 2 + offsets[None, :] ** 2
    # Ratio to the corner tap written as one exponential so corners are 1.
    taps = np.exp((2 * a * a - dist2) / (2.0 * sigma * sigma)).astype(np.int64)
    return Kernel.from_values(taps, divisor=int(taps.sum()))


def gaussian_weights(size: int) -> np.ndarray:
    """Normalized 1D Gaussian weights of length *size*."""
    validate_kernel_size(size, 'size')
    sigma = gaussian_sigma(size)
    a = size // 2
    offsets = np.arange(-a, a + 1)
    weights = np.exp(-(offsets ** 2) / (2.0 * sigma * sigma))
    return weights / weights.sum()


def _separable_pass(samples: np.ndarray, weights: np.ndarray, axis: int) -> np.ndarray:
    """Correlate *samples* with *weights* along *axis*, reflecting borders.

    ``mode='mirror'`` reflects about the edge sample, as ``PixelBuffer``
    does.
    """
    return correlate1d(samples, weights, axis=axis, mode='mirror')


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS)
class GaussianFilter(ImageTransform):
    """Direct 2D Gaussian blur through the convolution engine.

    Parameters
    ----------
    kernel_size : int
        Odd window side. Default 3.
    strategy : ConvolutionStrategy
        Convolution strategy. Default ``SLIDING_WINDOW``.
    """

    kernel_size: Annotated[int, Range(min=1), OddSize(),
                           Desc('Gaussian window side (odd)')] = 3

    def __init__(
        self,
        kernel_size: int = 3,
        strategy: ConvolutionStrategy = ConvolutionStrategy.SLIDING_WINDOW,
    ) -> None:
        validate_kernel_size(kernel_size)
        self.kernel_size = kernel_size
        self.strategy = strategy

    def apply(self, source: PixelBuffer, **kwargs: Any) -> PixelBuffer:
        params = self._resolve_params(kwargs)
        kernel = gaussian_kernel(params['kernel_size'])
        logger.debug("Gaussian blur: size=%d sigma=%.4f divisor=%d",
                     kernel.size, gaussian_sigma(kernel.size), kernel.divisor)
        return convolve(source, kernel, self.strategy)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS)
class SeparableGaussianFilter(BufferTransformMixin, ImageTransform):
    """Gaussian blur as a row pass followed by a column pass.

    Costs ``O(size)`` per pixel instead of ``O(size ** 2)``.

    Parameters
    ----------
    kernel_size : int
        Odd window side. Default 3.
    """

    kernel_size: Annotated[int, Range(min=1), OddSize(),
                           Desc('Gaussian window side (odd)')] = 3

    def __init__(self, kernel_size: int = 3) -> None:
        validate_kernel_size(kernel_size)
        self.kernel_size = kernel_size

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        weights = gaussian_weights(params['kernel_size'])
        rows_done = _separable_pass(pixels.astype(np.float64), weights, axis=1)
        both_done = _separable_pass(rows_done, weights, axis=0)
        return clamp_pixels(np.rint(both_done))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS)
class SharpenFilter(ImageTransform):
    """Fixed 3x3 sharpening through the convolution engine."""

    def __init__(
        self,
        strategy: ConvolutionStrategy = ConvolutionStrategy.SLIDING_WINDOW,
    ) -> None:
        self.strategy = strategy

    def apply(self, source: PixelBuffer, **kwargs: Any) -> PixelBuffer:
        return convolve(source, Kernel.from_values(SHARPEN_WEIGHTS), self.strategy)
