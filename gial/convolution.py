# -*- coding: utf-8 -*-
"""
Convolution Engine - Square kernels with a scalar divisor over pixel buffers.

Provides ``Kernel``, a fixed-size square kernel generic over an integer or
floating element type, and the convolution entry points used by the filter
bank and the edge detector.

Every output sample is the weighted sum of the ``a``-neighborhood of the
input sample (``a = size // 2``, taps visited in row-major order, borders
reflected), divided by the kernel divisor when it is non-zero, clamped to
``[0, 255]`` and truncated. Integer kernels accumulate in ``int64`` and
divide with truncation toward zero; floating kernels accumulate and divide
in their own precision. Kernels are applied without flipping.

Two execution strategies are provided and produce bit-identical output:

- ``ConvolutionStrategy.NAIVE`` computes each output sample independently
  from reflected tap coordinates.
- ``ConvolutionStrategy.SLIDING_WINDOW`` expands the buffer once by an
  ``a``-pixel reflected border and accumulates one shifted window of the
  expanded buffer per tap.

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
import logging
from typing import Any, Tuple, Union

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import (
    PixelBuffer,
    clamp_pixels,
    reflect_indices,
    truncating_divide,
)
from gial.exceptions import ValidationError
from gial.vocabulary import ConvolutionStrategy

logger = logging.getLogger(__name__)


class Kernel:
    """Square convolution kernel with a scalar divisor.

    Parameters
    ----------
    size : int
        Side length. Only odd sizes are valid for convolution, but even
        kernels can be built (``is_valid`` reports them).
    divisor : int or float
        Divisor applied to each weighted sum. ``0`` means no division.
    dtype : numpy dtype
        Element type, any integer or floating dtype. Default ``int64``.

    Raises
    ------
    ValidationError
        If *size* is not a positive integer or *dtype* is not numeric.

    Examples
    --------
    >>> box = Kernel.from_values(np.ones((3, 3), dtype=int), divisor=9)
    >>> box.aperture
    1
    """

    def __init__(
        self,
        size: int,
        divisor: Union[int, float] = 0,
        dtype: Any = np.int64,
    ) -> None:
        if not isinstance(size, (int, np.integer)) or isinstance(size, bool):
            raise ValidationError(
                f"size must be an integer, got {type(size).__name__}"
            )
        if size < 1:
            raise ValidationError(f"size must be >= 1, got {size}")
        dtype = np.dtype(dtype)
        if not (np.issubdtype(dtype, np.integer)
                or np.issubdtype(dtype, np.floating)):
            raise ValidationError(
                f"dtype must be an integer or floating type, got {dtype}"
            )
        self._values = np.zeros((int(size), int(size)), dtype=dtype)
        self.divisor = divisor

    @classmethod
    def from_values(
        cls,
        values: Any,
        divisor: Union[int, float] = 0,
        dtype: Any = None,
    ) -> 'Kernel':
        """Build a kernel from a square 2D array of weights.

        When *dtype* is omitted, integer weights give an ``int64`` kernel
        and floating weights keep their own precision.
        """
        values = np.asarray(values)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValidationError(
                f"Kernel weights must be a square 2D array, got {values.shape}"
            )
        if dtype is None:
            dtype = np.int64 if np.issubdtype(values.dtype, np.integer) \
                else values.dtype
        kernel = cls(values.shape[0], divisor, dtype)
        kernel._values[...] = values
        return kernel

    @property
    def size(self) -> int:
        return self._values.shape[0]

    @property
    def aperture(self) -> int:
        """Half-width ``a`` of the ``2a + 1`` window."""
        return self.size // 2

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    @property
    def is_integer(self) -> bool:
        return np.issubdtype(self.dtype, np.integer)

    @property
    def is_valid(self) -> bool:
        """Only odd-sized kernels can be convolved."""
        return self.size % 2 == 1

    @property
    def divisor(self) -> Union[int, float]:
        return self._divisor

    @divisor.setter
    def divisor(self, value: Union[int, float]) -> None:
        self._divisor = self.dtype.type(value)

    @property
    def values(self) -> np.ndarray:
        """Copy of the weights."""
        return self._values.copy()

    def __getitem__(self, key: Tuple[int, int]) -> Union[int, float]:
        return self._values[key]

    def __setitem__(self, key: Tuple[int, int], value: Union[int, float]) -> None:
        self._values[key] = value

    def __repr__(self) -> str:
        return (f"Kernel(size={self.size}, divisor={self.divisor!r}, "
                f"dtype={self.dtype})")


# =====================================================================
# Accumulation
# =====================================================================

def _accumulator_dtype(kernel: Kernel) -> np.dtype:
    return np.dtype(np.int64) if kernel.is_integer else kernel.dtype


def _apply_divisor(sums: np.ndarray, kernel: Kernel) -> np.ndarray:
    if kernel.divisor == 0:
        return sums
    if kernel.is_integer:
        return truncating_divide(sums, np.int64(kernel.divisor))
    return sums / kernel.divisor


def _window_sum(
    pixels: np.ndarray, row: int, col: int, kernel: Kernel,
) -> Union[int, float]:
    """Undivided weighted sum around one pixel, taps in row-major order."""
    acc = _accumulator_dtype(kernel)
    a = kernel.aperture
    rows = reflect_indices(np.arange(row - a, row + a + 1), pixels.shape[0])
    cols = reflect_indices(np.arange(col - a, col + a + 1), pixels.shape[1])
    products = kernel._values.astype(acc) * pixels[np.ix_(rows, cols)].astype(acc)
    if kernel.is_integer:
        return products.sum()
    # Sequential float accumulation, same order as the sliding window.
    total = acc.type(0)
    for product in products.ravel():
        total = total + product
    return total


def _sums_naive(buffer: PixelBuffer, kernel: Kernel) -> np.ndarray:
    pixels = buffer.data
    height, width = pixels.shape
    sums = np.empty((height, width), dtype=_accumulator_dtype(kernel))
    for row in range(height):
        for col in range(width):
            sums[row, col] = _window_sum(pixels, row, col, kernel)
    return sums


def _sums_sliding(buffer: PixelBuffer, kernel: Kernel) -> np.ndarray:
    acc = _accumulator_dtype(kernel)
    height, width = buffer.shape
    a = kernel.aperture
    expanded = buffer.resize(-a, -a, width + a - 1, height + a - 1).data.astype(acc)
    sums = np.zeros((height, width), dtype=acc)
    for kr in range(kernel.size):
        for kc in range(kernel.size):
            sums += kernel._values[kr, kc].astype(acc) * \
                expanded[kr:kr + height, kc:kc + width]
    return sums


_STRATEGIES = {
    ConvolutionStrategy.NAIVE: _sums_naive,
    ConvolutionStrategy.SLIDING_WINDOW: _sums_sliding,
}


# =====================================================================
# Public entry points
# =====================================================================

def convolve_raw(
    buffer: PixelBuffer,
    kernel: Kernel,
    strategy: ConvolutionStrategy = ConvolutionStrategy.SLIDING_WINDOW,
) -> np.ndarray:
    """Divided but unclamped convolution sums.

    Used where signed responses matter (gradient components).

    Parameters
    ----------
    buffer : PixelBuffer
        Initialized input buffer.
    kernel : Kernel
        Odd-sized kernel.
    strategy : ConvolutionStrategy
        Execution strategy.

    Returns
    -------
    np.ndarray
        ``int64`` for integer kernels, the kernel dtype for floating ones.

    Raises
    ------
    ValidationError
        If the kernel size is even.
    UninitializedBufferError
        If *buffer* is uninitialized.
    """
    buffer.require_initialized('convolution')
    if not kernel.is_valid:
        raise ValidationError(f"Kernel size must be odd, got {kernel.size}")
    logger.debug("Convolving %dx%d buffer with %r (%s)",
                 buffer.height, buffer.width, kernel, strategy.value)
    return _apply_divisor(_STRATEGIES[strategy](buffer, kernel), kernel)


def convolve(
    buffer: PixelBuffer,
    kernel: Kernel,
    strategy: ConvolutionStrategy = ConvolutionStrategy.SLIDING_WINDOW,
) -> PixelBuffer:
    """Convolve *buffer* with *kernel*, clamping every sample.

    Returns
    -------
    PixelBuffer
        The filtered buffer, or an uninitialized buffer when the kernel
        size is even.
    """
    if not kernel.is_valid:
        logger.debug("convolve: even kernel size %d rejected", kernel.size)
        return PixelBuffer()
    return PixelBuffer._wrap(clamp_pixels(convolve_raw(buffer, kernel, strategy)))


def convolve_pixel(
    buffer: PixelBuffer, row: int, col: int, kernel: Kernel,
) -> int:
    """Convolved value of the single sample at ``(row, col)``.

    Raises
    ------
    ValidationError
        If the kernel size is even.
    """
    buffer.require_initialized('convolve_pixel')
    if not kernel.is_valid:
        raise ValidationError(f"Kernel size must be odd, got {kernel.size}")
    value = _apply_divisor(_window_sum(buffer.data, row, col, kernel), kernel)
    return int(clamp_pixels(np.asarray(value)))
