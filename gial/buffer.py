# -*- coding: utf-8 -*-
"""
Pixel Buffer - Owned 8-bit grayscale sample grid with reflecting borders.

Provides ``PixelBuffer``, the value type every engine operation consumes
and produces, plus the numeric helpers shared by the engine: sample
clamping, truncating integer division, and boundary-reflecting coordinate
correction.

A buffer is either initialized (``height`` and ``width`` positive, samples
stored row-major as ``uint8``) or uninitialized (``height == width == -1``).
Out-of-range neighborhood coordinates are reflected about the nearest edge
without repeating the edge sample (``c < 0 -> -c``,
``c >= dim -> 2 * dim - 2 - c``), the rule used by every neighborhood
operation in gial instead of explicit border padding.

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
from gial.exceptions import UninitializedBufferError, ValidationError
from gial.vocabulary import BufferLayout, ScaleType

logger = logging.getLogger(__name__)

PIXEL_MIN = 0
PIXEL_MAX = 255

_RGB_CHANNELS = 3


# =====================================================================
# Numeric helpers
# =====================================================================

def clamp_pixel_value(value: Union[int, float]) -> Union[int, float]:
    """Clamp an arithmetic result destined to become a sample.

    Parameters
    ----------
    value : int or float
        Arbitrary arithmetic result.

    Returns
    -------
    int or float
        ``0`` for negative values, ``255`` for values above 255,
        otherwise *value* unchanged.
    """
    if value < PIXEL_MIN:
        return PIXEL_MIN
    if value > PIXEL_MAX:
        return PIXEL_MAX
    return value


def clamp_pixels(values: np.ndarray) -> np.ndarray:
    """Clamp an array of arithmetic results into a ``uint8`` sample grid.

    Fractional values are truncated after clamping.
    """
    return np.clip(values, PIXEL_MIN, PIXEL_MAX).astype(np.uint8)


def truncating_divide(numerator: Any, denominator: Any) -> Any:
    """Integer division rounding toward zero.

    ``//`` rounds toward negative infinity; the engine's integer kernels
    and blends divide with truncation instead, so ``-7 / 2 -> -3``.

    Parameters
    ----------
    numerator, denominator : int or np.ndarray
        Integer operands. *denominator* must be non-zero.

    Returns
    -------
    int or np.ndarray
        Quotient truncated toward zero.
    """
    quotient = np.abs(numerator) // np.abs(denominator)
    negative = np.logical_xor(np.less(numerator, 0), np.less(denominator, 0))
    return np.where(negative, -quotient, quotient)


def reflect_coordinate(coordinate: int, dim: int) -> int:
    """Reflect one out-of-range coordinate about the nearest edge.

    Examples
    --------
    >>> reflect_coordinate(-1, 10)
    1
    >>> reflect_coordinate(10, 10)
    8
    """
    if coordinate < 0:
        return -coordinate
    if coordinate >= dim:
        return 2 * dim - 2 - coordinate
    return coordinate


def reflect_indices(indices: Any, dim: int) -> np.ndarray:
    """Vectorized reflection of coordinates into ``[0, dim)``.

    Matches ``reflect_coordinate`` wherever one reflection is enough and
    keeps reflecting for offsets larger than the axis, which makes windows
    wider than the buffer well defined.

    Parameters
    ----------
    indices : array_like of int
        Coordinates along one axis, possibly out of range.
    dim : int
        Axis length.

    Returns
    -------
    np.ndarray
        In-range integer indices, same shape as *indices*.
    """
    idx = np.asarray(indices, dtype=np.intp)
    if dim == 1:
        return np.zeros_like(idx)
    period = 2 * dim - 2
    idx = np.mod(idx, period)
    return np.where(idx >= dim, period - idx, idx)


# =====================================================================
# PixelBuffer
# =====================================================================

class PixelBuffer:
    """Height x width grid of 8-bit grayscale samples.

    Parameters
    ----------
    height : int
        Number of rows. Default ``-1`` (uninitialized).
    width : int
        Number of columns. Default ``-1`` (uninitialized).

    Notes
    -----
    Samples are zero-initialized. Non-positive dimensions produce an
    uninitialized buffer rather than raising. Buffers are values: every
    operation returns a new buffer and ``copy()`` performs a deep copy.
    The ``data`` property exposes the underlying ``uint8`` array for raw
    sequential access.

    Examples
    --------
    >>> buf = PixelBuffer(10, 20)
    >>> buf[3, 4] = 300
    >>> buf[3, 4]
    255
    >>> buf.correct_coordinates(-1, 20)
    (1, 18)
    """

    __slots__ = ('_pixels',)

    def __init__(self, height: int = -1, width: int = -1) -> None:
        if height > 0 and width > 0:
            self._pixels = np.zeros((height, width), dtype=np.uint8)
        else:
            if (height, width) != (-1, -1):
                logger.debug(
                    "Non-positive dimensions %dx%d, buffer left uninitialized",
                    height, width,
                )
            self._pixels = None

    # -----------------------------------------------------------------
    # Construction
    # -----------------------------------------------------------------
    @classmethod
    def _wrap(cls, pixels: np.ndarray) -> 'PixelBuffer':
        """Adopt a 2D ``uint8`` array without copying."""
        buf = cls()
        if pixels.size:
            buf._pixels = pixels
        return buf

    @classmethod
    def from_buffer(
        cls,
        height: int,
        width: int,
        buffer: Any,
        layout: BufferLayout = BufferLayout.GRAYSCALE,
    ) -> 'PixelBuffer':
        """Build a buffer from externally decoded pixel data.

        Parameters
        ----------
        height, width : int
            Buffer dimensions.
        buffer : bytes-like or array_like
            Row-major samples. ``layout=RGB`` expects three interleaved
            bytes per pixel, averaged as ``(r + g + b) // 3``.
        layout : BufferLayout
            Sample layout of *buffer*.

        Returns
        -------
        PixelBuffer
            Uninitialized when either dimension is non-positive.

        Raises
        ------
        ValidationError
            If *buffer* holds fewer samples than the dimensions require.
        """
        if height <= 0 or width <= 0:
            logger.debug("from_buffer: non-positive dimensions %dx%d",
                         height, width)
            return cls()
        if isinstance(buffer, (bytes, bytearray, memoryview)):
            raw = np.frombuffer(buffer, dtype=np.uint8)
        else:
            raw = clamp_pixels(np.asarray(buffer).ravel())

        channels = _RGB_CHANNELS if layout is BufferLayout.RGB else 1
        required = height * width * channels
        if raw.size < required:
            raise ValidationError(
                f"buffer holds {raw.size} samples, "
                f"{height}x{width} {layout.value} needs {required}"
            )
        raw = raw[:required]
        if layout is BufferLayout.RGB:
            rgb = raw.reshape(height, width, channels).astype(np.uint16)
            pixels = (rgb.sum(axis=2) // channels).astype(np.uint8)
        else:
            pixels = raw.reshape(height, width).copy()
        return cls._wrap(pixels)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """Build a buffer from a 2D grayscale or ``(rows, cols, 3)`` array.

        Values are clamped to ``[0, 255]`` and truncated.

        Raises
        ------
        ValidationError
            If *array* is neither 2D nor 3D with three channels.
        """
        array = np.asarray(array)
        if array.ndim == 2:
            rows, cols = array.shape
            return cls.from_buffer(rows, cols, array)
        if array.ndim == 3 and array.shape[2] == _RGB_CHANNELS:
            rows, cols = array.shape[:2]
            return cls.from_buffer(rows, cols, array, BufferLayout.RGB)
        raise ValidationError(
            f"Expected a 2D or (rows, cols, 3) array, got shape {array.shape}"
        )

    # -----------------------------------------------------------------
    # Dimensions and raw access
    # -----------------------------------------------------------------
    @property
    def height(self) -> int:
        return -1 if self._pixels is None else self._pixels.shape[0]

    @property
    def width(self) -> int:
        return -1 if self._pixels is None else self._pixels.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        """``(height, width)``."""
        return (self.height, self.width)

    @property
    def is_initialized(self) -> bool:
        return self._pixels is not None

    @property
    def data(self) -> np.ndarray:
        """Underlying ``(height, width)`` ``uint8`` array (not a copy).

        Raises
        ------
        UninitializedBufferError
            If the buffer is uninitialized.
        """
        self.require_initialized()
        return self._pixels

    def require_initialized(self, operation: str = 'operation') -> None:
        """Raise ``UninitializedBufferError`` for a ``-1 x -1`` buffer."""
        if self._pixels is None:
            raise UninitializedBufferError(
                f"{operation} requires an initialized PixelBuffer"
            )

    def to_array(self) -> np.ndarray:
        """Copy of the samples as a ``uint8`` array."""
        return self.data.copy()

    def tobytes(self) -> bytes:
        """Samples as row-major bytes."""
        return self.data.tobytes()

    def copy(self) -> 'PixelBuffer':
        if self._pixels is None:
            return PixelBuffer()
        return PixelBuffer._wrap(self._pixels.copy())

    # -----------------------------------------------------------------
    # Sample access
    # -----------------------------------------------------------------
    def is_invalid_coordinates(self, row: int, col: int) -> bool:
        return not self.is_valid_coordinates(row, col)

    def is_valid_coordinates(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_pixel(self, row: int, col: int) -> int:
        """Sample at ``(row, col)``.

        Raises
        ------
        IndexError
            If the coordinates are outside the buffer.
        """
        self.require_initialized('get_pixel')
        if self.is_invalid_coordinates(row, col):
            raise IndexError(
                f"({row}, {col}) outside {self.height}x{self.width} buffer"
            )
        return int(self._pixels[row, col])

    def set_pixel(self, row: int, col: int, value: Union[int, float]) -> None:
        """Store *value* at ``(row, col)``, clamped to ``[0, 255]``."""
        self.require_initialized('set_pixel')
        if self.is_invalid_coordinates(row, col):
            raise IndexError(
                f"({row}, {col}) outside {self.height}x{self.width} buffer"
            )
        self._pixels[row, col] = int(clamp_pixel_value(value))

    def __getitem__(self, key: Tuple[int, int]) -> int:
        row, col = key
        return self.get_pixel(row, col)

    def __setitem__(self, key: Tuple[int, int], value: Union[int, float]) -> None:
        row, col = key
        self.set_pixel(row, col, value)

    def correct_coordinates(self, row: int, col: int) -> Tuple[int, int]:
        """Reflect ``(row, col)`` into the buffer."""
        return (reflect_coordinate(row, self.height),
                reflect_coordinate(col, self.width))

    # -----------------------------------------------------------------
    # Whole-buffer operations
    # -----------------------------------------------------------------
    def resize(
        self, x_min: int, y_min: int, x_max: int, y_max: int,
    ) -> 'PixelBuffer':
        """Extract the inclusive rectangle ``[x_min, x_max] x [y_min, y_max]``.

        Parts of the rectangle outside the buffer are synthesized by
        reflection, so ``resize(-a, -a, w + a - 1, h + a - 1)`` expands
        the buffer by an ``a``-pixel reflected border.

        Returns
        -------
        PixelBuffer
            Uninitialized when the rectangle is empty or inverted.
        """
        self.require_initialized('resize')
        if x_max < x_min or y_max < y_min:
            logger.debug("resize: empty rectangle x[%d,%d] y[%d,%d]",
                         x_min, x_max, y_min, y_max)
            return PixelBuffer()
        rows = reflect_indices(np.arange(y_min, y_max + 1), self.height)
        cols = reflect_indices(np.arange(x_min, x_max + 1), self.width)
        return PixelBuffer._wrap(self._pixels[np.ix_(rows, cols)])

    def difference(self, other: 'PixelBuffer') -> 'PixelBuffer':
        """Per-pixel absolute difference with an equally sized buffer.

        Returns
        -------
        PixelBuffer
            Uninitialized when the dimensions differ.
        """
        self.require_initialized('difference')
        if other.shape != self.shape:
            logger.debug("difference: size mismatch %s vs %s",
                         self.shape, other.shape)
            return PixelBuffer()
        diff = np.abs(self._pixels.astype(np.int16) - other.data)
        return PixelBuffer._wrap(diff.astype(np.uint8))

    def __sub__(self, other: 'PixelBuffer') -> 'PixelBuffer':
        return self.difference(other)

    def scale(self, k_x: int, k_y: int, scale_type: ScaleType) -> 'PixelBuffer':
        """Integer scaling by ``k_x`` columns and ``k_y`` rows.

        ``UPSCALE`` replicates each sample into a ``k_y x k_x`` block.
        ``DOWNSCALE`` replaces each complete block with its truncated mean;
        trailing partial blocks are dropped.

        Returns
        -------
        PixelBuffer
            Uninitialized when either factor is not greater than 1 or the
            downscaled buffer would be empty.
        """
        self.require_initialized('scale')
        if k_x <= 1 or k_y <= 1:
            logger.debug("scale: factors must exceed 1, got %d, %d", k_x, k_y)
            return PixelBuffer()
        if scale_type is ScaleType.UPSCALE:
            pixels = np.repeat(np.repeat(self._pixels, k_y, axis=0), k_x, axis=1)
            return PixelBuffer._wrap(pixels)

        rows, cols = self.height // k_y, self.width // k_x
        if rows == 0 or cols == 0:
            return PixelBuffer()
        blocks = self._pixels[:rows * k_y, :cols * k_x].reshape(
            rows, k_y, cols, k_x).astype(np.uint32)
        means = blocks.sum(axis=(1, 3)) // (k_x * k_y)
        return PixelBuffer._wrap(means.astype(np.uint8))

    # -----------------------------------------------------------------
    # Value semantics
    # -----------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        if self._pixels is None or other._pixels is None:
            return self._pixels is None and other._pixels is None
        return bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None

    def __repr__(self) -> str:
        if self._pixels is None:
            return "PixelBuffer(uninitialized)"
        return f"PixelBuffer(height={self.height}, width={self.width})"
