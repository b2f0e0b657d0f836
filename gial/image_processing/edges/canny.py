# -*- coding: utf-8 -*-
"""
Canny Edge Detector - Six-stage binary edge extraction.

Stages, strictly ordered:

1. Blur with the fixed 5x5 kernel (divisor 159).
2. Signed horizontal and vertical Sobel responses of the blurred buffer.
3. Per pixel ``Gradient``: magnitude ``round(hypot(h, v))`` clamped to a
   byte, direction quantized to 0, 45, 90 or 135 degrees from
   ``b = |v / h|`` (``b = 10`` when ``h == 0``).
4. Non-maximum suppression in raster order. Each pixel is compared with
   two neighbours at distance 1 and two at distance 2 across its edge;
   near the borders the neighbour choice is special-cased instead of
   reflected. A pixel smaller than any of the four is zeroed in place, so
   later pixels see the already suppressed values.
5. Double threshold: above ``threshold_max`` becomes 255, below
   ``threshold_min`` becomes 0, the rest stays ambiguous.
6. Ambiguity resolution in raster order. Each ambiguous pixel seeds an
   8-connected fill that absorbs (and zeroes) ambiguous neighbours and
   counts every confirmed (255) neighbour it meets. A group that met
   between 1 and 49 confirmed neighbours is promoted to 255.

The output holds only 0 and 255.

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
import math
from typing import Annotated, Any, List, NamedTuple, Tuple

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import PIXEL_MAX, PIXEL_MIN, PixelBuffer
from gial.convolution import Kernel, convolve
from gial.exceptions import ProcessorError, ValidationError
from gial.image_processing.base import ImageTransform
from gial.image_processing.edges.operators import (
    gradient_components,
    gradient_magnitude,
)
from gial.image_processing.params import Desc, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD_MIN = 20
DEFAULT_THRESHOLD_MAX = 90

#: Groups touching this many confirmed pixels or more stay suppressed.
MAX_CLOSER_COUNT = 50

BLUR_WEIGHTS = (
    (2, 4, 5, 4, 2),
    (4, 9, 12, 9, 4),
    (5, 12, 15, 12, 5),
    (4, 9, 12, 9, 4),
    (2, 4, 5, 4, 2),
)
BLUR_DIVISOR = 159

DIRECTIONS = (0, 45, 90, 135)

_TAN_22_5 = 0.414
_TAN_67_5 = 2.414

# Ambiguity trace visiting order (dx, dy).
_NEIGHBOUR_SHIFTS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


class Gradient(NamedTuple):
    """Per-pixel edge strength and quantized orientation in degrees."""

    magnitude: int
    direction: int

    @classmethod
    def from_components(cls, horizontal: float, vertical: float) -> 'Gradient':
        magnitude = min(PIXEL_MAX, round(math.hypot(horizontal, vertical)))
        return cls(magnitude, quantize_direction(horizontal, vertical))


def quantize_direction(horizontal: float, vertical: float) -> int:
    """Quantize a gradient to 0, 45, 90 or 135 degrees.

    Examples
    --------
    >>> quantize_direction(10, 1)
    0
    >>> quantize_direction(0, 5)
    90
    >>> quantize_direction(-3, 3)
    135
    """
    ratio = 10.0 if horizontal == 0 else abs(vertical / horizontal)
    if ratio < _TAN_22_5:
        return 0
    if ratio > _TAN_67_5:
        return 90
    if (horizontal > 0 and vertical > 0) or (horizontal < 0 and vertical < 0):
        return 45
    return 135


def compute_gradients(blurred: PixelBuffer) -> Tuple[np.ndarray, np.ndarray]:
    """Magnitude (``uint8``) and direction (degrees) arrays of *blurred*."""
    horizontal, vertical = gradient_components(blurred)
    safe = np.where(horizontal == 0, 1, horizontal)
    ratio = np.where(horizontal == 0, 10.0, np.abs(vertical / safe))
    same_sign = horizontal * vertical > 0
    direction = np.where(
        ratio < _TAN_22_5, 0,
        np.where(ratio > _TAN_67_5, 90, np.where(same_sign, 45, 135)),
    )
    return gradient_magnitude(horizontal, vertical), direction


def _suppression_neighbours(
    direction: int, row: int, col: int, height: int, width: int,
) -> List[Tuple[int, int]]:
    """The four ``(row, col)`` neighbours compared during suppression."""
    if direction == 0:
        near = [(row + 1 if row < height - 1 else row - 1, col),
                (row - 1 if row > 0 else row + 1, col)]
        far = [(row + 2 if row < height - 2 else row - 2, col),
               (row - 2 if row > 1 else row + 2, col)]
    elif direction == 90:
        near = [(row, col - 1 if col > 0 else col + 1),
                (row, col + 1 if col < width - 1 else col - 1)]
        far = [(row, col - 2 if col > 1 else col + 2),
               (row, col + 2 if col < width - 2 else col - 2)]
    elif direction == 45:
        diagonal = [(row + 1, col - 1), (row - 1, col + 1)]
        if col <= 1 or row >= height - 2:
            if col == 0 or row == height - 1:
                near = [(row - 1, col + 1)] * 2
            else:
                near = diagonal
            far = [(row - 2, col + 2)] * 2
        elif row <= 1 or col >= width - 2:
            if row == 0 or col == width - 1:
                near = [(row + 1, col - 1)] * 2
            else:
                near = diagonal
            far = [(row + 2, col - 2)] * 2
        else:
            near = diagonal
            far = [(row + 2, col - 2), (row - 2, col + 2)]
    elif direction == 135:
        diagonal = [(row + 1, col + 1), (row - 1, col - 1)]
        if col <= 1 or row <= 1:
            if col == 0 or row == 0:
                near = [(row + 1, col + 1)] * 2
            else:
                near = diagonal
            far = [(row + 2, col + 2)] * 2
        elif row >= height - 2 or col >= width - 2:
            if row == height - 1 or col == width - 1:
                near = [(row - 1, col - 1)] * 2
            else:
                near = diagonal
            far = [(row - 2, col - 2)] * 2
        else:
            near = diagonal
            far = [(row + 2, col + 2), (row - 2, col - 2)]
    else:
        raise ProcessorError(f"Gradient direction {direction} is not quantized")
    # Buffers narrower than five pixels can push a special case outside.
    return [(min(max(r, 0), height - 1), min(max(c, 0), width - 1))
            for r, c in near + far]


def suppress_non_maxima(magnitude: np.ndarray, direction: np.ndarray) -> np.ndarray:
    """Zero every pixel below one of its four cross-edge neighbours.

    Runs in raster order on a copy, reading already suppressed values.
    """
    height, width = magnitude.shape
    values = magnitude.astype(np.int64).tolist()
    angles = direction.tolist()
    for row in range(height):
        for col in range(width):
            current = values[row][col]
            if current == 0:
                continue
            neighbours = _suppression_neighbours(angles[row][col], row, col,
                                                 height, width)
            if any(current < values[r][c] for r, c in neighbours):
                values[row][col] = 0
    return np.array(values, dtype=np.uint8)


def double_threshold(
    magnitude: np.ndarray, threshold_min: int, threshold_max: int,
) -> np.ndarray:
    """Confirm strong pixels, discard weak ones, keep the rest ambiguous."""
    result = magnitude.copy()
    result[magnitude > threshold_max] = PIXEL_MAX
    result[magnitude < threshold_min] = PIXEL_MIN
    return result


def resolve_ambiguities(
    magnitude: np.ndarray, max_closer: int = MAX_CLOSER_COUNT,
) -> np.ndarray:
    """Promote or discard every ambiguous 8-connected group.

    Returns a binary ``uint8`` array.
    """
    height, width = magnitude.shape
    values = magnitude.tolist()
    seeds = np.argwhere((magnitude > PIXEL_MIN) & (magnitude < PIXEL_MAX))
    groups = promoted = 0
    for row, col in seeds.tolist():
        if not PIXEL_MIN < values[row][col] < PIXEL_MAX:
            continue
        group = [(row, col)]
        values[row][col] = PIXEL_MIN
        closer = 0
        index = 0
        while index < len(group):
            y, x = group[index]
            index += 1
            for dx, dy in _NEIGHBOUR_SHIFTS:
                ny, nx = y + dy, x + dx
                if not (0 <= ny < height and 0 <= nx < width):
                    continue
                value = values[ny][nx]
                if value == PIXEL_MAX:
                    closer += 1
                elif value > PIXEL_MIN:
                    values[ny][nx] = PIXEL_MIN
                    group.append((ny, nx))
        groups += 1
        if 0 < closer < max_closer:
            promoted += 1
            for y, x in group:
                values[y][x] = PIXEL_MAX
    logger.debug("Ambiguity resolution: %d groups, %d promoted", groups, promoted)
    return np.array(values, dtype=np.uint8)


def canny(
    source: PixelBuffer,
    threshold_min: int = DEFAULT_THRESHOLD_MIN,
    threshold_max: int = DEFAULT_THRESHOLD_MAX,
) -> PixelBuffer:
    """Binary Canny edge map of *source*.

    Parameters
    ----------
    source : PixelBuffer
        Initialized input buffer.
    threshold_min, threshold_max : int
        Double-threshold bounds.

    Returns
    -------
    PixelBuffer
        Buffer holding only 0 and 255.
    """
    source.require_initialized('canny')
    logger.debug("Canny on %dx%d buffer, thresholds %d/%d",
                 source.height, source.width, threshold_min, threshold_max)
    blurred = convolve(source, Kernel.from_values(BLUR_WEIGHTS, BLUR_DIVISOR))
    magnitude, direction = compute_gradients(blurred)
    suppressed = suppress_non_maxima(magnitude, direction)
    thresholded = double_threshold(suppressed, threshold_min, threshold_max)
    return PixelBuffer._wrap(resolve_ambiguities(thresholded))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.EDGES)
class CannyDetector(ImageTransform):
    """Canny edge detector.

    Parameters
    ----------
    threshold_min : int
        Lower double-threshold bound. Default 20.
    threshold_max : int
        Upper double-threshold bound. Default 90.

    Raises
    ------
    ValidationError
        If ``threshold_min > threshold_max`` or either is outside
        ``[0, 255]``.
    """

    threshold_min: Annotated[int, Range(min=0, max=255),
                             Desc('Weak-edge bound')] = DEFAULT_THRESHOLD_MIN
    threshold_max: Annotated[int, Range(min=0, max=255),
                             Desc('Strong-edge bound')] = DEFAULT_THRESHOLD_MAX

    def __post_init__(self) -> None:
        if self.threshold_min > self.threshold_max:
            raise ValidationError(
                f"threshold_min {self.threshold_min} exceeds "
                f"threshold_max {self.threshold_max}"
            )

    def apply(self, source: PixelBuffer, **kwargs: Any) -> PixelBuffer:
        params = self._resolve_params(kwargs)
        return canny(source, params['threshold_min'], params['threshold_max'])
