# -*- coding: utf-8 -*-
"""
Image Statistics - Global and local descriptors of a pixel buffer.

Entropy here weights each brightness level by its share of the total
brightness, not by its frequency:

    p(z) = z * count(z) / sum(pixels)
    E    = | sum_z p(z) * log2(p(z)) |

Level 0 never contributes and a buffer whose samples sum to zero has
entropy 0. Local entropy applies the same formula to the half-open window
``[row - a, row + a) x [col - a, col + a)`` with reflected borders.

The integral quality indicator combines five normalized terms with fixed
weights 0.33 / 0.27 / 0.20 / 0.13 / 0.07: mean brightness, standard
deviation, dynamic range, number of distinct levels, and entropy.

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
from typing import NamedTuple, Optional, Tuple

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import PixelBuffer, reflect_indices
from gial.exceptions import ValidationError

logger = logging.getLogger(__name__)

NUM_LEVELS = 256
LOCAL_ENTROPY_APERTURE = 2

_LEVELS = np.arange(NUM_LEVELS, dtype=np.float64)

# Integral quality indicator weights: brightness, deviation, range,
# distinct levels, entropy.
IQI_WEIGHTS = (0.33, 0.27, 0.20, 0.13, 0.07)


def histogram(buffer: PixelBuffer) -> np.ndarray:
    """256-bin sample count."""
    return np.bincount(buffer.data.ravel(), minlength=NUM_LEVELS)


def _entropy_of_histograms(counts: np.ndarray) -> np.ndarray:
    """Entropy of every 256-bin histogram along the last axis of *counts*.

    Terms are accumulated in ascending brightness order, so histograms with
    equal counts give bit-identical entropies whatever their origin.
    """
    weighted = _LEVELS * counts
    total = weighted.sum(axis=-1, keepdims=True)
    with np.errstate(divide='ignore', invalid='ignore'):
        p = weighted / total
        terms = np.where(weighted > 0, p * np.log2(p), 0.0)
    return np.abs(np.cumsum(terms, axis=-1)[..., -1])


def _entropy_of_histogram(counts: np.ndarray) -> float:
    return float(_entropy_of_histograms(counts[None, :])[0])


def entropy(buffer: PixelBuffer) -> float:
    """Brightness-weighted entropy of the whole buffer.

    Examples
    --------
    >>> buf = PixelBuffer.from_array(np.full((4, 4), 90))
    >>> entropy(buf)
    0.0
    """
    return _entropy_of_histogram(histogram(buffer))


def _validate_aperture(aperture: int) -> None:
    if not isinstance(aperture, int) or aperture < 1:
        raise ValidationError(f"aperture must be a positive integer, got {aperture!r}")


def local_entropy(
    buffer: PixelBuffer, row: int, col: int,
    aperture: int = LOCAL_ENTROPY_APERTURE,
) -> float:
    """Entropy of the ``2a x 2a`` window starting ``a`` pixels up-left."""
    _validate_aperture(aperture)
    pixels = buffer.data
    rows = reflect_indices(np.arange(row - aperture, row + aperture), pixels.shape[0])
    cols = reflect_indices(np.arange(col - aperture, col + aperture), pixels.shape[1])
    window = pixels[np.ix_(rows, cols)]
    return _entropy_of_histogram(np.bincount(window.ravel(), minlength=NUM_LEVELS))


def local_entropy_map(
    buffer: PixelBuffer, aperture: int = LOCAL_ENTROPY_APERTURE,
) -> np.ndarray:
    """``local_entropy`` of every pixel as a ``float64`` array.

    Window histograms are built one buffer row at a time and reduced the
    same way as ``local_entropy``, so both agree exactly.
    """
    _validate_aperture(aperture)
    pixels = buffer.data
    height, width = pixels.shape
    offsets = np.arange(-aperture, aperture)
    window_cols = reflect_indices(np.arange(width)[:, None] + offsets[None, :], width)
    # Bin index of every window sample: level + NUM_LEVELS * column.
    bin_base = (NUM_LEVELS * np.arange(width))[:, None, None]
    emap = np.empty((height, width), dtype=np.float64)
    for row in range(height):
        band = pixels[reflect_indices(row + offsets, height)]
        windows = band[:, window_cols].transpose(1, 0, 2).astype(np.intp)
        counts = np.bincount((windows + bin_base).ravel(),
                             minlength=width * NUM_LEVELS)
        emap[row] = _entropy_of_histograms(counts.reshape(width, NUM_LEVELS))
    return emap


def average_brightness(buffer: PixelBuffer) -> float:
    return float(buffer.data.mean())


def min_brightness(buffer: PixelBuffer) -> int:
    return int(buffer.data.min())


def max_brightness(buffer: PixelBuffer) -> int:
    return int(buffer.data.max())


def min_max_brightness(buffer: PixelBuffer) -> Tuple[int, int]:
    """``(min, max)`` sample values."""
    pixels = buffer.data
    return int(pixels.min()), int(pixels.max())


def standard_deviation(buffer: PixelBuffer, mean: Optional[float] = None) -> float:
    """Standard deviation with divisor ``N - 1``; 0 for a single pixel.

    Parameters
    ----------
    buffer : PixelBuffer
        Input buffer.
    mean : float, optional
        Precomputed ``average_brightness(buffer)``.
    """
    pixels = buffer.data
    if pixels.size < 2:
        return 0.0
    if mean is None:
        mean = float(pixels.mean())
    deviations = pixels.astype(np.float64) - mean
    return float(np.sqrt(np.sum(deviations * deviations) / (pixels.size - 1)))


def information_levels(buffer: PixelBuffer) -> int:
    """Number of distinct sample values."""
    return int(np.count_nonzero(histogram(buffer)))


def integral_quality_indicator(buffer: PixelBuffer) -> float:
    """Weighted quality score in ``[0, 1]``.

    Terms
    -----
    - brightness ``Ln``: ``mean / 128`` up to 107, ``(255 - mean) / 128``
      above 147, otherwise 1
    - deviation ``Sn``: ``sd / 50`` up to 50, otherwise ``(100 - sd) / 50``
    - range ``Kn``: ``(max - min) / 255``
    - levels ``Nn``: ``distinct levels / 256``
    - entropy ``En``: ``entropy / 8``
    """
    mean = average_brightness(buffer)
    deviation = standard_deviation(buffer, mean)
    low, high = min_max_brightness(buffer)

    if mean <= 107:
        brightness = mean / 128.0
    elif mean > 147:
        brightness = (255.0 - mean) / 128.0
    else:
        brightness = 1.0
    spread = deviation / 50.0 if deviation <= 50 else (100.0 - deviation) / 50.0
    dynamic_range = (high - low) / 255.0
    levels = information_levels(buffer) / float(NUM_LEVELS)
    ent = entropy(buffer) / 8.0

    terms = (brightness, spread, dynamic_range, levels, ent)
    score = sum(w * t for w, t in zip(IQI_WEIGHTS, terms))
    logger.debug("IQI terms %s -> %.4f", terms, score)
    return score


class ImageStatistics(NamedTuple):
    """All global descriptors of one buffer."""

    entropy: float
    average: float
    minimum: int
    maximum: int
    std_dev: float
    information_levels: int
    quality: float
    histogram: np.ndarray


def describe(buffer: PixelBuffer) -> ImageStatistics:
    """Compute every global descriptor of *buffer*."""
    mean = average_brightness(buffer)
    low, high = min_max_brightness(buffer)
    return ImageStatistics(
        entropy=entropy(buffer),
        average=mean,
        minimum=low,
        maximum=high,
        std_dev=standard_deviation(buffer, mean),
        information_levels=information_levels(buffer),
        quality=integral_quality_indicator(buffer),
        histogram=histogram(buffer),
    )
