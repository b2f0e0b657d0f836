# -*- coding: utf-8 -*-
"""
Recursive Gaussian - IIR approximation of a Gaussian blur.

Approximates a Gaussian of standard deviation ``sigma`` with a third-order
recursive filter whose poles come from a closed-form polynomial fit in
``sigma``. Each output sample is

    y[n] = b0 * x[n] + a0 * y[n-1] + a1 * y[n-2] + a2 * y[n-3]

The filter runs four sweeps: forward then backward along every row, then
forward then backward along every column. The recursive state starts at
zero at the beginning of every sweep. Each output is truncated, clamped and
written back immediately, so later sweeps read the earlier sweeps' samples.
State and coefficients are single precision.

Rows are independent during the horizontal sweeps (and columns during the
vertical ones), so one sweep step updates a whole column (row) at once.

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
from typing import Annotated, Any, NamedTuple

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import clamp_pixels
from gial.image_processing.base import BufferTransformMixin, ImageTransform
from gial.image_processing.params import Desc, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.image_processing.filters._validation import MIN_SIGMA, validate_sigma
from gial.vocabulary import ProcessorCategory

logger = logging.getLogger(__name__)


class IIRCoefficients(NamedTuple):
    """Feed-forward gain ``b0`` and feedback gains ``a0, a1, a2``."""

    b0: np.float32
    a0: np.float32
    a1: np.float32
    a2: np.float32


def iir_coefficients(sigma: float) -> IIRCoefficients:
    """Recursive Gaussian coefficients for *sigma*.

    The three poles are placed from cubic fits of their log-magnitude and
    angle in ``sigma``; the gains are normalized so that a constant signal
    passes unchanged in steady state (``b0 + a0 + a1 + a2 == 1``).

    Parameters
    ----------
    sigma : float
        Gaussian standard deviation, ``>= 1``.

    Returns
    -------
    IIRCoefficients
    """
    validate_sigma(sigma)
    s4 = 1.0 / (sigma * sigma) ** 2
    a = s4 * (sigma * (sigma * (sigma * 1.1442707 + 0.0130625) - 0.7500910)
              + 0.2546730)
    w = s4 * (sigma * (sigma * (sigma * 1.3642870 + 0.0088755) - 0.3255340)
              + 0.3016210)
    b = s4 * (sigma * (sigma * (sigma * 1.2397166 - 0.0001644) - 0.6363580)
              - 0.0536068)

    z0_abs = math.exp(a)
    z0_real = z0_abs * math.cos(w)
    z2 = math.exp(b)
    z0_abs_2 = z0_abs * z0_abs

    a2 = 1.0 / (z2 * z0_abs_2)
    a0 = (z0_abs_2 + 2.0 * z0_real * z2) * a2
    a1 = -(2.0 * z0_real + z2) * a2
    b0 = 1.0 - a0 - a1 - a2
    return IIRCoefficients(*(np.float32(c) for c in (b0, a0, a1, a2)))


def _sweep_rows(samples: np.ndarray, coeffs: IIRCoefficients) -> None:
    """Forward then backward sweep along axis 1 of *samples*, in place."""
    width = samples.shape[1]
    for columns in (range(width), range(width - 1, -1, -1)):
        y0 = y1 = y2 = np.zeros(samples.shape[0], dtype=np.float32)
        for col in columns:
            y = (samples[:, col].astype(np.float32) * coeffs.b0
                 + coeffs.a0 * y0 + coeffs.a1 * y1 + coeffs.a2 * y2)
            y2, y1, y0 = y1, y0, y
            samples[:, col] = clamp_pixels(y)


def recursive_gaussian(pixels: np.ndarray, sigma: float) -> np.ndarray:
    """Recursive Gaussian blur of a ``uint8`` array.

    Raises
    ------
    ValidationError
        If *sigma* is below 1.
    """
    coeffs = iir_coefficients(sigma)
    logger.debug("Recursive Gaussian: sigma=%.3f %r", sigma, coeffs)
    samples = pixels.copy()
    _sweep_rows(samples, coeffs)
    _sweep_rows(samples.T, coeffs)
    return samples


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FILTERS)
class RecursiveGaussianFilter(BufferTransformMixin, ImageTransform):
    """IIR Gaussian blur with cost independent of sigma.

    Parameters
    ----------
    sigma : float
        Gaussian standard deviation. Must be >= 1. Default 1.0.

    Examples
    --------
    >>> blurred = RecursiveGaussianFilter(sigma=12.0).apply(buffer)
    """

    sigma: Annotated[float, Range(min=MIN_SIGMA),
                     Desc('Gaussian standard deviation')] = 1.0

    def __init__(self, sigma: float = 1.0) -> None:
        validate_sigma(sigma)
        self.sigma = sigma

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        return recursive_gaussian(pixels, params['sigma'])
