# -*- coding: utf-8 -*-
"""
Brightness Correction - Retinex, level stretching, and gamma correction.

``SingleScaleRetinex`` divides the source by a wide recursive Gaussian blur
of itself and weights the ratio by the log of the source. ``AutoLevels``
stretches the occupied brightness range to the full byte range;
``NormalizedAutoLevels`` stretches ``mean +/- 3 sd`` instead.
``GammaCorrection`` applies a ``1 / gamma`` power-law lookup table.

``correct_image`` selects a corrector by ``CorrectorType``.

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
from typing import Annotated, Any

# Third-party
import numpy as np

# GIAL internal
from gial.analysis.statistics import standard_deviation
from gial.buffer import PIXEL_MAX, PIXEL_MIN, PixelBuffer, clamp_pixels
from gial.exceptions import ValidationError
from gial.image_processing.base import BufferTransformMixin, ImageTransform
from gial.image_processing.filters._validation import MIN_SIGMA
from gial.image_processing.filters.bank import IIR_SIZE_PER_SIGMA
from gial.image_processing.filters.recursive import recursive_gaussian
from gial.image_processing.params import Desc, Range
from gial.image_processing.versioning import processor_tags, processor_version
from gial.vocabulary import CorrectorType, ProcessorCategory

logger = logging.getLogger(__name__)

RETINEX_FILTER_SIZE = 72
RETINEX_SIGMA = RETINEX_FILTER_SIZE / IIR_SIZE_PER_SIGMA
RETINEX_GAIN = 2.5
GAMMA = 2.2


def stretch_levels(pixels: np.ndarray, low: int, high: int) -> np.ndarray:
    """Map ``[low, high]`` linearly onto ``[0, 255]``, clamping outside.

    A degenerate range (``high <= low``) returns a copy.
    """
    if high <= low:
        return pixels.copy()
    scale = PIXEL_MAX / float(high - low)
    return clamp_pixels(np.trunc((pixels.astype(np.float64) - low) * scale))


def gamma_table(gamma: float = GAMMA) -> np.ndarray:
    """256-entry ``uint8`` lookup table of ``255 * (i / 255) ** (1 / gamma)``."""
    levels = np.arange(PIXEL_MAX + 1, dtype=np.float64) / PIXEL_MAX
    return clamp_pixels(np.trunc(PIXEL_MAX * levels ** (1.0 / gamma)))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE,
                description='Single-scale Retinex reflectance estimate')
class SingleScaleRetinex(BufferTransformMixin, ImageTransform):
    """Single-scale Retinex.

    With ``blur`` the recursive Gaussian of the source, each pixel gets
    ``r = (src / blur) * ln(src)`` (0 where either is 0), and the output is
    ``255 * r / (2.5 * mean(r))`` truncated and clamped. An image whose
    ``r`` is 0 everywhere maps to all zeros.

    Parameters
    ----------
    sigma : float
        Surround Gaussian standard deviation. Default 12.0.
    """

    sigma: Annotated[float, Range(min=MIN_SIGMA),
                     Desc('Surround Gaussian standard deviation')] = RETINEX_SIGMA

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        blur = recursive_gaussian(pixels, params['sigma']).astype(np.float32)
        src = pixels.astype(np.float32)

        valid = (src > 0) & (blur > 0)
        safe_blur = np.where(valid, blur, 1.0)
        safe_src = np.where(valid, src, 1.0)
        reflectance = np.where(valid, src / safe_blur * np.log(safe_src), 0.0)

        peak = RETINEX_GAIN * float(reflectance.mean())
        logger.debug("Retinex: sigma=%.2f, peak reflectance %.4f",
                     params['sigma'], peak)
        if peak <= 0:
            return np.zeros_like(pixels)
        return clamp_pixels(np.trunc(PIXEL_MAX * reflectance / peak))


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE)
class AutoLevels(BufferTransformMixin, ImageTransform):
    """Stretch ``[min, max]`` of the source to ``[0, 255]``.

    A source that already spans both 0 and 255 is copied.
    """

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        low, high = int(pixels.min()), int(pixels.max())
        if low > PIXEL_MIN or high < PIXEL_MAX:
            return stretch_levels(pixels, low, high)
        return pixels.copy()


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE)
class NormalizedAutoLevels(BufferTransformMixin, ImageTransform):
    """Stretch ``[mean - 3 sd, mean + 3 sd]`` (clamped to bytes) to ``[0, 255]``."""

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        mean = float(pixels.mean())
        deviation = standard_deviation(PixelBuffer._wrap(pixels), mean)
        low = min(max(int(mean - 3 * deviation), PIXEL_MIN), PIXEL_MAX)
        high = min(max(int(mean + 3 * deviation), PIXEL_MIN), PIXEL_MAX)
        logger.debug("Normalized auto levels: range [%d, %d]", low, high)
        if low > PIXEL_MIN or high < PIXEL_MAX:
            return stretch_levels(pixels, low, high)
        return pixels.copy()


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ENHANCE)
class GammaCorrection(BufferTransformMixin, ImageTransform):
    """Power-law brightness correction.

    Parameters
    ----------
    gamma : float
        Display gamma; samples are raised to ``1 / gamma``. Default 2.2.
    """

    gamma: Annotated[float, Range(min=0.01), Desc('Display gamma')] = GAMMA

    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        params = self._resolve_params(kwargs)
        return gamma_table(params['gamma'])[pixels]


_CORRECTORS = {
    CorrectorType.SINGLE_SCALE_RETINEX: SingleScaleRetinex,
    CorrectorType.AUTO_LEVELS: AutoLevels,
    CorrectorType.NORM_AUTO_LEVELS: NormalizedAutoLevels,
    CorrectorType.GAMMA: GammaCorrection,
}


def correct_image(source: PixelBuffer, corrector_type: CorrectorType) -> PixelBuffer:
    """Run the corrector selected by *corrector_type* with its defaults.

    Raises
    ------
    ValidationError
        If *corrector_type* is not a ``CorrectorType``.
    UninitializedBufferError
        If *source* is uninitialized.
    """
    if not isinstance(corrector_type, CorrectorType):
        raise ValidationError(f"Unknown corrector type {corrector_type!r}")
    return _CORRECTORS[corrector_type]().apply(source)
