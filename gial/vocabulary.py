# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the GIAL engine.

Defines the single source of truth for controlled vocabularies used across
gial: processor categories, buffer layouts, filter, detector, combiner and
corrector selectors, and the closed result enumerations returned by the
filter and combiner entry points.

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

from enum import Enum


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    FILTERS = "filters"
    THRESHOLD = "threshold"
    EDGES = "edges"
    ENHANCE = "enhance"


class BufferLayout(Enum):
    """Sample layout of an externally decoded raw buffer.

    ``GRAYSCALE`` is one byte per pixel in row-major order. ``RGB`` is
    three interleaved bytes per pixel, averaged to one sample on ingestion.
    """

    GRAYSCALE = "grayscale"
    RGB = "rgb"


class ScaleType(Enum):
    """Direction of integer buffer scaling."""

    UPSCALE = "upscale"
    DOWNSCALE = "downscale"


class ConvolutionStrategy(Enum):
    """Execution strategy of the convolution engine.

    Both strategies produce bit-identical output.
    """

    NAIVE = "naive"
    SLIDING_WINDOW = "sliding_window"


class FilterType(Enum):
    """Filters reachable through ``filter_image``."""

    MEDIAN = "median"
    GAUSSIAN = "gaussian"
    SEP_GAUSSIAN = "sep_gaussian"
    IIR_GAUSSIAN = "iir_gaussian"
    SHARPEN = "sharpen"


class ThresholdType(Enum):
    """Adaptive threshold policy.

    ``MAX_MORE_THRESHOLD`` maps pixels exceeding the threshold to 255 and
    the rest to 0; ``MIN_MORE_THRESHOLD`` does the opposite.
    """

    MAX_MORE_THRESHOLD = "max_more_threshold"
    MIN_MORE_THRESHOLD = "min_more_threshold"


class FiltrationResult(Enum):
    """Result of every filter entry point."""

    SUCCESS = "success"
    INTERNAL_ERROR = "internal_error"
    INCORRECT_FILTER_TYPE = "incorrect_filter_type"
    INCORRECT_FILTER_SIZE = "incorrect_filter_size"
    FILTER_SIZE_TOO_SMALL = "filter_size_too_small"


class DetectorType(Enum):
    """Edge detectors."""

    SOBEL = "sobel"
    SCHARR = "scharr"
    CANNY = "canny"


class OperatorType(Enum):
    """Direction of a 3x3 gradient operator."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CombineType(Enum):
    """Image fusion strategies of ``ImageCombiner``."""

    INFORM_PRIORITY = "inform_priority"
    MORPHOLOGICAL = "morphological"
    LOCAL_ENTROPY = "local_entropy"
    DIFFERENCES_ADDING = "differences_adding"
    CALC_DIFF = "calc_diff"


class CombinationResult(Enum):
    """Result of ``ImageCombiner.combine``."""

    SUCCESS = "success"
    INCORRECT_COMBINER_TYPE = "incorrect_combiner_type"
    FEW_IMAGES = "few_images"
    NOT_SAME_IMAGES = "not_same_images"
    MANY_IMAGES = "many_images"


class CorrectorType(Enum):
    """Brightness correction methods."""

    SINGLE_SCALE_RETINEX = "single_scale_retinex"
    AUTO_LEVELS = "auto_levels"
    NORM_AUTO_LEVELS = "norm_auto_levels"
    GAMMA = "gamma"
