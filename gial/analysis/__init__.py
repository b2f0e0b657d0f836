# -*- coding: utf-8 -*-
"""
Image Analysis - Statistical descriptors and shape moments.

Sub-modules
-----------
statistics.py
    Brightness-weighted entropy, local entropy, brightness extremes,
    standard deviation, histogram, and the integral quality indicator.
moments.py
    ``HuMomentsCalculator`` for the seven Hu invariants of a region.

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

from gial.analysis.statistics import (
    LOCAL_ENTROPY_APERTURE,
    ImageStatistics,
    average_brightness,
    describe,
    entropy,
    histogram,
    information_levels,
    integral_quality_indicator,
    local_entropy,
    local_entropy_map,
    max_brightness,
    min_brightness,
    min_max_brightness,
    standard_deviation,
)
from gial.analysis.moments import NUM_HU_MOMENTS, HuMomentsCalculator

__all__ = [
    'ImageStatistics',
    'HuMomentsCalculator',
    'average_brightness',
    'describe',
    'entropy',
    'histogram',
    'information_levels',
    'integral_quality_indicator',
    'local_entropy',
    'local_entropy_map',
    'max_brightness',
    'min_brightness',
    'min_max_brightness',
    'standard_deviation',
    'LOCAL_ENTROPY_APERTURE',
    'NUM_HU_MOMENTS',
]
