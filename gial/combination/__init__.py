# -*- coding: utf-8 -*-
"""
Image Combination - Fusion of equally sized buffers.

Key Classes
-----------
``ImageCombiner``
    Holds source buffers and fuses them with one of the ``CombineType``
    strategies.
``MorphologicalForm``
    Connected same-band region used by the morphological strategy.

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

from gial.combination.forms import MorphologicalForm, find_forms
from gial.combination.combiner import (
    DEFAULT_NUM_MODS,
    ImageCombiner,
    brightness_step,
    differences_adding,
    informative_priority,
)

__all__ = [
    'ImageCombiner',
    'MorphologicalForm',
    'find_forms',
    'brightness_step',
    'differences_adding',
    'informative_priority',
    'DEFAULT_NUM_MODS',
]
