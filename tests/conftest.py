# -*- coding: utf-8 -*-
"""
Shared Test Fixtures - Synthetic grayscale buffers.

Dependencies
------------
pytest

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

import pytest
import numpy as np

from gial.buffer import PixelBuffer


@pytest.fixture
def flat_buffer():
    """16x16 buffer of constant value 100."""
    return PixelBuffer.from_array(np.full((16, 16), 100, dtype=np.uint8))


@pytest.fixture
def ramp_buffer():
    """16x32 horizontal ramp, column c holds 8 * c."""
    ramp = np.tile(np.arange(32, dtype=np.uint8) * 8, (16, 1))
    return PixelBuffer.from_array(ramp)


@pytest.fixture
def random_buffer():
    """24x24 buffer of seeded uniform noise."""
    rng = np.random.default_rng(42)
    return PixelBuffer.from_array(rng.integers(0, 256, (24, 24), dtype=np.uint8))


@pytest.fixture
def step_buffer():
    """20x20 buffer, columns 0-9 at 200 and columns 10-19 at 0."""
    step = np.zeros((20, 20), dtype=np.uint8)
    step[:, :10] = 200
    return PixelBuffer.from_array(step)


@pytest.fixture
def square_buffer():
    """24x24 dark buffer with a bright 10x10 square at rows/cols 7-16."""
    square = np.zeros((24, 24), dtype=np.uint8)
    square[7:17, 7:17] = 200
    return PixelBuffer.from_array(square)
