# -*- coding: utf-8 -*-
"""
Hu Moments - Shape descriptors of a rectangular buffer region.

Moments are taken over the non-zero pixels of the inclusive region
``[x_start, x_end] x [y_start, y_end]`` with coordinates relative to the
region origin. Only pixels whose relative ``kx`` and ``ky`` are both
strictly positive are counted, which leaves the first row and column of the
region out. Central moments apply the same rule after shifting by the
centroid, so they only see the pixels below and to the right of it.

Regular and central moments are integer sums. The centroid is the integer
quotient ``(M10 // M00, M01 // M00)``. Normalized central moments are

    Nu(p, q) = Mu(p, q) / Mu00 ** ((p + q + 2) / 2)

and the seven Hu invariants are the standard polynomial combinations of
the second and third order normalized moments. Slot 0 of ``hu_moments`` is
always 0 so that ``hu_moments[i]`` is the i-th invariant.

An inverted region, or one whose corners fall outside the buffer, yields
all-zero moments.

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
from typing import Tuple

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import PixelBuffer

logger = logging.getLogger(__name__)

NUM_HU_MOMENTS = 8


class HuMomentsCalculator:
    """Moments and Hu invariants of one region of one buffer.

    Parameters
    ----------
    buffer : PixelBuffer
        Initialized buffer.
    x_start, y_start : int
        Top-left corner (column, row), inclusive.
    x_end, y_end : int
        Bottom-right corner (column, row), inclusive.

    Examples
    --------
    >>> calc = HuMomentsCalculator(buf, 0, 0, 9, 9)
    >>> calc.hu_moments[0]
    0.0
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        x_start: int,
        y_start: int,
        x_end: int,
        y_end: int,
    ) -> None:
        buffer.require_initialized('HuMomentsCalculator')
        self.region = (x_start, y_start, x_end, y_end)
        self._hu = np.zeros(NUM_HU_MOMENTS, dtype=np.float64)
        self._kx = self._ky = np.zeros(0, dtype=np.int64)
        self._centroid = (0, 0)

        if x_start > x_end or y_start > y_end \
                or buffer.is_invalid_coordinates(y_start, x_start) \
                or buffer.is_invalid_coordinates(y_end, x_end):
            logger.debug("Hu moments: invalid region %s on %dx%d buffer",
                         self.region, buffer.height, buffer.width)
            self.is_valid = False
            return

        self.is_valid = True
        region = buffer.data[y_start:y_end + 1, x_start:x_end + 1]
        ky, kx = np.nonzero(region)
        self._kx = kx.astype(np.int64)
        self._ky = ky.astype(np.int64)

        m00 = self.regular_moment(0, 0)
        if m00 > 0:
            self._centroid = (self.regular_moment(1, 0) // m00,
                              self.regular_moment(0, 1) // m00)
        self._mu00 = self.central_moment(0, 0)
        self._hu = self._invariants()

    @staticmethod
    def _moment(kx: np.ndarray, ky: np.ndarray, p: int, q: int) -> int:
        counted = (kx > 0) & (ky > 0)
        return int(np.sum(kx[counted] ** p * ky[counted] ** q))

    def regular_moment(self, p: int, q: int) -> int:
        """``M(p, q)``; 0 for an invalid region."""
        return self._moment(self._kx, self._ky, p, q)

    def central_moment(self, p: int, q: int) -> int:
        """``Mu(p, q)`` about the integer centroid."""
        xz, yz = self._centroid
        return self._moment(self._kx - xz, self._ky - yz, p, q)

    def normalized_central_moment(self, p: int, q: int) -> float:
        """``Nu(p, q)``; 0 when ``Mu00`` is 0 or an order is negative."""
        if not self.is_valid or self._mu00 == 0 or p < 0 or q < 0:
            return 0.0
        return self.central_moment(p, q) / float(self._mu00) ** ((p + q + 2) / 2.0)

    @property
    def centroid(self) -> Tuple[int, int]:
        """``(x, y)`` centroid relative to the region origin."""
        return self._centroid

    @property
    def hu_moments(self) -> np.ndarray:
        """Copy of the 8-slot invariant array (slot 0 is 0)."""
        return self._hu.copy()

    def _invariants(self) -> np.ndarray:
        nu = self.normalized_central_moment
        n20, n02, n11 = nu(2, 0), nu(0, 2), nu(1, 1)
        n30, n03, n12, n21 = nu(3, 0), nu(0, 3), nu(1, 2), nu(2, 1)

        s1 = n30 + n12
        s2 = n21 + n03
        d1 = n30 - 3.0 * n12
        d2 = 3.0 * n21 - n03

        hu = np.zeros(NUM_HU_MOMENTS, dtype=np.float64)
        hu[1] = n20 + n02
        hu[2] = (n20 - n02) ** 2 + 4.0 * n11 ** 2
        hu[3] = d1 ** 2 + d2 ** 2
        hu[4] = s1 ** 2 + s2 ** 2
        hu[5] = (d1 * s1 * (s1 ** 2 - 3.0 * s2 ** 2)
                 + d2 * s2 * (3.0 * s1 ** 2 - s2 ** 2))
        hu[6] = ((n20 - n02) * (s1 ** 2 - s2 ** 2)
                 + 4.0 * n11 * s1 * s2)
        hu[7] = (d2 * s1 * (s1 ** 2 - 3.0 * s2 ** 2)
                 - d1 * s2 * (3.0 * s1 ** 2 - s2 ** 2))
        logger.debug("Hu moments for region %s: %s", self.region, hu[1:])
        return hu
