# -*- coding: utf-8 -*-
"""
Filter Validation - Shared parameter checks for the filter bank.

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
from typing import Any

# GIAL internal
from gial.exceptions import ValidationError

#: Smallest sigma the recursive Gaussian accepts.
MIN_SIGMA = 1.0


def validate_kernel_size(kernel_size: Any, name: str = 'kernel_size') -> None:
    """Validate that a window size is a positive odd integer.

    Parameters
    ----------
    kernel_size : int
        The window size to validate.
    name : str
        Parameter name for error messages. Default ``'kernel_size'``.

    Raises
    ------
    ValidationError
        If ``kernel_size`` is not an integer, is less than 1, or is even.
    """
    if not isinstance(kernel_size, int) or isinstance(kernel_size, bool):
        raise ValidationError(
            f"{name} must be an integer, got {type(kernel_size).__name__}"
        )
    if kernel_size < 1:
        raise ValidationError(f"{name} must be >= 1, got {kernel_size}")
    if kernel_size % 2 == 0:
        raise ValidationError(f"{name} must be odd, got {kernel_size}")


def validate_sigma(sigma: Any) -> None:
    """Validate a recursive Gaussian sigma.

    Raises
    ------
    ValidationError
        If ``sigma`` is not a number or is below ``MIN_SIGMA``.
    """
    if not isinstance(sigma, (int, float)) or isinstance(sigma, bool):
        raise ValidationError(
            f"sigma must be a number, got {type(sigma).__name__}"
        )
    if sigma < MIN_SIGMA:
        raise ValidationError(
            f"sigma must be >= {MIN_SIGMA}, got {sigma} (too small to filter)"
        )
