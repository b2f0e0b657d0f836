# -*- coding: utf-8 -*-
"""
GIAL Exception Hierarchy - Domain-specific exceptions for GIAL operations.

Provides a small exception hierarchy that lets consumers catch GIAL-specific
errors distinctly from Python built-in exceptions. All GIAL exceptions
subclass both ``GialError`` and the appropriate built-in exception.

Expected failures of the engine entry points (bad filter size, too few
images, mismatched dimensions) are reported through the result enums in
:mod:`gial.vocabulary` and never raised. The exceptions below cover
programming errors: invalid processor parameters and use of
uninitialized buffers.

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


class GialError(Exception):
    """Base exception for all GIAL errors."""


class ValidationError(GialError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for even or non-positive kernel sizes, out-of-range tunable
    parameters, unknown enum members passed to processors, and other
    input validation failures.
    """


class UninitializedBufferError(ValidationError):
    """A ``-1 x -1`` pixel buffer was used where pixel data is required."""


class ProcessorError(GialError, RuntimeError):
    """Algorithm or processing failure during apply().

    Raised when a processor encounters a non-recoverable error
    during execution (not an input validation issue).
    """
