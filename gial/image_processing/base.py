# -*- coding: utf-8 -*-
"""
Image Processing Base Classes - Abstract interfaces for buffer processors.

Defines the ``ImageProcessor`` common base class and the ``ImageTransform``
ABC for transforms that take one ``PixelBuffer`` and return a new one.
``ImageProcessor`` provides version checking at first instantiation and
``typing.Annotated``-based tunable parameter declarations with automatic
``__init__`` generation and runtime resolution through ``**kwargs``.

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
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

# Third-party
import numpy as np

# GIAL internal
from gial.buffer import PixelBuffer
from gial.image_processing.params import ParamSpec, collect_param_specs, _make_init

logger = logging.getLogger(__name__)


class ImageProcessor(ABC):
    """
    Common base class for all image processors.

    **Version checking**: Concrete subclasses that do not declare a processor
    version via ``@processor_version('x.y.z')`` trigger a ``UserWarning`` at
    first instantiation. The check uses ``__new__`` so that class decorators
    have been applied by the time it runs.

    **Tunable parameter flow**: Subclasses declare tunable parameters as
    ``typing.Annotated`` class-body fields using the markers from
    :mod:`gial.image_processing.params`. ``__init_subclass__`` collects them
    into ``__param_specs__`` and generates an ``__init__`` unless the
    subclass defines its own. ``_resolve_params(kwargs)`` merges instance
    values with keyword-argument overrides and validates them.
    """

    # Track which classes have been checked to warn only once per class.
    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = _make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'ImageProcessor':
        if cls not in ImageProcessor._version_warned_classes:
            ImageProcessor._version_warned_classes.add(cls)
            if (
                not getattr(cls, '__processor_version__', None)
                and not getattr(cls, '__abstractmethods__', None)
            ):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance values with runtime *kwargs* overrides.

        Keys of *kwargs* that are not declared parameters are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{param_name: resolved_value}`` for every declared param.

        Raises
        ------
        ValidationError
            If a resolved value violates its spec.
        """
        resolved: Dict[str, Any] = {}
        for spec in type(self).__param_specs__:
            value = kwargs[spec.name] if spec.name in kwargs \
                else getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved


class ImageTransform(ImageProcessor):
    """
    Abstract base class for buffer-to-buffer transforms.

    Subclasses implement ``apply``, which takes an initialized
    ``PixelBuffer`` and returns a new buffer of the same size.
    """

    @abstractmethod
    def apply(self, source: PixelBuffer, **kwargs: Any) -> PixelBuffer:
        """
        Apply the transform to a source buffer.

        Parameters
        ----------
        source : PixelBuffer
            Initialized grayscale buffer.

        Returns
        -------
        PixelBuffer
            Transformed buffer.
        """
        ...


class BufferTransformMixin:
    """Mixin that runs an array-level implementation on a ``PixelBuffer``.

    Overrides ``apply()`` to check that the source is initialized, hand the
    subclass the ``(rows, cols)`` ``uint8`` sample array through
    ``_apply_array()``, and wrap the returned array in a new buffer. The
    subclass must return a ``uint8`` array of the same shape.

    Usage
    -----
    ::

        class MyFilter(BufferTransformMixin, ImageTransform):
            def _apply_array(self, pixels, **kwargs):
                ...
    """

    def apply(self, source: PixelBuffer, **kwargs: Any) -> PixelBuffer:
        """Apply the transform to *source*.

        Raises
        ------
        UninitializedBufferError
            If *source* is uninitialized.
        """
        source.require_initialized(type(self).__name__)
        return PixelBuffer._wrap(self._apply_array(source.data, **kwargs))

    @abstractmethod
    def _apply_array(self, pixels: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Transform a ``(rows, cols)`` ``uint8`` array."""
        ...
