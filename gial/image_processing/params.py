# -*- coding: utf-8 -*-
"""
Tunable Parameter Annotations - Declarative parameter constraints via typing.Annotated.

Provides constraint marker types (``Range``, ``Options``, ``OddSize``,
``Desc``) for use inside ``typing.Annotated`` annotations on
``ImageProcessor`` subclasses, plus the ``ParamSpec`` introspection class
and the collection/init-generation utilities consumed by
``ImageProcessor.__init_subclass__``.

Usage
-----
Declare tunable parameters as class-body annotations::

    from typing import Annotated
    from gial.image_processing.params import Desc, OddSize, Range

    class MyFilter(ImageTransform):
        kernel_size: Annotated[int, Range(min=1, max=15), OddSize(),
                               Desc('Square window side')] = 3

Parameters are collected into ``cls.__param_specs__`` at class definition
time. An ``__init__`` is generated unless the class defines its own.

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
import inspect
from typing import (
    Annotated,
    Any,
    Optional,
    Tuple,
    Union,
    get_origin,
    get_type_hints,
)

# GIAL internal
from gial.exceptions import ValidationError


# =====================================================================
# Constraint marker types  (used inside Annotated[...])
# =====================================================================

class ParamMeta:
    """Base marker for tunable parameter metadata in ``Annotated`` types."""


class Range(ParamMeta):
    """Inclusive numeric range constraint."""

    __slots__ = ('min', 'max')

    def __init__(
        self,
        min: Optional[Union[int, float]] = None,
        max: Optional[Union[int, float]] = None,
    ) -> None:
        self.min = min
        self.max = max

    def __repr__(self) -> str:
        return f"Range(min={self.min!r}, max={self.max!r})"


class Options(ParamMeta):
    """Discrete choice constraint. Requires at least one choice."""

    __slots__ = ('choices',)

    def __init__(self, *choices: Any) -> None:
        if not choices:
            raise ValueError("Options requires at least one choice")
        self.choices = choices

    def __repr__(self) -> str:
        return f"Options{self.choices!r}"


class OddSize(ParamMeta):
    """Window sizes that must be odd."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "OddSize()"


class Desc(ParamMeta):
    """Human-readable parameter description."""

    __slots__ = ('text',)

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"Desc({self.text!r})"


# =====================================================================
# ParamSpec
# =====================================================================

_SENTINEL = object()


class ParamSpec:
    """Resolved specification for a single tunable parameter.

    Attributes
    ----------
    name : str
        Parameter name (keyword-argument key).
    param_type : type
        Expected Python type.
    default : Any
        Default value, ``None`` if the parameter is required.
    description : str
        Human-readable description.
    min_value, max_value : int, float, or None
        Inclusive bounds from ``Range``.
    choices : tuple or None
        Allowed values from ``Options``.
    odd : bool
        Whether ``OddSize`` applies.
    """

    __slots__ = (
        'name', 'param_type', 'default', '_has_default', 'description',
        'min_value', 'max_value', 'choices', 'odd',
    )

    def __init__(
        self,
        name: str,
        param_type: type,
        default: Any,
        has_default: bool,
        description: str = '',
        min_value: Optional[Union[int, float]] = None,
        max_value: Optional[Union[int, float]] = None,
        choices: Optional[Tuple] = None,
        odd: bool = False,
    ) -> None:
        self.name = name
        self.param_type = param_type
        self.default = default
        self._has_default = has_default
        self.description = description
        self.min_value = min_value
        self.max_value = max_value
        self.choices = choices
        self.odd = odd

    @property
    def required(self) -> bool:
        return not self._has_default

    def validate(self, value: Any) -> None:
        """Validate *value* against this spec's type and constraints.

        ``int`` is accepted where ``float`` is declared; ``bool`` is never
        accepted as a number.

        Raises
        ------
        ValidationError
            If *value* has the wrong type or violates a constraint.
        """
        self._check_type(value)
        problem = self._constraint_problem(value)
        if problem is not None:
            raise ValidationError(f"{self.name}={value!r}: {problem}")

    def _check_type(self, value: Any) -> None:
        expected = self.param_type
        if expected is object:
            return
        if expected in (int, float) and isinstance(value, bool):
            raise ValidationError(
                f"{self.name} expects {expected.__name__}, got bool")
        accepted = (int, float) if expected is float else expected
        if not isinstance(value, accepted):
            raise ValidationError(
                f"{self.name} expects {expected.__name__}, "
                f"got {type(value).__name__}")

    def _constraint_problem(self, value: Any) -> Optional[str]:
        if self.min_value is not None and value < self.min_value:
            return f"below the minimum of {self.min_value!r}"
        if self.max_value is not None and value > self.max_value:
            return f"above the maximum of {self.max_value!r}"
        # Window sides index a centre pixel.
        if self.odd and value % 2 == 0:
            return "window size must be odd"
        if self.choices is not None and value not in self.choices:
            return f"not one of the choices {self.choices!r}"
        return None

    def __repr__(self) -> str:
        text = (f"ParamSpec(name={self.name!r}, "
                f"param_type={self.param_type.__name__}")
        if not self.required:
            text += f", default={self.default!r}"
        return text + ")"


# =====================================================================
# Annotation collection
# =====================================================================

def collect_param_specs(cls: type) -> Tuple[ParamSpec, ...]:
    """Parse ``Annotated`` type hints on *cls* into ``ParamSpec`` objects.

    Fields are ordered parent-first, preserving declaration order within
    each class.

    Raises
    ------
    TypeError
        If a field carries both ``Range`` and ``Options``.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        return ()

    ordered_names: list = []
    for klass in reversed(cls.__mro__):
        for name in getattr(klass, '__annotations__', {}):
            if name not in ordered_names and name in hints:
                ordered_names.append(name)

    specs: list = []
    for name in ordered_names:
        hint = hints[name]
        if get_origin(hint) is not Annotated:
            continue
        metas = [m for m in hint.__metadata__ if isinstance(m, ParamMeta)]
        if not metas:
            continue

        range_meta = next((m for m in metas if isinstance(m, Range)), None)
        options_meta = next((m for m in metas if isinstance(m, Options)), None)
        desc_meta = next((m for m in metas if isinstance(m, Desc)), None)
        if range_meta and options_meta:
            raise TypeError(
                f"Parameter '{name}' on {cls.__qualname__}: "
                f"Range and Options are mutually exclusive."
            )

        default = getattr(cls, name, _SENTINEL)
        has_default = default is not _SENTINEL
        specs.append(ParamSpec(
            name=name,
            param_type=hint.__args__[0],
            default=default if has_default else None,
            has_default=has_default,
            description=desc_meta.text if desc_meta else '',
            min_value=range_meta.min if range_meta else None,
            max_value=range_meta.max if range_meta else None,
            choices=options_meta.choices if options_meta else None,
            odd=any(isinstance(m, OddSize) for m in metas),
        ))
    return tuple(specs)


# =====================================================================
# __init__ generation
# =====================================================================

def _make_init(param_specs: Tuple[ParamSpec, ...]):
    """Build a keyword-only ``__init__`` validating every spec.

    Calls ``self.__post_init__()`` afterwards when the class defines one.
    """
    known = {spec.name for spec in param_specs}

    def __init__(self, **kwargs):
        owner = type(self).__name__
        extra = sorted(set(kwargs) - known)
        if extra:
            raise TypeError(f"{owner}() got unexpected parameters: {', '.join(extra)}")
        for spec in param_specs:
            if spec.name not in kwargs and spec.required:
                raise TypeError(f"{owner}() requires parameter '{spec.name}'")
            value = kwargs.get(spec.name, spec.default)
            spec.validate(value)
            setattr(self, spec.name, value)
        post_init = getattr(self, '__post_init__', None)
        if post_init is not None:
            post_init()

    empty = inspect.Parameter.empty
    __init__.__signature__ = inspect.Signature(
        [inspect.Parameter('self', inspect.Parameter.POSITIONAL_OR_KEYWORD)]
        + [inspect.Parameter(spec.name, inspect.Parameter.KEYWORD_ONLY,
                             default=empty if spec.required else spec.default)
           for spec in param_specs])
    __init__.__qualname__ = '__init__'
    return __init__
