# policyext/core/extension.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterator, Optional, Sequence, Tuple

from policyext.core.errors import EvaluationTypeError, ExtensionRegistryError, WrongArityError
from policyext.core.names import Name
from policyext.core.types import CallStyle, SchemaType, SchemaTypeKind
from policyext.core.values import Value, type_of_value
from policyext.interfaces.types import ExtensionFunctionImpl

logger = logging.getLogger(__name__)


class ExtensionFunction:
    """
    Describes one function an extension adds to the policy language: its
    name, how it is called, what types it declares and the code that runs it.
    Instances are immutable once built.
    """

    __slots__ = ("_name", "_style", "_func", "_return_type", "_arg_types")

    def __init__(
        self,
        name: Name,
        style: CallStyle,
        func: ExtensionFunctionImpl,
        return_type: Optional[SchemaType],
        arg_types: Sequence[Optional[SchemaType]],
    ) -> None:
        """
        :param name: Name of the function, unique within its extension.
        :param style: Whether the function is called as ``f(a)`` or ``a.f()``.
        :param func: Implementation; receives one positional Value per argument.
        :param return_type: Declared return type, or None if undeclared.
        :param arg_types: Declared argument types; None entries are not checked.
        """
        self._name = name
        self._style = style
        self._func = func
        self._return_type = return_type
        self._arg_types: Tuple[Optional[SchemaType], ...] = tuple(arg_types)

    @classmethod
    def nullary(cls, name: Name, style: CallStyle, func: ExtensionFunctionImpl, return_type: SchemaType):
        return cls(name, style, func, return_type, ())

    @classmethod
    def unary(
        cls,
        name: Name,
        style: CallStyle,
        func: ExtensionFunctionImpl,
        return_type: SchemaType,
        arg_type: Optional[SchemaType],
    ):
        return cls(name, style, func, return_type, (arg_type,))

    @classmethod
    def binary(
        cls,
        name: Name,
        style: CallStyle,
        func: ExtensionFunctionImpl,
        return_type: SchemaType,
        arg_types: Tuple[Optional[SchemaType], Optional[SchemaType]],
    ):
        return cls(name, style, func, return_type, arg_types)

    @property
    def name(self) -> Name:
        return self._name

    @property
    def style(self) -> CallStyle:
        return self._style

    @property
    def return_type(self) -> Optional[SchemaType]:
        return self._return_type

    @property
    def arg_types(self) -> Tuple[Optional[SchemaType], ...]:
        return self._arg_types

    @property
    def arity(self) -> int:
        return len(self._arg_types)

    @property
    def is_constructor(self) -> bool:
        """
        True for the function that builds values of its extension's type: it
        returns that type and is named after it.
        """
        rt = self._return_type
        return rt is not None and rt.kind is SchemaTypeKind.EXTENSION and rt.name == self._name

    def call(self, args: Sequence[Value]) -> Value:
        """
        Apply the implementation to already-evaluated arguments.

        :raises WrongArityError: If the number of arguments is wrong.
        :raises EvaluationTypeError: If an argument does not have its declared type.
        :raises ExtensionEvaluationError: If the implementation fails.
        """
        if len(args) != self.arity:
            raise WrongArityError(self._name, self.arity, len(args))
        for expected, arg in zip(self._arg_types, args):
            if expected is not None and type_of_value(arg) != expected:
                raise EvaluationTypeError([expected], type_of_value(arg))
        return self._func(*args)

    def __repr__(self) -> str:
        return f"ExtensionFunction({self._name}, {self._style.name})"


class Extension:
    """
    A named bundle of extension functions. Built once when the host starts
    and shared read-only by every evaluation and validation.
    """

    def __init__(self, name: Name, funcs: Sequence[ExtensionFunction]) -> None:
        """
        :param name: Name of the extension.
        :param funcs: Functions in declaration order.
        :raises ExtensionRegistryError: If the functions are inconsistent.
        """
        self._name = name
        self._funcs: Tuple[ExtensionFunction, ...] = tuple(funcs)
        by_name = {}
        constructors = []
        for f in self._funcs:
            if f.name in by_name:
                raise ExtensionRegistryError(f"function {f.name} is defined twice in extension {name}")
            if f.style is CallStyle.METHOD_STYLE and f.arity == 0:
                raise ExtensionRegistryError(f"method-style function {f.name} must take at least one argument")
            if f.is_constructor:
                constructors.append(f)
            by_name[f.name] = f
        if len(constructors) > 1:
            names = ", ".join(str(f.name) for f in constructors)
            raise ExtensionRegistryError(f"extension {name} has more than one constructor: {names}")
        for ctor in constructors:
            if ctor.arg_types != (SchemaType.string(),):
                raise ExtensionRegistryError(f"constructor {ctor.name} must take exactly one String argument")
        self._by_name = MappingProxyType(by_name)
        logger.debug("Built extension %s with %d functions", name, len(self._funcs))

    @property
    def name(self) -> Name:
        return self._name

    def funcs(self) -> Iterator[ExtensionFunction]:
        """Iterate over the functions in declaration order."""
        return iter(self._funcs)

    def get_func(self, name: Name) -> Optional[ExtensionFunction]:
        """Look up a function by exact name, or None."""
        return self._by_name.get(name)

    def __repr__(self) -> str:
        return f"Extension({self._name})"
