# policyext/validator/extension_schema.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Optional, Sequence, Tuple

from policyext.core.errors import SchemaDriftError
from policyext.core.expr import Expr
from policyext.core.names import Name
from policyext.core.types import CallStyle
from policyext.interfaces.types import ArgumentCheckFn
from policyext.validator.types import Type


class ExtensionFunctionType:
    """
    The validator's view of one extension function: static argument and
    return types, plus an optional check run on the unevaluated arguments.
    """

    __slots__ = ("_name", "_argument_types", "_return_type", "_argument_check", "_call_style")

    def __init__(
        self,
        name: Name,
        argument_types: Sequence[Type],
        return_type: Type,
        argument_check: Optional[ArgumentCheckFn] = None,
        call_style: CallStyle = CallStyle.FUNCTION_STYLE,
    ) -> None:
        self._name = name
        self._argument_types: Tuple[Type, ...] = tuple(argument_types)
        self._return_type = return_type
        self._argument_check = argument_check
        self._call_style = call_style

    @property
    def name(self) -> Name:
        return self._name

    @property
    def argument_types(self) -> Tuple[Type, ...]:
        return self._argument_types

    @property
    def return_type(self) -> Type:
        return self._return_type

    @property
    def call_style(self) -> CallStyle:
        return self._call_style

    @property
    def has_argument_check(self) -> bool:
        return self._argument_check is not None

    def check_arguments(self, args: Sequence[Expr]) -> None:
        """
        Run the extra static check, if any. Arity has already been checked.

        :raises ArgumentCheckError: If the check rejects the arguments.
        """
        if self._argument_check is not None:
            self._argument_check(args)

    def __repr__(self) -> str:
        args = ", ".join(str(t) for t in self._argument_types)
        return f"ExtensionFunctionType({self._name}: ({args}) -> {self._return_type})"


class ExtensionSchema:
    """
    Validator-side mirror of one extension: the same function names as the
    runtime extension, with static signatures.
    """

    def __init__(self, name: Name, function_types: Sequence[ExtensionFunctionType]) -> None:
        """
        :raises SchemaDriftError: If two function types share a name.
        """
        self._name = name
        by_name = {}
        for ft in function_types:
            if ft.name in by_name:
                raise SchemaDriftError(f"schema for {name} declares {ft.name} twice")
            by_name[ft.name] = ft
        self._function_types = MappingProxyType(by_name)

    @property
    def name(self) -> Name:
        return self._name

    def function_types(self) -> Iterator[ExtensionFunctionType]:
        return iter(self._function_types.values())

    def function_type(self, name: Name) -> Optional[ExtensionFunctionType]:
        return self._function_types.get(name)

    def __repr__(self) -> str:
        return f"ExtensionSchema({self._name})"
