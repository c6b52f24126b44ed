# policyext/core/values.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import json
from typing import Any, Sequence, Tuple, Union

from policyext.core.names import Name
from policyext.core.types import SchemaType
from policyext.interfaces.protocols import ExtensionValue, SupportsEquality


class ExtensionValueWithArgs:
    """
    An extension value as seen by the evaluator: the payload plus the
    constructor call that produced it. The constructor name and arguments are
    kept only for display and debugging; equality and ordering look at the
    payload alone.
    """

    __slots__ = ("_value", "_args", "_constructor")

    def __init__(self, value: ExtensionValue, args: Sequence["Value"], constructor: Name) -> None:
        """
        :param value: The immutable payload.
        :param args: The arguments the constructor was called with.
        :param constructor: Name of the constructor function.
        """
        self._value = value
        self._args: Tuple[Value, ...] = tuple(args)
        self._constructor = constructor

    @property
    def value(self) -> ExtensionValue:
        """The payload."""
        return self._value

    @property
    def args(self) -> Tuple["Value", ...]:
        """Arguments of the constructor call that produced this value."""
        return self._args

    @property
    def constructor(self) -> Name:
        """Name of the constructor function."""
        return self._constructor

    def typename(self) -> Name:
        return self._value.typename()

    def _comparable(self, other: object) -> bool:
        return isinstance(other, ExtensionValueWithArgs) and self.typename() == other.typename()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExtensionValueWithArgs):
            return NotImplemented
        return self.typename() == other.typename() and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.typename(), self._value))

    def __lt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: object) -> bool:
        if not self._comparable(other):
            return NotImplemented
        return self._value >= other._value

    def __str__(self) -> str:
        rendered = ", ".join(render_value(a) for a in self._args)
        return f"{self._constructor}({rendered})"

    def __repr__(self) -> str:
        return f"ExtensionValueWithArgs({self})"


Value = Union[bool, int, str, ExtensionValueWithArgs]


def type_of_value(value: Any) -> SchemaType:
    """
    Return the declared type of a runtime value.

    bool is checked before int since bool is a subclass of int in Python.
    """
    if isinstance(value, bool):
        return SchemaType.bool()
    if isinstance(value, int):
        return SchemaType.long()
    if isinstance(value, str):
        return SchemaType.string()
    if isinstance(value, ExtensionValueWithArgs):
        return SchemaType.extension(value.typename())
    raise TypeError(f"not a policy value: {value!r}")


def values_equal(left: Value, right: Value) -> bool:
    """
    The evaluator's built-in equality. Values of different types are never
    equal, so ``true == 1`` is false even though Python says otherwise.
    """
    if type_of_value(left) != type_of_value(right):
        return False
    if isinstance(left, SupportsEquality):
        return left.typename() == right.typename() and left == right
    return left == right


def render_value(value: Value) -> str:
    """Render a value the way it would be written in a policy."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
