# policyext/core/expr.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional, Sequence, Tuple, Union

from policyext.core.names import Name
from policyext.core.types import CallStyle
from policyext.core.values import render_value


class ExprKind(Enum):
    """The expression forms the host understands."""

    LIT = auto()
    CONTEXT_ATTR = auto()
    CALL = auto()
    IS_EQ = auto()
    LESS = auto()


@dataclass(frozen=True)
class Expr:
    """
    An unevaluated policy expression. Only the forms needed to exercise
    extension functions are modelled: literals, context attributes, extension
    calls, the built-in ``==`` and the built-in long ``<``.
    """

    kind: ExprKind
    value: Any = None
    fn_name: Optional[Name] = None
    args: Tuple["Expr", ...] = ()
    style: CallStyle = CallStyle.FUNCTION_STYLE

    @classmethod
    def val(cls, value: Union[bool, int, str]) -> "Expr":
        """A literal bool, long or string."""
        if not isinstance(value, (bool, int, str)):
            raise TypeError(f"unsupported literal: {value!r}")
        return cls(ExprKind.LIT, value=value)

    @classmethod
    def context_attr(cls, attr: str) -> "Expr":
        """A read of ``context.<attr>``, known only at request time."""
        return cls(ExprKind.CONTEXT_ATTR, value=attr)

    @classmethod
    def call_extension_fn(
        cls,
        name: Union[Name, str],
        args: Sequence["Expr"],
        style: CallStyle = CallStyle.FUNCTION_STYLE,
    ) -> "Expr":
        """
        A call to an extension function.

        :param name: Function name, parsed if given as a string.
        :param args: Argument expressions; for method style the first is the receiver.
        :param style: How the call is written.
        :raises ValueError: If a method-style call has no receiver.
        """
        if isinstance(name, str):
            name = Name.parse(name)
        if style is CallStyle.METHOD_STYLE and not args:
            raise ValueError(f"method-style call to {name} needs a receiver")
        return cls(ExprKind.CALL, fn_name=name, args=tuple(args), style=style)

    @classmethod
    def is_eq(cls, left: "Expr", right: "Expr") -> "Expr":
        return cls(ExprKind.IS_EQ, args=(left, right))

    @classmethod
    def less(cls, left: "Expr", right: "Expr") -> "Expr":
        return cls(ExprKind.LESS, args=(left, right))

    @property
    def is_string_literal(self) -> bool:
        return self.kind is ExprKind.LIT and isinstance(self.value, str)

    def __str__(self) -> str:
        if self.kind is ExprKind.LIT:
            return render_value(self.value)
        if self.kind is ExprKind.CONTEXT_ATTR:
            return f"context.{self.value}"
        if self.kind is ExprKind.CALL:
            if self.style is CallStyle.METHOD_STYLE:
                receiver, *rest = self.args
                return f"{receiver}.{self.fn_name}({', '.join(str(a) for a in rest)})"
            return f"{self.fn_name}({', '.join(str(a) for a in self.args)})"
        left, right = self.args
        op = "==" if self.kind is ExprKind.IS_EQ else "<"
        return f"{left} {op} {right}"
