# policyext/runtime/evaluator.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from policyext.core.errors import (
    CallStyleError,
    EvaluationTypeError,
    ExtensionEvaluationError,
    MissingAttributeError,
    UnknownFunctionError,
)
from policyext.core.expr import Expr, ExprKind
from policyext.core.types import SchemaType
from policyext.core.values import Value, type_of_value, values_equal
from policyext.extensions.registry import Extensions

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Evaluates expressions for a single request. Extension calls are
    dispatched through the enabled Extensions; everything else is handled
    here.
    """

    def __init__(self, extensions: Extensions, context: Optional[Mapping[str, Value]] = None) -> None:
        """
        :param extensions: The enabled extensions, shared read-only.
        :param context: Request context attributes, readable as ``context.<name>``.
        """
        self._extensions = extensions
        self._context = MappingProxyType(dict(context or {}))

    def interpret(self, expr: Expr) -> Value:
        """
        Evaluate an expression to a value.

        :raises EvaluationError: If evaluation fails.
        """
        if expr.kind is ExprKind.LIT:
            return expr.value
        if expr.kind is ExprKind.CONTEXT_ATTR:
            return self._context_attr(expr.value)
        if expr.kind is ExprKind.CALL:
            return self._call(expr)
        left = self.interpret(expr.args[0])
        right = self.interpret(expr.args[1])
        if expr.kind is ExprKind.IS_EQ:
            return values_equal(left, right)
        for v in (left, right):
            if type_of_value(v) != SchemaType.long():
                raise EvaluationTypeError([SchemaType.long()], type_of_value(v))
        return left < right

    def _context_attr(self, attr: str) -> Value:
        try:
            return self._context[attr]
        except KeyError:
            raise MissingAttributeError(f"context does not have the attribute `{attr}`") from None

    def _call(self, expr: Expr) -> Value:
        f = self._extensions.func(expr.fn_name)
        if f is None:
            raise UnknownFunctionError(f"extension function `{expr.fn_name}` does not exist")
        if f.style is not expr.style:
            raise CallStyleError(f"`{expr.fn_name}` must be called in {f.style.name.lower()}")
        args = [self.interpret(a) for a in expr.args]
        try:
            return self._extensions.apply(expr.fn_name, args)
        except ExtensionEvaluationError as e:
            logger.debug("Extension call %s failed: %s", expr, e.message)
            raise


class RestrictedEvaluator(Evaluator):
    """
    Evaluator with no request context. Used where only literals and
    extension calls may appear, such as static checks of constructor
    arguments. Evaluation has no side effects.
    """

    def __init__(self, extensions: Extensions) -> None:
        super().__init__(extensions, context=None)

    def _context_attr(self, attr: str) -> Value:
        raise MissingAttributeError(f"restricted expressions cannot read `context.{attr}`")
