# policyext/validator/validation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from policyext.core.errors import ArgumentCheckError, ValidationError
from policyext.core.expr import Expr, ExprKind
from policyext.interfaces.types import ValidationResult
from policyext.validator.schemas import ExtensionSchemas
from policyext.validator.types import Type


class ValidationSeverity(Enum):
    """
    Severity of a typechecking diagnostic. Every diagnostic the typechecker
    reports today blocks the expression, so ERROR is the only level.
    """

    ERROR = 3


class Validator:
    """
    Typechecks expressions against the enabled extension schemas before they
    are evaluated.

    Runtime Invariants:
    - Validation never evaluates anything except literal-only constructor
      checks, which have no side effects
    - Results are deterministic for a given expression and context schema

    Example:
        validator = Validator(ExtensionSchemas.all_available(), {"amount": Type.primitive_string()})
        results = validator.validate(expr)
    """

    def __init__(self, schemas: ExtensionSchemas, context_types: Optional[Mapping[str, Type]] = None) -> None:
        """
        :param schemas: The enabled extension schemas, shared read-only.
        :param context_types: Static types of the request context attributes.
        """
        self._schemas = schemas
        self._context_types = MappingProxyType(dict(context_types or {}))

    def validate(self, expr: Expr) -> List[ValidationResult]:
        """
        Typecheck an expression and return every diagnostic found.
        """
        checker = _TypeChecker(self._schemas, self._context_types)
        checker.typecheck(expr)
        return checker.results

    def check(self, expr: Expr) -> Type:
        """
        Typecheck an expression and return its type.

        :raises ValidationError: If any ERROR diagnostic is reported.
        """
        checker = _TypeChecker(self._schemas, self._context_types)
        ty = checker.typecheck(expr)
        errors = [r for r in checker.results if r.severity == ValidationSeverity.ERROR.name]
        if errors:
            raise ValidationError("; ".join(r.message for r in errors), checker.results)
        return ty


class _TypeChecker:
    """
    Internal single-use walker that infers types bottom-up and collects
    diagnostics instead of stopping at the first one.
    """

    def __init__(self, schemas: ExtensionSchemas, context_types: Mapping[str, Type]) -> None:
        self._schemas = schemas
        self._context_types = context_types
        self.results: List[ValidationResult] = []

    def _error(self, message: str, expr: Expr, **context: Any) -> None:
        ctx: Dict[str, Any] = {"expr": str(expr)}
        ctx.update(context)
        self.results.append(ValidationResult(ValidationSeverity.ERROR.name, message, ctx))

    def typecheck(self, expr: Expr) -> Type:
        if expr.kind is ExprKind.LIT:
            return Type.of_literal(expr.value)
        if expr.kind is ExprKind.CONTEXT_ATTR:
            ty = self._context_types.get(expr.value)
            if ty is None:
                self._error(f"attribute `{expr.value}` is not declared on the context", expr)
                return Type.never()
            return ty
        if expr.kind is ExprKind.CALL:
            return self._typecheck_call(expr)
        left, right = (self.typecheck(a) for a in expr.args)
        if expr.kind is ExprKind.LESS:
            for side, ty in zip(expr.args, (left, right)):
                if not ty.is_subtype(Type.primitive_long()):
                    self._error(f"unexpected type: expected Long but saw {ty}", side)
        return Type.primitive_boolean()

    def _typecheck_call(self, expr: Expr) -> Type:
        ft = self._schemas.function_type(expr.fn_name)
        if ft is None:
            self._error(f"undefined extension function: {expr.fn_name}", expr)
            for a in expr.args:
                self.typecheck(a)
            return Type.never()
        if ft.call_style is not expr.style:
            self._error(f"`{expr.fn_name}` must be called in {ft.call_style.name.lower()}", expr)

        arg_tys = [self.typecheck(a) for a in expr.args]
        if len(arg_tys) != len(ft.argument_types):
            self._error(
                f"wrong number of arguments to {expr.fn_name}: expected {len(ft.argument_types)}, got {len(arg_tys)}",
                expr,
            )
            return ft.return_type

        well_typed = True
        for arg, actual, expected in zip(expr.args, arg_tys, ft.argument_types):
            if not actual.is_subtype(expected):
                well_typed = False
                self._error(f"unexpected type: expected {expected} but saw {actual}", arg)
        if well_typed:
            try:
                ft.check_arguments(expr.args)
            except ArgumentCheckError as e:
                self._error(str(e), expr)
        return ft.return_type
