# policyext/validator/extensions/u256.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Validator schema for the u256 extension.

Signatures are derived from the closed set of u256 function identities, not
copied from the runtime table, and then checked against it. A SchemaDriftError
from this module means it has fallen out of date with
``policyext.extensions.u256``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Mapping, Optional, Sequence, Tuple

from policyext.core.errors import ArgumentCheckError, EvaluationError, SchemaDriftError
from policyext.core.expr import Expr
from policyext.core.extension import Extension
from policyext.core.names import Name
from policyext.extensions import u256
from policyext.extensions.registry import Extensions
from policyext.interfaces.types import ArgumentCheckFn
from policyext.runtime.evaluator import RestrictedEvaluator
from policyext.validator.extension_schema import ExtensionFunctionType, ExtensionSchema
from policyext.validator.types import Type

logger = logging.getLogger(__name__)


class U256Function(Enum):
    """Every function the u256 extension defines."""

    U256 = "u256"
    LESS_THAN = "u256LessThan"
    LESS_THAN_OR_EQUAL = "u256LessThanOrEqual"
    GREATER_THAN = "u256GreaterThan"
    GREATER_THAN_OR_EQUAL = "u256GreaterThanOrEqual"

    @classmethod
    def from_name(cls, name: Name) -> "U256Function":
        """
        :raises SchemaDriftError: If the runtime defines a function this module does not know.
        """
        try:
            return cls(str(name))
        except ValueError:
            raise SchemaDriftError(f"unexpected u256 extension function name: {name}") from None


_COMPARISONS = (
    U256Function.LESS_THAN,
    U256Function.LESS_THAN_OR_EQUAL,
    U256Function.GREATER_THAN,
    U256Function.GREATER_THAN_OR_EQUAL,
)


def argument_types(u256_ty: Type) -> Mapping[U256Function, Tuple[Type, ...]]:
    table = {U256Function.U256: (Type.primitive_string(),)}
    table.update({f: (u256_ty, u256_ty) for f in _COMPARISONS})
    return table


def return_types(u256_ty: Type) -> Mapping[U256Function, Type]:
    table = {U256Function.U256: u256_ty}
    table.update({f: Type.primitive_boolean() for f in _COMPARISONS})
    return table


def argument_checks(extensions: Extensions) -> Mapping[U256Function, Optional[ArgumentCheckFn]]:
    table = {U256Function.U256: u256_string_validator(extensions)}
    table.update({f: None for f in _COMPARISONS})
    return table


def _require_complete(table: Mapping, what: str) -> None:
    missing = [f.value for f in U256Function if f not in table]
    if missing:
        raise SchemaDriftError(f"u256 {what} table has no entry for: {', '.join(missing)}")


def build_extension_schema(
    extension: Extension,
    arg_types: Mapping[U256Function, Tuple[Type, ...]],
    ret_types: Mapping[U256Function, Type],
    checks: Mapping[U256Function, Optional[ArgumentCheckFn]],
) -> ExtensionSchema:
    """
    Build the schema for the u256 extension from explicit signature tables
    and check it against the runtime definition.

    :raises SchemaDriftError: If a table is incomplete, the runtime defines an
        unknown function, or a signature disagrees with the runtime's.
    """
    for table, what in ((arg_types, "argument type"), (ret_types, "return type"), (checks, "argument check")):
        _require_complete(table, what)

    fun_tys = []
    for f in extension.funcs():
        fid = U256Function.from_name(f.name)
        return_type = ret_types[fid]
        if f.return_type is None:
            consistent = return_type == Type.never()
        else:
            consistent = return_type.is_consistent_with(f.return_type)
        if not consistent:
            raise SchemaDriftError(
                f"return type of {f.name} is {return_type} in the schema but {f.return_type} at runtime"
            )
        if len(arg_types[fid]) != f.arity:
            raise SchemaDriftError(
                f"{f.name} takes {len(arg_types[fid])} arguments in the schema but {f.arity} at runtime"
            )
        fun_tys.append(ExtensionFunctionType(f.name, arg_types[fid], return_type, checks[fid], f.style))
    logger.debug("Built validator schema for %s with %d functions", extension.name, len(fun_tys))
    return ExtensionSchema(extension.name, fun_tys)


def extension_schema(extensions: Extensions) -> ExtensionSchema:
    """
    Construct the u256 schema from the u256 extension enabled in ``extensions``.
    The constructor's static check evaluates with the same set.

    :raises ValueError: If u256 is not enabled.
    """
    u256_ext = extensions.lookup_extension(u256.EXTENSION_NAME)
    if u256_ext is None:
        raise ValueError("the u256 extension is not enabled")
    u256_ty = Type.extension(u256_ext.name)
    return build_extension_schema(
        u256_ext,
        argument_types(u256_ty),
        return_types(u256_ty),
        argument_checks(extensions),
    )


def u256_string_validator(extensions: Extensions) -> ArgumentCheckFn:
    """
    Return the extra static check for ``u256(...)``.

    When the argument is a string literal the check runs the runtime
    constructor on it, so malformed literals are reported before any request
    is evaluated. Any other argument is left to fail, if at all, at request
    time.
    """
    evaluator = RestrictedEvaluator(extensions)

    def validate_u256_string(exprs: Sequence[Expr]) -> None:
        arg = exprs[0] if exprs else None
        if arg is None or not arg.is_string_literal:
            return
        try:
            evaluator.interpret(Expr.call_extension_fn(u256.U256_FROM_STR_NAME, [arg]))
        except EvaluationError as e:
            logger.debug("Rejected u256 literal %s: %s", arg, e)
            raise ArgumentCheckError(f"Failed to parse as a u256 value: `{arg}`") from e

    return validate_u256_string
