# policyext/extensions/u256.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
The ``u256`` extension: unsigned 256-bit integers written as decimal strings.

    u256("115792089237316195423570985008687907853269984665640564039457584007913129639935")
    u256("123").u256LessThan(u256("124"))
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from policyext.core.errors import ExtensionEvaluationError, FailedParse, Overflow, U256Error
from policyext.core.extension import Extension, ExtensionFunction
from policyext.core.names import Name
from policyext.core.types import CallStyle, SchemaType
from policyext.core.values import ExtensionValueWithArgs, Value

EXTENSION_NAME = "u256"

U256_FROM_STR_NAME = Name.parse_unqualified_name(EXTENSION_NAME)
LESS_THAN = Name.parse_unqualified_name("u256LessThan")
LESS_THAN_OR_EQUAL = Name.parse_unqualified_name("u256LessThanOrEqual")
GREATER_THAN = Name.parse_unqualified_name("u256GreaterThan")
GREATER_THAN_OR_EQUAL = Name.parse_unqualified_name("u256GreaterThanOrEqual")

MAX_VALUE = 2**256 - 1
_MAX_DIGITS = len(str(MAX_VALUE))

# Leading zeros are accepted. ASCII only, so non-ASCII digits are FailedParse, not Overflow.
_LITERAL_RE = re.compile(r"[0-9]\d*", re.ASCII)


@dataclass(frozen=True, order=True)
class UINT256:
    """u256 payload, represented internally as a Python int."""

    value: int

    @staticmethod
    def typename() -> Name:
        return U256_FROM_STR_NAME

    @classmethod
    def from_str(cls, text: str) -> "UINT256":
        """
        Convert a decimal string into a UINT256.

        :raises FailedParse: If text is not a string of ASCII digits.
        :raises Overflow: If the number does not fit in 256 bits.
        """
        if not _LITERAL_RE.fullmatch(text):
            raise FailedParse(text)
        # int() refuses very long strings, so convert only the significant digits
        digits = text.lstrip("0") or "0"
        if len(digits) > _MAX_DIGITS:
            raise Overflow()
        value = int(digits)
        if value > MAX_VALUE:
            raise Overflow()
        return cls(value)

    def __str__(self) -> str:
        return str(self.value)


def extension_err(message: str) -> ExtensionEvaluationError:
    return ExtensionEvaluationError(U256_FROM_STR_NAME, message)


def u256_from_str(arg: Value) -> Value:
    """Construct a u256 value from a policy string."""
    try:
        u256 = UINT256.from_str(arg)
    except U256Error as e:
        raise extension_err(str(e)) from e
    return ExtensionValueWithArgs(u256, [arg], U256_FROM_STR_NAME)


def u256_lt(left: ExtensionValueWithArgs, right: ExtensionValueWithArgs) -> bool:
    return left.value < right.value


def u256_le(left: ExtensionValueWithArgs, right: ExtensionValueWithArgs) -> bool:
    return left.value <= right.value


def u256_gt(left: ExtensionValueWithArgs, right: ExtensionValueWithArgs) -> bool:
    return left.value > right.value


def u256_ge(left: ExtensionValueWithArgs, right: ExtensionValueWithArgs) -> bool:
    return left.value >= right.value


def extension() -> Extension:
    """Construct the u256 extension."""
    u256_type = SchemaType.extension(UINT256.typename())
    comparisons = [
        (LESS_THAN, u256_lt),
        (LESS_THAN_OR_EQUAL, u256_le),
        (GREATER_THAN, u256_gt),
        (GREATER_THAN_OR_EQUAL, u256_ge),
    ]
    return Extension(
        U256_FROM_STR_NAME,
        [
            ExtensionFunction.unary(
                U256_FROM_STR_NAME,
                CallStyle.FUNCTION_STYLE,
                u256_from_str,
                u256_type,
                SchemaType.string(),
            ),
            *(
                ExtensionFunction.binary(
                    name,
                    CallStyle.METHOD_STYLE,
                    func,
                    SchemaType.bool(),
                    (u256_type, u256_type),
                )
                for name, func in comparisons
            ),
        ],
    )
