# tests/unit/test_validation.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from policyext.core.errors import ValidationError
from policyext.core.expr import Expr
from policyext.core.names import Name
from policyext.core.types import CallStyle
from policyext.validator import ValidationSeverity, Validator
from policyext.validator.types import Type


@pytest.fixture
def validator(schemas):
    return Validator(schemas, {"amount": Type.primitive_string(), "count": Type.primitive_long()})


def messages(results):
    return [r.message for r in results]


def test_well_typed_expressions(validator, u256_expr, method_call):
    assert validator.validate(u256_expr("123")) == []
    assert validator.check(u256_expr("123")) == Type.extension(Name("u256"))
    cmp = method_call("u256LessThan", u256_expr("1"), u256_expr("2"))
    assert validator.check(cmp) == Type.primitive_boolean()
    assert validator.check(Expr.less(Expr.context_attr("count"), Expr.val(3))) == Type.primitive_boolean()


def test_malformed_literal_is_rejected(validator, u256_expr):
    results = validator.validate(u256_expr("1.a"))
    assert messages(results) == ['Failed to parse as a u256 value: `"1.a"`']
    assert results[0].severity == ValidationSeverity.ERROR.name
    assert results[0].context == {"expr": 'u256("1.a")'}


def test_overflowing_literal_is_rejected(validator, u256_expr):
    assert len(validator.validate(u256_expr(str(2**256)))) == 1


def test_literal_with_many_leading_zeros(validator, u256_expr):
    assert validator.validate(u256_expr("0" * 5000 + "7")) == []
    assert len(validator.validate(u256_expr("0" * 5000 + "7.0"))) == 1


def test_non_literal_argument_is_deferred(validator):
    expr = Expr.call_extension_fn("u256", [Expr.context_attr("amount")])
    assert validator.validate(expr) == []


def test_argument_type_mismatch(validator, method_call, u256_expr):
    results = validator.validate(Expr.call_extension_fn("u256", [Expr.val(12)]))
    assert messages(results) == ["unexpected type: expected String but saw Long"]

    results = validator.validate(method_call("u256GreaterThan", u256_expr("1"), Expr.val("2")))
    assert messages(results) == ["unexpected type: expected u256 but saw String"]


def test_builtin_less_rejects_u256(validator, u256_expr):
    results = validator.validate(Expr.less(u256_expr("1"), u256_expr("2")))
    assert messages(results) == ["unexpected type: expected Long but saw u256"] * 2


def test_wrong_call_style(validator):
    expr = Expr.call_extension_fn("u256", [Expr.val("1.0")], CallStyle.METHOD_STYLE)
    assert messages(validator.validate(expr)) == [
        "`u256` must be called in function_style",
        'Failed to parse as a u256 value: `"1.0"`',
    ]


def test_wrong_arity(validator, u256_expr):
    expr = Expr.call_extension_fn("u256", [Expr.val("1"), Expr.val("2")])
    assert messages(validator.validate(expr)) == ["wrong number of arguments to u256: expected 1, got 2"]


def test_unknown_function_and_attribute(validator):
    expr = Expr.call_extension_fn("u256Plus", [Expr.context_attr("missing")])
    assert messages(validator.validate(expr)) == [
        "undefined extension function: u256Plus",
        "attribute `missing` is not declared on the context",
    ]


def test_diagnostics_are_collected(validator, u256_expr):
    expr = Expr.is_eq(u256_expr("-1"), u256_expr("1.5"))
    assert len(validator.validate(expr)) == 2


def test_check_raises_with_results(validator, u256_expr):
    with pytest.raises(ValidationError) as exc_info:
        validator.check(u256_expr("-."))
    assert "Failed to parse as a u256 value" in str(exc_info.value)
    assert len(exc_info.value.results) == 1


def test_every_diagnostic_is_an_error(validator, u256_expr):
    assert [s.name for s in ValidationSeverity] == ["ERROR"]
    results = validator.validate(Expr.less(u256_expr("1"), Expr.val("x")))
    assert results
    assert all(r.severity == ValidationSeverity.ERROR.name for r in results)
