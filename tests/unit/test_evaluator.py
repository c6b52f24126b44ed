# tests/unit/test_evaluator.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging

import pytest

from policyext.core.errors import (
    CallStyleError,
    EvaluationTypeError,
    ExtensionEvaluationError,
    MissingAttributeError,
    UnknownFunctionError,
)
from policyext.core.expr import Expr
from policyext.core.types import CallStyle
from policyext.runtime import Evaluator, RestrictedEvaluator


def test_literals(evaluator):
    assert evaluator.interpret(Expr.val(True)) is True
    assert evaluator.interpret(Expr.val(5)) == 5
    assert evaluator.interpret(Expr.val("x")) == "x"


def test_builtin_less_on_longs(evaluator):
    assert evaluator.interpret(Expr.less(Expr.val(1), Expr.val(2))) is True
    assert evaluator.interpret(Expr.less(Expr.val(2), Expr.val(2))) is False
    with pytest.raises(EvaluationTypeError):
        evaluator.interpret(Expr.less(Expr.val(True), Expr.val(2)))


def test_builtin_eq_distinguishes_bool_and_long(evaluator):
    assert evaluator.interpret(Expr.is_eq(Expr.val(True), Expr.val(1))) is False
    assert evaluator.interpret(Expr.is_eq(Expr.val("a"), Expr.val("a"))) is True


def test_context_attributes(extensions, u256_expr):
    evaluator = Evaluator(extensions, {"amount": "500", "bad": "5.0"})
    amount = Expr.call_extension_fn("u256", [Expr.context_attr("amount")])
    assert evaluator.interpret(Expr.is_eq(amount, u256_expr("500"))) is True

    with pytest.raises(ExtensionEvaluationError):
        evaluator.interpret(Expr.call_extension_fn("u256", [Expr.context_attr("bad")]))
    with pytest.raises(MissingAttributeError):
        evaluator.interpret(Expr.context_attr("missing"))


def test_context_is_copied(extensions):
    ctx = {"a": 1}
    evaluator = Evaluator(extensions, ctx)
    ctx["a"] = 2
    assert evaluator.interpret(Expr.context_attr("a")) == 1


def test_unknown_function(evaluator):
    with pytest.raises(UnknownFunctionError):
        evaluator.interpret(Expr.call_extension_fn("u256Plus", [Expr.val("1")]))


def test_constructor_cannot_be_called_as_method(evaluator):
    # "1.0".u256()
    expr = Expr.call_extension_fn("u256", [Expr.val("1.0")], CallStyle.METHOD_STYLE)
    assert str(expr) == '"1.0".u256()'
    with pytest.raises(CallStyleError):
        evaluator.interpret(expr)


def test_comparison_cannot_be_called_as_function(evaluator, u256_expr):
    expr = Expr.call_extension_fn("u256LessThan", [u256_expr("1"), u256_expr("2")])
    with pytest.raises(CallStyleError):
        evaluator.interpret(expr)


def test_comparison_rejects_mixed_types(evaluator, u256_expr, method_call):
    with pytest.raises(EvaluationTypeError):
        evaluator.interpret(method_call("u256LessThan", u256_expr("1"), Expr.val(2)))


def test_failed_extension_call_is_logged(evaluator, u256_expr, caplog):
    with caplog.at_level(logging.DEBUG, logger="policyext.runtime.evaluator"):
        with pytest.raises(ExtensionEvaluationError):
            evaluator.interpret(u256_expr("-1"))
    assert "u256(\"-1\")" in caplog.text


def test_restricted_evaluator_has_no_context(extensions, u256_expr):
    restricted = RestrictedEvaluator(extensions)
    assert restricted.interpret(Expr.is_eq(u256_expr("7"), u256_expr("07"))) is True
    with pytest.raises(MissingAttributeError):
        restricted.interpret(Expr.call_extension_fn("u256", [Expr.context_attr("amount")]))
