# tests/unit/test_expr.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from policyext.core.expr import Expr, ExprKind
from policyext.core.names import Name
from policyext.core.types import CallStyle


def test_call_expression():
    e = Expr.call_extension_fn("u256", [Expr.val("12")])
    assert e.kind is ExprKind.CALL
    assert e.fn_name == Name("u256")
    assert e.style is CallStyle.FUNCTION_STYLE
    assert str(e) == 'u256("12")'


def test_method_call_rendering(u256_expr, method_call):
    e = method_call("u256LessThan", u256_expr("1"), u256_expr("2"))
    assert str(e) == 'u256("1").u256LessThan(u256("2"))'


def test_method_call_needs_receiver():
    with pytest.raises(ValueError):
        Expr.call_extension_fn("u256LessThan", [], CallStyle.METHOD_STYLE)


def test_string_literal_detection():
    assert Expr.val("1").is_string_literal
    assert not Expr.val(1).is_string_literal
    assert not Expr.context_attr("amount").is_string_literal


def test_rendering_of_builtins():
    assert str(Expr.is_eq(Expr.val(1), Expr.context_attr("n"))) == "1 == context.n"
    assert str(Expr.less(Expr.val(1), Expr.val(2))) == "1 < 2"


def test_unsupported_literal():
    with pytest.raises(TypeError):
        Expr.val(1.5)
