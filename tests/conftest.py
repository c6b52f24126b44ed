# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from policyext.core.expr import Expr
from policyext.core.types import CallStyle


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "property: mark test as a property-based test")


@pytest.fixture
def u256_extension():
    """A freshly built u256 runtime extension."""
    from policyext.extensions import u256

    return u256.extension()


@pytest.fixture
def extensions(u256_extension):
    """An enabled set holding only u256."""
    from policyext.extensions import Extensions

    return Extensions.specific_extensions([u256_extension])


@pytest.fixture
def schemas(extensions):
    """Validator schemas mirroring the enabled set."""
    from policyext.validator import ExtensionSchemas

    return ExtensionSchemas.from_extensions(extensions)


@pytest.fixture
def evaluator(extensions):
    """An evaluator with an empty request context."""
    from policyext.runtime import Evaluator

    return Evaluator(extensions)


@pytest.fixture
def u256_expr():
    """Returns a factory building ``u256("<text>")`` expressions."""

    def _factory(text):
        return Expr.call_extension_fn("u256", [Expr.val(text)])

    return _factory


@pytest.fixture
def method_call():
    """Returns a factory building method-style calls such as ``a.u256LessThan(b)``."""

    def _factory(name, receiver, *args):
        return Expr.call_extension_fn(name, [receiver, *args], CallStyle.METHOD_STYLE)

    return _factory


@pytest.fixture
def error_classes():
    """Provides a tuple of error classes for quick reference."""
    from policyext.core.errors import EvaluationError, PolicyExtError, SchemaDriftError, ValidationError

    return (PolicyExtError, EvaluationError, SchemaDriftError, ValidationError)
