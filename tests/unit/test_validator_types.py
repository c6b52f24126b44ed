# tests/unit/test_validator_types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import pytest

from policyext.core.names import Name
from policyext.core.types import SchemaType
from policyext.validator.types import Type


def test_consistency_with_runtime_types():
    u256 = Name("u256")
    assert Type.primitive_boolean().is_consistent_with(SchemaType.bool())
    assert Type.primitive_string().is_consistent_with(SchemaType.string())
    assert Type.primitive_long().is_consistent_with(SchemaType.long())
    assert Type.extension(u256).is_consistent_with(SchemaType.extension(u256))

    assert not Type.primitive_boolean().is_consistent_with(SchemaType.long())
    assert not Type.extension(u256).is_consistent_with(SchemaType.extension(Name("decimal")))
    assert not Type.extension(u256).is_consistent_with(SchemaType.string())
    assert not Type.never().is_consistent_with(SchemaType.bool())


def test_subtyping():
    assert Type.never().is_subtype(Type.primitive_long())
    assert Type.primitive_long().is_subtype(Type.primitive_long())
    assert not Type.primitive_long().is_subtype(Type.primitive_string())


def test_literal_types():
    assert Type.of_literal(True) == Type.primitive_boolean()
    assert Type.of_literal(3) == Type.primitive_long()
    assert Type.of_literal("3") == Type.primitive_string()
    with pytest.raises(TypeError):
        Type.of_literal(None)


def test_display():
    assert str(Type.primitive_string()) == "String"
    assert str(Type.extension(Name("u256"))) == "u256"
    assert str(SchemaType.bool()) == "Bool"
