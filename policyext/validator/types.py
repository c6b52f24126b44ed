"""
Static types used by the validator.

The validator's lattice is independent of the runtime's declared types.
``Type.is_consistent_with`` is the single point where the two are compared,
which is what the schema mirror uses to detect drift.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from policyext.core.names import Name
from policyext.core.types import SchemaType, SchemaTypeKind


class TypeKind(Enum):
    """Kinds of static types."""
    NEVER = auto()      # Bottom type, subtype of everything
    BOOL = auto()
    LONG = auto()
    STRING = auto()
    EXTENSION = auto()  # Named extension type


_PRIMITIVE_TO_SCHEMA = {
    TypeKind.BOOL: SchemaTypeKind.BOOL,
    TypeKind.LONG: SchemaTypeKind.LONG,
    TypeKind.STRING: SchemaTypeKind.STRING,
}


@dataclass(frozen=True)
class Type:
    kind: TypeKind
    name: Optional[Name] = None

    @classmethod
    def never(cls) -> "Type":
        return cls(TypeKind.NEVER)

    @classmethod
    def primitive_boolean(cls) -> "Type":
        return cls(TypeKind.BOOL)

    @classmethod
    def primitive_long(cls) -> "Type":
        return cls(TypeKind.LONG)

    @classmethod
    def primitive_string(cls) -> "Type":
        return cls(TypeKind.STRING)

    @classmethod
    def extension(cls, name: Name) -> "Type":
        return cls(TypeKind.EXTENSION, name)

    @classmethod
    def of_literal(cls, value) -> "Type":
        if isinstance(value, bool):
            return cls.primitive_boolean()
        if isinstance(value, int):
            return cls.primitive_long()
        if isinstance(value, str):
            return cls.primitive_string()
        raise TypeError(f"not a literal: {value!r}")

    def is_subtype(self, other: "Type") -> bool:
        return self.kind is TypeKind.NEVER or self == other

    def is_consistent_with(self, schema_type: SchemaType) -> bool:
        """
        Whether values of this static type may carry the given declared
        runtime type. Never is consistent with nothing.
        """
        if self.kind is TypeKind.EXTENSION:
            return schema_type.kind is SchemaTypeKind.EXTENSION and schema_type.name == self.name
        return _PRIMITIVE_TO_SCHEMA.get(self.kind) is schema_type.kind

    def __str__(self) -> str:
        if self.kind is TypeKind.EXTENSION:
            return str(self.name)
        return self.kind.name.capitalize()
