"""
Type definitions and enums shared by the runtime half of the extension mechanism.

This module contains the call styles and the declared (runtime) types that
extension functions are tagged with. The validator has its own static type
lattice in ``policyext.validator.types``; the two meet only through
``Type.is_consistent_with``.

Design:
- No runtime dependencies on other modules besides names
- Only contains type definitions and enums
- Used by values, extension and the evaluator
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from policyext.core.names import Name


class CallStyle(Enum):
    """Defines how an extension function is written in a policy.

    Used by the evaluator and validator to reject calls written in the
    wrong form, e.g. ``"1".u256()``.
    """
    FUNCTION_STYLE = auto()  # f(a, b)
    METHOD_STYLE = auto()    # a.f(b), needs at least one argument


class SchemaTypeKind(Enum):
    """Kinds of values an extension function can declare."""
    BOOL = auto()
    LONG = auto()
    STRING = auto()
    EXTENSION = auto()


@dataclass(frozen=True)
class SchemaType:
    """A declared runtime type.

    Extension types carry the name of their extension; primitive types do not.
    """

    kind: SchemaTypeKind
    name: Optional[Name] = None

    @classmethod
    def bool(cls) -> "SchemaType":
        return cls(SchemaTypeKind.BOOL)

    @classmethod
    def long(cls) -> "SchemaType":
        return cls(SchemaTypeKind.LONG)

    @classmethod
    def string(cls) -> "SchemaType":
        return cls(SchemaTypeKind.STRING)

    @classmethod
    def extension(cls, name: Name) -> "SchemaType":
        return cls(SchemaTypeKind.EXTENSION, name)

    def __str__(self) -> str:
        if self.kind is SchemaTypeKind.EXTENSION:
            return str(self.name)
        return self.kind.name.capitalize()
