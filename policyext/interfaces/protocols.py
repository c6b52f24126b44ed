# policyext/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ExtensionValue(Protocol):
    """
    Protocol for payloads carried by extension values.

    Methods:
        typename(): Returns the qualified name of the extension type.

    Runtime Invariants:
    - Payloads are immutable after construction.
    - str() of a payload is its canonical text form.
    """

    def typename(self) -> Any:
        """Return the name of the extension type this payload belongs to."""
        ...


@runtime_checkable
class SupportsEquality(Protocol):
    """
    Capability used by the evaluator's built-in ``==``.

    Two values supporting equality are equal when their type names are equal
    and their payloads compare equal. The capability is not registered as an
    extension function.
    """

    def typename(self) -> Any: ...

    def __eq__(self, other: object) -> bool: ...
