# policyext/extensions/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterator, Optional, Sequence, Tuple, Union

from policyext.core.errors import ExtensionInvariantError, ExtensionRegistryError
from policyext.core.extension import Extension, ExtensionFunction
from policyext.core.names import Name
from policyext.core.values import Value

logger = logging.getLogger(__name__)


def _as_name(name: Union[Name, str]) -> Optional[Name]:
    return Name.try_parse(name) if isinstance(name, str) else name


class Extensions:
    """
    The set of extensions enabled for a host. Hosts build one during
    initialization and pass it to every evaluator and validator they create;
    there is no process-wide registry.

    Runtime Invariants:
    - Extension names are unique within the set
    - Function names are unique across all extensions in the set
    - The set never changes after construction
    """

    def __init__(self, extensions: Sequence[Extension] = ()) -> None:
        """
        :param extensions: The extensions to enable, in order.
        :raises ExtensionRegistryError: On duplicate extension or function names.
        """
        self._extensions: Tuple[Extension, ...] = tuple(extensions)
        by_name = {}
        funcs = {}
        for ext in self._extensions:
            if ext.name in by_name:
                raise ExtensionRegistryError(f"extension {ext.name} is enabled twice")
            by_name[ext.name] = ext
            for f in ext.funcs():
                if f.name in funcs:
                    raise ExtensionRegistryError(f"function {f.name} is defined by more than one extension")
                funcs[f.name] = f
        self._by_name = MappingProxyType(by_name)
        self._funcs = MappingProxyType(funcs)
        logger.debug("Enabled extensions: %s", ", ".join(str(n) for n in by_name) or "<none>")

    @classmethod
    def all_available(cls) -> "Extensions":
        """Every extension shipped with this package."""
        from policyext.extensions import u256

        return cls([u256.extension()])

    @classmethod
    def specific_extensions(cls, extensions: Sequence[Extension]) -> "Extensions":
        """Exactly the given extensions."""
        return cls(extensions)

    @classmethod
    def none(cls) -> "Extensions":
        """No extensions at all."""
        return cls(())

    def extensions(self) -> Iterator[Extension]:
        return iter(self._extensions)

    def lookup_extension(self, name: Union[Name, str]) -> Optional[Extension]:
        """Return the enabled extension with this name, or None."""
        return self._by_name.get(_as_name(name))

    def func(self, name: Union[Name, str]) -> Optional[ExtensionFunction]:
        """Return the enabled function with this name, or None."""
        return self._funcs.get(_as_name(name))

    def apply(self, name: Union[Name, str], args: Sequence[Value]) -> Value:
        """
        Invoke an extension function on evaluated arguments.

        Callers check that the function exists before dispatching here.

        :raises ExtensionInvariantError: If no enabled extension defines the function.
        :raises EvaluationError: If the function itself fails.
        """
        f = self.func(name)
        if f is None:
            raise ExtensionInvariantError(f"no enabled extension defines function {name}")
        return f.call(args)

    def __len__(self) -> int:
        return len(self._extensions)

    def __repr__(self) -> str:
        return f"Extensions({', '.join(str(n) for n in self._by_name)})"
