# policyext/core/names.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

_IDENT_RE = re.compile(r"[_a-zA-Z][_a-zA-Z0-9]*")


@dataclass(frozen=True)
class Name:
    """
    A possibly namespaced identifier naming an extension, an extension type or
    an extension function, e.g. ``u256`` or ``Acme::u256LessThan``.
    """

    basename: str
    path: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for part in (*self.path, self.basename):
            if not _IDENT_RE.fullmatch(part):
                raise ValueError(f"invalid identifier: {part!r}")

    @classmethod
    def parse_unqualified_name(cls, text: str) -> "Name":
        """
        Parse a name with no namespace.

        :param text: The identifier.
        :raises ValueError: If text is not a valid identifier.
        """
        return cls(text)

    @classmethod
    def parse(cls, text: str) -> "Name":
        """
        Parse a name that may carry a ``::``-separated namespace.

        :raises ValueError: If any component is not a valid identifier.
        """
        *path, basename = text.split("::")
        return cls(basename, tuple(path))

    @classmethod
    def try_parse(cls, text: str) -> Optional["Name"]:
        """Like parse, but return None for text that is not a valid name."""
        try:
            return cls.parse(text)
        except ValueError:
            return None

    def __str__(self) -> str:
        return "::".join((*self.path, self.basename))
