# policyext/validator/schemas.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Dict, Iterator, Optional, Sequence, Union

from policyext.core.errors import SchemaDriftError
from policyext.core.names import Name
from policyext.extensions import u256 as u256_runtime
from policyext.extensions.registry import Extensions
from policyext.validator.extension_schema import ExtensionFunctionType, ExtensionSchema
from policyext.validator.extensions import u256

logger = logging.getLogger(__name__)

SchemaBuilder = Callable[[Extensions], ExtensionSchema]

_SCHEMA_BUILDERS: Dict[Name, SchemaBuilder] = {
    u256_runtime.U256_FROM_STR_NAME: u256.extension_schema,
}


def _as_name(name: Union[Name, str]) -> Optional[Name]:
    return Name.try_parse(name) if isinstance(name, str) else name


class ExtensionSchemas:
    """
    Validator-side counterpart of Extensions: one schema per enabled
    extension. Built once per enabled set and shared read-only.
    """

    def __init__(self, schemas: Sequence[ExtensionSchema]) -> None:
        by_name = {}
        funcs = {}
        for schema in schemas:
            by_name[schema.name] = schema
            for ft in schema.function_types():
                funcs[ft.name] = ft
        self._by_name = MappingProxyType(by_name)
        self._funcs = MappingProxyType(funcs)

    @classmethod
    def from_extensions(
        cls,
        extensions: Extensions,
        builders: Optional[Dict[Name, SchemaBuilder]] = None,
    ) -> "ExtensionSchemas":
        """
        Build the schema for every enabled extension.

        :param extensions: The enabled extensions.
        :param builders: Schema builders by extension name; defaults to the shipped ones.
        :raises SchemaDriftError: If an enabled extension has no schema builder,
            or a builder finds its schema out of date.
        """
        builders = _SCHEMA_BUILDERS if builders is None else builders
        schemas = []
        for ext in extensions.extensions():
            builder = builders.get(ext.name)
            if builder is None:
                raise SchemaDriftError(f"no validator schema is defined for extension {ext.name}")
            schemas.append(builder(extensions))
        logger.debug("Built %d validator schemas", len(schemas))
        return cls(schemas)

    @classmethod
    def all_available(cls) -> "ExtensionSchemas":
        return cls.from_extensions(Extensions.all_available())

    def schemas(self) -> Iterator[ExtensionSchema]:
        return iter(self._by_name.values())

    def lookup_schema_mirror(self, name: Union[Name, str]) -> Optional[ExtensionSchema]:
        """Return the schema of the named extension, or None."""
        return self._by_name.get(_as_name(name))

    def function_type(self, name: Union[Name, str]) -> Optional[ExtensionFunctionType]:
        """Return the static signature of the named function, or None."""
        return self._funcs.get(_as_name(name))
