# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Catalog of named type definitions, keyed by identifier."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from typedschema.model.types import IDENTIFIER_PATTERN

# ###############
# Public Interface
# ###############


class TypeCatalogError(Exception):
    """Raised when a definition cannot be added to a catalog."""


class TypeCatalog:
    """An ordered, append-only set of type definitions.

    Definitions are looked up by identifier (the definition name unless an
    explicit identifier is given). Names must also be unique, since the
    compiler hoists schemas under the definition name.
    """

    def __init__(self, definitions: Iterable[Any] = ()) -> None:
        self._by_identifier: dict[str, Any] = {}
        self._owners: dict[str, str] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: Any, *, identifier: str | None = None) -> None:
        """Add *definition* to the catalog.

        Raises:
            TypeCatalogError: If the identifier is malformed or already taken, or
                another definition already uses the same name.
        """
        identifier = identifier if identifier is not None else definition.name
        if not IDENTIFIER_PATTERN.fullmatch(identifier):
            raise TypeCatalogError(f"Invalid type identifier '{identifier}'")
        if identifier in self._by_identifier:
            raise TypeCatalogError(f"Duplicate type identifier '{identifier}'")
        owner = self._owners.get(definition.name)
        if owner is not None:
            raise TypeCatalogError(
                f"Duplicate type name '{definition.name}' (already used by '{owner}')"
            )
        self._by_identifier[identifier] = definition
        self._owners[definition.name] = identifier

    def get(self, identifier: str) -> Any | None:
        return self._by_identifier.get(identifier)

    def identifiers(self) -> list[str]:
        return list(self._by_identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._by_identifier

    def __iter__(self) -> Iterator[Any]:
        return iter(self._by_identifier.values())

    def __len__(self) -> int:
        return len(self._by_identifier)
