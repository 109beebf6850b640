# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""YAML parser for type-definition files.

A definition file is a mapping with a ``types`` list. Each entry is one type
definition selected by its ``kind``, with an optional ``identifier`` under which
it is registered (defaults to its ``name``)::

    types:
      - kind: sum
        name: Status
        values: [available, sold]
      - kind: product
        name: Pet
        fields:
          id: "!integer"
          status: Status?
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter, ValidationError

from typedschema.model.catalog import TypeCatalog, TypeCatalogError
from typedschema.model.types import TypeDefinition

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class DefinitionFileError(Exception):
    """Raised when a definition file cannot be read or is invalid."""


def load_definitions(path: Path) -> TypeCatalog:
    """Load a YAML definition file into a catalog.

    Args:
        path: Path to the YAML definition file.

    Returns:
        A catalog holding the definitions in file order.

    Raises:
        DefinitionFileError: If the file cannot be read or the definitions are invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DefinitionFileError(f"Definition file not found: {path}") from None
    except OSError as exc:
        raise DefinitionFileError(f"Cannot read definition file: {exc}") from exc

    return parse_definitions(text, source_label=str(path))


def parse_definitions(text: str, source_label: str = "<string>") -> TypeCatalog:
    """Parse definition-file YAML text into a catalog.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        DefinitionFileError: If the YAML is invalid or an entry does not describe
            a valid type definition.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DefinitionFileError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise DefinitionFileError(f"{source_label}: definition file must be a YAML mapping")
    if "types" not in data:
        raise DefinitionFileError(f"{source_label}: missing required field 'types'")
    entries = data["types"]
    if not isinstance(entries, list):
        raise DefinitionFileError(f"{source_label}: 'types' must be a list")

    catalog = TypeCatalog()
    for index, entry in enumerate(entries):
        identifier, definition = _parse_entry(entry, f"{source_label}: types[{index}]")
        try:
            catalog.register(definition, identifier=identifier)
        except TypeCatalogError as exc:
            raise DefinitionFileError(f"{source_label}: types[{index}]: {exc}") from exc

    logger.debug("Loaded %d type definitions from %s", len(catalog), source_label)
    return catalog


# ################
# Implementation
# ################

_DEFINITION_ADAPTER: TypeAdapter[Any] = TypeAdapter(TypeDefinition)


def _parse_entry(entry: object, location: str) -> tuple[str | None, Any]:
    """Validate a single ``types`` entry; returns its identifier and definition."""
    if not isinstance(entry, dict):
        raise DefinitionFileError(f"{location} must be a YAML mapping")

    data = dict(entry)
    identifier = data.pop("identifier", None)
    if identifier is not None and not isinstance(identifier, str):
        raise DefinitionFileError(f"{location}: 'identifier' must be a string")

    try:
        definition = _DEFINITION_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise DefinitionFileError(f"{location}: invalid type definition: {exc}") from exc
    return identifier, definition
