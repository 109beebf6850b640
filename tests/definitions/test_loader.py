# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the YAML definition-file loader."""

from pathlib import Path

import pytest

from typedschema.compiler.schema_compiler import CompilerMode, SchemaCompiler
from typedschema.definitions import DefinitionFileError, load_definitions, parse_definitions
from typedschema.model import InputType, MapType, ProductType, ScalarType, SumType, UnionType

# ###############
# Helpers
# ###############

_PETSTORE = """\
types:
  - kind: sum
    name: Status
    values: [available, pending, sold]
  - kind: product
    name: Pet
    description: A pet in the store.
    fields:
      id: "!integer"
      name:
        type: "!string"
        title: Name
      status: Status?
      tags: "[string]"
  - kind: map
    name: Inventory
    value_type: integer
    example:
      available: 3
  - kind: union
    name: Id
    allowed_types: [string, integer]
  - kind: input
    name: FindPet
    parameters:
      petId:
        type: "path:!integer"
        description: ID of the pet.
  - kind: scalar
    identifier: shop.Email
    name: Email
    fragment:
      type: string
      format: email
"""


def _write_definitions(tmp_path: Path, content: str) -> Path:
    """Write a definition file and return its path."""
    definition_file = tmp_path / "types.yaml"
    definition_file.write_text(content, encoding="utf-8")
    return definition_file


# ###############
# Normal Cases
# ###############


def test_load_all_kinds(tmp_path: Path) -> None:
    """Every definition kind is parsed into its model class, in file order."""
    catalog = load_definitions(_write_definitions(tmp_path, _PETSTORE))

    assert catalog.identifiers() == ["Status", "Pet", "Inventory", "Id", "FindPet", "shop.Email"]
    assert isinstance(catalog.get("Status"), SumType)
    assert isinstance(catalog.get("Pet"), ProductType)
    assert isinstance(catalog.get("Inventory"), MapType)
    assert isinstance(catalog.get("Id"), UnionType)
    assert isinstance(catalog.get("FindPet"), InputType)
    assert isinstance(catalog.get("shop.Email"), ScalarType)


def test_field_shorthand_is_expanded(tmp_path: Path) -> None:
    catalog = load_definitions(_write_definitions(tmp_path, _PETSTORE))
    pet = catalog.get("Pet")

    assert [f.name for f in pet.fields] == ["id", "name", "status", "tags"]
    assert pet.fields[1].title == "Name"
    assert pet.description == "A pet in the store."


def test_loaded_catalog_compiles(tmp_path: Path) -> None:
    """A loaded catalog can be handed straight to the compiler."""
    catalog = load_definitions(_write_definitions(tmp_path, _PETSTORE))
    compiler = SchemaCompiler(catalog, CompilerMode.OPEN_API | CompilerMode.REF_SCHEMA)

    assert compiler.compile("Pet") == {"$ref": "#/components/schemas/Pet"}
    assert compiler.schemas["Pet"]["properties"]["status"] == {
        "allOf": [{"$ref": "#/components/schemas/Status"}],
        "nullable": True,
    }
    assert compiler.schemas["Pet"]["required"] == ["id", "name"]


def test_empty_types_list() -> None:
    assert len(parse_definitions("types: []\n")) == 0


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DefinitionFileError, match="Definition file not found"):
        load_definitions(tmp_path / "missing.yaml")


def test_invalid_yaml() -> None:
    with pytest.raises(DefinitionFileError, match="Invalid YAML in types.yaml"):
        parse_definitions("types: [unclosed\n", source_label="types.yaml")


def test_top_level_must_be_mapping() -> None:
    with pytest.raises(DefinitionFileError, match="must be a YAML mapping"):
        parse_definitions("- kind: sum\n")


def test_missing_types_field() -> None:
    with pytest.raises(DefinitionFileError, match="missing required field 'types'"):
        parse_definitions("definitions: []\n")


def test_types_must_be_a_list() -> None:
    with pytest.raises(DefinitionFileError, match="'types' must be a list"):
        parse_definitions("types: Pet\n")


def test_entry_must_be_mapping() -> None:
    with pytest.raises(DefinitionFileError, match=r"types\[0\] must be a YAML mapping"):
        parse_definitions("types:\n  - Pet\n")


def test_unknown_kind() -> None:
    with pytest.raises(DefinitionFileError, match=r"types\[0\]: invalid type definition"):
        parse_definitions("types:\n  - kind: record\n    name: Pet\n")


def test_sum_without_values() -> None:
    with pytest.raises(DefinitionFileError, match="invalid type definition"):
        parse_definitions("types:\n  - kind: sum\n    name: Status\n    values: []\n")


def test_identifier_must_be_string() -> None:
    with pytest.raises(DefinitionFileError, match="'identifier' must be a string"):
        parse_definitions("types:\n  - kind: map\n    name: Labels\n    identifier: 42\n")


def test_duplicate_name() -> None:
    content = """\
types:
  - kind: map
    name: Labels
  - kind: sum
    name: Labels
    values: [a]
"""
    with pytest.raises(DefinitionFileError, match=r"types\[1\]: Duplicate type"):
        parse_definitions(content)
