# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of input types into flat lists of request-parameter records."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from typedschema.compiler.errors import InvalidTypeReference
from typedschema.compiler.grammar import TypeSpec, decode
from typedschema.model.types import InputType

# ###############
# Public Interface
# ###############

DEFAULT_LOCATION = "query"
PARAMETER_LOCATIONS = frozenset({"query", "path", "body", "header", "cookie", "formData"})


def split_location(definition: Any) -> tuple[str, Any]:
    """Split ``"<location>:<type ref>"`` on the first colon.

    A definition without a colon (or a list literal) is read from the query.

    Raises:
        InvalidTypeReference: If the location is not a known parameter location.
    """
    if not isinstance(definition, str) or ":" not in definition:
        return DEFAULT_LOCATION, definition
    location, rest = definition.split(":", 1)
    location = location.strip()
    if location not in PARAMETER_LOCATIONS:
        raise InvalidTypeReference(definition, f"unknown parameter location '{location}'")
    return location, rest


def build_parameters(
    input_type: InputType,
    compile_spec: Callable[[TypeSpec], dict[str, Any]],
) -> list[dict[str, Any]]:
    """Build one parameter record per declared parameter, in declaration order.

    Args:
        input_type: The input type to compile.
        compile_spec: Compiles a decoded reference to a schema fragment.

    Returns:
        Records of the form ``{"name", "in", "required", "schema"}``, with a
        ``description`` when the parameter declares one.
    """
    records: list[dict[str, Any]] = []
    for parameter in input_type.parameters:
        location, rest = split_location(parameter.type)
        spec = decode(rest, in_field=True)
        record: dict[str, Any] = {
            "name": parameter.name,
            "in": location,
            "required": spec.required,
            "schema": compile_spec(spec),
        }
        if parameter.description:
            record["description"] = parameter.description
        records.append(record)
    return records
