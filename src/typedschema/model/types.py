# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-definition variants for the typedschema type system.

Every variant is an immutable declarative model. Fields and parameters may be
written as a mapping shorthand (``{"id": "!integer"}``); declaration order is
preserved.
"""

from __future__ import annotations

import copy
import re
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

# A type reference as written by type authors: a grammar string such as
# "!integer", "Pet?" or "[string?]", or a one-element list wrapping another
# reference.
TypeExpr = str | list[Any]

JSON_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"

# Names of primitives and type identifiers, e.g. "integer" or "shop.Pet".
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.]*")


class FieldDef(BaseModel):
    """A named, typed field of a product type."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeExpr
    title: str | None = None
    description: str | None = None
    enum: list[str] | None = None


class ParameterDef(BaseModel):
    """A request parameter of an input type, e.g. ``"query:!integer"``."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeExpr
    description: str | None = None


class ScalarType(BaseModel):
    """A primitive type with a fixed schema fragment."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    name: str
    fragment: dict[str, Any]

    def to_schema(self) -> dict[str, Any]:
        return copy.deepcopy(self.fragment)


class ProductType(BaseModel):
    """An object type with named, ordered fields."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["product"] = "product"
    name: str
    fields: list[FieldDef] = _Field(default_factory=list)
    title: str | None = None
    description: str | None = None
    content_type: str = JSON_CONTENT_TYPE

    @field_validator("fields", mode="before")
    @classmethod
    def _expand_fields(cls, value: Any) -> Any:
        return _expand_members(value)


class SumType(BaseModel):
    """An enumeration of string literals."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["sum"] = "sum"
    name: str
    values: list[str] = _Field(min_length=1)

    def to_schema(self) -> dict[str, Any]:
        return {"type": "string", "enum": list(self.values)}


class MapType(BaseModel):
    """An object type whose keys are free-form and whose values share one type.

    Attributes:
        value_type: Type reference of every value, or ``None`` for untyped values.
        example: Example mapping attached verbatim to the schema when non-empty.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["map"] = "map"
    name: str
    value_type: TypeExpr | None = None
    example: dict[str, Any] = _Field(default_factory=dict)

    def to_schema(self) -> dict[str, Any]:
        return {"type": "object"}


class UnionType(BaseModel):
    """A type that is any one of several alternatives."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["union"] = "union"
    name: str
    allowed_types: list[TypeExpr] = _Field(min_length=1)


class InputType(BaseModel):
    """The parameter list of an API operation."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["input"] = "input"
    name: str
    parameters: list[ParameterDef] = _Field(default_factory=list)

    @field_validator("parameters", mode="before")
    @classmethod
    def _expand_parameters(cls, value: Any) -> Any:
        return _expand_members(value)


# Any type definition; the `kind` discriminator selects the variant when
# validating plain data (e.g. a YAML definition file).
TypeDefinition = Annotated[
    ScalarType | ProductType | SumType | MapType | UnionType | InputType,
    _Field(discriminator="kind"),
]

DEFINITION_CLASSES: tuple[type[BaseModel], ...] = (
    ScalarType,
    ProductType,
    SumType,
    MapType,
    UnionType,
    InputType,
)


# ################
# Implementation
# ################


def _expand_members(value: Any) -> Any:
    """Turn ``{name: ref}`` / ``{name: {type: ref, ...}}`` shorthand into a member list."""
    if not isinstance(value, dict):
        return value
    members: list[Any] = []
    for name, spec in value.items():
        if isinstance(spec, dict):
            members.append({"name": name, **spec})
        else:
            members.append({"name": name, "type": spec})
    return members
