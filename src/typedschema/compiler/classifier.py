# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification of base type names into type categories.

A definition is classified by its shape (the attributes it exposes), checked
in a fixed precedence: input > product > sum > map > union > scalar.
"""

from __future__ import annotations

import enum
from typing import Any, Protocol, runtime_checkable

from typedschema.compiler.errors import AmbiguousOrUnknownTypeKind, UnknownPrimitiveType
from typedschema.compiler.primitives import PrimitiveRegistry
from typedschema.model.catalog import TypeCatalog

# ###############
# Public Interface
# ###############


class TypeKind(enum.Enum):
    """The category a base type name belongs to."""

    SCALAR = "scalar"
    PRODUCT = "product"
    SUM = "sum"
    MAP = "map"
    UNION = "union"
    INPUT = "input"


def kind_of(definition: Any) -> TypeKind:
    """Return the category of a type-definition object.

    Raises:
        AmbiguousOrUnknownTypeKind: If the object has none of the variant shapes.
    """
    for shape, kind in _SHAPES:
        if isinstance(definition, shape):
            return kind
    raise AmbiguousOrUnknownTypeKind(getattr(definition, "name", repr(definition)))


def classify(base: str, catalog: TypeCatalog, primitives: PrimitiveRegistry) -> tuple[TypeKind, Any | None]:
    """Classify a base type name (already stripped of grammar markers).

    Registered primitive names take precedence over catalog identifiers.

    Returns:
        The category and the resolved definition (``None`` for registered primitives).

    Raises:
        UnknownPrimitiveType: If *base* is neither a primitive nor a catalog identifier.
        AmbiguousOrUnknownTypeKind: If the catalog entry has none of the variant shapes.
    """
    if base in primitives:
        return TypeKind.SCALAR, None
    definition = catalog.get(base)
    if definition is None:
        raise UnknownPrimitiveType(base)
    return kind_of(definition), definition


# ################
# Implementation
# ################


@runtime_checkable
class _InputShape(Protocol):
    name: str
    parameters: list[Any]


@runtime_checkable
class _ProductShape(Protocol):
    name: str
    fields: list[Any]


@runtime_checkable
class _SumShape(Protocol):
    name: str
    values: list[str]


@runtime_checkable
class _MapShape(Protocol):
    name: str
    value_type: Any
    example: dict[str, Any]


@runtime_checkable
class _UnionShape(Protocol):
    name: str
    allowed_types: list[Any]


@runtime_checkable
class _ScalarShape(Protocol):
    name: str

    def to_schema(self) -> dict[str, Any]: ...


_SHAPES: list[tuple[type, TypeKind]] = [
    (_InputShape, TypeKind.INPUT),
    (_ProductShape, TypeKind.PRODUCT),
    (_SumShape, TypeKind.SUM),
    (_MapShape, TypeKind.MAP),
    (_UnionShape, TypeKind.UNION),
    (_ScalarShape, TypeKind.SCALAR),
]
