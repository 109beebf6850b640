# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type-definition model for typedschema (products, sums, maps, unions, inputs)."""

from typedschema.model.catalog import TypeCatalog, TypeCatalogError
from typedschema.model.types import (
    DEFINITION_CLASSES,
    JSON_CONTENT_TYPE,
    MULTIPART_CONTENT_TYPE,
    FieldDef,
    InputType,
    MapType,
    ParameterDef,
    ProductType,
    ScalarType,
    SumType,
    TypeDefinition,
    TypeExpr,
    UnionType,
)

__all__ = [
    # Type definitions
    "TypeExpr",
    "FieldDef",
    "ParameterDef",
    "ScalarType",
    "ProductType",
    "SumType",
    "MapType",
    "UnionType",
    "InputType",
    "TypeDefinition",
    "DEFINITION_CLASSES",
    "JSON_CONTENT_TYPE",
    "MULTIPART_CONTENT_TYPE",
    # Catalog
    "TypeCatalog",
    "TypeCatalogError",
]
