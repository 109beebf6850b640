# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline: type-reference decoding, classification, and schema emission."""

from typedschema.compiler.classifier import TypeKind, classify, kind_of
from typedschema.compiler.errors import (
    AmbiguousOrUnknownTypeKind,
    InvalidTypeReference,
    SchemaCompileError,
    UnknownPrimitiveType,
    UnterminatedRecursion,
)
from typedschema.compiler.grammar import TypeSpec, decode
from typedschema.compiler.parameters import PARAMETER_LOCATIONS, build_parameters, split_location
from typedschema.compiler.primitives import PrimitiveRegistry
from typedschema.compiler.schema_compiler import (
    JSON_SCHEMA_REF_PREFIX,
    OPEN_API_REF_PREFIX,
    CompilerMode,
    SchemaCompiler,
)

__all__ = [
    # Grammar
    "TypeSpec",
    "decode",
    # Primitives and classification
    "PrimitiveRegistry",
    "TypeKind",
    "classify",
    "kind_of",
    # Schema compilation
    "CompilerMode",
    "SchemaCompiler",
    "JSON_SCHEMA_REF_PREFIX",
    "OPEN_API_REF_PREFIX",
    "PARAMETER_LOCATIONS",
    "build_parameters",
    "split_location",
    # Errors
    "SchemaCompileError",
    "InvalidTypeReference",
    "UnknownPrimitiveType",
    "AmbiguousOrUnknownTypeKind",
    "UnterminatedRecursion",
]
