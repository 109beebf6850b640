# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compile declarative type definitions to JSON Schema and OpenAPI schemas."""

from typedschema.compiler import CompilerMode, SchemaCompiler
from typedschema.model import TypeCatalog

__all__ = [
    "CompilerMode",
    "SchemaCompiler",
    "TypeCatalog",
]
