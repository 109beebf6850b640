# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while compiling type references to schemas.

All of them describe a static defect in the type definitions. They are never
retried, and a compile call that raises one produces no schema.
"""

from __future__ import annotations

from collections.abc import Sequence

# ###############
# Public Interface
# ###############


class SchemaCompileError(Exception):
    """Base class for every error raised by the schema compiler."""


class InvalidTypeReference(SchemaCompileError):
    """Raised when a type reference does not follow the type grammar.

    Attributes:
        reference: The offending reference as written.
        reason: What is wrong with it.
    """

    def __init__(self, reference: object, reason: str) -> None:
        super().__init__(f"Invalid type reference {reference!r}: {reason}")
        self.reference = reference
        self.reason = reason


class UnknownPrimitiveType(SchemaCompileError):
    """Raised when a base name is neither a registered primitive nor a known type."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown type '{name}': not a registered primitive or type definition")
        self.name = name


class AmbiguousOrUnknownTypeKind(SchemaCompileError):
    """Raised when a resolved definition matches none of the type variant shapes."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot determine the kind of type '{name}'")
        self.name = name


class UnterminatedRecursion(SchemaCompileError):
    """Raised when a recursive type is compiled without reference extraction.

    Attributes:
        chain: The type names being expanded, ending with the repeated name.
    """

    def __init__(self, chain: Sequence[str]) -> None:
        path = " -> ".join(f"'{name}'" for name in chain)
        super().__init__(f"Recursive type {path} can only be compiled with REF_SCHEMA enabled")
        self.chain = tuple(chain)
