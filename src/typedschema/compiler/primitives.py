# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry of primitive type names and their schema fragments."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from typedschema.compiler.errors import UnknownPrimitiveType
from typedschema.model.types import ScalarType

# ###############
# Public Interface
# ###############

SchemaProducer = Callable[[], dict[str, Any]]

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}:\d{2}$"
TIMESTAMP_PATTERN = r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$"


class PrimitiveRegistry:
    """Maps primitive type names to zero-argument schema producers.

    Each producer returns a fresh fragment, so callers may mutate the result.
    A new registry starts with the built-in primitives unless *builtins* is false.
    """

    def __init__(self, *, builtins: bool = True) -> None:
        self._producers: dict[str, SchemaProducer] = {}
        if builtins:
            for name, producer in _BUILTIN_PRIMITIVES.items():
                self.register(name, producer)

    def register(self, name: str, producer: SchemaProducer) -> None:
        """Add a primitive, replacing any existing entry with the same name."""
        self._producers[name] = producer

    def register_scalar(self, scalar: ScalarType) -> None:
        self.register(scalar.name, scalar.to_schema)

    def resolve(self, name: str) -> SchemaProducer:
        """Return the producer registered for *name*.

        Raises:
            UnknownPrimitiveType: If no primitive with that name is registered.
        """
        try:
            return self._producers[name]
        except KeyError:
            raise UnknownPrimitiveType(name) from None

    def names(self) -> list[str]:
        return list(self._producers)

    def __contains__(self, name: object) -> bool:
        return name in self._producers


# ################
# Implementation
# ################

_BUILTIN_PRIMITIVES: dict[str, SchemaProducer] = {
    "integer": lambda: {"type": "integer"},
    "number": lambda: {"type": "number"},
    "string": lambda: {"type": "string"},
    "boolean": lambda: {"type": "boolean"},
    "binary": lambda: {"type": "string", "format": "binary"},
    "dict": lambda: {"type": "object"},
    "date": lambda: {"type": "string", "format": "date", "pattern": DATE_PATTERN},
    "time": lambda: {"type": "string", "pattern": TIME_PATTERN},
    "timestamp": lambda: {"type": "string", "format": "timestamp", "pattern": TIMESTAMP_PATTERN},
}
