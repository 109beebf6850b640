# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Decoder for the compact type-reference grammar.

A reference is parsed once, at the boundary, into a :class:`TypeSpec`:

* ``!X``   required (only inside a field or parameter definition)
* ``X?``   nullable
* ``[X]``  array of X; the element is decoded on its own, so ``[X?]`` and
  ``[X]?`` differ
* ``["X"]`` a one-element list is the same as ``[X]``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from typedschema.compiler.errors import InvalidTypeReference
from typedschema.model.types import IDENTIFIER_PATTERN

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class TypeSpec:
    """A decoded type reference.

    Attributes:
        base: Primitive name or type identifier; ``None`` for arrays.
        required: Whether the enclosing field or parameter is required.
        nullable: Whether this occurrence also admits ``null``.
        element: Decoded element reference when this is an array.
    """

    base: str | None = None
    required: bool = False
    nullable: bool = False
    element: TypeSpec | None = None

    @property
    def is_array(self) -> bool:
        return self.element is not None

    def __str__(self) -> str:
        text = f"[{self.element}]" if self.element is not None else str(self.base)
        if self.nullable:
            text += "?"
        if self.required:
            text = "!" + text
        return text


def decode(definition: Any, *, in_field: bool = False) -> TypeSpec:
    """Decode a type reference into a :class:`TypeSpec`.

    Args:
        definition: A grammar string or a one-element list.
        in_field: Whether the reference appears in a field or parameter
            definition, the only place a leading ``!`` is allowed.

    Returns:
        The decoded reference. Whether its base name exists is not checked here.

    Raises:
        InvalidTypeReference: If the reference does not follow the grammar.
    """
    if isinstance(definition, (list, tuple)):
        if len(definition) != 1:
            raise InvalidTypeReference(definition, "an array literal must wrap exactly one element type")
        return TypeSpec(element=decode(definition[0]))

    if not isinstance(definition, str):
        raise InvalidTypeReference(definition, "expected a string or a one-element list")

    text = definition.strip()
    required = False
    if text.startswith("!"):
        if not in_field:
            raise InvalidTypeReference(definition, "'!' is only allowed on field and parameter definitions")
        required = True
        text = text[1:]

    nullable = False
    if text.endswith("?"):
        nullable = True
        text = text[:-1]
        if text.endswith("?"):
            raise InvalidTypeReference(definition, "only one '?' marker is allowed")

    if text.startswith("[") or text.endswith("]"):
        if not (text.startswith("[") and text.endswith("]")):
            raise InvalidTypeReference(definition, "unbalanced array brackets")
        element = decode(text[1:-1])
        return TypeSpec(required=required, nullable=nullable, element=element)

    if not text:
        raise InvalidTypeReference(definition, "missing type name")
    if not IDENTIFIER_PATTERN.fullmatch(text):
        raise InvalidTypeReference(definition, f"'{text}' is not a valid type name")

    return TypeSpec(base=text, required=required, nullable=nullable)
