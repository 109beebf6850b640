# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compilation of type references into JSON Schema and OpenAPI schema fragments.

The compiler walks a decoded type reference recursively. Named types (product,
sum, map and union definitions) are either inlined at every occurrence or, in
``REF_SCHEMA`` mode, compiled once into a shared schema table and referenced
with ``$ref``. A recursion chain of the names currently being expanded stops
self-referential types: in ``REF_SCHEMA`` mode a repeated name becomes a
``$ref``; otherwise it is an :class:`UnterminatedRecursion` error.

Nullability depends on the dialect:

* JSON Schema and OpenAPI 3.1 widen the type, ``{"type": ["string", "null"]}``.
* OpenAPI 3.0 adds a flag, ``{"type": "string", "nullable": true}``.
"""

from __future__ import annotations

import copy
import enum
import logging
from dataclasses import dataclass, field, replace
from typing import Any

from typedschema.compiler.classifier import TypeKind, classify, kind_of
from typedschema.compiler.errors import InvalidTypeReference, UnterminatedRecursion
from typedschema.compiler.grammar import TypeSpec, decode
from typedschema.compiler.parameters import build_parameters
from typedschema.compiler.primitives import PrimitiveRegistry
from typedschema.model.catalog import TypeCatalog
from typedschema.model.types import DEFINITION_CLASSES, JSON_CONTENT_TYPE

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

Schema = dict[str, Any]

JSON_SCHEMA_REF_PREFIX = "#/definitions/"
OPEN_API_REF_PREFIX = "#/components/schemas/"


class CompilerMode(enum.IntFlag):
    """Output dialect and options; combine with ``|``.

    ``OPEN_API_31`` only changes nullable encoding. Set alone, it behaves like
    ``JSON_SCHEMA`` with OpenAPI ``$ref`` paths.
    """

    JSON_SCHEMA = 1
    OPEN_API = 2
    REF_SCHEMA = 4
    OPEN_API_31 = 8


class SchemaCompiler:
    """Compiles type references against a catalog of type definitions.

    A compiler keeps one schema table per output dialect (``$ref`` prefix and
    nullable encoding), filled with hoisted named schemas in ``REF_SCHEMA``
    mode. A compile call that fails leaves the tables unchanged.
    Instances are not safe for concurrent ``compile`` calls; independent
    instances are.

    Args:
        catalog: The known type definitions, as a catalog or an iterable of definitions.
        mode: Default mode for :meth:`compile`.
        primitives: Primitive registry; a new one with the built-ins by default.
        ref_prefix: Overrides the ``$ref`` prefix derived from the mode.
    """

    def __init__(
        self,
        catalog: TypeCatalog | Any = None,
        mode: CompilerMode = CompilerMode.JSON_SCHEMA,
        *,
        primitives: PrimitiveRegistry | None = None,
        ref_prefix: str | None = None,
    ) -> None:
        self._mode = _check_mode(mode)
        self._catalog = catalog if isinstance(catalog, TypeCatalog) else TypeCatalog(catalog or ())
        self._primitives = primitives if primitives is not None else PrimitiveRegistry()
        self._ref_prefix = ref_prefix
        self._tables: dict[_Dialect, dict[str, Schema]] = {}

    @property
    def mode(self) -> CompilerMode:
        return self._mode

    @property
    def catalog(self) -> TypeCatalog:
        return self._catalog

    @property
    def primitives(self) -> PrimitiveRegistry:
        return self._primitives

    @property
    def schemas(self) -> dict[str, Schema]:
        """Named schemas hoisted so far in the default mode's dialect, keyed by type name."""
        return self.schemas_for(self._mode)

    def schemas_for(self, mode: CompilerMode) -> dict[str, Schema]:
        """Named schemas hoisted so far in the dialect of *mode*, keyed by type name."""
        return copy.deepcopy(self._tables.get(self._dialect(_check_mode(mode)), {}))

    def content_type(self, type_ref: Any) -> str:
        """Media type of a request body carrying *type_ref*.

        A product type declares its own (``multipart/form-data`` for file
        uploads); every other reference is sent as JSON.
        """
        definition = type_ref
        if not isinstance(type_ref, DEFINITION_CLASSES):
            spec = decode(type_ref)
            if spec.base is None:
                return JSON_CONTENT_TYPE
            definition = classify(spec.base, self._catalog, self._primitives)[1]
        if definition is not None and kind_of(definition) is TypeKind.PRODUCT:
            return getattr(definition, "content_type", JSON_CONTENT_TYPE)
        return JSON_CONTENT_TYPE

    def compile(self, type_ref: Any, mode: CompilerMode | None = None) -> Schema | list[Schema]:
        """Compile a type reference or definition object to a schema fragment.

        Args:
            type_ref: A grammar string, a one-element list, or a type-definition object.
            mode: Overrides the compiler's default mode for this call. Hoisted
                schemas are shared only across calls emitting the same dialect.

        Returns:
            The schema fragment, or a list of parameter records for an input type.

        Raises:
            InvalidTypeReference: On malformed references or misplaced input types.
            UnknownPrimitiveType: If a base name is not registered anywhere.
            AmbiguousOrUnknownTypeKind: If a definition has no recognizable shape.
            UnterminatedRecursion: If a recursive type is compiled without ``REF_SCHEMA``.
        """
        mode = self._mode if mode is None else _check_mode(mode)
        dialect = self._dialect(mode)
        session = _Session(mode=mode, ref_prefix=dialect[0], schemas=dict(self._tables.get(dialect, {})))
        logger.debug("Compiling %r (mode=%s)", type_ref, mode)

        if isinstance(type_ref, DEFINITION_CLASSES):
            result = self._compile_definition(type_ref, session)
        else:
            result = self._compile_top(decode(type_ref), session)

        self._tables[dialect] = session.schemas
        return result

    def compile_parameters(self, type_ref: Any, mode: CompilerMode | None = None) -> list[Schema]:
        """Compile an input type to its parameter records.

        Raises:
            InvalidTypeReference: If *type_ref* does not name an input type.
        """
        if isinstance(type_ref, DEFINITION_CLASSES):
            kind = kind_of(type_ref)
        else:
            spec = decode(type_ref)
            kind = TypeKind.SCALAR if spec.base is None else classify(spec.base, self._catalog, self._primitives)[0]
        if kind is not TypeKind.INPUT:
            raise InvalidTypeReference(type_ref, "not an input type")
        result = self.compile(type_ref, mode)
        assert isinstance(result, list)
        return result

    def _dialect(self, mode: CompilerMode) -> _Dialect:
        if self._ref_prefix is not None:
            ref_prefix = self._ref_prefix
        elif mode & (CompilerMode.OPEN_API | CompilerMode.OPEN_API_31):
            ref_prefix = OPEN_API_REF_PREFIX
        else:
            ref_prefix = JSON_SCHEMA_REF_PREFIX
        return ref_prefix, _flag_nullable(mode)

    def _compile_top(self, spec: TypeSpec, session: _Session) -> Schema | list[Schema]:
        """Compile a top-level reference; only here may an input type appear."""
        if spec.base is not None:
            kind, definition = classify(spec.base, self._catalog, self._primitives)
            if kind is TypeKind.INPUT:
                if spec.nullable:
                    raise InvalidTypeReference(str(spec), "an input type cannot be nullable")
                return self._compile_parameters(definition, session)
        return self._compile_spec(spec, session)

    def _compile_definition(self, definition: Any, session: _Session) -> Schema | list[Schema]:
        kind = kind_of(definition)
        if kind is TypeKind.INPUT:
            return self._compile_parameters(definition, session)
        if kind is TypeKind.SCALAR:
            return definition.to_schema()
        return self._compile_named(kind, definition, False, session)

    def _compile_parameters(self, definition: Any, session: _Session) -> list[Schema]:
        return build_parameters(definition, lambda spec: self._compile_spec(spec, session))

    def _compile_spec(self, spec: TypeSpec, session: _Session) -> Schema:
        # `required` belongs to the enclosing field, not to the schema.
        key = (replace(spec, required=False), session.mode)
        cached = session.memo.get(key)
        if cached is not None:
            return copy.deepcopy(cached)

        if spec.element is not None:
            schema: Schema = {"type": "array", "items": self._compile_spec(spec.element, session)}
            schema = _make_nullable(schema, spec.nullable, session.flag_nullable)
        else:
            schema = self._compile_base(spec, session)

        session.memo[key] = schema
        return copy.deepcopy(schema)

    def _compile_base(self, spec: TypeSpec, session: _Session) -> Schema:
        assert spec.base is not None
        kind, definition = classify(spec.base, self._catalog, self._primitives)
        if kind is TypeKind.INPUT:
            raise InvalidTypeReference(str(spec), f"input type '{spec.base}' cannot be nested in another type")
        if kind is TypeKind.SCALAR:
            if definition is None:
                schema = self._primitives.resolve(spec.base)()
            else:
                schema = definition.to_schema()
            return _make_nullable(schema, spec.nullable, session.flag_nullable)
        return self._compile_named(kind, definition, spec.nullable, session)

    def _compile_named(self, kind: TypeKind, definition: Any, nullable: bool, session: _Session) -> Schema:
        name = definition.name

        if session.mode & CompilerMode.REF_SCHEMA:
            if name in session.schemas:
                logger.debug("Reusing hoisted schema '%s'", name)
            elif name in session.chain:
                logger.debug("Recursive reference to '%s' emitted as $ref", name)
            else:
                session.schemas[name] = self._expand(kind, definition, session)
                logger.debug("Hoisted schema '%s'", name)
            return _make_nullable({"$ref": session.ref_prefix + name}, nullable, session.flag_nullable)

        if name in session.chain:
            raise UnterminatedRecursion([*session.chain, name])
        return _make_nullable(self._expand(kind, definition, session), nullable, session.flag_nullable)

    def _expand(self, kind: TypeKind, definition: Any, session: _Session) -> Schema:
        """Compile the body of a named type with its name on the recursion chain."""
        session.chain.append(definition.name)
        try:
            if kind is TypeKind.PRODUCT:
                return self._compile_product(definition, session)
            if kind is TypeKind.SUM:
                return definition.to_schema()
            if kind is TypeKind.MAP:
                return self._compile_map(definition, session)
            return self._compile_union(definition, session)
        finally:
            session.chain.pop()

    def _compile_product(self, definition: Any, session: _Session) -> Schema:
        properties: dict[str, Schema] = {}
        required: list[str] = []

        for field_def in definition.fields:
            spec = decode(field_def.type, in_field=True)
            if field_def.enum:
                # An explicit enum replaces whatever the declared type compiles to.
                schema: Schema = _make_nullable(
                    {"type": "string", "enum": list(field_def.enum)}, spec.nullable, session.flag_nullable
                )
            else:
                schema = self._compile_spec(spec, session)
            if field_def.title:
                schema["title"] = field_def.title
            if field_def.description:
                schema["description"] = field_def.description
            properties[field_def.name] = schema
            if spec.required:
                required.append(field_def.name)

        result: Schema = {"type": "object", "properties": properties}
        if required:
            result["required"] = required
        if getattr(definition, "title", None):
            result["title"] = definition.title
        if getattr(definition, "description", None):
            result["description"] = definition.description
        return result

    def _compile_map(self, definition: Any, session: _Session) -> Schema:
        schema = definition.to_schema()
        if definition.value_type is not None:
            schema["additionalProperties"] = self._compile_spec(decode(definition.value_type), session)
        if definition.example:
            schema["example"] = copy.deepcopy(definition.example)
        return schema

    def _compile_union(self, definition: Any, session: _Session) -> Schema:
        return {"oneOf": [self._compile_spec(decode(t), session) for t in definition.allowed_types]}


# ################
# Implementation
# ################


@dataclass
class _Session:
    """State of one top-level compile call.

    Attributes:
        schemas: Staged copy of the compiler's schema table, committed on success.
        chain: Names of the named types currently being expanded.
        memo: Compiled fragments keyed by (reference, mode).
    """

    mode: CompilerMode
    ref_prefix: str
    schemas: dict[str, Schema]
    chain: list[str] = field(default_factory=list)
    memo: dict[tuple[TypeSpec, CompilerMode], Schema] = field(default_factory=dict)

    @property
    def flag_nullable(self) -> bool:
        return _flag_nullable(self.mode)


# ($ref prefix, OpenAPI 3.0 nullable flag); schemas hoisted for one dialect are
# never reused by another.
_Dialect = tuple[str, bool]


def _flag_nullable(mode: CompilerMode) -> bool:
    return bool(mode & CompilerMode.OPEN_API) and not mode & CompilerMode.OPEN_API_31


def _check_mode(mode: CompilerMode | int) -> CompilerMode:
    mode = CompilerMode(mode)
    if mode & CompilerMode.JSON_SCHEMA and mode & CompilerMode.OPEN_API:
        raise ValueError("JSON_SCHEMA and OPEN_API modes are mutually exclusive")
    return mode


def _make_nullable(schema: Schema, nullable: bool, flag_style: bool) -> Schema:
    """Return *schema* extended to also admit ``null``."""
    if not nullable:
        return schema
    if "oneOf" in schema and "type" not in schema:
        return {**schema, "oneOf": [*schema["oneOf"], {"type": "null"}]}

    schema_type = schema.get("type")
    if schema_type is None:
        # $ref and other untyped fragments cannot carry the marker themselves.
        if flag_style:
            return {"allOf": [schema], "nullable": True}
        return {"oneOf": [schema, {"type": "null"}]}

    if flag_style:
        return {**schema, "nullable": True}
    if isinstance(schema_type, list):
        types = schema_type if "null" in schema_type else [*schema_type, "null"]
    else:
        types = [schema_type, "null"]
    return {**schema, "type": types}
