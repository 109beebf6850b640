# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the typedschema command-line interface."""

import argparse
import json
import logging
import sys
from pathlib import Path

from typedschema.compiler.classifier import kind_of
from typedschema.compiler.errors import SchemaCompileError
from typedschema.compiler.schema_compiler import CompilerMode, SchemaCompiler
from typedschema.definitions.loader import DefinitionFileError, load_definitions

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the typedschema CLI."""
    parser = argparse.ArgumentParser(
        prog="typedschema",
        description="typedschema - compile type definitions to JSON Schema and OpenAPI schemas",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log compiler decisions to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # compile subcommand
    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a type reference to a schema",
        description="Compile a type reference against a YAML definition file and print the schema as JSON.",
    )
    compile_parser.add_argument("definitions", help="Path to the YAML definition file")
    compile_parser.add_argument("type_ref", metavar="TYPE_REF", help="Type reference, e.g. 'Pet' or '[Pet]?'")
    compile_parser.add_argument(
        "--dialect",
        choices=sorted(_DIALECTS),
        default="json-schema",
        help="Schema dialect to emit (default: json-schema)",
    )
    compile_parser.add_argument(
        "--ref",
        action="store_true",
        help="Hoist named types into a shared schema table and reference them with $ref",
    )
    compile_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        help="List the types declared in a definition file",
        description="Print the identifier and kind of every type in a YAML definition file.",
    )
    list_parser.add_argument("definitions", help="Path to the YAML definition file")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_DIALECTS: dict[str, CompilerMode] = {
    "json-schema": CompilerMode.JSON_SCHEMA,
    "openapi": CompilerMode.OPEN_API,
    "openapi-3.1": CompilerMode.OPEN_API | CompilerMode.OPEN_API_31,
}


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "compile":
        return _cmd_compile(args)
    if args.command == "list":
        return _cmd_list(args)
    return 0


def _cmd_compile(args: argparse.Namespace) -> int:
    """Handle the compile subcommand."""
    try:
        catalog = load_definitions(Path(args.definitions))
    except DefinitionFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    mode = _DIALECTS[args.dialect]
    if args.ref:
        mode |= CompilerMode.REF_SCHEMA

    compiler = SchemaCompiler(catalog, mode)
    try:
        schema = compiler.compile(args.type_ref)
    except SchemaCompileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output = {"schema": schema, "schemas": compiler.schemas} if args.ref else schema
    print(json.dumps(output, indent=args.indent))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    """Handle the list subcommand."""
    try:
        catalog = load_definitions(Path(args.definitions))
    except DefinitionFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for identifier in catalog.identifiers():
        definition = catalog.get(identifier)
        print(f"{identifier}\t{kind_of(definition).value}")
    return 0
