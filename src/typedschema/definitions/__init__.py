# Copyright 2026 typedschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loading type definitions from YAML definition files."""

from typedschema.definitions.loader import DefinitionFileError, load_definitions, parse_definitions

__all__ = [
    "DefinitionFileError",
    "load_definitions",
    "parse_definitions",
]
