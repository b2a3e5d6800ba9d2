"""Heuristic classification of repository files.

Pure functions over a file's repository-relative path and its text.  A
file is first assigned a :class:`Stereotype`; the stereotype decides the
layer number and the WHY sentence.  The WHAT sentence comes from the
file's own documentation when a language plugin found some, otherwise
from well-known file names or identifier expansion of the file stem.

Layer numbering::

    0 Config     manifests and configuration
    1 Core       entry points and command-line surfaces
    2 Domain     types, parsers, formatters, services, errors (default)
    3 Utilities  helpers, repositories, request handlers
    4 Tests
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from semmap.domain.naming import expand_identifier
from semmap.domain.types import Stereotype

DEFAULT_LAYER = 2

DEFAULT_LAYER_NAMES: dict[int, str] = {
    0: "Config",
    1: "Core",
    2: "Domain",
    3: "Utilities",
    4: "Tests",
}

CONFIG_EXTENSIONS = frozenset({"toml", "yaml", "yml", "json"})
CODE_EXTENSIONS = frozenset({"rs", "py", "ts", "js", "go", "java"})

_LAYER_BY_STEREOTYPE: dict[Stereotype, int] = {
    Stereotype.CONFIG: 0,
    Stereotype.ENTRYPOINT: 1,
    Stereotype.CLI: 1,
    Stereotype.ENTITY: 2,
    Stereotype.PARSER: 2,
    Stereotype.FORMATTER: 2,
    Stereotype.SERVICE: 2,
    Stereotype.ERROR: 2,
    Stereotype.UTILITY: 3,
    Stereotype.REPOSITORY: 3,
    Stereotype.HANDLER: 3,
    Stereotype.TEST: 4,
}

_WHY_BY_STEREOTYPE: dict[Stereotype, str] = {
    Stereotype.CONFIG: "Centralizes project configuration.",
    Stereotype.ENTRYPOINT: "Provides application entry point.",
    Stereotype.ENTITY: "Defines domain data structures.",
    Stereotype.SERVICE: "Orchestrates business logic.",
    Stereotype.REPOSITORY: "Handles data persistence.",
    Stereotype.HANDLER: "Handles HTTP/API requests.",
    Stereotype.UTILITY: "Provides reusable helper functions.",
    Stereotype.PARSER: "Parses input into structured data.",
    Stereotype.FORMATTER: "Formats data for output.",
    Stereotype.ERROR: "Defines error types and handling.",
    Stereotype.CLI: "Defines command-line interface.",
    Stereotype.TEST: "Verifies correctness.",
    Stereotype.UNKNOWN: "Supports application functionality.",
}

_ENTRYPOINT_NAMES = frozenset(
    {"main.rs", "lib.rs", "main.py", "__main__.py", "main.go", "index.ts", "index.js"}
)

# Import prefixes that reveal a file's role regardless of its name.
_IMPORT_HINTS: tuple[tuple[Stereotype, tuple[str, ...]], ...] = (
    (
        Stereotype.CLI,
        ("use clap", "use structopt", "import click", "from click", "import argparse",
         "import typer", "from typer"),
    ),
    (
        Stereotype.HANDLER,
        ("use axum", "use actix", "from fastapi", "from flask", "import flask"),
    ),
    (
        Stereotype.REPOSITORY,
        ("use diesel", "use sqlx", "import sqlalchemy", "from sqlalchemy"),
    ),
)

_STRUCT_PATTERN = re.compile(r"^\s*(?:pub struct |class )", re.MULTILINE)
_FUNCTION_PATTERN = re.compile(r"^\s*(?:pub fn |def )", re.MULTILINE)

_WELL_KNOWN_FILES: dict[str, str] = {
    "Cargo.toml": "Rust package manifest and dependencies.",
    "package.json": "Node.js package manifest.",
    "pyproject.toml": "Python project metadata and dependencies.",
    "go.mod": "Go module definition and dependencies.",
    "main.rs": "Application entry point.",
    "main.py": "Application entry point.",
    "__main__.py": "Application entry point.",
    "main.go": "Application entry point.",
    "lib.rs": "Library root and public exports.",
}


# ---------------------------------------------------------------------------
# Stereotype classification
# ---------------------------------------------------------------------------


def classify(rel_path: str, content: str) -> Stereotype:
    """Classify a file by filename, then imports, then name patterns, then shape."""
    lower = rel_path.lower()
    for found in (
        _classify_by_filename(lower),
        _classify_by_imports(content),
        _classify_by_name_pattern(lower, content),
    ):
        if found is not None:
            return found
    if _is_mostly_structs(content):
        return Stereotype.ENTITY
    return Stereotype.UNKNOWN


def _classify_by_filename(lower: str) -> Stereotype | None:
    if is_config_file(lower):
        return Stereotype.CONFIG
    if "test" in lower or "spec" in lower:
        return Stereotype.TEST
    if PurePosixPath(lower).name in _ENTRYPOINT_NAMES:
        return Stereotype.ENTRYPOINT
    if "error" in lower or "exception" in lower:
        return Stereotype.ERROR
    return None


def _classify_by_imports(content: str) -> Stereotype | None:
    for line in content.splitlines():
        stripped = line.strip()
        for stereotype, prefixes in _IMPORT_HINTS:
            if stripped.startswith(prefixes):
                return stereotype
    return None


def _classify_by_name_pattern(lower: str, content: str) -> Stereotype | None:
    uses_regex = any(line.strip().startswith("use regex") for line in content.splitlines())
    if "parse" in lower or uses_regex:
        return Stereotype.PARSER
    if "format" in lower or "render" in lower:
        return Stereotype.FORMATTER
    if "util" in lower or "helper" in lower:
        return Stereotype.UTILITY
    if "types" in lower or "model" in lower:
        return Stereotype.ENTITY
    if "service" in lower or "command" in lower:
        return Stereotype.SERVICE
    return None


def _is_mostly_structs(content: str) -> bool:
    structs = len(_STRUCT_PATTERN.findall(content))
    functions = len(_FUNCTION_PATTERN.findall(content))
    return structs > 2 and structs > functions


def is_config_file(rel_path: str) -> bool:
    lower = rel_path.lower()
    return _extension(lower) in CONFIG_EXTENSIONS or "config" in lower or "cargo" in lower


# ---------------------------------------------------------------------------
# Layer / description inference
# ---------------------------------------------------------------------------


def layer_for(stereotype: Stereotype, rel_path: str) -> int:
    """Layer number for *stereotype*; unknown files fall back to path hints."""
    number = _LAYER_BY_STEREOTYPE.get(stereotype)
    if number is not None:
        return number
    return _layer_from_path(rel_path)


def infer_layer(rel_path: str, content: str) -> int:
    """Classify and map to a layer number in one step."""
    return layer_for(classify(rel_path, content), rel_path)


def _layer_from_path(rel_path: str) -> int:
    lower = rel_path.lower()
    if _extension(lower) in CONFIG_EXTENSIONS:
        return 0
    if "main" in lower or lower.endswith(("lib.rs", "mod.rs", "__init__.py")):
        return 1
    if "types" in lower or "model" in lower or "schema" in lower:
        return 2
    if "util" in lower or "helper" in lower or "common" in lower:
        return 3
    if "test" in lower or "spec" in lower:
        return 4
    return DEFAULT_LAYER


def infer_what(rel_path: str, summary: str | None = None) -> str:
    """WHAT sentence: doc summary, then well-known names, then the file stem."""
    if summary:
        return first_sentence(summary)

    path = PurePosixPath(rel_path)
    known = _WELL_KNOWN_FILES.get(path.name)
    if known is not None:
        return known

    ext = _extension(path.name)
    parent = path.parent.name or "the project"
    if path.name == "mod.rs":
        return f"Module definitions for {parent}."
    if path.name == "__init__.py":
        return f"Package initializer for {parent}."
    if ext in CODE_EXTENSIONS:
        return expand_identifier(path.stem)
    if ext in CONFIG_EXTENSIONS:
        return f"Configuration for {path.stem}."
    return f"Handles {path.stem}."


def why_for(stereotype: Stereotype) -> str:
    return _WHY_BY_STEREOTYPE[stereotype]


def first_sentence(text: str) -> str:
    """Collapse doc text to its first sentence, always ending in a period.

    Examples:
        >>> first_sentence("Parses input.  Handles errors.")
        'Parses input.'
        >>> first_sentence("Parses input")
        'Parses input.'
    """
    collapsed = " ".join(text.split())
    head, sep, _ = collapsed.partition(". ")
    if sep:
        return f"{head}."
    if collapsed.endswith("."):
        return collapsed
    return f"{collapsed}."


def _extension(name: str) -> str:
    return PurePosixPath(name).suffix.lower().lstrip(".")
