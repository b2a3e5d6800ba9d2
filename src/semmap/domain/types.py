"""Classification enums shared across the domain.

Stereotypes name the architectural role a file plays; the layer a file
lands in is derived from its stereotype (see :mod:`semmap.domain.inference`).
"""

from __future__ import annotations

from enum import StrEnum


class Stereotype(StrEnum):
    """Architectural role inferred for a source file."""

    CONFIG = "config"
    ENTRYPOINT = "entrypoint"
    CLI = "cli"
    ENTITY = "entity"
    PARSER = "parser"
    FORMATTER = "formatter"
    SERVICE = "service"
    ERROR = "error"
    UTILITY = "utility"
    REPOSITORY = "repository"
    HANDLER = "handler"
    TEST = "test"
    UNKNOWN = "unknown"


class Severity(StrEnum):
    """Validation issue severity."""

    ERROR = "error"
    WARNING = "warning"


class DepKind(StrEnum):
    """Kind of dependency edge between two documented files."""

    IMPORT = "import"
