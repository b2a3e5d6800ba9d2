"""Structural validation of a semantic map.

Pure checks over the in-memory model.  Filesystem checks (missing files,
undocumented files) live in :mod:`semmap.services.validate`.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from pydantic import BaseModel, Field

from semmap.domain.model import Document
from semmap.domain.types import Severity

CONFIG_EXTENSIONS = frozenset({"toml", "json", "yaml", "yml"})


class ValidationIssue(BaseModel):
    """A single validation finding."""

    model_config = {"frozen": True}

    severity: Severity
    message: str
    path: str | None = None
    line: int | None = None

    @classmethod
    def error(cls, message: str, *, path: str | None = None) -> ValidationIssue:
        return cls(severity=Severity.ERROR, message=message, path=path)

    @classmethod
    def warning(cls, message: str, *, path: str | None = None) -> ValidationIssue:
        return cls(severity=Severity.WARNING, message=message, path=path)


class ValidationResult(BaseModel):
    """All issues found for one document."""

    model_config = {"frozen": True}

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)


def validate_document(doc: Document) -> ValidationResult:
    """Run every structural check on *doc*."""
    issues: list[ValidationIssue] = []
    issues.extend(check_header(doc))
    issues.extend(check_layers(doc))
    issues.extend(check_entries(doc))
    issues.extend(check_duplicates(doc))
    return ValidationResult(issues=issues)


def check_header(doc: Document) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if not doc.project_name:
        issues.append(ValidationIssue.error("Missing project name"))
    if not doc.purpose:
        issues.append(ValidationIssue.warning("Missing purpose statement"))
    return issues


def check_layers(doc: Document) -> list[ValidationIssue]:
    """Layers must exist, be unique by number, and be contiguous (gaps warn)."""
    if not doc.layers:
        return [ValidationIssue.error("No layers defined")]

    issues: list[ValidationIssue] = []
    seen: set[int] = set()
    previous: int | None = None
    for layer in doc.layers:
        if layer.number in seen:
            issues.append(ValidationIssue.error(f"Duplicate layer: {layer.number}"))
        seen.add(layer.number)
        if previous is not None and layer.number != previous + 1:
            issues.append(ValidationIssue.warning(f"Layer gap after {previous}"))
        previous = layer.number
    return issues


def check_entries(doc: Document) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for layer in doc.layers:
        for entry in layer.entries:
            if not entry.description.what:
                issues.append(ValidationIssue.error("Missing WHAT", path=entry.path))
            elif is_generic_description(entry.description.what, entry.path):
                message = "Generic description; add a doc comment"
                issues.append(ValidationIssue.warning(message, path=entry.path))
    return issues


def check_duplicates(doc: Document) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    seen: set[str] = set()
    for path in doc.all_paths():
        if path in seen:
            issues.append(ValidationIssue.error("Duplicate path", path=path))
        seen.add(path)
    return issues


def is_generic_description(what: str, path: str) -> bool:
    """Whether *what* looks like a classifier fallback rather than real prose.

    Config files are exempt; their fallback descriptions are accurate.
    """
    suffix = PurePosixPath(path).suffix.lower().lstrip(".")
    if suffix in CONFIG_EXTENSIONS:
        return False
    return what.startswith("Implements ") or "functionality." in what
