"""ValidateService — structural and filesystem checks of a map file.

Structural checks come from :mod:`semmap.domain.validation`.  This
service adds the checks that need the repository: every documented path
must exist, and in strict mode every source file must be documented.
"""

from __future__ import annotations

from pathlib import Path

from semmap.domain.model import Document
from semmap.domain.paths import build_root_prefix_relative, prefix_path, strip_prefix_for_lookup
from semmap.domain.validation import ValidationIssue, ValidationResult, validate_document
from semmap.infrastructure.filesystem import find_source_files
from semmap.services.base import BaseService
from semmap.services.result import ErrorCode, ServiceError, ServiceResult
from semmap.services.telemetry import trace_span, traced

# Files a strict check expects to see documented.
STRICT_SOURCE_EXTS: tuple[str, ...] = ("rs", "ts", "js", "py", "go")


class ValidateService(BaseService):
    """Check a semantic map against its own rules and the repository."""

    @traced
    def validate(self, map_file: Path, root: Path, *, strict: bool = False) -> ServiceResult:
        """Validate *map_file*; errors fail, and in strict mode so do warnings."""
        op = "validate"
        with trace_span("parse"):
            loaded = self._load_map(map_file, op=op)
        if isinstance(loaded, ServiceResult):
            return loaded
        doc = loaded

        prefix = build_root_prefix_relative(map_file.parent, root)
        with trace_span("structure"):
            issues = list(validate_document(doc).issues)
        with trace_span("filesystem"):
            issues.extend(check_files_exist(doc, root, prefix))
            if strict:
                excluded = self._settings.scan.exclude_dirs
                issues.extend(check_undocumented(doc, root, prefix, excluded))

        result = ValidationResult(issues=issues)
        data = {
            "file": str(map_file),
            "strict": strict,
            "issues": [issue.model_dump(mode="json") for issue in result.issues],
            "error_count": result.error_count,
            "warning_count": result.warning_count,
            "entries": doc.entry_count(),
        }
        if result.error_count or (strict and result.warning_count):
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=ServiceError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"{result.error_count} errors, {result.warning_count} warnings",
                    detail={"file": str(map_file)},
                ),
            )
        return ServiceResult(ok=True, op=op, data=data)


def check_files_exist(doc: Document, root: Path, prefix: str = "") -> list[ValidationIssue]:
    """Every documented path must name an existing file under *root*."""
    issues: list[ValidationIssue] = []
    for path in doc.all_paths():
        if not (root / strip_prefix_for_lookup(prefix, path)).exists():
            issues.append(ValidationIssue.error("File not found", path=path))
    return issues


def check_undocumented(
    doc: Document,
    root: Path,
    prefix: str = "",
    exclude_dirs: list[str] | None = None,
) -> list[ValidationIssue]:
    """Warn for each source file under *root* that the map does not mention."""
    documented = set(doc.all_paths())
    files = find_source_files(
        root,
        include_exts=STRICT_SOURCE_EXTS,
        exclude_dirs=exclude_dirs or (),
    )
    return [
        ValidationIssue.warning("Not in SEMMAP", path=prefix_path(prefix, rel))
        for rel in files
        if prefix_path(prefix, rel) not in documented
    ]
