"""UpdateService — bring an existing map in line with the repository.

Reads the map, rescans the root, reconciles, and writes the result back.
Hand-written descriptions of surviving entries are preserved; see
:mod:`semmap.domain.reconcile`.
"""

from __future__ import annotations

from pathlib import Path

from semmap.domain.paths import build_root_prefix_relative
from semmap.domain.reconcile import diff_paths, reconcile
from semmap.infrastructure.filesystem import write_map_file
from semmap.services.base import io_failure
from semmap.services.generate import GenerateService
from semmap.services.result import ServiceResult
from semmap.services.telemetry import trace_span, traced


class UpdateService(GenerateService):
    """Reconcile a map file with a fresh scan of its root."""

    @traced
    def update(self, map_file: Path, root: Path, *, dry_run: bool = False) -> ServiceResult:
        """Add new files and drop deleted ones; with *dry_run*, only report."""
        op = "update"
        with trace_span("parse"):
            loaded = self._load_map(map_file, op=op)
        if isinstance(loaded, ServiceResult):
            return loaded
        existing = loaded

        with trace_span("scan"):
            fresh = self.build(root, name=existing.project_name, purpose=existing.purpose)

        prefix = build_root_prefix_relative(map_file.parent, root)
        with trace_span("reconcile"):
            diff = diff_paths(existing, fresh, prefix)
            updated = reconcile(existing, fresh, prefix)

        if not dry_run:
            with trace_span("write"):
                try:
                    write_map_file(map_file, updated)
                except OSError as exc:
                    return io_failure(op, map_file, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "file": str(map_file),
                "prefix": prefix,
                "dry_run": dry_run,
                "added": diff.added,
                "removed": diff.removed,
                "entries": updated.entry_count(),
            },
        )
