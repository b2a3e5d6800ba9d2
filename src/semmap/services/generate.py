"""GenerateService — write a fresh semantic map for a repository."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from semmap.domain.model import Document
from semmap.domain.serializer import format_document, to_json, to_yaml
from semmap.infrastructure.classifier import GenerateOptions, generate
from semmap.infrastructure.filesystem import write_text_file
from semmap.services.base import BaseService, io_failure
from semmap.services.result import ServiceResult
from semmap.services.telemetry import trace_span, traced

OutputFormat = Literal["md", "json", "yaml"]

_RENDERERS = {
    "md": format_document,
    "json": to_json,
    "yaml": to_yaml,
}


class GenerateService(BaseService):
    """Scan a repository and write its map in one of the supported formats."""

    def build(self, root: Path, *, name: str = "", purpose: str = "") -> Document:
        """Classify *root* using the configured scan and layer settings."""
        options = GenerateOptions(
            project_name=name,
            purpose=purpose,
            include_exts=self._settings.scan.include_exts,
            exclude_dirs=self._settings.scan.exclude_dirs,
            layer_names=self._settings.layers.resolved(),
        )
        return generate(root, options, self.plugins)

    @traced
    def generate(
        self,
        root: Path,
        output: Path,
        *,
        name: str = "",
        purpose: str = "",
        fmt: OutputFormat = "md",
    ) -> ServiceResult:
        op = "generate"
        with trace_span("scan") as span:
            doc = self.build(root, name=name, purpose=purpose)
            if span is not None:
                span.annotate("files", doc.entry_count())

        content = _RENDERERS[fmt](doc)
        with trace_span("write"):
            try:
                write_text_file(output, content)
            except OSError as exc:
                return io_failure(op, output, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output": str(output),
                "format": fmt,
                "project_name": doc.project_name,
                "layers": len(doc.layers),
                "files": doc.entry_count(),
            },
        )
