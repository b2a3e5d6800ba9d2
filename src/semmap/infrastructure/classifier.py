"""Repository classifier — build a fresh semantic map from a directory scan.

The result is the "fresh" side of reconciliation: every path is relative
to the scan root, and entries within a layer are sorted by path.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel, Field

from semmap.config.models import DEFAULT_EXCLUDE_DIRS, DEFAULT_INCLUDE_EXTS
from semmap.domain.inference import DEFAULT_LAYER_NAMES, classify, infer_what, layer_for, why_for
from semmap.domain.model import Description, Document, FileEntry, Layer, LegendEntry
from semmap.infrastructure.filesystem import find_source_files, read_source_file

if TYPE_CHECKING:
    from semmap.plugins.manager import PluginManager

log = structlog.get_logger(__name__)

DEFAULT_LEGEND: tuple[tuple[str, str], ...] = (
    ("ENTRY", "Application entry point"),
    ("CORE", "Core business logic"),
    ("TYPE", "Data structures and types"),
    ("UTIL", "Utility functions"),
)


class GenerateOptions(BaseModel):
    """Inputs for :func:`generate` beyond the root directory."""

    model_config = {"frozen": True}

    project_name: str = ""
    purpose: str = ""
    include_exts: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE_EXTS))
    exclude_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))
    layer_names: dict[int, str] = Field(default_factory=lambda: dict(DEFAULT_LAYER_NAMES))


def generate(
    root: Path,
    options: GenerateOptions | None = None,
    plugins: PluginManager | None = None,
) -> Document:
    """Scan *root* and classify every candidate file into a layer."""
    options = options or GenerateOptions()
    files = find_source_files(
        root,
        include_exts=options.include_exts,
        exclude_dirs=options.exclude_dirs,
    )
    log.debug("classifier.scan", root=str(root), files=len(files))

    by_layer: dict[int, list[FileEntry]] = defaultdict(list)
    for rel_path in files:
        content = read_source_file(root / rel_path)
        number, entry = classify_file(rel_path, content, plugins)
        by_layer[number].append(entry)

    layers = [
        Layer(
            number=number,
            name=options.layer_names.get(number) or f"Layer {number}",
            entries=sorted(by_layer[number], key=lambda e: e.path),
        )
        for number in sorted(by_layer)
    ]
    return Document(
        project_name=options.project_name or _default_project_name(root),
        purpose=options.purpose,
        legend=[LegendEntry(tag=tag, definition=text) for tag, text in DEFAULT_LEGEND],
        layers=layers,
    )


def classify_file(
    rel_path: str,
    content: str,
    plugins: PluginManager | None = None,
) -> tuple[int, FileEntry]:
    """Build the entry for one file and pick its layer number."""
    stereotype = classify(rel_path, content)
    summary = plugins.summary_for(rel_path, content) if plugins is not None else None
    exports = plugins.exports_for(rel_path, content) if plugins is not None else None

    entry = FileEntry(
        path=rel_path,
        description=Description(what=infer_what(rel_path, summary), why=why_for(stereotype)),
        exports=exports or None,
    )
    return layer_for(stereotype, rel_path), entry


def _default_project_name(root: Path) -> str:
    return root.resolve().name or "project"
