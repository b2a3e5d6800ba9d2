"""Filesystem operations for semantic maps and scanned repositories.

INVARIANT: a map file is always read and written whole.  There are no
partial writes and no streaming; a failed read or write surfaces as
``OSError`` to the caller.

Pure parsing/rendering lives in :mod:`semmap.domain.parser` and
:mod:`semmap.domain.serializer` (dependency direction: infrastructure ->
domain).  This module handles actual file I/O and repository discovery.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from semmap.domain.model import Document
from semmap.domain.parser import parse
from semmap.domain.serializer import format_document

# ---------------------------------------------------------------------------
# Map file I/O
# ---------------------------------------------------------------------------


def read_map_file(path: Path) -> Document:
    """Read and parse a semantic map markdown file.

    Raises:
        OSError: The file cannot be read.
        ParseError: The file has no title line.
    """
    return parse(path.read_text(encoding="utf-8"))


def write_map_file(path: Path, doc: Document) -> None:
    """Render *doc* as markdown and write it to *path*."""
    write_text_file(path, format_document(doc))


def write_text_file(path: Path, content: str) -> None:
    """Write *content* to *path*, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def read_source_file(path: Path) -> str:
    """Read a scanned source file; undecodable bytes are replaced, not fatal."""
    return path.read_text(encoding="utf-8", errors="replace")


# ---------------------------------------------------------------------------
# Repository discovery
# ---------------------------------------------------------------------------


def find_source_files(
    root: Path,
    *,
    include_exts: Iterable[str],
    exclude_dirs: Iterable[str],
) -> list[str]:
    """Discover candidate files under *root*.

    Skips dot-directories, dot-files and any directory named in
    *exclude_dirs*; keeps files whose extension is in *include_exts*.
    Returns sorted root-relative paths using forward slashes.
    """
    extensions = {ext.lstrip(".") for ext in include_exts}
    excluded = set(exclude_dirs)

    results: list[str] = []
    for path in root.rglob("*"):
        rel = path.relative_to(root)
        if any(part.startswith(".") or part in excluded for part in rel.parts[:-1]):
            continue
        if rel.name.startswith(".") or not path.is_file():
            continue
        if path.suffix.lstrip(".") in extensions:
            results.append(rel.as_posix())

    return sorted(results)
