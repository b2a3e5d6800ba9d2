"""Rust language support.

Exports are ``pub struct|fn|trait|enum`` items at any indentation.  The
summary is the leading ``//!`` module doc, else the first ``///`` block.
``use crate::x`` / ``use super::x`` / ``use self::x`` and ``mod x;`` resolve
to ``<dir>/x.rs`` and ``<dir>/x/mod.rs`` (``src/`` for files at the root).
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath

import pluggy

hookimpl = pluggy.HookimplMarker("semmap")

_PUB_ITEM = re.compile(r"^pub (?:struct|fn|trait|enum) ([A-Za-z0-9_]+)")
_USE = re.compile(r"\buse\s+(?:crate|super|self)::(\w+)")
_MOD = re.compile(r"\bmod\s+(\w+);")


def _is_rust(rel_path: str) -> bool:
    return rel_path.endswith(".rs")


class RustPlugin:
    """Scrapes Rust sources."""

    @hookimpl
    def extract_exports(self, rel_path: str, content: str) -> list[str] | None:
        if not _is_rust(rel_path):
            return None
        names: list[str] = []
        for line in content.splitlines():
            match = _PUB_ITEM.match(line.strip())
            if match:
                names.append(match.group(1))
        return names

    @hookimpl
    def extract_summary(self, rel_path: str, content: str) -> str | None:
        if not _is_rust(rel_path):
            return None
        return _module_doc(content) or _first_item_doc(content)

    @hookimpl
    def extract_imports(self, rel_path: str, content: str) -> list[str] | None:
        if not _is_rust(rel_path):
            return None
        base = str(PurePosixPath(rel_path).parent)
        base = "src" if base == "." else base
        modules = [*_USE.findall(content), *_MOD.findall(content)]
        targets: list[str] = []
        for module in modules:
            targets.extend((f"{base}/{module}.rs", f"{base}/{module}/mod.rs"))
        return targets


def _module_doc(content: str) -> str | None:
    lines: list[str] = []
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("//!"):
            lines.append(stripped[3:].strip())
        elif stripped and not stripped.startswith("//"):
            break
    return " ".join(lines).strip() or None


def _first_item_doc(content: str) -> str | None:
    lines: list[str] = []
    for line in content.splitlines():
        stripped = line.strip()
        if stripped.startswith("///") and not stripped.startswith("////"):
            lines.append(stripped[3:].strip())
        elif lines:
            break
    return " ".join(lines).strip() or None
