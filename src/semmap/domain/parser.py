"""Semantic map text parser.

A single forward pass over the document lines.  Each phase is a pure
function ``(lines, cursor) -> (value, cursor)`` that advances a shared
cursor; phases run in strict order and never backtrack:

1. header  — title (mandatory) and purpose
2. legend  — ``[TAG]`` definitions (optional)
3. layers  — ``## Layer N — Name`` sections, each delegating to entries

The parser is lenient about formatting drift (hyphen vs. em dash, plain
vs. bold ``Purpose:`` label, indented ``Exports:`` without the arrow) and silently
skips lines it does not recognise.  The only hard failure is a missing
title line.
"""

from __future__ import annotations

import re

from semmap.domain.errors import ParseError
from semmap.domain.model import Description, Document, FileEntry, Layer, LegendEntry

# Em dash, hyphen, or double hyphen — one token class for every header.
_DASH = r"(?:—|--?)"

_TITLE_PATTERN = re.compile(rf"^#\s+(.+?)\s*{_DASH}\s*Semantic Map\s*$")
_PURPOSE_PATTERN = re.compile(r"^\s*(?:\*\*Purpose:\*\*|Purpose:)\s*(.*\S)")
_LEGEND_PATTERN = re.compile(r"^`\[([A-Z][A-Z0-9_]*)\]`(?:\s+(.*))?$")
_LAYER_PATTERN = re.compile(rf"^##\s+Layer\s+(\d+)(?:\s*{_DASH}\s*(.*?))?\s*$")
_PATH_PATTERN = re.compile(r"^`([^`]+)`$")
_LEGACY_PATH_PATTERN = re.compile(r"^(\S+\.\w+)$")
# The arrow-less marker form is only recognised on indented lines.
_EXPORTS_PATTERN = re.compile(r"^→\s*Exports:\s*(.*)$")
_TOUCH_PATTERN = re.compile(r"^→\s*Touch:\s*(.*)$")
_LEGACY_EXPORTS_PATTERN = re.compile(r"^Exports:\s*(.*)$")
_LEGACY_TOUCH_PATTERN = re.compile(r"^Touch:\s*(.*)$")

_MAX_LAYER_NUMBER = 255


def parse(text: str) -> Document:
    """Parse semantic map *text* into a :class:`Document`.

    Raises:
        ParseError: If no ``# <name> — Semantic Map`` title line exists.
    """
    lines = text.replace("\r\n", "\n").split("\n")

    (project_name, purpose), cursor = parse_header(lines, 0)
    legend, cursor = parse_legend(lines, cursor)
    layers, cursor = parse_layers(lines, cursor)

    return Document(
        project_name=project_name,
        purpose=purpose,
        legend=legend,
        layers=layers,
    )


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------


def parse_header(lines: list[str], cursor: int) -> tuple[tuple[str, str], int]:
    """Scan for the title and purpose until the first ``## Legend``/``## Layer``.

    First match wins for both the title and the purpose.
    """
    project_name = ""
    purpose = ""

    while cursor < len(lines):
        line = lines[cursor]
        if line.startswith("## Legend") or line.startswith("## Layer"):
            break

        if not project_name:
            title = _TITLE_PATTERN.match(line)
            if title:
                project_name = title.group(1).strip()
                cursor += 1
                continue

        if not purpose:
            found = _PURPOSE_PATTERN.match(line)
            if found:
                purpose = found.group(1).strip()

        cursor += 1

    if not project_name:
        raise ParseError(1, "Missing project title (# name — Semantic Map)")

    return (project_name, purpose), cursor


def parse_legend(lines: list[str], cursor: int) -> tuple[list[LegendEntry], int]:
    """Collect legend entries up to the first ``## Layer`` line."""
    legend: list[LegendEntry] = []

    while cursor < len(lines):
        line = lines[cursor]
        if line.startswith("## Layer"):
            break
        found = _LEGEND_PATTERN.match(line.strip())
        if found:
            definition = (found.group(2) or "").strip()
            legend.append(LegendEntry(tag=found.group(1), definition=definition))
        cursor += 1

    return legend, cursor


def parse_layers(lines: list[str], cursor: int) -> tuple[list[Layer], int]:
    """Parse every layer section from *cursor* to the end of the text."""
    layers: list[Layer] = []

    while cursor < len(lines):
        header = _match_layer_header(lines[cursor])
        if header is None:
            cursor += 1
            continue

        number, name = header
        entries, cursor = parse_entries(lines, cursor + 1)
        layers.append(Layer(number=number, name=name, entries=entries))

    return layers, cursor


def parse_entries(lines: list[str], cursor: int) -> tuple[list[FileEntry], int]:
    """Parse file entries until the next layer header or top-level heading."""
    entries: list[FileEntry] = []

    while cursor < len(lines):
        line = lines[cursor]
        if line.startswith("## Layer") or line.startswith("# "):
            break

        path = _match_path(line.strip(), allow_legacy=True)
        if path is None:
            cursor += 1
            continue

        entry, cursor = parse_entry_body(path, lines, cursor + 1)
        entries.append(entry)

    return entries, cursor


def parse_entry_body(path: str, lines: list[str], cursor: int) -> tuple[FileEntry, int]:
    """Consume an entry body: description lines plus Exports/Touch markers.

    The body ends at a blank line, a new backtick path line, or any
    ``## `` heading.
    """
    description_parts: list[str] = []
    exports: list[str] | None = None
    touch: str | None = None

    while cursor < len(lines):
        raw = lines[cursor]
        trimmed = raw.strip()
        if not trimmed or trimmed.startswith("## ") or _match_path(trimmed) is not None:
            break

        exports_match, touch_match = _match_markers(trimmed, indented=raw[:1].isspace())
        if exports_match:
            exports = parse_exports(exports_match.group(1))
        elif touch_match:
            touch = touch_match.group(1).strip()
        else:
            description_parts.append(trimmed)

        cursor += 1

    entry = FileEntry(
        path=path,
        description=split_description(" ".join(description_parts)),
        exports=exports,
        touch=touch,
    )
    return entry, cursor


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def split_description(text: str) -> Description:
    """Split description text at the first ``". "`` into WHAT and WHY.

    Examples:
        >>> split_description("Defines dependencies. Needed for build.")
        Description(what='Defines dependencies.', why='Needed for build.')
        >>> split_description("Only what.")
        Description(what='Only what.', why='')
    """
    what, sep, why = text.partition(". ")
    if not sep:
        return Description(what=text, why="")
    return Description(what=f"{what}.", why=why)


def parse_exports(raw: str) -> list[str]:
    """Split a comma-separated export list, trimming each name."""
    return [name.strip() for name in raw.split(",") if name.strip()]


def _match_markers(
    trimmed: str, *, indented: bool
) -> tuple[re.Match[str] | None, re.Match[str] | None]:
    exports = _EXPORTS_PATTERN.match(trimmed)
    touch = _TOUCH_PATTERN.match(trimmed)
    if indented and exports is None and touch is None:
        exports = _LEGACY_EXPORTS_PATTERN.match(trimmed)
        touch = _LEGACY_TOUCH_PATTERN.match(trimmed)
    return exports, touch


def _match_layer_header(line: str) -> tuple[int, str] | None:
    found = _LAYER_PATTERN.match(line)
    if found is None:
        return None
    number = int(found.group(1))
    if number > _MAX_LAYER_NUMBER:
        return None
    return number, (found.group(2) or "").strip()


def _match_path(trimmed: str, *, allow_legacy: bool = False) -> str | None:
    found = _PATH_PATTERN.match(trimmed)
    if found:
        return found.group(1)
    if allow_legacy:
        legacy = _LEGACY_PATH_PATTERN.match(trimmed)
        if legacy:
            return legacy.group(1)
    return None
