"""Canonical rendering of a :class:`Document`.

``format_document`` emits the canonical markdown form (em-dash
separators, bold ``**Purpose:**`` label, ``→`` markers).  Re-parsing its
output reproduces the same model: ``parse(format_document(d)) == d``.
The serializer never re-sorts layers or entries.

``to_json`` and ``to_yaml`` are machine-readable alternatives used by
``semmap generate --format``.
"""

from __future__ import annotations

from io import StringIO

from ruamel.yaml import YAML

from semmap.domain.model import Description, Document, FileEntry, Layer

TITLE_SUFFIX = "Semantic Map"
EXPORTS_MARKER = "→ Exports:"
TOUCH_MARKER = "→ Touch:"


def format_document(doc: Document) -> str:
    """Render *doc* as canonical semantic map markdown."""
    parts: list[str] = [f"# {doc.project_name} — {TITLE_SUFFIX}\n\n"]

    if doc.purpose:
        parts.append(f"**Purpose:** {doc.purpose}\n\n")

    if doc.legend:
        parts.append("## Legend\n\n")
        for item in doc.legend:
            parts.append(f"`[{item.tag}]` {item.definition}".rstrip() + "\n\n")

    for layer in doc.layers:
        parts.append(_format_layer(layer))

    return "".join(parts)


def format_description(description: Description) -> str:
    """Join WHAT and WHY with a single space (WHY omitted when empty)."""
    if not description.why:
        return description.what
    return f"{description.what} {description.why}"


def _format_layer(layer: Layer) -> str:
    parts = [f"## Layer {layer.number} — {layer.name}\n\n"]
    for entry in layer.entries:
        parts.append(_format_entry(entry))
    return "".join(parts)


def _format_entry(entry: FileEntry) -> str:
    lines = [f"`{entry.path}`"]

    # An empty description line would terminate the entry body on re-parse.
    text = format_description(entry.description)
    if text:
        lines.append(text)

    if entry.exports:
        lines.append(f"{EXPORTS_MARKER} {', '.join(entry.exports)}")
    if entry.touch is not None:
        lines.append(f"{TOUCH_MARKER} {entry.touch}")

    return "\n".join(lines) + "\n\n"


def to_json(doc: Document) -> str:
    """Serialize *doc* as pretty-printed JSON."""
    return doc.model_dump_json(indent=2)


def to_yaml(doc: Document) -> str:
    """Serialize *doc* as block-style YAML."""
    y = YAML()
    y.default_flow_style = False
    buf = StringIO()
    y.dump(doc.model_dump(mode="json"), buf)
    return buf.getvalue()
