"""Semantic map document model.

A document is a title, a purpose statement, an optional legend and a
sequence of numbered layers, each holding file entries.  All models are
frozen pydantic models; updates produce new instances via
``model_copy(update=...)``.

INVARIANT: ``FileEntry.path`` is unique across the whole document, not
just within one layer.  The model does not enforce this; reconciliation
preserves it and validation reports violations.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Description(BaseModel):
    """Two-part entry description: one WHAT sentence plus trailing WHY text."""

    model_config = {"frozen": True}

    what: str
    why: str = ""


class FileEntry(BaseModel):
    """The description record for one repository file."""

    model_config = {"frozen": True}

    path: str
    description: Description
    exports: list[str] | None = None
    touch: str | None = None

    @classmethod
    def create(cls, path: str, what: str, why: str = "") -> FileEntry:
        """Build an entry without exports or touch note."""
        return cls(path=path, description=Description(what=what, why=why))


class LegendEntry(BaseModel):
    """A ``[TAG]`` definition from the legend section."""

    model_config = {"frozen": True}

    tag: str
    definition: str


class Layer(BaseModel):
    """A numbered architectural tier."""

    model_config = {"frozen": True}

    number: int = Field(ge=0, le=255)
    name: str
    entries: list[FileEntry] = Field(default_factory=list)


class Document(BaseModel):
    """A complete semantic map."""

    model_config = {"frozen": True}

    project_name: str
    purpose: str = ""
    legend: list[LegendEntry] = Field(default_factory=list)
    layers: list[Layer] = Field(default_factory=list)

    def all_paths(self) -> list[str]:
        """Every entry path in layer-then-entry order, duplicates included."""
        return [entry.path for layer in self.layers for entry in layer.entries]

    def find_entry(self, path: str) -> FileEntry | None:
        """Return the first entry with *path*, scanning layers in order."""
        for layer in self.layers:
            for entry in layer.entries:
                if entry.path == path:
                    return entry
        return None

    def path_to_layer(self) -> dict[str, int]:
        """Map each path to its layer number.

        If a path appears in more than one layer the last one wins.
        """
        mapping: dict[str, int] = {}
        for layer in self.layers:
            for entry in layer.entries:
                mapping[entry.path] = layer.number
        return mapping

    def find_layer(self, number: int) -> Layer | None:
        """Return the first layer with *number*, or None."""
        for layer in self.layers:
            if layer.number == number:
                return layer
        return None

    def entry_count(self) -> int:
        """Total number of entries across all layers."""
        return sum(len(layer.entries) for layer in self.layers)
