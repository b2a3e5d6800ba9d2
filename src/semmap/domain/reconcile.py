"""Reconciliation — merge a hand-edited map with a fresh rescan.

``reconcile(existing, fresh, path_prefix)`` brings *existing* up to date
with the files reported by *fresh* (the classifier's view):

- paths only in *fresh* are added, copied from *fresh* with the path
  rewritten into the map namespace, into the layer *fresh* assigned;
- paths only in *existing* are removed, and layers left empty are dropped;
- paths in both are left untouched.

INVARIANT: an entry whose path survives reconciliation keeps its
description, exports and touch note exactly as they were.  Human edits
are never overwritten by classifier output.

INVARIANT: the result has at most one layer per number, each path
appears once, layers are sorted by number and entries by path.  Running
``reconcile`` again with the same *fresh* returns an equal document.
"""

from __future__ import annotations

import structlog
from pydantic import BaseModel, Field

from semmap.domain.model import Document, FileEntry, Layer
from semmap.domain.paths import prefix_path, strip_prefix_for_lookup

log = structlog.get_logger(__name__)


class PathDiff(BaseModel):
    """Added and removed paths, both in the map namespace and sorted."""

    model_config = {"frozen": True}

    added: list[str] = Field(default_factory=list)
    removed: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def diff_paths(existing: Document, fresh: Document, path_prefix: str = "") -> PathDiff:
    """Compare the path sets of *existing* and *fresh*.

    *fresh* paths are scan-root relative and are translated with
    *path_prefix* before comparison.
    """
    existing_paths = set(existing.all_paths())
    fresh_paths = {prefix_path(path_prefix, p) for p in fresh.all_paths()}
    return PathDiff(
        added=sorted(fresh_paths - existing_paths),
        removed=sorted(existing_paths - fresh_paths),
    )


def reconcile(existing: Document, fresh: Document, path_prefix: str = "") -> Document:
    """Return *existing* updated with the additions and removals in *fresh*."""
    diff = diff_paths(existing, fresh, path_prefix)

    layers = _merge_duplicate_layers(existing.layers)
    layers = _remove_paths(layers, set(diff.removed))
    staged = _stage_additions(diff.added, fresh, path_prefix)
    layers = _insert_staged(layers, staged, fresh)

    ordered = sorted(
        (
            layer.model_copy(update={"entries": sorted(layer.entries, key=lambda e: e.path)})
            for layer in layers
        ),
        key=lambda layer: layer.number,
    )
    return existing.model_copy(update={"layers": ordered})


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


def _merge_duplicate_layers(layers: list[Layer]) -> list[Layer]:
    """Fold layers sharing a number into the first one and drop repeated paths.

    The first occurrence of a path (in layer-then-entry order) is kept.
    """
    merged: dict[int, list[FileEntry]] = {}
    names: dict[int, str] = {}
    seen: set[str] = set()

    for layer in layers:
        names.setdefault(layer.number, layer.name)
        bucket = merged.setdefault(layer.number, [])
        for entry in layer.entries:
            if entry.path in seen:
                log.debug("reconcile.duplicate_path", path=entry.path, layer=layer.number)
                continue
            seen.add(entry.path)
            bucket.append(entry)

    return [
        Layer(number=number, name=names[number], entries=entries)
        for number, entries in merged.items()
    ]


def _remove_paths(layers: list[Layer], removed: set[str]) -> list[Layer]:
    """Drop entries for *removed* paths from every layer, then drop empty layers."""
    kept: list[Layer] = []
    for layer in layers:
        entries = [e for e in layer.entries if e.path not in removed]
        if entries:
            kept.append(layer.model_copy(update={"entries": entries}))
    return kept


def _stage_additions(
    added: list[str],
    fresh: Document,
    path_prefix: str,
) -> dict[int, list[FileEntry]]:
    """Copy each added entry out of *fresh*, grouped by its layer number.

    A path missing from *fresh* (only possible if *fresh* is inconsistent)
    is skipped.
    """
    staged: dict[int, list[FileEntry]] = {}
    for path in added:
        lookup = strip_prefix_for_lookup(path_prefix, path)
        located = _locate(fresh, lookup)
        if located is None:
            log.debug("reconcile.lookup_miss", path=path, lookup=lookup)
            continue
        entry, number = located
        staged.setdefault(number, []).append(entry.model_copy(update={"path": path}))
    return staged


def _insert_staged(
    layers: list[Layer],
    staged: dict[int, list[FileEntry]],
    fresh: Document,
) -> list[Layer]:
    """Append staged entries to matching layers, creating missing layers."""
    result = list(layers)
    for number, entries in staged.items():
        index = next((i for i, layer in enumerate(result) if layer.number == number), None)
        if index is None:
            source = fresh.find_layer(number)
            name = source.name if source is not None and source.name else f"Layer {number}"
            result.append(Layer(number=number, name=name, entries=entries))
        else:
            current = result[index]
            result[index] = current.model_copy(update={"entries": [*current.entries, *entries]})
    return result


def _locate(doc: Document, path: str) -> tuple[FileEntry, int] | None:
    for layer in doc.layers:
        for entry in layer.entries:
            if entry.path == path:
                return entry, layer.number
    return None
