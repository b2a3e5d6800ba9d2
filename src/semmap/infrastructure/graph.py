"""Dependency graph between documented files.

Built per invocation from the map plus the import statements found by the
language plugins.  Only edges between two documented paths are kept, and
self-imports are dropped.

INVARIANT: a file may depend on files in its own or a lower-numbered
layer.  An edge to a higher-numbered layer is a layer violation.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

import networkx as nx
import structlog

from semmap.domain.model import Document
from semmap.domain.paths import strip_prefix_for_lookup
from semmap.domain.types import DepKind
from semmap.infrastructure.filesystem import read_source_file

if TYPE_CHECKING:
    from semmap.plugins.manager import PluginManager

log = structlog.get_logger(__name__)

type _Graph = nx.DiGraph

_ARROWS: dict[DepKind, str] = {
    DepKind.IMPORT: "-->",
}


def build_dependency_graph(
    root: Path,
    doc: Document,
    plugins: PluginManager,
    *,
    path_prefix: str = "",
) -> _Graph:
    """One node per documented path, one edge per resolved import.

    Map paths carrying *path_prefix* are read from *root* with the prefix
    stripped.  Files that cannot be read contribute a node but no edges.
    """
    g: _Graph = nx.DiGraph()
    layers = doc.path_to_layer()
    for path in doc.all_paths():
        g.add_node(path, layer=layers[path])

    for path in doc.all_paths():
        try:
            content = read_source_file(root / strip_prefix_for_lookup(path_prefix, path))
        except OSError:
            log.debug("graph.unreadable", path=path)
            continue
        for target in plugins.imports_for(path, content):
            if target != path and target in g and not g.has_edge(path, target):
                g.add_edge(path, target, kind=DepKind.IMPORT)
    return g


def layer_violations(g: _Graph) -> list[str]:
    """Describe every edge that points to a higher-numbered layer."""
    violations: list[str] = []
    for source, target in g.edges:
        from_layer = g.nodes[source]["layer"]
        to_layer = g.nodes[target]["layer"]
        if to_layer > from_layer:
            violations.append(
                f"Layer violation: {source} (L{from_layer}) depends on {target} (L{to_layer})"
            )
    return violations


def render_mermaid(g: _Graph) -> str:
    """Render as a mermaid ``graph TD`` block (nodes, then edges)."""
    lines = ["graph TD"]
    for path in g.nodes:
        lines.append(f'    {sanitize_id(path)}["{PurePosixPath(path).name or path}"]')
    for source, target, kind in g.edges(data="kind", default=DepKind.IMPORT):
        lines.append(f"    {sanitize_id(source)} {_ARROWS[DepKind(kind)]} {sanitize_id(target)}")
    return "\n".join(lines) + "\n"


def graph_to_dict(g: _Graph) -> dict[str, Any]:
    """JSON-ready node and edge lists."""
    return {
        "nodes": [{"path": path, "layer": layer} for path, layer in g.nodes(data="layer")],
        "edges": [
            {"from": source, "to": target, "kind": str(kind)}
            for source, target, kind in g.edges(data="kind", default=DepKind.IMPORT)
        ],
    }


def sanitize_id(path: str) -> str:
    """Mermaid node id: ``/``, ``.`` and ``-`` become ``_``."""
    return path.replace("/", "_").replace(".", "_").replace("-", "_")
