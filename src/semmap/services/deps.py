"""DepsService — dependency map and layer-violation check."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from semmap.domain.paths import build_root_prefix_relative
from semmap.infrastructure.graph import (
    build_dependency_graph,
    graph_to_dict,
    layer_violations,
    render_mermaid,
)
from semmap.services.base import BaseService
from semmap.services.result import ErrorCode, ServiceError, ServiceResult
from semmap.services.telemetry import trace_span, traced

DepsFormat = Literal["mermaid", "json"]


class DepsService(BaseService):
    """Analyze imports between the files a map documents."""

    @traced
    def deps(
        self,
        map_file: Path,
        root: Path,
        *,
        fmt: DepsFormat = "mermaid",
        check: bool = False,
    ) -> ServiceResult:
        """Render the dependency graph; with *check*, fail on layer violations."""
        op = "deps"
        with trace_span("parse"):
            loaded = self._load_map(map_file, op=op)
        if isinstance(loaded, ServiceResult):
            return loaded
        doc = loaded

        prefix = build_root_prefix_relative(map_file.parent, root)
        with trace_span("analyze") as span:
            graph = build_dependency_graph(root, doc, self.plugins, path_prefix=prefix)
            if span is not None:
                span.annotate("edges", graph.number_of_edges())

        violations = layer_violations(graph) if check else []
        if fmt == "json":
            rendered = json.dumps(graph_to_dict(graph), indent=2)
        else:
            rendered = render_mermaid(graph)

        data = {
            "format": fmt,
            "check": check,
            "nodes": graph.number_of_nodes(),
            "edges": graph.number_of_edges(),
            "violations": violations,
            "output": rendered,
        }
        if violations:
            return ServiceResult(
                ok=False,
                op=op,
                data=data,
                error=ServiceError(
                    code=ErrorCode.LAYER_VIOLATIONS,
                    message=f"{len(violations)} layer violations",
                    detail={"violations": violations},
                ),
            )
        return ServiceResult(ok=True, op=op, data=data)
