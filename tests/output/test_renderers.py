"""Tests for the operation-specific Rich renderers."""

from __future__ import annotations

from semmap.output.renderers import render_quiet, render_result
from semmap.services.result import ErrorCode, ServiceError, ServiceResult


def _validate_data(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "file": "SEMMAP.md",
        "strict": False,
        "issues": [],
        "error_count": 0,
        "warning_count": 0,
        "entries": 3,
    }
    data.update(overrides)
    return data


class TestRenderValidate:
    def test_valid(self) -> None:
        output = render_result(ServiceResult(ok=True, op="validate", data=_validate_data()))
        assert "OK" in output
        assert "SEMMAP is valid" in output
        assert "file: SEMMAP.md" in output
        assert "0 errors, 0 warnings" in output

    def test_warnings_listed_when_valid(self) -> None:
        issues = [{"severity": "warning", "message": "Missing purpose statement", "path": None}]
        data = _validate_data(issues=issues, warning_count=1)
        output = render_result(ServiceResult(ok=True, op="validate", data=data))
        assert "warning Missing purpose statement" in output
        assert "0 errors, 1 warnings" in output

    def test_failure_lists_issues_then_error(self) -> None:
        issues = [{"severity": "error", "message": "File not found", "path": "src/gone.rs"}]
        result = ServiceResult(
            ok=False,
            op="validate",
            data=_validate_data(issues=issues, error_count=1),
            error=ServiceError(code=ErrorCode.VALIDATION_FAILED, message="1 errors, 0 warnings"),
        )
        output = render_result(result)
        assert "error [src/gone.rs] File not found" in output
        assert "ERROR  validate — 1 errors, 0 warnings" in output
        assert output.index("File not found") < output.index("ERROR")


_GENERATED = {
    "output": "SEMMAP.md",
    "format": "md",
    "project_name": "demo",
    "layers": 2,
    "files": 3,
}


class TestRenderGenerate:
    def test_summary(self) -> None:
        output = render_result(ServiceResult(ok=True, op="generate", data=_GENERATED))
        assert "Generated SEMMAP.md (2 layers, 3 files)" in output
        assert "project_name" not in output

    def test_verbose_fields(self) -> None:
        result = ServiceResult(ok=True, op="generate", data=_GENERATED)
        output = render_result(result, verbose=True)
        assert "project_name: demo" in output


class TestRenderUpdate:
    def test_changes(self) -> None:
        data = {"added": ["src/new.rs"], "removed": ["src/old.rs"], "dry_run": False}
        output = render_result(ServiceResult(ok=True, op="update", data=data))
        assert "Updated SEMMAP: +1 -1" in output
        assert "  + src/new.rs" in output
        assert "  - src/old.rs" in output

    def test_dry_run(self) -> None:
        data = {"added": [], "removed": [], "dry_run": True}
        output = render_result(ServiceResult(ok=True, op="update", data=data))
        assert "Would update SEMMAP: +0 -0" in output


class TestRenderDeps:
    def test_graph_printed(self) -> None:
        data = {"check": False, "output": "graph TD\n    a --> b\n", "violations": []}
        output = render_result(ServiceResult(ok=True, op="deps", data=data))
        assert output.startswith("graph TD")
        assert "No layer violations" not in output

    def test_check_ok(self) -> None:
        data = {"check": True, "output": "graph TD\n", "violations": []}
        output = render_result(ServiceResult(ok=True, op="deps", data=data))
        assert "No layer violations" in output

    def test_violations_listed(self) -> None:
        violation = "Layer violation: a.rs (L0) depends on b.rs (L2)"
        result = ServiceResult(
            ok=False,
            op="deps",
            data={"check": True, "output": "graph TD\n", "violations": [violation]},
            error=ServiceError(code=ErrorCode.LAYER_VIOLATIONS, message="1 layer violations"),
        )
        output = render_result(result)
        assert f"violation {violation}" in output
        assert "ERROR  deps — 1 layer violations" in output


class TestRenderGeneric:
    def test_unknown_op(self) -> None:
        output = render_result(ServiceResult(ok=True, op="custom", data={"count": 4}))
        assert "custom" in output
        assert "count: 4" in output

    def test_error_detail_when_verbose(self) -> None:
        result = ServiceResult(
            ok=False,
            op="update",
            error=ServiceError(code="IO_ERROR", message="denied", detail={"path": "SEMMAP.md"}),
        )
        assert "path: SEMMAP.md" not in render_result(result)
        assert "path: SEMMAP.md" in render_result(result, verbose=True)


class TestRenderMeta:
    def test_telemetry_tree(self) -> None:
        meta = {
            "telemetry": {
                "name": "UpdateService.update",
                "duration_ms": 12.5,
                "children": [{"name": "scan", "duration_ms": 3.0, "annotations": {"files": 4}}],
            }
        }
        result = ServiceResult(ok=True, op="custom", meta=meta)
        output = render_result(result, verbose=True)
        assert "UpdateService.update" in output
        assert "scan  (files=4)" in output

    def test_meta_hidden_without_verbose(self) -> None:
        meta = {"telemetry": {"name": "X.run", "duration_ms": 1.0}}
        output = render_result(ServiceResult(ok=True, op="custom", meta=meta))
        assert "X.run" not in output


class TestRenderQuiet:
    def test_ok(self) -> None:
        assert render_quiet(ServiceResult(ok=True, op="validate")) == "OK: validate"

    def test_error(self) -> None:
        result = ServiceResult(ok=False, op="deps", error=ServiceError(code="X", message="bad"))
        assert render_quiet(result) == "ERROR: deps — bad"

    def test_deps_prints_graph(self) -> None:
        result = ServiceResult(ok=True, op="deps", data={"output": "graph TD\n    a --> b\n"})
        assert render_quiet(result) == "graph TD\n    a --> b"
