"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.  Failed checks
(``validate``, ``deps --check``) still list their findings before the
error line.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.text import Text

from semmap.output.console import SEVERITY_STYLES, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from semmap.services.result import ServiceResult

type _Renderer = Callable[..., None]


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        findings = _FINDINGS_RENDERERS.get(result.op)
        if findings is not None:
            findings(result, console)
        _render_error(result, console, verbose=verbose)

    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "deps" and result.data.get("output"):
        return str(result.data["output"]).rstrip("\n")
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult, message: str = "") -> None:
    label = Text("OK", style="semmap.ok")
    op = Text(f"  {result.op}", style="semmap.op")
    if message:
        console.print(label, op, Text(f"  {message}"))
    else:
        console.print(label, op)


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="semmap.key")
    style = "semmap.path" if key in ("file", "output") else ""
    console.print(k, Text(str(value), style=style), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print the telemetry span tree, if any."""
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_telemetry_tree(console, value, indent=4)
        else:
            console.print(Text(f"    {key}: {value}"))


def _render_telemetry_tree(console: Console, span: dict[str, Any], indent: int = 4) -> None:
    duration = span.get("duration_ms", 0.0)
    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(" " * indent)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {span.get('name', '?')}")
    annotations = span.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text("ERROR", style="semmap.error"),
        Text(f"  {result.op}", style="semmap.op"),
        Text(" — "),
        Text(msg),
        sep="",
    )
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Findings ──────────────────────────────────────────────────────────


def _render_issues(result: ServiceResult, console: Console) -> None:
    """List validation issues as ``severity [path] message`` lines."""
    issues = result.data.get("issues", [])
    for issue in issues:
        severity = str(issue.get("severity", "warning"))
        line = Text("  ")
        line.append(severity, style=SEVERITY_STYLES.get(severity, ""))
        if issue.get("path"):
            line.append(f" [{issue['path']}]", style="semmap.path")
        elif issue.get("line"):
            line.append(f" [line {issue['line']}]")
        line.append(f" {issue.get('message', '')}")
        console.print(line)
    if issues:
        console.print()


def _render_violations(result: ServiceResult, console: Console) -> None:
    for violation in result.data.get("violations", []):
        line = Text("  ")
        line.append("violation", style="semmap.error")
        line.append(f" {violation}")
        console.print(line)


# ── Op renderers ──────────────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _render_issues(result, console)
    _status_line(console, result, "SEMMAP is valid")
    _field(console, "file", result.data.get("file", ""))
    _field(console, "entries", result.data.get("entries", 0))
    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", 0)
    console.print(Text(f"\n{errors} errors, {warnings} warnings"))


def _render_generate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    summary = f"Generated {d.get('output')} ({d.get('layers')} layers, {d.get('files')} files)"
    _status_line(console, result, summary)
    if verbose:
        for key in ("project_name", "format"):
            if key in d:
                _field(console, key, d[key])


def _render_update(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    added = d.get("added", [])
    removed = d.get("removed", [])
    verb = "Would update" if d.get("dry_run") else "Updated"
    _status_line(console, result, f"{verb} SEMMAP: +{len(added)} -{len(removed)}")
    for path in added:
        console.print(Text(f"  + {path}", style="semmap.added"))
    for path in removed:
        console.print(Text(f"  - {path}", style="semmap.removed"))
    if verbose:
        _field(console, "file", d.get("file", ""))
        _field(console, "entries", d.get("entries", 0))


def _render_deps(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if d.get("check"):
        _status_line(console, result, "No layer violations")
    if verbose:
        _field(console, "nodes", d.get("nodes", 0))
        _field(console, "edges", d.get("edges", 0))
    output = str(d.get("output", "")).rstrip("\n")
    if output:
        console.print(Text(output))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, _Renderer] = {
    "validate": _render_validate,
    "generate": _render_generate,
    "update": _render_update,
    "deps": _render_deps,
}

_FINDINGS_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "validate": _render_issues,
    "deps": _render_violations,
}
