"""Command: dependency map between documented files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from semmap.commands._base import SemmapCommand

if TYPE_CHECKING:
    from semmap.commands._context import AppContext
    from semmap.services.deps import DepsFormat


@click.command(
    cls=SemmapCommand,
    examples="""\
  semmap deps
  semmap deps --format json
  semmap deps --check""",
)
@click.option(
    "-f",
    "--file",
    "map_file",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the SEMMAP markdown file.  [default: SEMMAP.md]",
)
@click.option(
    "-r",
    "--root",
    type=click.Path(path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root directory of the codebase.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["mermaid", "json"]),
    default="mermaid",
    show_default=True,
    help="Output format.",
)
@click.option("--check", is_flag=True, help="Fail when a file depends on a higher layer.")
@click.pass_obj
def deps(app: AppContext, map_file: Path | None, root: Path, fmt: DepsFormat, check: bool) -> None:
    """Print the dependency graph of the files a SEMMAP documents."""
    from semmap.services.deps import DepsService

    svc = DepsService(app.settings)
    app.emit(svc.deps(app.map_file(map_file), root, fmt=fmt, check=check))
