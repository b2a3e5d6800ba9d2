"""Command: reconcile a semantic map with the repository."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from semmap.commands._base import SemmapCommand

if TYPE_CHECKING:
    from semmap.commands._context import AppContext


@click.command(
    cls=SemmapCommand,
    examples="""\
  semmap update
  semmap update --dry-run
  semmap update -f SEMMAP.md -r crates/app""",
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
    help="Root directory to rescan.",
)
@click.option("--dry-run", is_flag=True, help="Report changes without writing the file.")
@click.pass_obj
def update(app: AppContext, map_file: Path | None, root: Path, dry_run: bool) -> None:
    """Add new files to a SEMMAP and drop deleted ones, keeping existing text."""
    from semmap.services.update import UpdateService

    app.emit(UpdateService(app.settings).update(app.map_file(map_file), root, dry_run=dry_run))
