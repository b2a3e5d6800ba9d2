"""Command: validate a semantic map."""

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
  semmap validate
  semmap validate -f docs/SEMMAP.md -r .
  semmap validate --strict
  semmap --json validate""",
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
    help="Root directory documented paths are checked against.",
)
@click.option("--strict", is_flag=True, help="Also require every source file to be documented.")
@click.pass_obj
def validate(app: AppContext, map_file: Path | None, root: Path, strict: bool) -> None:
    """Check a SEMMAP file for structural problems and missing files."""
    from semmap.services.validate import ValidateService

    app.emit(ValidateService(app.settings).validate(app.map_file(map_file), root, strict=strict))
