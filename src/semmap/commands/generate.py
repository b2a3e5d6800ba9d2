"""Command: generate a semantic map from a repository scan."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from semmap.commands._base import SemmapCommand

if TYPE_CHECKING:
    from semmap.commands._context import AppContext
    from semmap.services.generate import OutputFormat


@click.command(
    cls=SemmapCommand,
    examples="""\
  semmap generate
  semmap generate -r crates/app -o crates/app/SEMMAP.md
  semmap generate --name billing --purpose "Invoices and payment runs."
  semmap generate --format json -o semmap.json""",
)
@click.option(
    "-r",
    "--root",
    type=click.Path(path_type=Path),
    default=Path("."),
    show_default=True,
    help="Root directory to scan.",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Output file path.  [default: SEMMAP.md]",
)
@click.option("--name", default="", help="Project name (defaults to the root directory name).")
@click.option("--purpose", default="", help="One-sentence purpose statement.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["md", "json", "yaml"]),
    default="md",
    show_default=True,
    help="Output format.",
)
@click.pass_obj
def generate(
    app: AppContext,
    root: Path,
    output: Path | None,
    name: str,
    purpose: str,
    fmt: OutputFormat,
) -> None:
    """Scan a repository and write a new SEMMAP."""
    from semmap.services.generate import GenerateService

    svc = GenerateService(app.settings)
    app.emit(svc.generate(root, app.map_file(output), name=name, purpose=purpose, fmt=fmt))
