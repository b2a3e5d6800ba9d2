"""Per-invocation state shared by every subcommand via ``@click.pass_obj``.

Building an :class:`AppContext` installs logging (and telemetry under
``--verbose``); :meth:`AppContext.emit` is the only place results reach
the terminal.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from semmap.config.logging import configure_logging
from semmap.output.formatters import OutputSettings, format_result
from semmap.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from semmap.config.settings import SemmapSettings
    from semmap.services.result import ServiceResult


class AppContext:
    def __init__(self, settings: SemmapSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    def map_file(self, explicit: Path | None) -> Path:
        """``-f/--file`` when given, else ``[map] file`` from config."""
        return Path(self.settings.map.file) if explicit is None else explicit

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; failures go to stderr and exit with status 1.

        Result warnings are repeated on stderr unless output is JSON, where
        they are already part of the payload.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if not self.output.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
