"""Subcommand modules for semmap.

``register_commands()`` imports each command module when the root group
is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every subcommand on the root CLI group."""
    from semmap.commands.deps import deps
    from semmap.commands.generate import generate
    from semmap.commands.update import update
    from semmap.commands.validate import validate

    cli.add_command(validate)
    cli.add_command(generate)
    cli.add_command(update)
    cli.add_command(deps)
