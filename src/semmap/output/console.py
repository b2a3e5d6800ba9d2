"""Rich Console factory and theme for semmap output.

Consoles render into a StringIO buffer so renderers return plain strings.
In non-TTY environments (tests, pipes) Rich drops color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SEMMAP_THEME = Theme(
    {
        "semmap.ok": "bold green",
        "semmap.error": "bold red",
        "semmap.warning": "bold yellow",
        "semmap.op": "bold cyan",
        "semmap.key": "dim",
        "semmap.path": "cyan",
        "semmap.added": "green",
        "semmap.removed": "red",
    }
)

SEVERITY_STYLES: dict[str, str] = {
    "error": "semmap.error",
    "warning": "semmap.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SEMMAP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
