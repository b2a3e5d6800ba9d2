"""Pluggy hook specifications for language support.

Each hook is ``firstresult``: plugins return None for files they do not
handle, and the first non-None answer wins.  Built-in plugins cover Rust,
Python and JavaScript/TypeScript; third-party plugins register through
the ``semmap.plugins`` entry-point group.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("semmap")


class SemmapHookSpec:
    """Hook specifications for the semmap plugin system."""

    @hookspec(firstresult=True)
    def extract_exports(self, rel_path: str, content: str) -> list[str] | None:
        """Return the public symbols a file exports, or None if unhandled."""

    @hookspec(firstresult=True)
    def extract_summary(self, rel_path: str, content: str) -> str | None:
        """Return the file's own documentation text, or None."""

    @hookspec(firstresult=True)
    def extract_imports(self, rel_path: str, content: str) -> list[str] | None:
        """Return candidate root-relative paths the file imports, or None.

        Candidates need not exist; callers keep only documented paths.
        """
