"""Extension layer — language support via pluggy.

Discovery: built-ins, entry_points (pip-installed), and ``.semmap/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from semmap.plugins.manager import PluginManager

__all__ = ["PluginManager"]
