"""Built-in language plugins, registered by :meth:`PluginManager.register_builtins`."""

from semmap.plugins.builtins.javascript import JavaScriptPlugin
from semmap.plugins.builtins.python import PythonPlugin
from semmap.plugins.builtins.rust import RustPlugin

BUILTIN_PLUGINS: dict[str, type] = {
    "rust": RustPlugin,
    "python": PythonPlugin,
    "javascript": JavaScriptPlugin,
}

__all__ = ["BUILTIN_PLUGINS", "JavaScriptPlugin", "PythonPlugin", "RustPlugin"]
