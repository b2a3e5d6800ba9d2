"""Language plugin registry with failure-contained dispatch.

Sources, in registration order: built-in language plugins, packages
exposing the ``semmap.plugins`` entry-point group, then single-file
plugins in the project's ``.semmap/plugins/`` directory.  pluggy calls
the most recently registered implementation first, so local plugins can
override built-ins for a language they both claim.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

import pluggy

from semmap.plugins.hookspecs import SemmapHookSpec

PROJECT_NAME = "semmap"
ENTRY_POINT_GROUP = "semmap.plugins"
LOCAL_PREFIX = "local:"

logger = logging.getLogger(__name__)


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` for language hooks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SemmapHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """Whether :meth:`discover_and_load` has run."""
        return self._loaded

    def discover_and_load(
        self,
        *,
        local_dir: Path | None = None,
        builtins: bool = True,
    ) -> list[str]:
        """Register every plugin source and return the registered names."""
        if builtins:
            self.register_builtins()
        self._load_entry_points()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("[!_]*.py")):
                self._load_local(path)
        self._loaded = True
        return self.list_plugin_names()

    def register_builtins(self) -> None:
        from semmap.plugins.builtins import BUILTIN_PLUGINS

        for name, plugin_cls in BUILTIN_PLUGINS.items():
            if not self._pm.has_plugin(name):
                self.register_plugin(plugin_cls(), name=name)

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or type(plugin).__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # -- dispatch ----------------------------------------------------------

    def exports_for(self, rel_path: str, content: str) -> list[str] | None:
        """Public symbols of a file, or None when no plugin handles it."""
        return self._first("extract_exports", rel_path, content)

    def summary_for(self, rel_path: str, content: str) -> str | None:
        return self._first("extract_summary", rel_path, content)

    def imports_for(self, rel_path: str, content: str) -> list[str]:
        """Candidate root-relative import targets; empty when unhandled."""
        return self._first("extract_imports", rel_path, content) or []

    def _first(self, hook_name: str, rel_path: str, content: str) -> Any:
        caller = getattr(self._pm.hook, hook_name)
        try:
            return caller(rel_path=rel_path, content=content)
        except Exception:
            logger.warning("Plugin hook %s failed for %s", hook_name, rel_path, exc_info=True)
            return None

    # -- loading -----------------------------------------------------------

    def _load_entry_points(self) -> None:
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        # Entry points may name a class; hooks need an instance to bind self.
        for plugin in self.get_plugins():
            if not (inspect.isclass(plugin) and _has_hooks(plugin)):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                self.register_plugin(plugin(), name=name)
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)

    def _load_local(self, path: Path) -> None:
        module = _import_file(path)
        if module is None:
            return
        for cls in _hook_classes(module):
            try:
                self.register_plugin(cls(), name=f"{LOCAL_PREFIX}{path.stem}")
            except Exception:
                logger.warning(
                    "Failed to instantiate %s from %s", cls.__name__, path, exc_info=True
                )


def _import_file(path: Path) -> ModuleType | None:
    """Import a standalone plugin file, logging instead of raising."""
    module_name = f"semmap_local_plugin_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Failed to load local plugin %s: not importable", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        sys.modules.pop(module_name, None)
        return None
    return module


def _hook_classes(module: ModuleType) -> list[type]:
    return [
        cls
        for _, cls in inspect.getmembers(module, inspect.isclass)
        if cls.__module__ == module.__name__ and _has_hooks(cls)
    ]


def _has_hooks(cls: type) -> bool:
    """Whether any public attribute carries pluggy's ``semmap_impl`` marker."""
    return any(
        getattr(getattr(cls, attr, None), f"{PROJECT_NAME}_impl", None)
        for attr in dir(cls)
        if not attr.startswith("_")
    )
