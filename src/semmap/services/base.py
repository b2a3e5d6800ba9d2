"""BaseService — shared foundation for semmap services.

Every service receives the resolved :class:`SemmapSettings`.  The plugin
manager is built lazily on first use so services that never inspect
source files never import a plugin.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from semmap.domain.errors import ParseError
from semmap.domain.model import Document
from semmap.infrastructure.filesystem import read_map_file
from semmap.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from semmap.config.settings import SemmapSettings
    from semmap.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class ValidateService(BaseService):
            def validate(self, map_file: Path, root: Path) -> ServiceResult:
                doc = self._load_map(map_file, op="validate")
                ...
    """

    def __init__(
        self,
        settings: SemmapSettings,
        plugins: PluginManager | None = None,
    ) -> None:
        self._settings = settings
        self._plugins = plugins

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager with built-ins, entry points and local plugins loaded."""
        if self._plugins is None:
            from semmap.plugins.manager import PluginManager

            pm = PluginManager()
            if self._settings.plugins.enabled:
                pm.discover_and_load(local_dir=self._settings.plugin_dir)
            else:
                pm.register_builtins()
            self._plugins = pm
        return self._plugins

    @staticmethod
    def _load_map(map_file: Path, *, op: str) -> Document | ServiceResult:
        """Read and parse *map_file*, or return the failure as a result."""
        try:
            return read_map_file(map_file)
        except ParseError as exc:
            logger.debug("Parse failure in %s at line %d", map_file, exc.line)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=ErrorCode.PARSE_ERROR,
                    message=str(exc),
                    detail={"path": str(map_file), "line": exc.line},
                ),
            )
        except OSError as exc:
            return io_failure(op, map_file, exc)


def io_failure(op: str, path: Path, exc: OSError) -> ServiceResult:
    """Result for a failed read or write of *path*."""
    reason = exc.strerror or str(exc)
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code=ErrorCode.IO_ERROR,
            message=f"Failed to access {path}: {reason}",
            detail={"path": str(path)},
        ),
    )
