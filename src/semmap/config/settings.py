"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SEMMAP_*`` prefix, ``__`` between section and key
  3. TOML file    — ``semmap.toml`` located by :func:`find_config`
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import logging
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from semmap.config.discovery import find_config
from semmap.config.models import LayersConfig, MapConfig, PluginsConfig, ScanConfig

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = frozenset({"scan", "layers", "map", "plugins"})

# The TOML file chosen by from_cli(), visible to the source while the model builds.
_active_toml: ContextVar[Path | None] = ContextVar("_active_toml", default=None)


def read_toml(path: Path) -> dict[str, Any]:
    """Load *path*, keeping only the sections semmap understands.

    Raises:
        click.ClickException: The file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc

    unknown = sorted(set(data) - KNOWN_SECTIONS)
    if unknown:
        logger.warning("Ignoring unknown sections in %s: %s", path, ", ".join(unknown))
    return {key: value for key, value in data.items() if key in KNOWN_SECTIONS}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``semmap.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path) if toml_path and toml_path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class SemmapSettings(BaseSettings):
    """Unified settings for the semmap CLI.

    Attributes:
        project_root: Directory holding ``semmap.toml``, or CWD if none found.
        config_path: The TOML file actually loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SEMMAP_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    scan: ScanConfig = Field(default_factory=ScanConfig)
    layers: LayersConfig = Field(default_factory=LayersConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> SemmapSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist means "no config";
        otherwise the file is located from *project_root* (default: cwd).
        Without an explicit root, the project root is the directory that
        holds the config (or its ``.semmap/`` folder).
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = _root_for(toml_path) if toml_path else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        finally:
            _active_toml.reset(token)

    @property
    def plugin_dir(self) -> Path:
        """Absolute directory scanned for single-file local plugins."""
        return self.project_root / self.plugins.local_dir


def _root_for(toml_path: Path) -> Path:
    parent = toml_path.parent
    return parent.parent if parent.name == ".semmap" else parent
