"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``semmap.toml`` only contains
overrides.  A project needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from semmap.domain.inference import DEFAULT_LAYER_NAMES

DEFAULT_INCLUDE_EXTS: tuple[str, ...] = (
    "rs", "ts", "js", "py", "go", "java", "toml", "yaml", "yml", "json",
)
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    ".git", "target", "node_modules", "dist", "build", "__pycache__", ".venv", "venv",
)


class ScanConfig(BaseModel):
    """[scan] section."""

    model_config = {"frozen": True}

    include_exts: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE_EXTS))
    exclude_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_DIRS))


class LayersConfig(BaseModel):
    """[layers] section.

    ``names`` maps layer numbers to display names for generated maps;
    TOML keys are strings (``[layers.names] 3 = "Helpers"``).
    """

    model_config = {"frozen": True}

    names: dict[int, str] = Field(default_factory=lambda: dict(DEFAULT_LAYER_NAMES))

    def resolved(self) -> dict[int, str]:
        """Configured names layered over the built-in defaults."""
        return {**DEFAULT_LAYER_NAMES, **self.names}

    def name_for(self, number: int) -> str:
        return self.resolved().get(number) or f"Layer {number}"


class MapConfig(BaseModel):
    """[map] section."""

    model_config = {"frozen": True}

    file: str = "SEMMAP.md"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".semmap/plugins"
