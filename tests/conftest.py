"""Shared pytest fixtures and test helpers for semmap tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from semmap.config.settings import SemmapSettings
from semmap.plugins.manager import PluginManager
from semmap.services.telemetry import disable_telemetry

SAMPLE_MAP = """\
# demo — Semantic Map

**Purpose:** Demonstrates the semantic map format.

## Legend

`[ENTRY]` Application entry point

`[CORE]` Core business logic

## Layer 0 — Config

`Cargo.toml`
Rust package manifest and dependencies. Centralizes project configuration.

## Layer 1 — Core

`src/main.rs`
Application entry point. Provides application entry point.
→ Exports: main

`src/lib.rs`
Library root and public exports.
→ Exports: run, Config
→ Touch: Keep the public surface stable.
"""

SAMPLE_FILES: dict[str, str] = {
    "Cargo.toml": '[package]\nname = "demo"\n',
    "src/main.rs": "use crate::lib;\n\npub fn main() {}\n",
    "src/lib.rs": "//! Library root and public exports.\n\npub fn run() {}\npub struct Config;\n",
}


@pytest.fixture(autouse=True)
def _reset_process_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep env vars, telemetry and logging from leaking between tests."""
    for var in ("SEMMAP_CONFIG", "SEMMAP_VERBOSE", "SEMMAP_QUIET", "SEMMAP_JSON_OUTPUT"):
        monkeypatch.delenv(var, raising=False)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    semmap_level = logging.getLogger("semmap").level
    yield
    disable_telemetry()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("semmap").setLevel(semmap_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A small Rust repository documented by ``SAMPLE_MAP``."""
    write_files(tmp_path, SAMPLE_FILES)
    (tmp_path / "SEMMAP.md").write_text(SAMPLE_MAP, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(tmp_path: Path) -> SemmapSettings:
    """Settings rooted at *tmp_path* with no config file."""
    return SemmapSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def plugins() -> PluginManager:
    """Plugin manager with only the built-in language plugins."""
    pm = PluginManager()
    pm.register_builtins()
    return pm


@pytest.fixture
def _in_repo(repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run with CWD at the sample repository so CLI defaults apply."""
    monkeypatch.chdir(repo)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create each relative path under *root* with the given content."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
