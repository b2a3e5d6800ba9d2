"""Tests for semmap.toml walk-up discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from semmap.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    HIDDEN_CONFIG,
    find_config,
)


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("")
        assert find_config(tmp_path) == config.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_hidden_config_dir(self, tmp_path: Path) -> None:
        hidden = tmp_path / HIDDEN_CONFIG
        hidden.parent.mkdir()
        hidden.write_text("")
        assert find_config(tmp_path) == hidden.resolve()

    def test_visible_config_preferred(self, tmp_path: Path) -> None:
        (tmp_path / ".semmap").mkdir()
        (tmp_path / HIDDEN_CONFIG).write_text("")
        visible = tmp_path / CONFIG_FILENAME
        visible.write_text("")
        assert find_config(tmp_path) == visible.resolve()

    def test_stops_at_repo_root(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        nested = repo / "src"
        nested.mkdir()
        assert find_config(nested) is None

    def test_config_at_repo_root_found(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        config = tmp_path / CONFIG_FILENAME
        config.write_text("")
        nested = tmp_path / "src"
        nested.mkdir()
        assert find_config(nested) == config.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "elsewhere.toml"
        custom.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(custom))
        assert find_config(tmp_path) == custom

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None
