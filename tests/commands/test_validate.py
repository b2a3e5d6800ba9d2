"""Tests for the validate CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from semmap.cli import cli
from tests.conftest import write_files


@pytest.mark.usefixtures("_in_repo")
class TestValidateCommand:
    def test_valid_map(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate"])
        assert result.exit_code == 0
        assert "SEMMAP is valid" in result.output
        assert "0 errors, 0 warnings" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "validate"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "validate"
        assert data["data"]["entries"] == 3

    def test_missing_file_exits_1(self, cli_runner: CliRunner, repo: Path) -> None:
        (repo / "src" / "main.rs").unlink()
        result = cli_runner.invoke(cli, ["validate"])
        assert result.exit_code == 1
        assert "[src/main.rs] File not found" in result.stderr
        assert "1 errors, 0 warnings" in result.stderr

    def test_strict(self, cli_runner: CliRunner, repo: Path) -> None:
        write_files(repo, {"src/extra.rs": ""})
        assert cli_runner.invoke(cli, ["validate"]).exit_code == 0
        result = cli_runner.invoke(cli, ["--json", "validate", "--strict"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["error"]["code"] == "VALIDATION_FAILED"

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "validate"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "OK: validate"

    def test_explicit_file_and_root(
        self, cli_runner: CliRunner, repo: Path, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        elsewhere = tmp_path_factory.mktemp("maps") / "MAP.md"
        elsewhere.write_text((repo / "SEMMAP.md").read_text(encoding="utf-8"), encoding="utf-8")
        result = cli_runner.invoke(cli, ["validate", "-f", str(elsewhere), "-r", str(repo)])
        assert result.exit_code == 0, result.output

    def test_missing_map(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["validate", "-f", "NOPE.md"])
        assert result.exit_code == 1
        assert "Failed to access NOPE.md" in result.stderr

    def test_map_file_from_config(self, cli_runner: CliRunner, repo: Path) -> None:
        (repo / "SEMMAP.md").rename(repo / "ARCH.md")
        (repo / "semmap.toml").write_text('[map]\nfile = "ARCH.md"\n')
        result = cli_runner.invoke(cli, ["validate"])
        assert result.exit_code == 0, result.output
