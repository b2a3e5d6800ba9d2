"""Tests for map file I/O and repository discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from semmap.domain.errors import ParseError
from semmap.domain.model import Document, FileEntry, Layer
from semmap.infrastructure.filesystem import (
    find_source_files,
    read_map_file,
    read_source_file,
    write_map_file,
    write_text_file,
)
from tests.conftest import SAMPLE_MAP, write_files


class TestMapFileIO:
    def test_read(self, tmp_path: Path) -> None:
        path = tmp_path / "SEMMAP.md"
        path.write_text(SAMPLE_MAP, encoding="utf-8")
        doc = read_map_file(path)
        assert doc.project_name == "demo"
        assert doc.entry_count() == 3

    def test_read_missing_raises_oserror(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            read_map_file(tmp_path / "missing.md")

    def test_read_untitled_raises_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "SEMMAP.md"
        path.write_text("no title here\n", encoding="utf-8")
        with pytest.raises(ParseError):
            read_map_file(path)

    def test_write_then_read(self, tmp_path: Path) -> None:
        doc = Document(
            project_name="demo",
            purpose="Demo.",
            layers=[Layer(number=0, name="Config", entries=[FileEntry.create("a.toml", "A.")])],
        )
        path = tmp_path / "nested" / "SEMMAP.md"
        write_map_file(path, doc)
        assert read_map_file(path) == doc

    def test_write_text_creates_parents(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "out.json"
        write_text_file(path, "{}")
        assert path.read_text(encoding="utf-8") == "{}"


class TestReadSourceFile:
    def test_replaces_undecodable_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "bin.rs"
        path.write_bytes(b"pub fn ok() {}\n\xff\xfe")
        assert read_source_file(path).startswith("pub fn ok()")


class TestFindSourceFiles:
    def test_filters_and_sorts(self, tmp_path: Path) -> None:
        write_files(
            tmp_path,
            {
                "src/b.rs": "",
                "src/a.rs": "",
                "README.md": "",
                "Cargo.toml": "",
                "target/debug/build.rs": "",
                ".git/config.toml": "",
                "src/.hidden.rs": "",
                ".github/workflows/ci.yml": "",
            },
        )
        found = find_source_files(
            tmp_path, include_exts=["rs", "toml", "yml"], exclude_dirs=["target"]
        )
        assert found == ["Cargo.toml", "src/a.rs", "src/b.rs"]

    def test_accepts_dotted_extensions(self, tmp_path: Path) -> None:
        write_files(tmp_path, {"main.py": ""})
        assert find_source_files(tmp_path, include_exts=[".py"], exclude_dirs=[]) == ["main.py"]

    def test_empty_root(self, tmp_path: Path) -> None:
        assert find_source_files(tmp_path, include_exts=["rs"], exclude_dirs=[]) == []
