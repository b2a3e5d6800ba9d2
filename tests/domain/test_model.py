"""Tests for the document model queries."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from semmap.domain.model import Description, Document, FileEntry, Layer


def _doc() -> Document:
    return Document(
        project_name="demo",
        layers=[
            Layer(number=0, name="Config", entries=[FileEntry.create("Cargo.toml", "Manifest.")]),
            Layer(
                number=1,
                name="Core",
                entries=[
                    FileEntry.create("src/lib.rs", "Library."),
                    FileEntry.create("a.rs", "A."),
                ],
            ),
        ],
    )


class TestQueries:
    def test_all_paths_layer_then_entry_order(self) -> None:
        assert _doc().all_paths() == ["Cargo.toml", "src/lib.rs", "a.rs"]

    def test_all_paths_keeps_duplicates(self) -> None:
        entry = FileEntry.create("dup.rs", "Dup.")
        doc = Document(
            project_name="x",
            layers=[
                Layer(number=0, name="A", entries=[entry]),
                Layer(number=1, name="B", entries=[entry]),
            ],
        )
        assert doc.all_paths() == ["dup.rs", "dup.rs"]

    def test_find_entry(self) -> None:
        entry = _doc().find_entry("src/lib.rs")
        assert entry is not None
        assert entry.description.what == "Library."

    def test_find_entry_missing(self) -> None:
        assert _doc().find_entry("nope.rs") is None

    def test_find_entry_returns_first_match(self) -> None:
        doc = Document(
            project_name="x",
            layers=[
                Layer(number=0, name="A", entries=[FileEntry.create("dup.rs", "First.")]),
                Layer(number=1, name="B", entries=[FileEntry.create("dup.rs", "Second.")]),
            ],
        )
        entry = doc.find_entry("dup.rs")
        assert entry is not None
        assert entry.description.what == "First."

    def test_path_to_layer_last_wins(self) -> None:
        doc = Document(
            project_name="x",
            layers=[
                Layer(number=0, name="A", entries=[FileEntry.create("dup.rs", "First.")]),
                Layer(number=3, name="B", entries=[FileEntry.create("dup.rs", "Second.")]),
            ],
        )
        assert doc.path_to_layer() == {"dup.rs": 3}

    def test_find_layer_and_count(self) -> None:
        doc = _doc()
        layer = doc.find_layer(1)
        assert layer is not None
        assert layer.name == "Core"
        assert doc.find_layer(7) is None
        assert doc.entry_count() == 3


class TestConstruction:
    def test_create_has_no_exports_or_touch(self) -> None:
        entry = FileEntry.create("x.rs", "Does x.", "Because.")
        assert entry.description == Description(what="Does x.", why="Because.")
        assert entry.exports is None
        assert entry.touch is None

    def test_models_are_frozen(self) -> None:
        entry = FileEntry.create("x.rs", "Does x.")
        with pytest.raises(ValidationError):
            entry.path = "y.rs"  # type: ignore[misc]

    @pytest.mark.parametrize("number", [-1, 256])
    def test_layer_number_range(self, number: int) -> None:
        with pytest.raises(ValidationError):
            Layer(number=number, name="Bad")

    def test_field_wise_equality(self) -> None:
        assert _doc() == _doc()
