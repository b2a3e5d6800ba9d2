"""Tests for canonical rendering and the machine formats."""

from __future__ import annotations

import json

import pytest
from ruamel.yaml import YAML

from semmap.domain.model import Description, Document, FileEntry, Layer, LegendEntry
from semmap.domain.parser import parse
from semmap.domain.serializer import format_description, format_document, to_json, to_yaml
from tests.conftest import SAMPLE_MAP


def _full_doc() -> Document:
    return Document(
        project_name="demo",
        purpose="Shows every feature.",
        legend=[LegendEntry(tag="CORE", definition="Core business logic")],
        layers=[
            Layer(
                number=0,
                name="Config",
                entries=[FileEntry.create("Cargo.toml", "Manifest.", "Lists crates.")],
            ),
            Layer(
                number=2,
                name="Domain",
                entries=[
                    FileEntry(
                        path="src/model.rs",
                        description=Description(what="Defines types.", why="Shared by all."),
                        exports=["User", "Account"],
                        touch="Schema changes need a migration.",
                    ),
                    FileEntry.create("src/empty_touch.rs", "Has an empty touch."),
                ],
            ),
        ],
    )


class TestFormatDocument:
    def test_canonical_text(self) -> None:
        doc = Document(
            project_name="demo",
            purpose="P.",
            legend=[LegendEntry(tag="CORE", definition="Core")],
            layers=[
                Layer(
                    number=1,
                    name="Core",
                    entries=[
                        FileEntry(
                            path="a.rs",
                            description=Description(what="A.", why="Why."),
                            exports=["x", "y"],
                            touch="t",
                        )
                    ],
                )
            ],
        )
        assert format_document(doc) == (
            "# demo — Semantic Map\n\n"
            "**Purpose:** P.\n\n"
            "## Legend\n\n"
            "`[CORE]` Core\n\n"
            "## Layer 1 — Core\n\n"
            "`a.rs`\n"
            "A. Why.\n"
            "→ Exports: x, y\n"
            "→ Touch: t\n\n"
        )

    def test_omits_empty_purpose_and_legend(self) -> None:
        text = format_document(Document(project_name="bare"))
        assert text == "# bare — Semantic Map\n\n"

    def test_empty_exports_not_rendered(self) -> None:
        entry = FileEntry(path="a.rs", description=Description(what="A."), exports=[])
        doc = Document(project_name="x", layers=[Layer(number=0, name="L", entries=[entry])])
        assert "Exports" not in format_document(doc)

    def test_does_not_resort_layers(self) -> None:
        doc = Document(
            project_name="x",
            layers=[
                Layer(number=3, name="Late", entries=[FileEntry.create("b.rs", "B.")]),
                Layer(number=0, name="Early", entries=[FileEntry.create("a.rs", "A.")]),
            ],
        )
        text = format_document(doc)
        assert text.index("## Layer 3") < text.index("## Layer 0")

    def test_format_description(self) -> None:
        assert format_description(Description(what="A.", why="")) == "A."
        assert format_description(Description(what="A.", why="B.")) == "A. B."


class TestRoundTrip:
    def test_full_document(self) -> None:
        doc = _full_doc()
        assert parse(format_document(doc)) == doc

    def test_sample_map(self) -> None:
        doc = parse(SAMPLE_MAP)
        assert parse(format_document(doc)) == doc

    def test_empty_touch_survives(self) -> None:
        entry = FileEntry(path="a.rs", description=Description(what="A."), touch="")
        doc = Document(project_name="x", layers=[Layer(number=0, name="L", entries=[entry])])
        assert parse(format_document(doc)) == doc

    def test_entry_without_description(self) -> None:
        entry = FileEntry(path="a.rs", description=Description(what=""), exports=["f"])
        doc = Document(project_name="x", layers=[Layer(number=0, name="L", entries=[entry])])
        assert parse(format_document(doc)) == doc

    @pytest.mark.parametrize("what", ["Touch: screens are handled here.", "Exports: the API."])
    def test_marker_words_in_description(self, what: str) -> None:
        entry = FileEntry.create("a.py", what)
        doc = Document(project_name="p", layers=[Layer(number=0, name="X", entries=[entry])])
        assert parse(format_document(doc)) == doc

    def test_legend_without_definition(self) -> None:
        doc = Document(project_name="p", legend=[LegendEntry(tag="CORE", definition="")])
        assert format_document(doc) == "# p — Semantic Map\n\n## Legend\n\n`[CORE]`\n\n"
        assert parse(format_document(doc)) == doc

    @pytest.mark.parametrize("name", ["app", "my-app", "Two Words"])
    def test_project_names(self, name: str) -> None:
        doc = Document(project_name=name, purpose="P.")
        assert parse(format_document(doc)) == doc

    def test_hyphen_variant_normalizes_to_em_dash(self) -> None:
        legacy = "# app - Semantic Map\n\nPurpose: Old.\n\n## Layer 0 - Config\n\n`a.toml`\nA.\n"
        text = format_document(parse(legacy))
        assert text.startswith("# app — Semantic Map\n\n**Purpose:** Old.\n\n## Layer 0 — Config")


class TestMachineFormats:
    def test_to_json_keys(self) -> None:
        data = json.loads(to_json(_full_doc()))
        assert set(data) == {"project_name", "purpose", "legend", "layers"}
        assert data["layers"][1]["entries"][0]["exports"] == ["User", "Account"]

    def test_to_json_validates_back(self) -> None:
        doc = _full_doc()
        assert Document.model_validate_json(to_json(doc)) == doc

    def test_to_yaml_loads_back(self) -> None:
        doc = _full_doc()
        data = YAML(typ="safe").load(to_yaml(doc))
        assert Document.model_validate(data) == doc
