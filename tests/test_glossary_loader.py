import json
from pathlib import Path

import pytest

from odx_mcp.glossary import FieldsSource, GlossaryEntry
from odx_mcp.glossary_loader import dump_glossary_file, load_glossary_file

EXAMPLE = Path(__file__).resolve().parent.parent / "glossary.example.json"


def write(tmp_path, data):
    p = tmp_path / "glossary.json"
    p.write_text(json.dumps(data), encoding="utf-8")
    return p


def test_loads_bundled_example():
    entries = load_glossary_file(EXAMPLE)
    assert [e.model for e in entries] == ["res.partner", "res.company", "sale.order"]
    assert entries[0].fields_source is FieldsSource.DYNAMIC
    assert entries[1].fields["name"]["type"] == "char"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_glossary_file(tmp_path / "nope.json")


def test_must_be_a_list(tmp_path):
    with pytest.raises(ValueError, match="JSON list"):
        load_glossary_file(write(tmp_path, {"model": "res.partner"}))


def test_rejects_duplicate_models(tmp_path):
    with pytest.raises(ValueError, match="duplicate"):
        load_glossary_file(write(tmp_path, [{"model": "res.partner"}, {"model": "res.partner"}]))


def test_dump_then_load(tmp_path):
    entries = [GlossaryEntry("res.partner", aliases=["customer"], fields={"name": {"type": "char"}})]
    out = dump_glossary_file(entries, tmp_path / "out.json")
    assert load_glossary_file(out) == entries
