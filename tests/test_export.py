"""Tests for the structured (JSON) export."""
from __future__ import annotations

import json

import pytest

from flatfile import FieldFormat, FlatFile
from flatfile.api.schemas import FieldRecord


def test_records_project_every_field(roster) -> None:
    records = roster.to_records()
    assert len(records) == 3
    assert records[0] == [{"key": "name", "value": "Yoda", "offset": "0", "length": "8"}]
    assert [r["key"] for r in records[2]] == ["title", "first", "last"]
    assert records[2][2] == {"key": "last", "value": "Organa", "offset": "16", "length": "8"}


def test_json_matches_records(roster) -> None:
    assert json.loads(roster.to_json()) == roster.to_records()
    assert json.loads(roster.to_json(indent=2)) == roster.to_records()


def test_json_escapes_values() -> None:
    ff = FlatFile([FieldFormat("raw", 0, 8)])
    ff.append_raw('12"\\5678')
    ff.append_raw("        ")
    decoded = json.loads(ff.to_json())
    assert decoded[0][0]["value"] == '12"\\5678'
    assert decoded[1][0]["value"] == ""


def test_empty_file_exports_empty_list() -> None:
    assert json.loads(FlatFile([FieldFormat("raw", 0, 8)]).to_json()) == []


def test_export_does_not_change_the_file(roster) -> None:
    before = roster.to_bytes()
    roster.to_json()
    roster.to_records()[0][0]["value"] = "changed"
    assert roster.to_bytes() == before


def test_field_record_is_frozen() -> None:
    record = FieldRecord(key="name", value="Yoda", offset="0", length="8")
    with pytest.raises(Exception):
        record.value = "Luke"  # type: ignore[misc]


def test_import_is_not_supported(roster) -> None:
    with pytest.raises(NotImplementedError):
        FlatFile.from_json(roster.to_json())
