"""Tests for line classifiers and layout conversion."""
from __future__ import annotations

import pytest

from flatfile import (
    FieldFormat,
    FlatFile,
    InvalidFormatError,
    layout_to_formats,
    length_classifier,
    static_classifier,
)
from flatfile.core.codec import as_classifier

CUSTOMER_LAYOUT = [
    {"fieldName": "CUST-ID", "startPosition": 1, "length": 6},
    {"fieldName": "CUST-NAME", "startPosition": 7, "length": 10},
    {"fieldName": "BALANCE", "startPosition": 17, "length": 5},
]


def test_static_classifier_accepts_every_line() -> None:
    formats = [FieldFormat("a", 0, 1)]
    classify = static_classifier(formats)
    assert classify(b"x") == formats
    assert classify(b"anything at all") == formats


def test_length_classifier_rejects_unknown_lengths() -> None:
    classify = length_classifier({4: [FieldFormat("code", 0, 4)]})
    assert [f.key for f in classify(b"ABCD")] == ["code"]
    assert classify(b"ABC") is None


def test_as_classifier_passes_callables_through() -> None:
    def classify(raw: bytes):
        return None

    assert as_classifier(classify) is classify
    assert as_classifier([FieldFormat("a", 0, 1)])(b"z") == [FieldFormat("a", 0, 1)]


def test_layout_positions_are_one_based() -> None:
    formats = layout_to_formats(CUSTOMER_LAYOUT)
    assert formats == [
        FieldFormat("CUST-ID", 0, 6),
        FieldFormat("CUST-NAME", 6, 10),
        FieldFormat("BALANCE", 16, 5),
    ]


def test_layout_defaults_field_names() -> None:
    formats = layout_to_formats([{"startPosition": 3, "length": 2}])
    assert formats == [FieldFormat("FIELD_3", 2, 2)]


@pytest.mark.parametrize(
    "entry",
    [
        {"fieldName": "X", "startPosition": 0, "length": 2},
        {"fieldName": "X", "startPosition": 1, "length": 0},
    ],
)
def test_invalid_layout_entries(entry: dict) -> None:
    with pytest.raises(InvalidFormatError):
        layout_to_formats([entry])


def test_layout_drives_a_flat_file() -> None:
    ff = FlatFile(layout_to_formats(CUSTOMER_LAYOUT))
    ff.append_raw("000042Jane Doe  00150")
    assert ff.key_values(0) == {"CUST-ID": "000042", "CUST-NAME": "Jane Doe", "BALANCE": "00150"}
    assert ff.string_at(0) == "000042Jane Doe  00150"
