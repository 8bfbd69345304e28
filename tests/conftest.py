"""Shared fixtures: a small roster of names in three record layouts."""
from __future__ import annotations

import pytest

from flatfile import FieldFormat, FlatFile, length_classifier

NAME = [FieldFormat("name", 0, 8)]
FIRST_LAST = [FieldFormat("first", 0, 8), FieldFormat("last", 8, 8)]
TITLE_FIRST_LAST = [
    FieldFormat("title", 0, 8),
    FieldFormat("first", 8, 8),
    FieldFormat("last", 16, 8),
]


@pytest.fixture
def roster_classifier():
    return length_classifier({8: NAME, 16: FIRST_LAST, 24: TITLE_FIRST_LAST})


@pytest.fixture
def roster(roster_classifier) -> FlatFile:
    ff = FlatFile(roster_classifier)
    ff.append_raw("Yoda    ")
    ff.append_raw("Luke    Skywalke")
    ff.append_raw("PrincessLeia    Organa  ")
    return ff
