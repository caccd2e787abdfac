"""Shared test fixtures for the chant_pointer test suite.

WHY: Several test modules need the same psalm records: a single psalm,
a small collection, and the JSON files on disk the CLI reads.
Centralizing them here avoids duplication and keeps the expected
pointings in one place.

HOW: Pytest fixtures return fresh dicts (so tests may mutate them
freely) and write them to tmp_path when a file is needed.

RULES:
- Expected pointings for VENITE_TEXT are worked out by hand in the
  pointer tests; change the text and those tests together
- Every fixture returns a new object per test
"""

import copy
import json
from typing import Any, Dict

import pytest


VENITE_TEXT = (
    "O come, let us sing unto the Lord;\n"
    "let us heartily rejoice in the strength of our salvation."
)

PSALM_95: Dict[str, Any] = {
    "psalm_number": 95,
    "latin_name": "Venite, exultemus",
    "text": VENITE_TEXT,
}

PSALM_103: Dict[str, Any] = {
    "psalm_number": 103,
    "latin_name": "Benedic, anima mea",
    "text": "Praise the Lord, O my soul\nand all that is within me, praise his holy Name.",
}

COLLECTION: Dict[str, Any] = {
    "version": "1979-bcp",
    "name": "Psalter",
    "psalms": [PSALM_95, PSALM_103],
}


@pytest.fixture
def venite_text():
    """Two lines of Psalm 95 with a comma and a semicolon in the first."""
    return VENITE_TEXT


@pytest.fixture
def psalm_95():
    """Psalm 95 (first verse only) as a single psalm record."""
    return copy.deepcopy(PSALM_95)


@pytest.fixture
def psalm_collection():
    """A two-psalm collection without a description."""
    return copy.deepcopy(COLLECTION)


@pytest.fixture
def psalm_file(tmp_path, psalm_95):
    """Psalm 95 written to tmp_path/psalm_95.json."""
    path = tmp_path / "psalm_95.json"
    path.write_text(json.dumps(psalm_95), encoding="utf-8")
    return path


@pytest.fixture
def collection_file(tmp_path, psalm_collection):
    """The two-psalm collection written to tmp_path/psalms.json."""
    path = tmp_path / "psalms.json"
    path.write_text(json.dumps(psalm_collection), encoding="utf-8")
    return path
