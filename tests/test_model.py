"""Test module for status records and path canonicalization."""

from __future__ import annotations

import dataclasses

import pytest

from git_status_tracker.core.errors import ParseError
from git_status_tracker.core.model import StatusRecord, canonicalize


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("foo/bar", "foo/bar"),
        ("foo/bar/", "foo/bar"),
        ("  foo/bar/ \n", "foo/bar"),
        ("foo/bar//", "foo/bar/"),
        ("/", ""),
        ("", ""),
    ],
)
def test_canonicalize_trims_and_strips_one_separator(raw: str, expected: str) -> None:
    """Verify whitespace is trimmed and exactly one trailing separator dropped."""
    assert canonicalize(raw) == expected


def test_canonicalize_equates_trailing_separator_forms() -> None:
    """Verify both spellings of a directory address the same key."""
    assert canonicalize("foo/bar/") == canonicalize("foo/bar")


def test_build_canonicalizes_and_decodes_input() -> None:
    """Verify build trims fields and parses the raw status string."""
    record = StatusRecord.build(" /home/u/proj/ ", " main ", " 2 M|1 ?? ")
    assert record.path == "/home/u/proj"
    assert record.branch == "main"
    assert record.file_states == {"M": 2, "??": 1}


def test_build_propagates_parse_errors() -> None:
    """Verify malformed status input surfaces as ParseError."""
    with pytest.raises(ParseError):
        StatusRecord.build("/p", "main", "X M")


def test_empty_record_is_zero_value() -> None:
    """Verify the empty record has no path, branch, or states."""
    record = StatusRecord.empty()
    assert record == StatusRecord(path="", branch="", file_states={})


def test_record_is_immutable() -> None:
    """Verify record fields cannot be reassigned."""
    record = StatusRecord.build("/p", "main")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.path = "/q"  # type: ignore[misc]
