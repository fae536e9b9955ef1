"""Tests for metadata normalisation and merging."""

from __future__ import annotations

from s3conn import shallow_merge, stringify_metadata


def test_stringify_metadata_converts_values_and_drops_none() -> None:
    result = stringify_metadata({"count": 3, "ratio": 0.5, "ok": True, "gone": None, "name": "a"})
    assert result == {"count": "3", "ratio": "0.5", "ok": "true", "name": "a"}


def test_stringify_metadata_non_mapping_is_empty() -> None:
    assert stringify_metadata(None) == {}
    assert stringify_metadata({}) == {}
    assert stringify_metadata("not a mapping") == {}
    assert stringify_metadata(["a", "b"]) == {}


def test_shallow_merge_overrides_and_removes() -> None:
    current = {"owner": "ada", "stage": "draft", "tmp": "1"}
    merged = shallow_merge(current, {"stage": "final", "tmp": None, "reviewer": "bob"})
    assert merged == {"owner": "ada", "stage": "final", "reviewer": "bob"}
    assert current == {"owner": "ada", "stage": "draft", "tmp": "1"}
