"""Unit tests for the filesystem JSON store."""

from __future__ import annotations

import pytest

from core.errors import ChronodocCorruptDataError, ChronodocNotFoundError
from store.local_store import LocalJsonStore


def test_write_json_round_trips_nested_value(tmp_path) -> None:
    """A written value should read back unchanged."""
    store = LocalJsonStore(tmp_path)
    payload = {"title": "draft", "tags": ["a", "b"], "meta": {"count": 2}}

    store.write_json("history/version-1.diff", payload)

    assert store.read_json("history/version-1.diff") == payload


def test_write_json_leaves_no_temporary_files(tmp_path) -> None:
    """Atomic writes should not leave temporary siblings behind."""
    store = LocalJsonStore(tmp_path)

    store.write_json("document.json", {"a": 1})

    assert sorted(path.name for path in tmp_path.iterdir()) == ["document.json"]


def test_read_json_raises_not_found_for_missing_file(tmp_path) -> None:
    """Missing files should raise the not-found error."""
    store = LocalJsonStore(tmp_path)

    with pytest.raises(ChronodocNotFoundError):
        store.read_json("head.json")


def test_read_json_raises_corrupt_for_invalid_json(tmp_path) -> None:
    """Unparsable files should raise the corrupt-data error."""
    (tmp_path / "head.json").write_text("{not json", encoding="utf-8")
    store = LocalJsonStore(tmp_path)

    with pytest.raises(ChronodocCorruptDataError):
        store.read_json("head.json")


def test_list_names_returns_sorted_entries(tmp_path) -> None:
    """Listing should return entry names in sorted order."""
    store = LocalJsonStore(tmp_path)
    store.write_json("history/version-20.diff", [])
    store.write_json("history/version-3.diff", [])

    names = store.list_names("history")

    assert names == ["version-20.diff", "version-3.diff"]


def test_list_names_raises_not_found_for_missing_directory(tmp_path) -> None:
    """Listing a missing directory should raise the not-found error."""
    store = LocalJsonStore(tmp_path)

    with pytest.raises(ChronodocNotFoundError):
        store.list_names("history")


def test_ensure_dir_creates_nested_directory(tmp_path) -> None:
    """ensure_dir should create missing parents."""
    store = LocalJsonStore(tmp_path)

    store.ensure_dir("docs/history")

    assert (tmp_path / "docs" / "history").is_dir()


def test_read_json_raises_corrupt_for_invalid_utf8(tmp_path) -> None:
    """Files that are not UTF-8 should raise the corrupt-data error."""
    (tmp_path / "head.json").write_bytes(b"\xff\xfe garbage")
    store = LocalJsonStore(tmp_path)

    with pytest.raises(ChronodocCorruptDataError):
        store.read_json("head.json")
