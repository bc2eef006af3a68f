"""Unit tests for layout bootstrapping and interrupted-save recovery."""

from __future__ import annotations

import pytest

from core.errors import ChronodocStoreError
from store.memory_store import MemoryJsonStore
from tests.history_fixtures import FaultyStore, memory_history


def test_init_creates_head_and_snapshot() -> None:
    """init should create an empty head record and snapshot."""
    store = MemoryJsonStore()

    result = memory_history(store).init()

    assert (result.action, store.read_json("head.json"), store.read_json("document.json")) == (
        "clean",
        {"version": None},
        {},
    )


def test_init_keeps_existing_snapshot() -> None:
    """init should not overwrite an existing document."""
    store = MemoryJsonStore()
    store.write_json("document.json", {"title": "kept"})

    memory_history(store).init()

    assert store.read_json("document.json") == {"title": "kept"}


def test_recover_completes_save_interrupted_after_record() -> None:
    """A save cut short after its record landed should roll forward."""
    store = FaultyStore()
    store.fail_write_paths.add("head.json")
    history = memory_history(store)
    with pytest.raises(ChronodocStoreError):
        history.save_new_version({"a": 1})
    store.fail_write_paths.clear()

    result = history.recover()

    assert (result.action, history.current_version(), history.read_document()) == (
        "completed",
        "1000",
        {"a": 1},
    )


def test_recover_discards_save_interrupted_before_record() -> None:
    """A save cut short before its record landed should be dropped."""
    store = FaultyStore()
    store.fail_write_paths.add("history/version-1000.diff")
    history = memory_history(store)
    with pytest.raises(ChronodocStoreError):
        history.save_new_version({"a": 1})
    store.fail_write_paths.clear()

    result = history.recover()

    assert (result.action, history.list_versions(), history.current_version()) == (
        "discarded",
        [],
        None,
    )


def test_recover_without_marker_is_clean() -> None:
    """Recovery with nothing pending should report clean."""
    history = memory_history()
    history.save_new_version({"a": 1})

    assert history.recover().action == "clean"


def test_next_save_recovers_interrupted_save_first() -> None:
    """A save should finish an interrupted mutation before appending."""
    store = FaultyStore()
    store.fail_write_paths.add("document.json")
    history = memory_history(store)
    with pytest.raises(ChronodocStoreError):
        history.save_new_version({"a": 1})
    store.fail_write_paths.clear()

    history.save_new_version({"a": 1, "b": 2})

    assert history.reconstruct("1001").document == {"a": 1, "b": 2}


def test_recover_completes_apply_interrupted_before_snapshot() -> None:
    """An apply cut short before the snapshot write should roll forward."""
    store = FaultyStore()
    history = memory_history(store)
    history.save_new_version({"a": 1})
    history.save_new_version({"a": 2})
    store.fail_write_paths.add("document.json")
    with pytest.raises(ChronodocStoreError):
        history.apply_version("1000")
    store.fail_write_paths.clear()

    result = history.recover()

    assert (result.action, history.current_version(), history.read_document()) == (
        "completed",
        "1000",
        {"a": 1},
    )
