"""Unit tests for the awaitable filesystem JSON store."""

from __future__ import annotations

import asyncio

import pytest

from core.errors import ChronodocCorruptDataError, ChronodocNotFoundError
from store.async_local_store import AsyncLocalJsonStore
from store.local_store import LocalJsonStore


def test_async_write_is_readable_by_blocking_store(tmp_path) -> None:
    """Both local stores should share one on-disk format."""
    store = AsyncLocalJsonStore(tmp_path)
    delta = [{"op": "add", "path": "/a", "value": 1}]

    asyncio.run(store.write_json("history/version-1.diff", delta))

    assert LocalJsonStore(tmp_path).read_json("history/version-1.diff")[0]["value"] == 1


def test_async_read_raises_not_found_for_missing_file(tmp_path) -> None:
    """Missing files should raise the not-found error."""
    store = AsyncLocalJsonStore(tmp_path)

    with pytest.raises(ChronodocNotFoundError):
        asyncio.run(store.read_json("document.json"))


def test_async_list_names_sorts_entries(tmp_path) -> None:
    """Listing should return sorted entry names."""
    store = AsyncLocalJsonStore(tmp_path)

    async def _write_and_list() -> list[str]:
        await store.ensure_dir("history")
        await store.write_json("history/version-2.diff", [])
        await store.write_json("history/version-1.diff", [])
        return await store.list_names("history")

    assert asyncio.run(_write_and_list()) == ["version-1.diff", "version-2.diff"]


def test_async_list_names_raises_not_found_for_missing_directory(tmp_path) -> None:
    """Listing a missing directory should raise the not-found error."""
    store = AsyncLocalJsonStore(tmp_path)

    with pytest.raises(ChronodocNotFoundError):
        asyncio.run(store.list_names("history"))


def test_async_read_raises_corrupt_for_invalid_utf8(tmp_path) -> None:
    """Files that are not UTF-8 should raise the corrupt-data error."""
    (tmp_path / "document.json").write_bytes(b"\xff\xfe garbage")
    store = AsyncLocalJsonStore(tmp_path)

    with pytest.raises(ChronodocCorruptDataError):
        asyncio.run(store.read_json("document.json"))
