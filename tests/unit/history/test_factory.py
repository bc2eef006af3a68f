"""Unit tests for building history facades from config."""

from __future__ import annotations

from dataclasses import replace

import pytest

from core.config import ChronodocConfig
from core.errors import ChronodocConfigError
from history.factory import build_async_store, build_store, open_history
from store.async_local_store import AsyncLocalJsonStore
from store.local_store import LocalJsonStore
from store.memory_store import MemoryJsonStore


def test_build_store_defaults_to_local_root(tmp_path) -> None:
    """The local backend should root its store at the data root."""
    config = replace(ChronodocConfig.from_env(), data_root=tmp_path, storage="local")

    store = build_store(config)

    assert isinstance(store, LocalJsonStore) and store.root == tmp_path


def test_build_store_selects_memory_backend(tmp_path) -> None:
    """The memory backend should produce a memory store."""
    config = replace(ChronodocConfig.from_env(), data_root=tmp_path, storage="memory")

    assert isinstance(build_store(config), MemoryJsonStore)


def test_build_async_store_selects_aiofiles_backend(tmp_path) -> None:
    """The local backend should produce the aiofiles store for async callers."""
    config = replace(ChronodocConfig.from_env(), data_root=tmp_path, storage="local")

    assert isinstance(build_async_store(config), AsyncLocalJsonStore)


def test_build_store_requires_uri_for_s3(tmp_path) -> None:
    """An s3 backend without a URI should fail fast."""
    config = replace(ChronodocConfig.from_env(), storage="s3", s3_uri=None)

    with pytest.raises(ChronodocConfigError):
        build_store(config)


def test_open_history_writes_under_data_root(tmp_path) -> None:
    """A history opened from config should persist under the data root."""
    config = replace(ChronodocConfig.from_env(), data_root=tmp_path, storage="local")
    history = open_history(config)

    history.save_new_version({"a": 1})

    assert (tmp_path / "document.json").exists()
