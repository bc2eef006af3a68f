"""Public SDK surface for chronodoc.

This module provides a stable import path for library users.
It re-exports the history facades, stores, and typed results.
"""

from __future__ import annotations

from core.config import ChronodocConfig
from core.errors import (
    ChronodocConfigError,
    ChronodocCorruptDataError,
    ChronodocDependencyError,
    ChronodocError,
    ChronodocHistoryError,
    ChronodocNotFoundError,
    ChronodocStoreError,
)
from core.layout_file import load_layout_file
from core.types import DocumentLayout, RecoveryResult, SaveResult, VersionState
from history.diff_codec import DiffCodec, JsonPatchCodec
from history.document_history import AsyncDocumentHistory, DocumentHistory
from history.factory import open_async_history, open_history
from store.async_local_store import AsyncLocalJsonStore
from store.base import AsyncJsonStore, JsonStore
from store.local_store import LocalJsonStore
from store.memory_store import AsyncMemoryJsonStore, MemoryJsonStore
from store.s3_store import S3JsonStore
from store.threaded_store import ThreadedJsonStore

__all__ = [
    "AsyncDocumentHistory",
    "AsyncJsonStore",
    "AsyncLocalJsonStore",
    "AsyncMemoryJsonStore",
    "ChronodocConfig",
    "ChronodocConfigError",
    "ChronodocCorruptDataError",
    "ChronodocDependencyError",
    "ChronodocError",
    "ChronodocHistoryError",
    "ChronodocNotFoundError",
    "ChronodocStoreError",
    "DiffCodec",
    "DocumentHistory",
    "DocumentLayout",
    "JsonPatchCodec",
    "JsonStore",
    "LocalJsonStore",
    "MemoryJsonStore",
    "RecoveryResult",
    "S3JsonStore",
    "SaveResult",
    "ThreadedJsonStore",
    "VersionState",
    "load_layout_file",
    "open_async_history",
    "open_history",
]
