"""Build history facades from runtime configuration."""

from __future__ import annotations

from core.config import ChronodocConfig
from core.logging_config import configure_logging
from core.types import DocumentLayout
from history.document_history import AsyncDocumentHistory, DocumentHistory
from store.async_local_store import AsyncLocalJsonStore
from store.base import AsyncJsonStore, JsonStore
from store.local_store import LocalJsonStore
from store.memory_store import AsyncMemoryJsonStore, MemoryJsonStore
from store.s3_store import S3JsonStore
from store.threaded_store import ThreadedJsonStore


def open_history(
    config: ChronodocConfig | None = None,
    layout: DocumentLayout | None = None,
) -> DocumentHistory:
    """Open a blocking history handle for the configured backend.

    Args:
        config: Runtime config; read from the environment when omitted.
        layout: Document locations inside the store.

    Returns:
        Blocking history facade.
    """
    config = config or ChronodocConfig.from_env()
    configure_logging(config.log_level)
    return DocumentHistory(build_store(config), layout, strict=config.strict_errors)


def open_async_history(
    config: ChronodocConfig | None = None,
    layout: DocumentLayout | None = None,
) -> AsyncDocumentHistory:
    """Open an awaitable history handle for the configured backend.

    S3 has no native async client here, so its blocking store runs in
    worker threads.
    """
    config = config or ChronodocConfig.from_env()
    configure_logging(config.log_level)
    return AsyncDocumentHistory(build_async_store(config), layout, strict=config.strict_errors)


def build_store(config: ChronodocConfig) -> JsonStore:
    """Create the blocking store named by ``config.storage``."""
    if config.storage == "memory":
        return MemoryJsonStore()
    if config.storage == "s3":
        return S3JsonStore.from_config(config)
    return LocalJsonStore(config.data_root)


def build_async_store(config: ChronodocConfig) -> AsyncJsonStore:
    """Create the awaitable store named by ``config.storage``."""
    if config.storage == "memory":
        return AsyncMemoryJsonStore()
    if config.storage == "s3":
        return ThreadedJsonStore(S3JsonStore.from_config(config))
    return AsyncLocalJsonStore(config.data_root)
