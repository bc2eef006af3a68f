"""Blocking and awaitable entry points for one versioned document.

Both facades run the same history steps; they differ only in how store
calls are executed. Every call re-reads snapshot, head, and chain from the
store. Mutating calls are serialized per facade instance.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any, Callable

from core.types import DocumentLayout, RecoveryResult, SaveResult, VersionState
from history import append, head, navigation, recovery
from history.chain import list_versions
from history.context import HistoryContext, current_time_ms
from history.diff_codec import DiffCodec, JsonPatchCodec
from history.reconstruct import reconstruct
from history.runner import Steps, T, run_steps, run_steps_async
from store.base import AsyncJsonStore, JsonStore


def build_context(
    layout: DocumentLayout | None = None,
    codec: DiffCodec | None = None,
    strict: bool = False,
    clock: Callable[[], int] | None = None,
) -> HistoryContext:
    """Assemble per-document settings with defaults filled in."""
    return HistoryContext(
        layout=layout or DocumentLayout(),
        codec=codec or JsonPatchCodec(),
        strict=strict,
        clock=clock or current_time_ms,
    )


class DocumentHistory:
    """Blocking history API over a ``JsonStore``."""

    def __init__(
        self,
        store: JsonStore,
        layout: DocumentLayout | None = None,
        *,
        codec: DiffCodec | None = None,
        strict: bool = False,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Create a history handle.

        Args:
            store: Blocking store holding the document.
            layout: Store locations; defaults to ``DocumentLayout()``.
            codec: Diff codec; defaults to ``JsonPatchCodec``.
            strict: Propagate read faults instead of degrading them.
            clock: Millisecond clock used for identifier minting.
        """
        self._store = store
        self._context = build_context(layout, codec, strict, clock)
        self._lock = threading.RLock()

    @property
    def layout(self) -> DocumentLayout:
        return self._context.layout

    def init(self) -> RecoveryResult:
        """Create missing layout blobs and recover interrupted mutations."""
        return self._mutate(recovery.initialize_layout(self._context))

    def recover(self) -> RecoveryResult:
        return self._mutate(recovery.recover_pending(self._context))

    def read_document(self) -> Any:
        """Return the current document snapshot."""
        return self._run(append.read_snapshot(self._context))

    def list_versions(self) -> list[str]:
        return self._run(list_versions(self._context))

    def current_version(self) -> str | None:
        return self._run(head.read_head(self._context))

    def set_current_version(self, version_id: str | None) -> bool:
        return self._mutate(head.set_current_version(self._context, version_id))

    def save_new_version(self, target: Any) -> SaveResult:
        return self._mutate(append.save_new_version(self._context, target))

    def reconstruct(self, version_id: str) -> VersionState | None:
        return self._run(reconstruct(self._context, version_id))

    def previous_version(self) -> str | None:
        return self._run(navigation.previous_version(self._context))

    def next_version(self) -> str | None:
        return self._run(navigation.next_version(self._context))

    def initial_version(self) -> VersionState | None:
        return self._run(navigation.initial_version(self._context))

    def latest_version(self) -> VersionState | None:
        return self._run(navigation.latest_version(self._context))

    def apply_version(self, version_id: str) -> VersionState | None:
        return self._mutate(navigation.apply_version(self._context, version_id))

    def apply_previous_version(self) -> VersionState | None:
        return self._mutate(navigation.apply_previous_version(self._context))

    def apply_next_version(self) -> VersionState | None:
        return self._mutate(navigation.apply_next_version(self._context))

    def apply_initial_version(self) -> VersionState | None:
        return self._mutate(navigation.apply_initial_version(self._context))

    def apply_latest_version(self) -> VersionState | None:
        return self._mutate(navigation.apply_latest_version(self._context))

    def _run(self, steps: Steps[T]) -> T:
        return run_steps(steps, self._store)

    def _mutate(self, steps: Steps[T]) -> T:
        with self._lock:
            return run_steps(steps, self._store)


class AsyncDocumentHistory:
    """Awaitable history API over an ``AsyncJsonStore``.

    Method names and results match ``DocumentHistory``.
    """

    def __init__(
        self,
        store: AsyncJsonStore,
        layout: DocumentLayout | None = None,
        *,
        codec: DiffCodec | None = None,
        strict: bool = False,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._store = store
        self._context = build_context(layout, codec, strict, clock)
        self._lock = asyncio.Lock()

    @property
    def layout(self) -> DocumentLayout:
        return self._context.layout

    async def init(self) -> RecoveryResult:
        return await self._mutate(recovery.initialize_layout(self._context))

    async def recover(self) -> RecoveryResult:
        return await self._mutate(recovery.recover_pending(self._context))

    async def read_document(self) -> Any:
        return await self._run(append.read_snapshot(self._context))

    async def list_versions(self) -> list[str]:
        return await self._run(list_versions(self._context))

    async def current_version(self) -> str | None:
        return await self._run(head.read_head(self._context))

    async def set_current_version(self, version_id: str | None) -> bool:
        return await self._mutate(head.set_current_version(self._context, version_id))

    async def save_new_version(self, target: Any) -> SaveResult:
        return await self._mutate(append.save_new_version(self._context, target))

    async def reconstruct(self, version_id: str) -> VersionState | None:
        return await self._run(reconstruct(self._context, version_id))

    async def previous_version(self) -> str | None:
        return await self._run(navigation.previous_version(self._context))

    async def next_version(self) -> str | None:
        return await self._run(navigation.next_version(self._context))

    async def initial_version(self) -> VersionState | None:
        return await self._run(navigation.initial_version(self._context))

    async def latest_version(self) -> VersionState | None:
        return await self._run(navigation.latest_version(self._context))

    async def apply_version(self, version_id: str) -> VersionState | None:
        return await self._mutate(navigation.apply_version(self._context, version_id))

    async def apply_previous_version(self) -> VersionState | None:
        return await self._mutate(navigation.apply_previous_version(self._context))

    async def apply_next_version(self) -> VersionState | None:
        return await self._mutate(navigation.apply_next_version(self._context))

    async def apply_initial_version(self) -> VersionState | None:
        return await self._mutate(navigation.apply_initial_version(self._context))

    async def apply_latest_version(self) -> VersionState | None:
        return await self._mutate(navigation.apply_latest_version(self._context))

    async def _run(self, steps: Steps[T]) -> T:
        return await run_steps_async(steps, self._store)

    async def _mutate(self, steps: Steps[T]) -> T:
        async with self._lock:
            return await run_steps_async(steps, self._store)
