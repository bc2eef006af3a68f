"""Shared history helpers for tests."""

from __future__ import annotations

from typing import Any

from core.errors import ChronodocStoreError
from history.document_history import DocumentHistory
from store.memory_store import MemoryJsonStore


class SteppingClock:
    """Millisecond clock returning a fixed start and advancing on request."""

    def __init__(self, start_ms: int = 1_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, delta_ms: int = 1) -> None:
        self.now_ms += delta_ms


class FaultyStore(MemoryJsonStore):
    """Memory store that fails writes or reads of chosen paths.

    Attributes:
        fail_write_paths: Paths whose next writes raise a store error.
        fail_read_paths: Paths whose reads raise a store error.
        fail_listing: Whether directory listing raises a store error.
    """

    def __init__(self) -> None:
        super().__init__()
        self.fail_write_paths: set[str] = set()
        self.fail_read_paths: set[str] = set()
        self.fail_listing = False

    def read_json(self, path: str) -> Any:
        if path in self.fail_read_paths:
            raise ChronodocStoreError(f"Simulated read fault at {path}.")
        return super().read_json(path)

    def write_json(self, path: str, payload: Any) -> None:
        if path in self.fail_write_paths:
            raise ChronodocStoreError(f"Simulated write fault at {path}.")
        super().write_json(path, payload)

    def list_names(self, directory: str) -> list[str]:
        if self.fail_listing:
            raise ChronodocStoreError(f"Simulated listing fault at {directory}.")
        return super().list_names(directory)


def memory_history(
    store: MemoryJsonStore | None = None,
    clock: SteppingClock | None = None,
    strict: bool = False,
) -> DocumentHistory:
    """Build a history over a memory store with a deterministic clock.

    Args:
        store: Backing store; a fresh one when omitted.
        clock: Clock for identifier minting.
        strict: Propagate read faults.

    Returns:
        Blocking history facade.
    """
    return DocumentHistory(
        store or MemoryJsonStore(),
        clock=clock or SteppingClock(),
        strict=strict,
    )
