"""Persistence store protocols.

The history core consumes stores only through these surfaces. Every
implementation raises ``ChronodocNotFoundError`` for absent paths,
``ChronodocCorruptDataError`` for unparsable JSON, and
``ChronodocStoreError`` for any other I/O fault.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JsonStore(Protocol):
    """Blocking JSON blob store.

    Implementations: ``LocalJsonStore``, ``MemoryJsonStore``, ``S3JsonStore``.
    """

    def read_json(self, path: str) -> Any: ...
    def write_json(self, path: str, payload: Any) -> None: ...
    def list_names(self, directory: str) -> list[str]: ...
    def ensure_dir(self, directory: str) -> None: ...


@runtime_checkable
class AsyncJsonStore(Protocol):
    """Awaitable JSON blob store.

    Implementations: ``AsyncLocalJsonStore``, ``AsyncMemoryJsonStore``,
    ``ThreadedJsonStore``.
    """

    async def read_json(self, path: str) -> Any: ...
    async def write_json(self, path: str, payload: Any) -> None: ...
    async def list_names(self, directory: str) -> list[str]: ...
    async def ensure_dir(self, directory: str) -> None: ...
