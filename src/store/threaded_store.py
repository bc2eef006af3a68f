"""Thread-offloading adapter from blocking to awaitable stores.

This lets event-loop callers use backends that only ship a blocking
client, such as the boto3-based S3 store.
"""

from __future__ import annotations

import asyncio
from typing import Any

from store.base import JsonStore


class ThreadedJsonStore:
    """Run each call of a blocking store in a worker thread."""

    def __init__(self, store: JsonStore) -> None:
        self.store = store

    async def read_json(self, path: str) -> Any:
        return await asyncio.to_thread(self.store.read_json, path)

    async def write_json(self, path: str, payload: Any) -> None:
        await asyncio.to_thread(self.store.write_json, path, payload)

    async def list_names(self, directory: str) -> list[str]:
        return await asyncio.to_thread(self.store.list_names, directory)

    async def ensure_dir(self, directory: str) -> None:
        await asyncio.to_thread(self.store.ensure_dir, directory)
