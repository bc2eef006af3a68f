"""In-memory JSON stores.

Blobs are held as encoded text so every read returns a fresh value and
callers can never alias stored state.
"""

from __future__ import annotations

import threading
from typing import Any

from core.errors import ChronodocNotFoundError
from store.json_payload import decode_json, encode_json


class MemoryJsonStore:
    """A memory-backed blocking JSON store."""

    def __init__(self) -> None:
        self.blobs: dict[str, str] = {}
        self.directories: set[str] = set()
        self._lock = threading.Lock()

    def read_json(self, path: str) -> Any:
        key = _normalize(path)
        text = self.blobs.get(key)
        if text is None:
            raise ChronodocNotFoundError(f"No stored JSON at memory:{key}.")
        return decode_json(text, f"memory:{key}")

    def write_json(self, path: str, payload: Any) -> None:
        key = _normalize(path)
        text = encode_json(payload, f"memory:{key}")
        with self._lock:
            self.blobs[key] = text
            self.directories.update(_parents(key))

    def list_names(self, directory: str) -> list[str]:
        prefix = _normalize(directory)
        with self._lock:
            if prefix and prefix not in self.directories:
                raise ChronodocNotFoundError(f"No directory at memory:{prefix}.")
            entries = set(self.blobs) | self.directories
        lead = f"{prefix}/" if prefix else ""
        names = {
            entry[len(lead):].split("/", 1)[0]
            for entry in entries
            if entry.startswith(lead) and entry != prefix
        }
        return sorted(names)

    def ensure_dir(self, directory: str) -> None:
        key = _normalize(directory)
        with self._lock:
            self.directories.update(_parents(key))
            if key:
                self.directories.add(key)


class AsyncMemoryJsonStore:
    """Awaitable facade over a ``MemoryJsonStore``."""

    def __init__(self, backing: MemoryJsonStore | None = None) -> None:
        self.backing = backing or MemoryJsonStore()

    async def read_json(self, path: str) -> Any:
        return self.backing.read_json(path)

    async def write_json(self, path: str, payload: Any) -> None:
        self.backing.write_json(path, payload)

    async def list_names(self, directory: str) -> list[str]:
        return self.backing.list_names(directory)

    async def ensure_dir(self, directory: str) -> None:
        self.backing.ensure_dir(directory)


def _normalize(path: str) -> str:
    parts = [part for part in path.replace("\\", "/").split("/") if part not in ("", ".")]
    return "/".join(parts)


def _parents(key: str) -> list[str]:
    parts = key.split("/")[:-1]
    return ["/".join(parts[: index + 1]) for index in range(len(parts))]
