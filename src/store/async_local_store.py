"""Awaitable filesystem-backed JSON store.

This module mirrors ``LocalJsonStore`` with aiofiles so that event-loop
callers suspend at every file operation instead of blocking.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from core.errors import (
    ChronodocCorruptDataError,
    ChronodocNotFoundError,
    ChronodocStoreError,
)
from store.json_payload import decode_json, encode_json


class AsyncLocalJsonStore:
    """Awaitable JSON store rooted at a local directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    async def read_json(self, path: str) -> Any:
        file_path = self.resolve(path)
        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as handle:
                text = await handle.read()
        except FileNotFoundError as error:
            raise ChronodocNotFoundError(f"No stored JSON at {file_path}.") from error
        except UnicodeDecodeError as error:
            raise ChronodocCorruptDataError(
                f"Stored JSON at {file_path} is not valid UTF-8: {error}."
            ) from error
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to read {file_path}: {error}. Check file permissions and retry."
            ) from error
        return decode_json(text, str(file_path))

    async def write_json(self, path: str, payload: Any) -> None:
        file_path = self.resolve(path)
        text = encode_json(payload, str(file_path))
        temp_path = file_path.with_name(f".{file_path.name}.{os.getpid()}.tmp")
        try:
            await aiofiles.os.makedirs(file_path.parent, exist_ok=True)
            async with aiofiles.open(temp_path, "w", encoding="utf-8") as handle:
                await handle.write(text)
            await aiofiles.os.replace(temp_path, file_path)
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to write {file_path}: {error}. Check disk space and permissions."
            ) from error

    async def list_names(self, directory: str) -> list[str]:
        dir_path = self.resolve(directory)
        try:
            names = await aiofiles.os.listdir(dir_path)
        except FileNotFoundError as error:
            raise ChronodocNotFoundError(f"No directory at {dir_path}.") from error
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to list {dir_path}: {error}. Check that it is a readable directory."
            ) from error
        return sorted(names)

    async def ensure_dir(self, directory: str) -> None:
        dir_path = self.resolve(directory)
        try:
            await aiofiles.os.makedirs(dir_path, exist_ok=True)
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to create directory {dir_path}: {error}. Check permissions."
            ) from error

    def resolve(self, path: str) -> Path:
        return self._root / path
