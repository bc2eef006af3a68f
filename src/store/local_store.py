"""Filesystem-backed JSON store.

This module persists JSON blobs as files under a root directory.
Writes go through a temporary sibling file and an atomic replace.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from core.errors import (
    ChronodocCorruptDataError,
    ChronodocNotFoundError,
    ChronodocStoreError,
)
from store.json_payload import decode_json, encode_json


class LocalJsonStore:
    """Blocking JSON store rooted at a local directory."""

    def __init__(self, root: Path | str) -> None:
        """Create a store rooted at ``root``.

        Args:
            root: Directory that relative store paths resolve against.
        """
        self._root = Path(root).expanduser()

    @property
    def root(self) -> Path:
        return self._root

    def read_json(self, path: str) -> Any:
        """Read and parse the JSON file at ``path``.

        Raises:
            ChronodocNotFoundError: If the file does not exist.
            ChronodocCorruptDataError: If the file is not valid UTF-8 JSON.
            ChronodocStoreError: If the file cannot be read.
        """
        file_path = self.resolve(path)
        try:
            text = file_path.read_text(encoding="utf-8")
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

    def write_json(self, path: str, payload: Any) -> None:
        """Write ``payload`` to ``path`` atomically.

        Raises:
            ChronodocStoreError: If the value cannot be encoded or written.
        """
        file_path = self.resolve(path)
        text = encode_json(payload, str(file_path))
        temp_path = file_path.with_name(f".{file_path.name}.{os.getpid()}.tmp")
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(text, encoding="utf-8")
            temp_path.replace(file_path)
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to write {file_path}: {error}. Check disk space and permissions."
            ) from error

    def list_names(self, directory: str) -> list[str]:
        """List entry names in ``directory``.

        Raises:
            ChronodocNotFoundError: If the directory does not exist.
            ChronodocStoreError: If the directory cannot be listed.
        """
        dir_path = self.resolve(directory)
        try:
            return sorted(entry.name for entry in dir_path.iterdir())
        except FileNotFoundError as error:
            raise ChronodocNotFoundError(f"No directory at {dir_path}.") from error
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to list {dir_path}: {error}. Check that it is a readable directory."
            ) from error

    def ensure_dir(self, directory: str) -> None:
        """Create ``directory`` and its parents when missing."""
        dir_path = self.resolve(directory)
        try:
            dir_path.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise ChronodocStoreError(
                f"Failed to create directory {dir_path}: {error}. Check permissions."
            ) from error

    def resolve(self, path: str) -> Path:
        """Map a store path onto the local filesystem."""
        return self._root / path
