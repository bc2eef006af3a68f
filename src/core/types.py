"""Shared typed models.

This module defines immutable data models used by the store, history,
SDK, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from core.constants import (
    DEFAULT_DIFF_FILE_PREFIX,
    DEFAULT_HEAD_FILE_NAME,
    DEFAULT_HISTORY_DIR_NAME,
    DEFAULT_SOURCE_FILE_NAME,
    PENDING_MARKER_FILE_NAME,
)

RecoveryAction = Literal["clean", "completed", "discarded"]


@dataclass(frozen=True)
class DocumentLayout:
    """Store locations for one versioned document.

    All paths are store-relative and use ``/`` separators.

    Attributes:
        source_path: Location of the document snapshot.
        head_path: Location of the head pointer record.
        history_dir: Directory holding version records.
        diff_prefix: Filename prefix of version records.
        journal_path: Optional pending-marker location; defaults to a
            file inside ``history_dir``.
    """

    source_path: str = DEFAULT_SOURCE_FILE_NAME
    head_path: str = DEFAULT_HEAD_FILE_NAME
    history_dir: str = DEFAULT_HISTORY_DIR_NAME
    diff_prefix: str = DEFAULT_DIFF_FILE_PREFIX
    journal_path: str | None = None

    @property
    def pending_path(self) -> str:
        """Return the resolved pending-marker location."""
        if self.journal_path:
            return self.journal_path
        return f"{self.history_dir.rstrip('/')}/{PENDING_MARKER_FILE_NAME}"


@dataclass(frozen=True)
class SaveResult:
    """Outcome of saving a new document state.

    A result is falsy when the target matched the current snapshot and
    nothing was written.

    Attributes:
        changed: Whether any state was written.
        version_id: Version the head points at after the save.
        document: Document snapshot after the save.
    """

    changed: bool
    version_id: str | None
    document: Any

    def __bool__(self) -> bool:
        return self.changed


@dataclass(frozen=True)
class VersionState:
    """A document value as of one recorded version."""

    version_id: str
    document: Any


@dataclass(frozen=True)
class RecoveryResult:
    """Outcome of inspecting the pending marker.

    Attributes:
        action: ``clean`` when nothing was pending, ``completed`` when an
            interrupted mutation was rolled forward, ``discarded`` when its
            version record never landed.
        version_id: Version named by the pending marker, if any.
    """

    action: RecoveryAction
    version_id: str | None = None
