"""Per-document settings shared by every history step."""

from __future__ import annotations

from dataclasses import dataclass, field
import time
from typing import Callable

from core.types import DocumentLayout
from history.diff_codec import DiffCodec, JsonPatchCodec


def current_time_ms() -> int:
    """Return wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class HistoryContext:
    """Settings for one versioned document.

    Attributes:
        layout: Store locations of snapshot, head, and records.
        codec: Diff codec used for deltas.
        strict: Propagate read faults instead of degrading them.
        clock: Millisecond clock used to mint version identifiers.
    """

    layout: DocumentLayout = field(default_factory=DocumentLayout)
    codec: DiffCodec = field(default_factory=JsonPatchCodec)
    strict: bool = False
    clock: Callable[[], int] = current_time_ms
