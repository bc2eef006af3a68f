"""Layout bootstrapping and write-ahead recovery.

Saving and applying a version each touch several blobs with no shared
transaction. Before such a mutation starts, a pending marker naming the
target version and document is written, and it is cleared once every
write has landed. A marker found later means the mutation was cut short:
it is rolled forward when its version record exists, and discarded when
the record never landed.
"""

from __future__ import annotations

from typing import Any

from core.errors import ChronodocCorruptDataError, ChronodocNotFoundError
from core.logging_config import get_logger
from core.types import RecoveryResult
from history.chain import version_path
from history.context import HistoryContext
from history.head import head_version_from_payload, write_head
from history.runner import EnsureDir, ReadJson, Steps, WriteJson

_LOGGER = get_logger(__name__)


def begin_pending(context: HistoryContext, version_id: str, document: Any) -> Steps[None]:
    """Write the pending marker for a mutation about to start."""
    yield WriteJson(
        context.layout.pending_path,
        {"pending": {"version": version_id, "document": document}},
    )


def clear_pending(context: HistoryContext) -> Steps[None]:
    """Mark the in-flight mutation as complete."""
    yield WriteJson(context.layout.pending_path, {"pending": None})


def commit_state(context: HistoryContext, version_id: str, document: Any) -> Steps[None]:
    """Move head and snapshot to a recorded version under a pending marker."""
    yield from begin_pending(context, version_id, document)
    yield from write_head(context, version_id)
    yield WriteJson(context.layout.source_path, document)
    yield from clear_pending(context)


def read_pending(context: HistoryContext) -> Steps[dict[str, Any] | None]:
    """Return the in-flight mutation recorded by the marker, if any."""
    pending_path = context.layout.pending_path
    try:
        payload = yield ReadJson(pending_path)
    except ChronodocNotFoundError:
        return None
    except ChronodocCorruptDataError as error:
        _LOGGER.error("pending_marker_malformed", pending_path=pending_path, error=str(error))
        return None
    pending = payload.get("pending") if isinstance(payload, dict) else None
    if not isinstance(pending, dict) or "document" not in pending:
        return None
    if head_version_from_payload(pending) is None:
        return None
    return pending


def recover_pending(context: HistoryContext) -> Steps[RecoveryResult]:
    """Complete or discard a mutation interrupted mid-way."""
    pending = yield from read_pending(context)
    if pending is None:
        return RecoveryResult(action="clean")
    version_id = str(head_version_from_payload(pending))
    try:
        yield ReadJson(version_path(context.layout, version_id))
    except ChronodocNotFoundError:
        yield from clear_pending(context)
        _LOGGER.warning("pending_mutation_discarded", version_id=version_id)
        return RecoveryResult(action="discarded", version_id=version_id)
    yield from write_head(context, version_id)
    yield WriteJson(context.layout.source_path, pending["document"])
    yield from clear_pending(context)
    _LOGGER.warning("pending_mutation_completed", version_id=version_id)
    return RecoveryResult(action="completed", version_id=version_id)


def initialize_layout(context: HistoryContext) -> Steps[RecoveryResult]:
    """Create missing history directory, head record, and snapshot.

    Existing blobs are left untouched. Recovery runs last so a restart
    picks up any mutation the previous process left pending.
    """
    layout = context.layout
    yield EnsureDir(layout.history_dir)
    try:
        yield ReadJson(layout.head_path)
    except ChronodocNotFoundError:
        yield from write_head(context, None)
        _LOGGER.info("head_record_created", head_path=layout.head_path)
    except ChronodocCorruptDataError as error:
        _LOGGER.warning("head_record_malformed", head_path=layout.head_path, error=str(error))
    try:
        yield ReadJson(layout.source_path)
    except ChronodocNotFoundError:
        yield WriteJson(layout.source_path, {})
        _LOGGER.info("snapshot_created", source_path=layout.source_path)
    return (yield from recover_pending(context))
