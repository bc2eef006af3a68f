"""Document reconstruction by delta replay.

Replay always starts from the empty object and applies each record of the
chain prefix in ascending identifier order, so the value rebuilt for a
version depends only on the records up to it.
"""

from __future__ import annotations

from typing import Any, Sequence

from core.errors import ChronodocHistoryError, ChronodocStoreError
from core.logging_config import get_logger
from core.types import VersionState
from history.chain import list_versions, version_path
from history.context import HistoryContext
from history.head import read_head
from history.runner import ReadJson, Steps

_LOGGER = get_logger(__name__)


def replay_versions(context: HistoryContext, version_ids: Sequence[str]) -> Steps[Any]:
    """Replay the given records onto the empty object.

    Args:
        context: Document settings.
        version_ids: Records to apply, in ascending order.

    Returns:
        The document value after the last record.

    Raises:
        ChronodocHistoryError: If a record is missing, unreadable, or does
            not apply.
    """
    document: Any = {}
    for version_id in version_ids:
        record_path = version_path(context.layout, version_id)
        try:
            delta = yield ReadJson(record_path)
        except ChronodocStoreError as error:
            raise ChronodocHistoryError(
                f"Cannot replay version {version_id}: record at {record_path} "
                f"is unreadable ({error})."
            ) from error
        try:
            document = context.codec.apply(document, delta)
        except ChronodocHistoryError as error:
            raise ChronodocHistoryError(
                f"Cannot replay version {version_id}: {error}"
            ) from error
    return document


def reconstruct(context: HistoryContext, version_id: str) -> Steps[VersionState | None]:
    """Rebuild the document as of ``version_id``.

    Returns:
        The reconstructed state, or None when the head is unset, the
        identifier is not in the chain, or (outside strict mode) replay
        fails.
    """
    version_id = str(version_id)
    head = yield from read_head(context)
    versions = yield from list_versions(context)
    if head is None:
        _LOGGER.info("reconstruct_skipped_no_head", version_id=version_id)
        return None
    if version_id not in versions:
        _LOGGER.info("version_not_found", version_id=version_id)
        return None
    prefix = versions[: versions.index(version_id) + 1]
    try:
        document = yield from replay_versions(context, prefix)
    except ChronodocHistoryError as error:
        if context.strict:
            raise
        _LOGGER.error("version_replay_failed", version_id=version_id, error=str(error))
        return None
    return VersionState(version_id=version_id, document=document)
