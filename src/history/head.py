"""Head pointer persistence.

The head record is ``{"version": id-or-null}`` and names the version whose
state is materialized in the document snapshot.
"""

from __future__ import annotations

from typing import Any

from core.errors import (
    ChronodocCorruptDataError,
    ChronodocNotFoundError,
    ChronodocStoreError,
)
from core.logging_config import get_logger
from history.chain import list_versions
from history.context import HistoryContext
from history.runner import ReadJson, Steps, WriteJson

_LOGGER = get_logger(__name__)


def read_head(context: HistoryContext) -> Steps[str | None]:
    """Read the head pointer.

    Missing and malformed records read as None.
    """
    head_path = context.layout.head_path
    try:
        payload = yield ReadJson(head_path)
    except ChronodocNotFoundError:
        return None
    except ChronodocCorruptDataError as error:
        _LOGGER.warning("head_record_malformed", head_path=head_path, error=str(error))
        return None
    except ChronodocStoreError as error:
        if context.strict:
            raise
        _LOGGER.error("head_read_failed", head_path=head_path, error=str(error))
        return None
    return head_version_from_payload(payload)


def write_head(context: HistoryContext, version_id: str | None) -> Steps[None]:
    """Persist the head pointer."""
    yield WriteJson(context.layout.head_path, {"version": version_id})


def head_version_from_payload(payload: Any) -> str | None:
    """Normalize a stored head record into an identifier.

    Args:
        payload: Parsed head record.

    Returns:
        Identifier as a string, or None when absent or malformed.
    """
    if not isinstance(payload, dict):
        return None
    version = payload.get("version")
    if version is None or isinstance(version, bool):
        return None
    if isinstance(version, (int, str)):
        return str(version)
    return None


def set_current_version(context: HistoryContext, version_id: str | None) -> Steps[bool]:
    """Point the head at a recorded version, or clear it with None.

    Identifiers missing from the chain are refused so the head never
    names a version that cannot be reconstructed.

    Returns:
        True when the head was written.
    """
    if version_id is not None:
        version_id = str(version_id)
        versions = yield from list_versions(context)
        if version_id not in versions:
            _LOGGER.warning("head_update_refused", version_id=version_id)
            return False
    yield from write_head(context, version_id)
    _LOGGER.info("head_updated", version_id=version_id)
    return True
