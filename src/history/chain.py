"""History chain discovery.

The chain is never stored. It is derived on every call by listing the
history directory and keeping names shaped like ``{prefix}{digits}.diff``.
"""

from __future__ import annotations

import re
from typing import Iterable

from core.constants import DIFF_FILE_SUFFIX
from core.errors import ChronodocNotFoundError, ChronodocStoreError
from core.logging_config import get_logger
from core.types import DocumentLayout
from history.context import HistoryContext
from history.runner import ListNames, Steps

_LOGGER = get_logger(__name__)


def version_file_name(prefix: str, version_id: str) -> str:
    """Return the record file name for a version."""
    return f"{prefix}{version_id}{DIFF_FILE_SUFFIX}"


def version_path(layout: DocumentLayout, version_id: str) -> str:
    """Return the store path of a version record."""
    return f"{layout.history_dir.rstrip('/')}/{version_file_name(layout.diff_prefix, version_id)}"


def parse_version_names(names: Iterable[str], prefix: str) -> list[str]:
    """Extract version identifiers from record file names.

    Args:
        names: Entry names found in the history directory.
        prefix: Record filename prefix.

    Returns:
        Identifiers sorted in ascending numeric order.
    """
    pattern = re.compile(rf"^{re.escape(prefix)}(\d+){re.escape(DIFF_FILE_SUFFIX)}$")
    versions = {match.group(1) for name in names if (match := pattern.match(name))}
    return sorted(versions, key=int)


def list_versions(context: HistoryContext) -> Steps[list[str]]:
    """List recorded version identifiers in ascending order.

    A missing history directory is a cold start and yields an empty chain.
    Other listing faults yield an empty chain unless ``context.strict``.
    """
    layout = context.layout
    try:
        names = yield ListNames(layout.history_dir)
    except ChronodocNotFoundError:
        _LOGGER.debug("history_directory_missing", history_dir=layout.history_dir)
        return []
    except ChronodocStoreError as error:
        if context.strict:
            raise
        _LOGGER.error("history_listing_failed", history_dir=layout.history_dir, error=str(error))
        return []
    return parse_version_names(names, layout.diff_prefix)
