"""Version identifier minting.

Identifiers are millisecond timestamps rendered as decimal strings, bumped
past the newest recorded identifier so the chain stays strictly increasing
even when the clock stalls or runs backwards.
"""

from __future__ import annotations

from typing import Sequence

from core.constants import MAX_MINT_ATTEMPTS
from core.errors import (
    ChronodocCorruptDataError,
    ChronodocHistoryError,
    ChronodocNotFoundError,
)
from core.logging_config import get_logger
from history.chain import version_path
from history.context import HistoryContext
from history.runner import ReadJson, Steps

_LOGGER = get_logger(__name__)


def mint_version_id(existing: Sequence[str], now_ms: int) -> str:
    """Mint an identifier newer than every existing one.

    Args:
        existing: Recorded identifiers in ascending order.
        now_ms: Current time in milliseconds.

    Returns:
        Candidate identifier.
    """
    latest = int(existing[-1]) if existing else 0
    return str(max(now_ms, latest + 1))


def reserve_version_id(context: HistoryContext, existing: Sequence[str]) -> Steps[str]:
    """Mint an identifier whose record path is still free.

    Another writer may have landed a record after ``existing`` was listed,
    so each candidate is probed and bumped until an unused one is found.

    Raises:
        ChronodocHistoryError: If no free identifier is found in
            ``MAX_MINT_ATTEMPTS`` probes.
    """
    candidate = int(mint_version_id(existing, context.clock()))
    for _ in range(MAX_MINT_ATTEMPTS):
        try:
            yield ReadJson(version_path(context.layout, str(candidate)))
        except ChronodocNotFoundError:
            return str(candidate)
        except ChronodocCorruptDataError:
            _LOGGER.warning("version_record_unreadable", version_id=str(candidate))
        _LOGGER.warning("version_id_collision", version_id=str(candidate))
        candidate += 1
    raise ChronodocHistoryError(
        f"Could not mint a free version id after {MAX_MINT_ATTEMPTS} attempts. "
        "Check for concurrent writers on the same history directory."
    )
