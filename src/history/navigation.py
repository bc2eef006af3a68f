"""Navigation through recorded versions.

Lookups resolve neighbours of the head or the chain ends; apply operations
rebuild a version and materialize it as the snapshot with the head moved
onto it. None means the requested version does not exist.
"""

from __future__ import annotations

from typing import Callable

from core.logging_config import get_logger
from core.types import VersionState
from history.chain import list_versions
from history.context import HistoryContext
from history.head import read_head
from history.reconstruct import reconstruct
from history.recovery import commit_state, recover_pending
from history.runner import Steps

_LOGGER = get_logger(__name__)


def step_from_head(context: HistoryContext, offset: int) -> Steps[str | None]:
    """Return the identifier ``offset`` places away from the head.

    Returns:
        The identifier, or None when the head is unset, not in the chain,
        or the step leaves the chain.
    """
    head = yield from read_head(context)
    versions = yield from list_versions(context)
    if head is None or head not in versions:
        return None
    index = versions.index(head) + offset
    if 0 <= index < len(versions):
        return versions[index]
    return None


def previous_version(context: HistoryContext) -> Steps[str | None]:
    """Return the identifier just before the head."""
    return (yield from step_from_head(context, -1))


def next_version(context: HistoryContext) -> Steps[str | None]:
    """Return the identifier just after the head."""
    return (yield from step_from_head(context, 1))


def initial_version_id(context: HistoryContext) -> Steps[str | None]:
    """Return the oldest recorded identifier."""
    versions = yield from list_versions(context)
    return versions[0] if versions else None


def latest_version_id(context: HistoryContext) -> Steps[str | None]:
    """Return the newest recorded identifier."""
    versions = yield from list_versions(context)
    return versions[-1] if versions else None


def initial_version(context: HistoryContext) -> Steps[VersionState | None]:
    """Reconstruct the first recorded version."""
    return (yield from _reconstruct_lookup(context, initial_version_id, "initial"))


def latest_version(context: HistoryContext) -> Steps[VersionState | None]:
    """Reconstruct the newest recorded version."""
    return (yield from _reconstruct_lookup(context, latest_version_id, "latest"))


def apply_version(context: HistoryContext, version_id: str) -> Steps[VersionState | None]:
    """Materialize ``version_id`` as the snapshot and move the head to it.

    Returns:
        The applied state, or None when the version cannot be rebuilt.
    """
    yield from recover_pending(context)
    state = yield from reconstruct(context, version_id)
    if state is None:
        _LOGGER.info("version_not_applied", version_id=str(version_id))
        return None
    yield from commit_state(context, state.version_id, state.document)
    _LOGGER.info("version_applied", version_id=state.version_id)
    return state


def apply_previous_version(context: HistoryContext) -> Steps[VersionState | None]:
    """Step the head back one version and materialize it."""
    return (yield from _apply_lookup(context, previous_version, "previous"))


def apply_next_version(context: HistoryContext) -> Steps[VersionState | None]:
    """Step the head forward one version and materialize it."""
    return (yield from _apply_lookup(context, next_version, "next"))


def apply_initial_version(context: HistoryContext) -> Steps[VersionState | None]:
    """Materialize the oldest recorded version."""
    return (yield from _apply_lookup(context, initial_version_id, "initial"))


def apply_latest_version(context: HistoryContext) -> Steps[VersionState | None]:
    """Materialize the newest recorded version."""
    return (yield from _apply_lookup(context, latest_version_id, "latest"))


def _reconstruct_lookup(
    context: HistoryContext,
    lookup: Callable[[HistoryContext], Steps[str | None]],
    label: str,
) -> Steps[VersionState | None]:
    version_id = yield from lookup(context)
    if version_id is None:
        _LOGGER.info("no_history_versions", lookup=label)
        return None
    return (yield from reconstruct(context, version_id))


def _apply_lookup(
    context: HistoryContext,
    lookup: Callable[[HistoryContext], Steps[str | None]],
    label: str,
) -> Steps[VersionState | None]:
    version_id = yield from lookup(context)
    if version_id is None:
        _LOGGER.info("version_lookup_empty", lookup=label)
        return None
    return (yield from apply_version(context, version_id))
