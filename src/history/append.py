"""Version append engine.

A save diffs the target against the state at the chain tip, records the
delta under a freshly minted identifier, then advances head and snapshot.
When the head has been moved back in history, the tip state is rebuilt by
replay and used as the diff base, so the chain stays linear and replay
from the first record still reproduces every saved state. The same rebase
applies when the snapshot is missing or unreadable.
"""

from __future__ import annotations

from typing import Any

from core.errors import ChronodocCorruptDataError, ChronodocNotFoundError
from core.logging_config import get_logger
from core.types import SaveResult
from history.chain import list_versions, version_path
from history.context import HistoryContext
from history.head import read_head, write_head
from history.minting import reserve_version_id
from history.reconstruct import replay_versions
from history.recovery import begin_pending, clear_pending, commit_state, recover_pending
from history.runner import EnsureDir, ReadJson, Steps, WriteJson

_LOGGER = get_logger(__name__)


def read_snapshot(context: HistoryContext) -> Steps[Any]:
    """Read the document snapshot; a missing snapshot reads as ``{}``.

    A malformed snapshot also reads as ``{}`` unless ``context.strict``.
    Other read faults propagate.
    """
    snapshot, _ = yield from load_snapshot(context)
    return snapshot


def load_snapshot(context: HistoryContext) -> Steps[tuple[Any, bool]]:
    """Read the document snapshot and report whether it was stored.

    Returns:
        The snapshot, or ``{}`` when it is missing or malformed, paired
        with True only when a stored value was parsed.
    """
    source_path = context.layout.source_path
    try:
        snapshot = yield ReadJson(source_path)
    except ChronodocNotFoundError:
        return {}, False
    except ChronodocCorruptDataError as error:
        if context.strict:
            raise
        _LOGGER.warning("snapshot_malformed", source_path=source_path, error=str(error))
        return {}, False
    return snapshot, True


def save_new_version(context: HistoryContext, target: Any) -> Steps[SaveResult]:
    """Record ``target`` as the newest version of the document.

    Args:
        context: Document settings.
        target: Desired JSON document value.

    Returns:
        A falsy result when ``target`` equals the current snapshot,
        otherwise the committed version and snapshot.

    Raises:
        ChronodocStoreError: If any write fails; later writes are skipped
            and the pending marker is left for recovery.
        ChronodocHistoryError: If the chain tip cannot be replayed or no
            identifier can be minted.
    """
    layout = context.layout
    codec = context.codec
    yield from recover_pending(context)
    yield EnsureDir(layout.history_dir)
    snapshot, snapshot_stored = yield from load_snapshot(context)
    head = yield from read_head(context)
    versions = yield from list_versions(context)
    if (snapshot_stored or not versions) and codec.diff(snapshot, target) is None:
        _LOGGER.info("version_not_saved_no_changes", version_id=head)
        return SaveResult(changed=False, version_id=head, document=snapshot)

    base = snapshot
    if versions and (not snapshot_stored or head != versions[-1]):
        base = yield from replay_versions(context, versions)
        _LOGGER.info(
            "save_rebased_on_latest",
            head=head,
            latest=versions[-1],
            snapshot_stored=snapshot_stored,
        )
    delta = codec.diff(base, target)
    if delta is None:
        yield from commit_state(context, versions[-1], base)
        _LOGGER.info("head_moved_to_latest", version_id=versions[-1])
        return SaveResult(changed=True, version_id=versions[-1], document=base)

    version_id = yield from reserve_version_id(context, versions)
    patched = codec.apply(base, delta)
    yield from begin_pending(context, version_id, patched)
    record_path = version_path(layout, version_id)
    yield WriteJson(record_path, delta)
    yield from write_head(context, version_id)
    yield WriteJson(layout.source_path, patched)
    yield from clear_pending(context)
    _LOGGER.info("version_saved", version_id=version_id, record_path=record_path)
    return SaveResult(changed=True, version_id=version_id, document=patched)
