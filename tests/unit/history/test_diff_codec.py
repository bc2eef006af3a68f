"""Unit tests for the JSON Patch diff codec."""

from __future__ import annotations

import pytest

from core.errors import ChronodocHistoryError
from history.diff_codec import JsonPatchCodec


def test_diff_returns_none_for_equal_values() -> None:
    """Equal documents should produce no delta."""
    codec = JsonPatchCodec()

    assert codec.diff({"a": [1, 2]}, {"a": [1, 2]}) is None


def test_apply_of_diff_reproduces_target() -> None:
    """Applying a computed delta should yield the target."""
    codec = JsonPatchCodec()
    source = {"a": 1, "nested": {"keep": True, "drop": "x"}}
    target = {"a": 2, "nested": {"keep": True}, "b": [1]}

    delta = codec.diff(source, target)

    assert codec.apply(source, delta) == target


def test_apply_leaves_source_unchanged() -> None:
    """Applying a delta should not mutate its input."""
    codec = JsonPatchCodec()
    source = {"a": 1}

    codec.apply(source, [{"op": "replace", "path": "/a", "value": 5}])

    assert source == {"a": 1}


def test_apply_rejects_non_list_delta() -> None:
    """Deltas that are not operation lists should be rejected."""
    codec = JsonPatchCodec()

    with pytest.raises(ChronodocHistoryError):
        codec.apply({}, {"op": "add"})


def test_apply_raises_history_error_for_conflicting_delta() -> None:
    """Deltas that do not fit the base document should be rejected."""
    codec = JsonPatchCodec()

    with pytest.raises(ChronodocHistoryError):
        codec.apply({}, [{"op": "remove", "path": "/missing"}])
