"""Diff codec contract and the jsonpatch-backed implementation.

Deltas are RFC 6902 operation lists, so every version record on disk is
a plain JSON array that other tools can read.
"""

from __future__ import annotations

from typing import Any, Protocol

import jsonpatch
import jsonpointer

from core.errors import ChronodocHistoryError


class DiffCodec(Protocol):
    """Computes and applies structural deltas between JSON values."""

    def diff(self, source: Any, target: Any) -> Any | None:
        """Return a delta turning ``source`` into ``target``, or None if equal."""

    def apply(self, source: Any, delta: Any) -> Any:
        """Return a new value with ``delta`` applied to ``source``."""


class JsonPatchCodec:
    """Diff codec producing JSON Patch operation lists."""

    def diff(self, source: Any, target: Any) -> list[dict[str, Any]] | None:
        operations = jsonpatch.make_patch(source, target).patch
        return list(operations) or None

    def apply(self, source: Any, delta: Any) -> Any:
        """Apply a JSON Patch without mutating ``source``.

        Raises:
            ChronodocHistoryError: If ``delta`` is not a valid patch for
                ``source``.
        """
        if not isinstance(delta, list):
            raise ChronodocHistoryError(
                f"Invalid delta: expected a list of JSON Patch operations, "
                f"got {type(delta).__name__}."
            )
        try:
            return jsonpatch.apply_patch(source, delta, in_place=False)
        except (
            jsonpatch.JsonPatchException,
            jsonpointer.JsonPointerException,
            KeyError,
            TypeError,
        ) as error:
            raise ChronodocHistoryError(
                f"Delta does not apply to base document: {error}."
            ) from error
