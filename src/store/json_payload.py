"""Shared JSON text encoding for stored blobs.

This module centralizes how documents, head records, and deltas are
rendered to text and parsed back, so every backend agrees on format.
"""

from __future__ import annotations

import json
from typing import Any

from core.constants import JSON_INDENT
from core.errors import ChronodocCorruptDataError, ChronodocStoreError


def encode_json(payload: Any, location: str) -> str:
    """Render a JSON value as indented text.

    Args:
        payload: JSON-compatible value.
        location: Target path, used in error messages.

    Returns:
        Encoded text with a trailing newline.

    Raises:
        ChronodocStoreError: If the value is not JSON-serializable.
    """
    try:
        return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as error:
        raise ChronodocStoreError(
            f"Cannot encode value for {location} as JSON: {error}. "
            "Only dicts, lists, strings, numbers, booleans and null can be stored."
        ) from error


def decode_json(text: str, location: str) -> Any:
    """Parse stored JSON text.

    Args:
        text: Raw stored text.
        location: Source path, used in error messages.

    Returns:
        Parsed JSON value.

    Raises:
        ChronodocCorruptDataError: If the text is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise ChronodocCorruptDataError(
            f"Failed to parse JSON at {location}: {error.msg} (line {error.lineno}). "
            "Restore the file from a backup or remove it."
        ) from error
