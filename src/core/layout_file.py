"""YAML document layout parsing.

This module loads and validates layout files that name where a document's
snapshot, head pointer, and version records live inside a store.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, cast

import yaml

from core.errors import ChronodocConfigError
from core.types import DocumentLayout

SUPPORTED_LAYOUT_KEYS = (
    "source_path",
    "head_path",
    "history_dir",
    "diff_prefix",
    "journal_path",
)


def load_layout_file(layout_path: str) -> DocumentLayout:
    """Load and validate a YAML layout file from disk.

    Missing keys keep their ``DocumentLayout`` defaults.

    Args:
        layout_path: File path to YAML layout.

    Returns:
        Validated document layout.

    Raises:
        ChronodocConfigError: If the file is unreadable or fails validation.
    """
    payload = _load_yaml_payload(layout_path)
    root_mapping = _expect_mapping(payload, "layout root")
    _validate_root_keys(root_mapping)
    values = {key: _expect_string(root_mapping, key) for key in root_mapping}
    if "diff_prefix" in values and any(char in values["diff_prefix"] for char in "/\\"):
        raise ChronodocConfigError(
            f"Invalid layout field 'diff_prefix': '{values['diff_prefix']}' "
            "must not contain path separators."
        )
    return DocumentLayout(**values)


def _load_yaml_payload(layout_path: str) -> object:
    layout_file = Path(layout_path).expanduser().resolve()
    if not layout_file.exists():
        raise ChronodocConfigError(
            f"Layout file does not exist at {layout_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(layout_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise ChronodocConfigError(
            f"Failed to read layout at {layout_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise ChronodocConfigError(
            f"Failed to parse YAML layout at {layout_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    return payload


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise ChronodocConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise ChronodocConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_string(mapping: Mapping[str, object], key: str) -> str:
    value = mapping[key]
    if not isinstance(value, str) or not value.strip():
        raise ChronodocConfigError(f"Layout field '{key}' must be a non-empty string.")
    return value.strip()


def _validate_root_keys(root_mapping: Mapping[str, object]) -> None:
    unknown_keys = sorted(set(root_mapping) - set(SUPPORTED_LAYOUT_KEYS))
    if unknown_keys:
        raise ChronodocConfigError(
            f"Unsupported layout keys: {', '.join(unknown_keys)}. "
            f"Use only {', '.join(SUPPORTED_LAYOUT_KEYS)}."
        )
