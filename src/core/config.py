"""Runtime configuration model for chronodoc.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DATA_ROOT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_STORAGE_BACKEND,
    SUPPORTED_LOG_LEVELS,
    SUPPORTED_STORAGE_BACKENDS,
)
from core.errors import ChronodocConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class ChronodocConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory that document paths resolve against.
        storage: Storage backend name: ``local``, ``memory`` or ``s3``.
        s3_uri: Bucket and key prefix for the ``s3`` backend.
        s3_region: Optional default AWS region for S3 operations.
        s3_profile: Optional AWS profile for boto3 session initialization.
        strict_errors: Propagate read faults instead of degrading them.
        log_level: Minimum structured log level.
    """

    data_root: Path
    storage: str
    s3_uri: str | None
    s3_region: str | None
    s3_profile: str | None
    strict_errors: bool
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ChronodocConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ChronodocConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("CHRONODOC_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        storage = _parse_storage(os.getenv("CHRONODOC_STORAGE", DEFAULT_STORAGE_BACKEND))
        s3_uri = os.getenv("CHRONODOC_S3_URI")
        if storage == "s3" and not s3_uri:
            raise ChronodocConfigError(
                "CHRONODOC_STORAGE is 's3' but CHRONODOC_S3_URI is not set. "
                "Set CHRONODOC_S3_URI to s3://bucket/prefix."
            )
        strict_errors = _parse_bool(
            "CHRONODOC_STRICT_ERRORS", os.getenv("CHRONODOC_STRICT_ERRORS", "")
        )
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            storage=storage,
            s3_uri=s3_uri,
            s3_region=os.getenv("CHRONODOC_S3_REGION"),
            s3_profile=os.getenv("CHRONODOC_S3_PROFILE"),
            strict_errors=strict_errors,
            log_level=_parse_log_level(os.getenv("CHRONODOC_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _parse_storage(raw_value: str) -> str:
    """Parse the storage backend name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized backend name.

    Raises:
        ChronodocConfigError: If the backend is not supported.
    """
    storage = raw_value.strip().lower()
    if storage not in SUPPORTED_STORAGE_BACKENDS:
        raise ChronodocConfigError(
            f"Invalid CHRONODOC_STORAGE value '{raw_value}': "
            f"expected one of {', '.join(SUPPORTED_STORAGE_BACKENDS)}."
        )
    return storage


def _parse_bool(variable: str, raw_value: str) -> bool:
    """Parse a boolean flag environment value.

    Args:
        variable: Environment variable name used in error messages.
        raw_value: Raw string from environment.

    Returns:
        Parsed flag.

    Raises:
        ChronodocConfigError: If value is not a recognized boolean.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ChronodocConfigError(
        f"Invalid {variable} value: expected true/false, got '{raw_value}'. "
        f"Set {variable} to 1 or 0."
    )


def _parse_log_level(raw_value: str) -> str:
    """Parse the log level environment value."""
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise ChronodocConfigError(
            f"Invalid CHRONODOC_LOG_LEVEL value '{raw_value}': "
            f"expected one of {', '.join(SUPPORTED_LOG_LEVELS)}."
        )
    return level
