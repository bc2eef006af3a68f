"""Core constants used across chronodoc modules.

This module centralizes file names, defaults, and limits.
Keeping values here avoids magic literals in history logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".chronodoc")
DEFAULT_SOURCE_FILE_NAME = "document.json"
DEFAULT_HEAD_FILE_NAME = "head.json"
DEFAULT_HISTORY_DIR_NAME = "history"
DEFAULT_DIFF_FILE_PREFIX = "version-"
DIFF_FILE_SUFFIX = ".diff"
PENDING_MARKER_FILE_NAME = "pending.json"
DEFAULT_STORAGE_BACKEND = "local"
SUPPORTED_STORAGE_BACKENDS = ("local", "memory", "s3")
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
MAX_MINT_ATTEMPTS = 64
JSON_INDENT = 2
