"""chronodoc exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Store faults, history faults, and configuration faults stay distinct.
"""

from __future__ import annotations


class ChronodocError(Exception):
    """Base exception for all chronodoc failures."""


class ChronodocConfigError(ChronodocError):
    """Raised for invalid runtime configuration or layout files."""


class ChronodocStoreError(ChronodocError):
    """Raised when a persistence store read, write, or listing fails."""


class ChronodocNotFoundError(ChronodocStoreError):
    """Raised by stores when a requested path does not exist."""


class ChronodocCorruptDataError(ChronodocStoreError):
    """Raised by stores when a path holds unparsable JSON."""


class ChronodocHistoryError(ChronodocError):
    """Raised when the version chain cannot be replayed or extended."""


class ChronodocDependencyError(ChronodocError):
    """Raised when an optional runtime dependency is missing."""
