"""S3 URI parsing helpers.

This module centralizes S3 URI validation for config and store layers.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.errors import ChronodocConfigError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 location model."""

    bucket: str
    prefix: str

    def key_for(self, path: str) -> str:
        """Return the object key for a store-relative path."""
        relative = path.strip("/")
        if not relative:
            return self.prefix.rstrip("/")
        return f"{self.prefix.rstrip('/')}/{relative}"


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 URI.

    Args:
        uri: URI in format ``s3://bucket/prefix``.

    Returns:
        Parsed bucket and prefix pair.

    Raises:
        ChronodocConfigError: If the URI has no bucket or prefix.
    """
    if not uri.startswith("s3://"):
        _raise_uri_error(uri)
    stripped_uri = uri.removeprefix("s3://")
    if "/" not in stripped_uri:
        _raise_uri_error(uri)
    bucket, prefix = stripped_uri.split("/", 1)
    if not bucket or not prefix.strip("/"):
        _raise_uri_error(uri)
    return S3Location(bucket=bucket, prefix=prefix.strip("/"))


def _raise_uri_error(uri: str) -> None:
    """Raise an invalid URI error.

    Args:
        uri: Invalid URI value.

    Raises:
        ChronodocConfigError: Always.
    """
    raise ChronodocConfigError(
        f"Invalid S3 URI '{uri}': expected s3://bucket/prefix. "
        "Provide both bucket and prefix."
    )
