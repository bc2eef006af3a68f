"""S3-backed JSON store.

This module maps store paths onto object keys under one bucket prefix.
S3 has no real directories, so ``ensure_dir`` is a no-op and listing
a prefix with no objects returns an empty list.
"""

from __future__ import annotations

from typing import Any

from core.config import ChronodocConfig
from core.errors import (
    ChronodocConfigError,
    ChronodocDependencyError,
    ChronodocNotFoundError,
    ChronodocStoreError,
)
from core.logging_config import get_logger
from core.s3_uri import S3Location, parse_s3_uri
from store.json_payload import decode_json, encode_json

_LOGGER = get_logger(__name__)
_MISSING_KEY_CODES = ("NoSuchKey", "404", "NotFound")


class S3JsonStore:
    """Blocking JSON store over an S3 bucket prefix."""

    def __init__(self, s3_client: Any, location: S3Location) -> None:
        """Create a store over ``location``.

        Args:
            s3_client: Boto3 S3 client, or any object with the same methods.
            location: Bucket and key prefix that store paths live under.
        """
        self._client = s3_client
        self._location = location

    @classmethod
    def from_config(cls, config: ChronodocConfig) -> "S3JsonStore":
        """Build a store from runtime config.

        Raises:
            ChronodocConfigError: If no S3 URI is configured.
            ChronodocDependencyError: If boto3 is missing.
        """
        if not config.s3_uri:
            raise ChronodocConfigError(
                "S3 storage requires CHRONODOC_S3_URI. Set it to s3://bucket/prefix."
            )
        return cls(create_s3_client(config), parse_s3_uri(config.s3_uri))

    def read_json(self, path: str) -> Any:
        key = self._location.key_for(path)
        try:
            response = self._client.get_object(Bucket=self._location.bucket, Key=key)
            body = response["Body"].read().decode("utf-8")
        except Exception as error:
            if _error_code(error) in _MISSING_KEY_CODES:
                raise ChronodocNotFoundError(
                    f"No stored JSON at {self._uri(key)}."
                ) from error
            raise ChronodocStoreError(
                f"Failed to read {self._uri(key)}: {error}. Check AWS credentials and retry."
            ) from error
        return decode_json(body, self._uri(key))

    def write_json(self, path: str, payload: Any) -> None:
        key = self._location.key_for(path)
        body = encode_json(payload, self._uri(key)).encode("utf-8")
        try:
            self._client.put_object(
                Bucket=self._location.bucket,
                Key=key,
                Body=body,
                ContentType="application/json",
            )
        except Exception as error:
            raise ChronodocStoreError(
                f"Failed to write {self._uri(key)}: {error}. Check AWS credentials and retry."
            ) from error

    def list_names(self, directory: str) -> list[str]:
        prefix = self._location.key_for(directory).rstrip("/") + "/"
        names: set[str] = set()
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            pages = paginator.paginate(
                Bucket=self._location.bucket,
                Prefix=prefix,
                Delimiter="/",
            )
            for page in pages:
                for obj in page.get("Contents", []):
                    names.add(str(obj["Key"])[len(prefix):])
                for common in page.get("CommonPrefixes", []):
                    names.add(str(common["Prefix"])[len(prefix):].rstrip("/"))
        except Exception as error:
            raise ChronodocStoreError(
                f"Failed to list {self._uri(prefix)}: {error}. Check AWS credentials and retry."
            ) from error
        names.discard("")
        return sorted(names)

    def ensure_dir(self, directory: str) -> None:
        _LOGGER.debug("s3_ensure_dir_skipped", uri=self._uri(self._location.key_for(directory)))

    def _uri(self, key: str) -> str:
        return f"s3://{self._location.bucket}/{key}"


def create_s3_client(config: ChronodocConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.

    Raises:
        ChronodocDependencyError: If boto3 is missing.
    """
    try:
        import boto3
    except ImportError as error:
        raise ChronodocDependencyError(
            "S3 storage requires boto3, but it is not installed. "
            "Install the 's3' extra to use s3:// locations."
        ) from error
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    return session.client("s3")


def _error_code(error: Exception) -> str:
    """Extract the service error code from a botocore-style exception."""
    response = getattr(error, "response", None)
    if not isinstance(response, dict):
        return ""
    return str(response.get("Error", {}).get("Code", ""))
