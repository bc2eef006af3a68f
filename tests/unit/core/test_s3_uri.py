"""Unit tests for S3 URI parsing."""

from __future__ import annotations

import pytest

from core.errors import ChronodocConfigError
from core.s3_uri import parse_s3_uri


def test_parse_s3_uri_splits_bucket_and_prefix() -> None:
    """Parser should split bucket from a normalized prefix."""
    location = parse_s3_uri("s3://docs-bucket/team/settings/")

    assert (location.bucket, location.prefix) == ("docs-bucket", "team/settings")


def test_key_for_joins_prefix_and_path() -> None:
    """Store paths should map under the bucket prefix."""
    location = parse_s3_uri("s3://docs-bucket/team")

    assert location.key_for("history/version-5.diff") == "team/history/version-5.diff"


@pytest.mark.parametrize("uri", ["docs-bucket/team", "s3://docs-bucket", "s3:///team"])
def test_parse_s3_uri_rejects_incomplete_uri(uri: str) -> None:
    """URIs without a scheme, bucket, or prefix should be rejected."""
    with pytest.raises(ChronodocConfigError):
        parse_s3_uri(uri)
