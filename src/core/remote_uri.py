"""Remote store URI parsing helpers.

This module centralizes parsing of the configured remote store location.
It keeps URI validation behavior consistent across transports.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import FILE_URI_SCHEME, S3_URI_SCHEME
from core.errors import ParcelConfigError


@dataclass(frozen=True)
class S3Location:
    """Parsed S3 location model."""

    bucket: str
    prefix: str


def is_s3_uri(uri: str) -> bool:
    """Return whether a remote URI addresses an S3 store."""
    return uri.startswith(S3_URI_SCHEME)


def parse_s3_uri(uri: str) -> S3Location:
    """Parse and validate an S3 URI.

    The prefix is optional, so ``s3://bucket`` stores archives at the
    bucket root.

    Args:
        uri: URI in format ``s3://bucket[/prefix]``.

    Returns:
        Parsed bucket and prefix pair.

    Raises:
        ParcelConfigError: If the bucket is missing.
    """
    stripped_uri = uri.removeprefix(S3_URI_SCHEME)
    bucket, _, prefix = stripped_uri.partition("/")
    if not bucket:
        raise ParcelConfigError(
            f"Invalid S3 URI '{uri}': expected s3://bucket[/prefix]. Provide a bucket name."
        )
    return S3Location(bucket=bucket, prefix=prefix.strip("/"))


def parse_directory_uri(uri: str) -> Path:
    """Resolve a ``file://`` URI or plain path into a store directory.

    Args:
        uri: Local store location.

    Returns:
        Absolute store directory path.
    """
    raw_path = uri.removeprefix(FILE_URI_SCHEME)
    return Path(raw_path).expanduser().resolve()
