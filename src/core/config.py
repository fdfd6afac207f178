"""Runtime configuration model for Parcel.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import DEFAULT_REMOTE_URI, DEFAULT_WORK_DIR
from core.errors import ParcelConfigError


@dataclass(frozen=True)
class ParcelConfig:
    """Validated runtime configuration.

    Attributes:
        work_dir: Local directory where archives are built and extracted.
        remote_uri: Remote store location (``s3://bucket/prefix`` or a path).
        s3_region: Optional default AWS region for S3 operations.
        s3_profile: Optional AWS profile for boto3 session initialization.
        s3_endpoint_url: Optional S3-compatible endpoint override.
    """

    work_dir: Path
    remote_uri: str
    s3_region: str | None
    s3_profile: str | None
    s3_endpoint_url: str | None

    @classmethod
    def from_env(cls) -> "ParcelConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ParcelConfigError: If environment values are invalid.
        """
        work_dir_value = os.getenv("PARCEL_WORK_DIR", str(DEFAULT_WORK_DIR))
        remote_uri = _parse_remote_uri(os.getenv("PARCEL_REMOTE_URI", DEFAULT_REMOTE_URI))
        return cls(
            work_dir=Path(work_dir_value).expanduser().resolve(),
            remote_uri=remote_uri,
            s3_region=os.getenv("PARCEL_S3_REGION") or None,
            s3_profile=os.getenv("PARCEL_S3_PROFILE") or None,
            s3_endpoint_url=os.getenv("PARCEL_S3_ENDPOINT_URL") or None,
        )


def _parse_remote_uri(raw_value: str) -> str:
    """Validate the remote store environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Stripped remote URI.

    Raises:
        ParcelConfigError: If value is blank.
    """
    remote_uri = raw_value.strip()
    if not remote_uri:
        raise ParcelConfigError(
            "Invalid PARCEL_REMOTE_URI value: expected a path or s3://bucket/prefix, "
            "got an empty string. Unset it or point it at a remote store."
        )
    return remote_uri
