"""S3 remote store for package archives.

This module encapsulates boto3 client creation and blob transfer.
Archive blobs live at ``<prefix>/<archive name>`` inside one bucket.
"""

from __future__ import annotations

from typing import Any, BinaryIO, cast

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionError as BotoConnectionError,
    ReadTimeoutError,
)

from core.config import ParcelConfig
from core.errors import TransportError
from core.types import TransportErrorKind

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


def create_s3_client(config: ParcelConfig) -> Any:
    """Create a boto3 S3 client.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 S3 client.
    """
    session_kwargs: dict[str, str] = {}
    if config.s3_profile:
        session_kwargs["profile_name"] = config.s3_profile
    if config.s3_region:
        session_kwargs["region_name"] = config.s3_region
    session = boto3.session.Session(**session_kwargs)
    client_kwargs: dict[str, str] = {}
    if config.s3_endpoint_url:
        client_kwargs["endpoint_url"] = config.s3_endpoint_url
    return session.client("s3", **client_kwargs)


class S3Transport:
    """Remote transport backed by an S3 bucket prefix."""

    def __init__(self, s3_client: Any, bucket: str, prefix: str = "") -> None:
        self._client = s3_client
        self._bucket = bucket
        self._prefix = prefix.strip("/")

    def object_key(self, name: str) -> str:
        """Return the object key for a blob name."""
        if not self._prefix:
            return name
        return f"{self._prefix}/{name}"

    def put(self, name: str, content: BinaryIO) -> None:
        """Upload ``content`` to the blob key, overwriting any existing object.

        Raises:
            TransportError: If the upload fails.
        """
        object_key = self.object_key(name)
        try:
            self._client.upload_fileobj(content, self._bucket, object_key)
        except (BotoCoreError, ClientError, S3UploadFailedError) as error:
            raise TransportError(
                _classify_error(error),
                name,
                f"upload to s3://{self._bucket}/{object_key} failed: {error}",
            ) from error

    def get(self, name: str) -> BinaryIO:
        """Open the blob object as a streaming body.

        Raises:
            TransportError: If the object is missing or cannot be fetched.
        """
        object_key = self.object_key(name)
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=object_key)
        except (BotoCoreError, ClientError) as error:
            raise TransportError(
                _classify_error(error),
                name,
                f"download of s3://{self._bucket}/{object_key} failed: {error}",
            ) from error
        return cast(BinaryIO, _S3BodyReader(response["Body"], name))


class _S3BodyReader:
    """Streaming body wrapper that reports read failures as transport errors."""

    def __init__(self, body: Any, name: str) -> None:
        self._body = body
        self._name = name

    def read(self, size: int = -1) -> bytes:
        try:
            return self._body.read(None if size < 0 else size)
        except BotoCoreError as error:
            raise TransportError(
                _classify_error(error), self._name, f"download interrupted: {error}"
            ) from error

    def close(self) -> None:
        self._body.close()

    def __enter__(self) -> "_S3BodyReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _classify_error(error: Exception) -> TransportErrorKind:
    """Map boto3 and botocore failures onto transport error kinds."""
    if isinstance(error, ClientError):
        error_code = str(error.response.get("Error", {}).get("Code", ""))
        if error_code in _NOT_FOUND_CODES:
            return TransportErrorKind.NOT_FOUND
        return TransportErrorKind.OTHER
    if isinstance(error, (BotoConnectionError, ReadTimeoutError)):
        return TransportErrorKind.CONNECTION_FAILED
    return TransportErrorKind.OTHER
