"""Unit tests for the S3 transport."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, BinaryIO

from botocore.exceptions import ClientError, EndpointConnectionError, ReadTimeoutError
import pytest

from core.config import ParcelConfig
from core.errors import TransportError
from core.types import TransportErrorKind
from transport import s3_transport
from transport.s3_transport import S3Transport, create_s3_client


class _FakeS3Client:
    """Minimal S3 client double keyed by (bucket, key)."""

    def __init__(self, failure: Exception | None = None) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self._failure = failure

    def upload_fileobj(self, fileobj: BinaryIO, bucket: str, key: str) -> None:
        if self._failure is not None:
            raise self._failure
        self.objects[(bucket, key)] = fileobj.read()

    def get_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        if self._failure is not None:
            raise self._failure
        if (Bucket, Key) not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        return {"Body": io.BytesIO(self.objects[(Bucket, Key)])}


class _FailingBody:
    def read(self, amt: int | None = None) -> bytes:
        raise ReadTimeoutError(endpoint_url="https://s3.example.com")

    def close(self) -> None:
        return None


def test_put_uploads_under_prefix() -> None:
    """Put should upload the blob below the configured prefix."""
    client = _FakeS3Client()
    transport = S3Transport(client, "releases", "parcel/")

    transport.put("app_1.zip", io.BytesIO(b"archive"))

    assert client.objects == {("releases", "parcel/app_1.zip"): b"archive"}


def test_object_key_without_prefix_is_blob_name() -> None:
    """An empty prefix should store blobs at the bucket root."""
    transport = S3Transport(_FakeS3Client(), "releases")

    assert transport.object_key("app_1.zip") == "app_1.zip"


def test_get_streams_object_body() -> None:
    """Get should return a readable stream of the object."""
    client = _FakeS3Client()
    client.objects[("releases", "app_1.zip")] = b"archive"
    transport = S3Transport(client, "releases")

    with transport.get("app_1.zip") as stream:
        content = stream.read()

    assert content == b"archive"


def test_get_maps_missing_key_to_not_found() -> None:
    """NoSuchKey responses should become not-found errors."""
    transport = S3Transport(_FakeS3Client(), "releases")

    with pytest.raises(TransportError) as error_info:
        transport.get("absent_1.zip")

    assert error_info.value.kind is TransportErrorKind.NOT_FOUND


def test_get_maps_endpoint_failure_to_connection_failed() -> None:
    """Unreachable endpoints should become connection failures."""
    failure = EndpointConnectionError(endpoint_url="https://s3.example.com")
    transport = S3Transport(_FakeS3Client(failure), "releases")

    with pytest.raises(TransportError) as error_info:
        transport.get("app_1.zip")

    assert error_info.value.kind is TransportErrorKind.CONNECTION_FAILED


def test_put_maps_access_denied_to_other() -> None:
    """Other client errors should be reported with the other kind."""
    failure = ClientError({"Error": {"Code": "AccessDenied", "Message": "no"}}, "PutObject")
    transport = S3Transport(_FakeS3Client(failure), "releases")

    with pytest.raises(TransportError) as error_info:
        transport.put("app_1.zip", io.BytesIO(b"archive"))

    assert error_info.value.kind is TransportErrorKind.OTHER


def test_interrupted_download_raises_transport_error() -> None:
    """Read failures mid-stream should surface as transport errors."""
    client = _FakeS3Client()
    client.get_object = lambda Bucket, Key: {"Body": _FailingBody()}  # type: ignore[method-assign]
    transport = S3Transport(client, "releases")
    stream = transport.get("app_1.zip")

    with pytest.raises(TransportError) as error_info:
        stream.read(1024)

    assert error_info.value.kind is TransportErrorKind.CONNECTION_FAILED


def test_create_s3_client_passes_session_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Client creation should forward profile, region and endpoint."""
    captured: dict[str, object] = {}

    class _FakeSession:
        def __init__(self, **kwargs: str) -> None:
            captured["session"] = kwargs

        def client(self, service_name: str, **kwargs: str) -> str:
            captured["client"] = (service_name, kwargs)
            return "client"

    monkeypatch.setattr(s3_transport.boto3.session, "Session", _FakeSession)
    config = ParcelConfig(
        work_dir=Path("."),
        remote_uri="s3://releases",
        s3_region="eu-west-1",
        s3_profile="ci",
        s3_endpoint_url="http://localhost:9000",
    )

    create_s3_client(config)

    assert captured == {
        "session": {"profile_name": "ci", "region_name": "eu-west-1"},
        "client": ("s3", {"endpoint_url": "http://localhost:9000"}),
    }
