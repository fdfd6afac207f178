"""Remote transport selection from runtime configuration."""

from __future__ import annotations

from core.config import ParcelConfig
from core.remote_uri import is_s3_uri, parse_directory_uri, parse_s3_uri
from transport.directory_transport import DirectoryTransport
from transport.remote_transport import RemoteTransport
from transport.s3_transport import S3Transport, create_s3_client


def create_transport(config: ParcelConfig) -> RemoteTransport:
    """Build the transport addressed by ``config.remote_uri``.

    ``s3://bucket[/prefix]`` selects the S3 store; ``file://`` URIs and
    plain paths select a local directory store.

    Args:
        config: Runtime config.

    Returns:
        Remote transport instance.

    Raises:
        ParcelConfigError: If the remote URI is invalid.
    """
    if is_s3_uri(config.remote_uri):
        location = parse_s3_uri(config.remote_uri)
        return S3Transport(create_s3_client(config), location.bucket, location.prefix)
    return DirectoryTransport(parse_directory_uri(config.remote_uri))
