"""Remote transport contract consumed by the distribution flows."""

from __future__ import annotations

from typing import BinaryIO, Protocol


class RemoteTransport(Protocol):
    """Named blob store used for package archives.

    Implementations raise ``TransportError`` for every failure and never
    retry on their own behalf.
    """

    def put(self, name: str, content: BinaryIO) -> None:
        """Store ``content`` under ``name``, replacing any existing blob."""
        ...

    def get(self, name: str) -> BinaryIO:
        """Open the blob stored under ``name``; the caller closes the stream."""
        ...
