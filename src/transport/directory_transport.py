"""Local directory remote store.

This transport treats one directory as the remote store, which suits
shared network mounts and tests. Blob names map to flat file names.
"""

from __future__ import annotations

import os
from pathlib import Path
import shutil
from typing import BinaryIO

from core.constants import COPY_CHUNK_SIZE, PARTIAL_UPLOAD_SUFFIX
from core.errors import TransportError
from core.types import TransportErrorKind


class DirectoryTransport:
    """Filesystem-backed remote transport."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Store directory."""
        return self._root

    def put(self, name: str, content: BinaryIO) -> None:
        """Copy ``content`` into the store, creating the store if needed.

        The blob is written to a partial file first and renamed into place,
        so readers never observe a half-written archive.

        Raises:
            TransportError: If the name is invalid or the copy fails.
        """
        blob_path = self._blob_path(name)
        partial_path = blob_path.with_name(blob_path.name + PARTIAL_UPLOAD_SUFFIX)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with partial_path.open("wb") as destination:
                shutil.copyfileobj(content, destination, COPY_CHUNK_SIZE)
            os.replace(partial_path, blob_path)
        except OSError as error:
            partial_path.unlink(missing_ok=True)
            raise TransportError(TransportErrorKind.OTHER, name, str(error)) from error

    def get(self, name: str) -> BinaryIO:
        """Open a stored blob for reading.

        Raises:
            TransportError: If the store is missing, the blob is missing, or
                the blob cannot be opened.
        """
        blob_path = self._blob_path(name)
        if not self._root.is_dir():
            raise TransportError(
                TransportErrorKind.CONNECTION_FAILED,
                name,
                f"store directory {self._root} does not exist",
            )
        try:
            return blob_path.open("rb")
        except FileNotFoundError as error:
            raise TransportError(
                TransportErrorKind.NOT_FOUND, name, f"no blob at {blob_path}"
            ) from error
        except OSError as error:
            raise TransportError(TransportErrorKind.OTHER, name, str(error)) from error

    def _blob_path(self, name: str) -> Path:
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise TransportError(
                TransportErrorKind.OTHER, name, "blob names must be plain file names"
            )
        return self._root / name
