"""Zip archive extraction into a destination directory.

Entries are applied in container order. Every entry path is resolved and
checked against the destination root before anything is written for it.
Existing files are replaced rather than reopened, so read-only files from
an earlier extraction do not block a rerun. Only the rwx permission bits
are applied. Extraction is not transactional: when an entry fails, files
written by earlier entries stay in place.
"""

from __future__ import annotations

import os
from pathlib import Path
import shutil
import zipfile
import zlib

from archive.archive_entries import entry_from_info
from core.constants import COPY_CHUNK_SIZE
from core.errors import ArchiveExtractError, PathTraversalError
from core.logging_config import get_logger
from core.types import ArchiveEntry, ArchiveHandle

_LOGGER = get_logger(__name__)
_ENTRY_ERRORS = (
    OSError,
    EOFError,
    RuntimeError,
    NotImplementedError,
    zipfile.BadZipFile,
    zlib.error,
)


def extract_archive(handle: ArchiveHandle | Path, dest_dir: str | Path) -> tuple[Path, ...]:
    """Extract every archive entry under ``dest_dir``.

    Args:
        handle: Archive handle or local archive path.
        dest_dir: Extraction root directory.

    Returns:
        Paths created or overwritten, in container order.

    Raises:
        PathTraversalError: If an entry resolves outside ``dest_dir``.
        ArchiveExtractError: If the archive or an entry cannot be read or
            written.
    """
    archive_path = handle.path if isinstance(handle, ArchiveHandle) else Path(handle)
    dest_root = Path(dest_dir).resolve()
    try:
        archive = zipfile.ZipFile(archive_path)
    except (OSError, zipfile.BadZipFile) as error:
        raise ArchiveExtractError.for_entry(None, error) from error
    written: list[Path] = []
    with archive:
        for info in archive.infolist():
            entry = entry_from_info(info)
            target = resolve_entry_path(dest_root, entry.stored_path)
            try:
                _apply_entry(archive, info, entry, target)
            except _ENTRY_ERRORS as error:
                raise ArchiveExtractError.for_entry(entry.stored_path, error) from error
            written.append(target)
    _LOGGER.info(
        "archive_extracted",
        archive_path=str(archive_path),
        dest_dir=str(dest_root),
        entry_count=len(written),
    )
    return tuple(written)


def resolve_entry_path(dest_root: Path, stored_path: str) -> Path:
    """Resolve an entry path and require it to stay under ``dest_root``.

    Args:
        dest_root: Resolved extraction root.
        stored_path: Path recorded in the archive.

    Returns:
        Absolute target path inside ``dest_root``.

    Raises:
        PathTraversalError: If the resolved path escapes ``dest_root``.
    """
    target = (dest_root / stored_path).resolve()
    if not target.is_relative_to(dest_root):
        raise PathTraversalError(stored_path)
    return target


def _apply_entry(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    entry: ArchiveEntry,
    target: Path,
) -> None:
    if entry.is_directory:
        target.mkdir(parents=True, exist_ok=True)
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    if not target.is_dir():
        target.unlink(missing_ok=True)
    with archive.open(info) as source, target.open("wb") as destination:
        shutil.copyfileobj(source, destination, COPY_CHUNK_SIZE)
    if entry.mode:
        os.chmod(target, entry.mode)
