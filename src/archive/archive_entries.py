"""Archive entry inspection helpers.

This module maps zip member headers onto typed ``ArchiveEntry`` rows.
It is shared by the extractor and by callers listing archive contents.
"""

from __future__ import annotations

from pathlib import Path
import zipfile

from core.constants import PERMISSION_BITS_MASK
from core.errors import ArchiveExtractError
from core.types import ArchiveEntry


def entry_from_info(info: zipfile.ZipInfo) -> ArchiveEntry:
    """Build a typed entry row from a zip member header.

    Args:
        info: Zip member header.

    Returns:
        Entry with stored path, permission bits, and directory flag.
    """
    return ArchiveEntry(
        stored_path=info.filename,
        mode=(info.external_attr >> 16) & PERMISSION_BITS_MASK,
        is_directory=info.is_dir(),
        size=info.file_size,
    )


def read_archive_entries(archive_path: Path) -> tuple[ArchiveEntry, ...]:
    """List archive entries in container order.

    Args:
        archive_path: Local zip archive path.

    Returns:
        Entries in the order they were written.

    Raises:
        ArchiveExtractError: If the archive cannot be opened.
    """
    try:
        with zipfile.ZipFile(archive_path) as archive:
            return tuple(entry_from_info(info) for info in archive.infolist())
    except (OSError, zipfile.BadZipFile) as error:
        raise ArchiveExtractError.for_entry(None, error) from error
