"""Zip archive construction from a manifest file list.

Targets are written in manifest order under their manifest path string.
The first target that cannot be read aborts the build and removes the
partially written archive, so a returned handle always names a complete
archive.
"""

from __future__ import annotations

import os
from pathlib import Path
import shutil
import stat
import time
import zipfile

from archive.archive_naming import archive_handle_for
from core.constants import COPY_CHUNK_SIZE, ZIP_EPOCH
from core.errors import ArchiveBuildError
from core.logging_config import get_logger
from core.types import ArchiveHandle, Manifest

_LOGGER = get_logger(__name__)
_ZIP_LATEST = (2107, 12, 31, 23, 59, 59)
_MSDOS_DIRECTORY_FLAG = 0x10


def build_archive(
    manifest: Manifest,
    base_dir: str | Path,
    output_dir: str | Path | None = None,
) -> ArchiveHandle:
    """Build the package archive for a manifest.

    Args:
        manifest: Parsed package manifest.
        base_dir: Directory that relative manifest targets resolve against.
        output_dir: Directory receiving the archive, defaults to ``base_dir``.

    Returns:
        Handle of the finished archive.

    Raises:
        ArchiveBuildError: If any target cannot be read or written.
    """
    base_path = Path(base_dir)
    handle = archive_handle_for(manifest, Path(output_dir) if output_dir else base_path)
    try:
        with zipfile.ZipFile(handle.path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for target in manifest.files:
                _add_target(archive, base_path, target)
    except ArchiveBuildError:
        handle.path.unlink(missing_ok=True)
        raise
    except OSError as error:
        handle.path.unlink(missing_ok=True)
        raise ArchiveBuildError(str(handle.path), error) from error
    _LOGGER.info(
        "archive_built",
        archive_name=handle.name,
        archive_path=str(handle.path),
        entry_count=len(manifest.files),
    )
    return handle


def _add_target(archive: zipfile.ZipFile, base_path: Path, target: str) -> None:
    """Stream one manifest target into a new archive entry.

    Raises:
        ArchiveBuildError: If the target cannot be read or copied.
    """
    source_path = base_path / target
    try:
        stat_result = source_path.stat()
        info = _entry_info(target, stat_result)
        if stat.S_ISDIR(stat_result.st_mode):
            archive.writestr(info, b"")
            return
        with source_path.open("rb") as source, archive.open(info, "w") as destination:
            shutil.copyfileobj(source, destination, COPY_CHUNK_SIZE)
    except (OSError, ValueError) as error:
        raise ArchiveBuildError(target, error) from error


def _entry_info(target: str, stat_result: os.stat_result) -> zipfile.ZipInfo:
    """Synthesize a zip header from filesystem metadata."""
    is_directory = stat.S_ISDIR(stat_result.st_mode)
    stored_path = target
    if is_directory and not target.endswith(("/", os.sep)):
        stored_path = f"{target}/"
    info = zipfile.ZipInfo(stored_path, date_time=_zip_date_time(stat_result.st_mtime))
    info.external_attr = (stat_result.st_mode & 0xFFFF) << 16
    if is_directory:
        info.external_attr |= _MSDOS_DIRECTORY_FLAG
        info.compress_type = zipfile.ZIP_STORED
    else:
        info.file_size = stat_result.st_size
        info.compress_type = zipfile.ZIP_DEFLATED
    return info


def _zip_date_time(mtime: float) -> tuple[int, int, int, int, int, int]:
    """Clamp a modification time into the range zip headers can store."""
    date_time = tuple(time.localtime(mtime)[:6])
    if date_time < ZIP_EPOCH:
        return ZIP_EPOCH
    if date_time > _ZIP_LATEST:
        return _ZIP_LATEST
    return date_time  # type: ignore[return-value]
