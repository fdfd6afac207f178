"""Archive naming for package versions.

Build and fetch sides both call ``archive_name`` so the local file and the
remote blob always agree. Plain names map to ``<name>_<version>.zip``.
Percent, slash and backslash are percent-encoded in both parts, and the
separator is also encoded in the name part, so no two (name, version)
pairs share an archive name and no name contains a path separator.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import ARCHIVE_EXTENSION, ARCHIVE_NAME_SEPARATOR
from core.types import ArchiveHandle, DependencyRef, Manifest

_COMMON_ESCAPES = (("%", "%25"), ("/", "%2F"), ("\\", "%5C"))
_NAME_ESCAPES = _COMMON_ESCAPES + ((ARCHIVE_NAME_SEPARATOR, "%5F"),)


def archive_name(name: str, version: str) -> str:
    """Derive the archive name for a package version.

    Args:
        name: Package name.
        version: Package version.

    Returns:
        Archive file and blob name.
    """
    return (
        f"{_escape(name, _NAME_ESCAPES)}{ARCHIVE_NAME_SEPARATOR}"
        f"{_escape(version, _COMMON_ESCAPES)}{ARCHIVE_EXTENSION}"
    )


def archive_name_for(package: Manifest | DependencyRef) -> str:
    """Derive the archive name for a manifest or dependency reference."""
    return archive_name(package.name, package.version)


def archive_handle_for(package: Manifest | DependencyRef, directory: Path) -> ArchiveHandle:
    """Return the handle of a package archive stored in ``directory``."""
    name = archive_name_for(package)
    return ArchiveHandle(name=name, path=directory / name)


def _escape(value: str, escapes: tuple[tuple[str, str], ...]) -> str:
    escaped = value
    for raw, encoded in escapes:
        escaped = escaped.replace(raw, encoded)
    return escaped
