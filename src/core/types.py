"""Shared typed models.

This module defines immutable data models used by manifest, archive,
transport, and distribution layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class DependencyRef:
    """Flat reference to one dependency archive.

    Attributes:
        name: Dependency package name.
        version: Dependency package version.
    """

    name: str
    version: str


@dataclass(frozen=True)
class Manifest:
    """Package descriptor loaded from a manifest document.

    Attributes:
        name: Package name.
        version: Package version.
        files: Ordered target paths packed by the create flow.
        dependencies: Ordered dependency refs applied by the update flow.
    """

    name: str
    version: str
    files: tuple[str, ...] = ()
    dependencies: tuple[DependencyRef, ...] = ()


@dataclass(frozen=True)
class ArchiveHandle:
    """Built or fetched archive addressed by its derived name.

    Attributes:
        name: Archive name shared by the local file and the remote blob.
        path: Local archive file path.
    """

    name: str
    path: Path


@dataclass(frozen=True)
class ArchiveEntry:
    """One member of an archive container.

    Attributes:
        stored_path: Path recorded in the archive.
        mode: Recorded permission bits, 0 when the archive has none.
        is_directory: Whether the entry represents a directory.
        size: Uncompressed content size in bytes.
    """

    stored_path: str
    mode: int
    is_directory: bool
    size: int


class FlowStage(str, Enum):
    """Stages of the create and update flows."""

    PARSE = "parse"
    BUILD = "build"
    UPLOAD = "upload"
    FETCH = "fetch"
    EXTRACT = "extract"


class TransportErrorKind(str, Enum):
    """Failure categories reported by remote transports."""

    NOT_FOUND = "not_found"
    CONNECTION_FAILED = "connection_failed"
    OTHER = "other"


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a successful create flow.

    Attributes:
        manifest: Parsed package manifest.
        handle: Built and uploaded archive.
    """

    manifest: Manifest
    handle: ArchiveHandle


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a successful update flow.

    Attributes:
        manifest: Parsed package manifest.
        applied: Dependencies fetched and extracted by this run.
        skipped: Dependencies skipped because a resumed checkpoint had them.
    """

    manifest: Manifest
    applied: tuple[DependencyRef, ...]
    skipped: tuple[DependencyRef, ...] = ()
