"""Parcel exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.types import DependencyRef, FlowStage, TransportErrorKind


class ParcelError(Exception):
    """Base exception for all Parcel failures."""


class ParcelConfigError(ParcelError):
    """Raised for invalid runtime configuration."""


class ManifestError(ParcelError):
    """Raised when a manifest document cannot be loaded."""


class MalformedManifestError(ManifestError):
    """Raised when a manifest document does not have the required shape."""


class ArchiveError(ParcelError):
    """Base class for archive build and extraction failures."""


class ArchiveBuildError(ArchiveError):
    """Raised when a manifest target cannot be added to an archive.

    Attributes:
        path: Manifest target path that failed.
        cause: Underlying failure.
    """

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(
            f"Failed to add '{path}' to archive: {cause}. "
            "Check that every manifest target exists and is readable."
        )
        self.path = path
        self.cause = cause


class ArchiveExtractError(ArchiveError):
    """Raised when an archive entry cannot be extracted.

    Attributes:
        entry: Stored path of the failing entry, or None when the archive
            itself could not be opened.
        cause: Underlying failure, if any.
    """

    def __init__(self, entry: str | None, cause: BaseException | None, message: str) -> None:
        super().__init__(message)
        self.entry = entry
        self.cause = cause

    @classmethod
    def for_entry(cls, entry: str | None, cause: BaseException) -> "ArchiveExtractError":
        """Build an extract error for one failing entry."""
        if entry is None:
            message = f"Failed to open archive: {cause}. Re-fetch the archive and retry."
        else:
            message = (
                f"Failed to extract archive entry '{entry}': {cause}. "
                "Check destination permissions and free space."
            )
        return cls(entry, cause, message)


class PathTraversalError(ArchiveExtractError):
    """Raised when an archive entry would be written outside its destination."""

    def __init__(self, entry: str) -> None:
        super().__init__(
            entry,
            None,
            f"Refusing to extract archive entry '{entry}': "
            "its path escapes the destination directory.",
        )


class TransportError(ParcelError):
    """Raised when the remote store cannot serve a put or get request.

    Attributes:
        kind: Failure category.
        name: Blob name being transferred.
    """

    def __init__(self, kind: "TransportErrorKind", name: str, detail: str) -> None:
        super().__init__(f"Remote transfer of '{name}' failed ({kind.value}): {detail}")
        self.kind = kind
        self.name = name


class DistributionError(ParcelError):
    """Base class for create/update command failures."""


class PackageCreateError(DistributionError):
    """Raised when the create flow stops before the upload completes.

    Attributes:
        stage: Flow stage that failed.
        cause: Underlying error.
    """

    def __init__(self, stage: "FlowStage", cause: BaseException) -> None:
        super().__init__(f"Package create failed at {stage.value}: {cause}")
        self.stage = stage
        self.cause = cause


class PackageUpdateError(DistributionError):
    """Raised when the update flow stops before every dependency is applied.

    Attributes:
        stage: Flow stage that failed.
        cause: Underlying error.
    """

    def __init__(
        self,
        stage: "FlowStage",
        cause: BaseException,
        message: str | None = None,
    ) -> None:
        super().__init__(message or f"Package update failed at {stage.value}: {cause}")
        self.stage = stage
        self.cause = cause


class UpdateAbortedError(PackageUpdateError):
    """Raised when one dependency in the update loop fails.

    Dependencies applied before the failing one are left in place.

    Attributes:
        index: Zero-based index of the failing dependency.
        total: Number of dependencies in the manifest.
        dependency: The failing dependency reference.
        applied: Dependencies extracted by this run before the failure.
    """

    def __init__(
        self,
        index: int,
        total: int,
        dependency: "DependencyRef",
        stage: "FlowStage",
        applied: tuple["DependencyRef", ...],
        cause: BaseException,
    ) -> None:
        cause_text = str(cause).rstrip(".")
        super().__init__(
            stage,
            cause,
            f"Update stopped at dependency {index + 1} of {total} "
            f"({dependency.name}@{dependency.version}) during {stage.value}: {cause_text}. "
            "Earlier dependencies remain applied; fix the failure and rerun update.",
        )
        self.index = index
        self.total = total
        self.dependency = dependency
        self.applied = applied


class ParcelCheckpointError(ParcelError):
    """Raised when update checkpoint state cannot be read or written."""
