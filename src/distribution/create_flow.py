"""Create flow: parse a manifest, build its archive, and upload it.

The built archive stays in the working directory whatever the upload
outcome, so a failed upload can be retried without rebuilding.
"""

from __future__ import annotations

from pathlib import Path

from archive.archive_builder import build_archive
from core.errors import ArchiveBuildError, ManifestError, PackageCreateError, TransportError
from core.logging_config import get_logger
from core.types import CreateResult, FlowStage
from manifest.manifest_parser import load_manifest
from transport.remote_transport import RemoteTransport

_LOGGER = get_logger(__name__)


def create_package(
    manifest_path: str | Path,
    work_dir: str | Path,
    transport: RemoteTransport,
) -> CreateResult:
    """Build and upload the archive described by a manifest.

    Args:
        manifest_path: Manifest document path.
        work_dir: Directory targets resolve against and the archive lands in.
        transport: Remote store receiving the archive.

    Returns:
        Parsed manifest and the uploaded archive handle.

    Raises:
        PackageCreateError: If parsing, building, or uploading fails. The
            ``stage`` attribute names the failed step.
    """
    try:
        manifest = load_manifest(manifest_path)
    except ManifestError as error:
        raise _create_failure(FlowStage.PARSE, error, manifest_path=str(manifest_path)) from error
    try:
        handle = build_archive(manifest, work_dir)
    except ArchiveBuildError as error:
        raise _create_failure(FlowStage.BUILD, error, target=error.path) from error
    try:
        with handle.path.open("rb") as content:
            transport.put(handle.name, content)
    except (TransportError, OSError) as error:
        raise _create_failure(FlowStage.UPLOAD, error, archive_name=handle.name) from error
    _LOGGER.info(
        "package_uploaded",
        package_name=manifest.name,
        package_version=manifest.version,
        archive_name=handle.name,
    )
    return CreateResult(manifest=manifest, handle=handle)


def _create_failure(stage: FlowStage, error: Exception, **fields: object) -> PackageCreateError:
    """Log a create failure and wrap it with its stage."""
    _LOGGER.error("package_create_failed", stage=stage.value, error=str(error), **fields)
    return PackageCreateError(stage, error)
