"""Update flow: fetch and extract every declared dependency in order.

Dependencies are processed one at a time in manifest order. The first
fetch or extract failure stops the loop; dependencies applied before it
stay applied. A ``resume=True`` run records its progress in a checkpoint
so a later resumed run can skip the dependencies it already extracted.
A plain run neither reads nor records progress.
"""

from __future__ import annotations

from contextlib import closing
from pathlib import Path
import shutil

from archive.archive_extractor import extract_archive
from archive.archive_naming import archive_handle_for
from core.constants import COPY_CHUNK_SIZE
from core.errors import (
    ArchiveExtractError,
    ManifestError,
    PackageUpdateError,
    ParcelCheckpointError,
    TransportError,
    UpdateAbortedError,
)
from core.logging_config import get_logger
from core.types import ArchiveHandle, DependencyRef, FlowStage, UpdateResult
from distribution.update_checkpoint import (
    UpdateCheckpointState,
    UpdateCheckpointStore,
    build_update_signature,
)
from manifest.manifest_parser import load_manifest
from transport.remote_transport import RemoteTransport

_LOGGER = get_logger(__name__)


def update_packages(
    manifest_path: str | Path,
    work_dir: str | Path,
    transport: RemoteTransport,
    resume: bool = False,
) -> UpdateResult:
    """Fetch and extract each dependency declared by a manifest.

    Args:
        manifest_path: Manifest document path.
        work_dir: Directory receiving fetched archives and their contents.
        transport: Remote store serving dependency archives.
        resume: Record progress and skip dependencies a previous resumed
            run of the same manifest already extracted.

    Returns:
        Parsed manifest with applied and skipped dependencies.

    Raises:
        PackageUpdateError: If the manifest cannot be parsed.
        UpdateAbortedError: If a dependency cannot be fetched or extracted.
        ParcelCheckpointError: If checkpoint state cannot be read before
            the first dependency or cleared.
    """
    work_path = Path(work_dir)
    try:
        manifest = load_manifest(manifest_path)
    except ManifestError as error:
        _LOGGER.error(
            "package_update_failed",
            stage=FlowStage.PARSE.value,
            manifest_path=str(manifest_path),
            error=str(error),
        )
        raise PackageUpdateError(FlowStage.PARSE, error) from error
    checkpoint = UpdateCheckpointStore(work_path)
    state: UpdateCheckpointState | None = None
    if resume:
        state = checkpoint.prepare_run(build_update_signature(manifest))
    else:
        checkpoint.clear()
    already_extracted = frozenset(state.extracted if state else ())
    total = len(manifest.dependencies)
    applied: list[DependencyRef] = []
    skipped: list[DependencyRef] = []
    for index, dependency in enumerate(manifest.dependencies):
        handle = archive_handle_for(dependency, work_path)
        if handle.name in already_extracted:
            skipped.append(dependency)
            _LOGGER.info("dependency_skipped", index=index, total=total, archive_name=handle.name)
            continue
        try:
            fetch_archive(transport, handle)
        except (TransportError, OSError) as error:
            raise _abort(index, total, dependency, FlowStage.FETCH, applied, error) from error
        try:
            extract_archive(handle, work_path)
            if state is not None:
                state = checkpoint.mark_extracted(state, handle.name)
        except (ArchiveExtractError, ParcelCheckpointError) as error:
            raise _abort(index, total, dependency, FlowStage.EXTRACT, applied, error) from error
        applied.append(dependency)
        _LOGGER.info("dependency_applied", index=index, total=total, archive_name=handle.name)
    if state is not None:
        checkpoint.clear()
    _LOGGER.info(
        "package_updated",
        package_name=manifest.name,
        package_version=manifest.version,
        applied_count=len(applied),
        skipped_count=len(skipped),
    )
    return UpdateResult(manifest=manifest, applied=tuple(applied), skipped=tuple(skipped))


def fetch_archive(transport: RemoteTransport, handle: ArchiveHandle) -> None:
    """Download one archive blob to its local handle path.

    A partially downloaded file is removed when the transfer fails.

    Args:
        transport: Remote store.
        handle: Archive to fetch.

    Raises:
        TransportError: If the remote store cannot serve the blob.
        OSError: If the local archive file cannot be written.
    """
    source = transport.get(handle.name)
    try:
        with closing(source), handle.path.open("wb") as destination:
            shutil.copyfileobj(source, destination, COPY_CHUNK_SIZE)
    except (TransportError, OSError):
        handle.path.unlink(missing_ok=True)
        raise
    _LOGGER.info("dependency_fetched", archive_name=handle.name, archive_path=str(handle.path))


def _abort(
    index: int,
    total: int,
    dependency: DependencyRef,
    stage: FlowStage,
    applied: list[DependencyRef],
    error: Exception,
) -> UpdateAbortedError:
    """Log an aborted update and build its error."""
    _LOGGER.error(
        "update_aborted",
        stage=stage.value,
        index=index,
        total=total,
        dependency_name=dependency.name,
        dependency_version=dependency.version,
        applied_count=len(applied),
        error=str(error),
    )
    return UpdateAbortedError(index, total, dependency, stage, tuple(applied), error)
