"""Public SDK surface for Parcel.

This module provides a stable import path for library users.
It re-exports the primary client, flows, and typed models.
"""

from __future__ import annotations

from archive.archive_builder import build_archive
from archive.archive_entries import read_archive_entries
from archive.archive_extractor import extract_archive
from archive.archive_naming import archive_name
from core.config import ParcelConfig
from core.types import (
    ArchiveEntry,
    ArchiveHandle,
    CreateResult,
    DependencyRef,
    FlowStage,
    Manifest,
    UpdateResult,
)
from distribution.client import ParcelClient
from distribution.create_flow import create_package
from distribution.update_flow import update_packages
from manifest.manifest_parser import load_manifest, parse_manifest
from transport.directory_transport import DirectoryTransport
from transport.s3_transport import S3Transport
from transport.transport_factory import create_transport

__all__ = [
    "ArchiveEntry",
    "ArchiveHandle",
    "CreateResult",
    "DependencyRef",
    "DirectoryTransport",
    "FlowStage",
    "Manifest",
    "ParcelClient",
    "ParcelConfig",
    "S3Transport",
    "UpdateResult",
    "archive_name",
    "build_archive",
    "create_package",
    "create_transport",
    "extract_archive",
    "load_manifest",
    "parse_manifest",
    "read_archive_entries",
    "update_packages",
]
