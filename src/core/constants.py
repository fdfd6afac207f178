"""Core constants used across Parcel modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_WORK_DIR = Path(".")
DEFAULT_REMOTE_URI = ".parcel-store"
S3_URI_SCHEME = "s3://"
FILE_URI_SCHEME = "file://"
ARCHIVE_EXTENSION = ".zip"
ARCHIVE_NAME_SEPARATOR = "_"
MANIFEST_NAME_FIELD = "name"
MANIFEST_VERSION_FIELD = "ver"
MANIFEST_TARGETS_FIELD = "targets"
MANIFEST_PACKAGES_FIELD = "packages"
YAML_MANIFEST_EXTENSIONS = (".yaml", ".yml")
SUPPORTED_MANIFEST_FORMATS = ("json", "yaml")
COPY_CHUNK_SIZE = 1024 * 1024
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
PERMISSION_BITS_MASK = 0o777
STATE_DIR_NAME = ".parcel"
UPDATE_CHECKPOINT_FILE_NAME = "update_state.json"
PARTIAL_UPLOAD_SUFFIX = ".partial"
EXIT_CODE_SUCCESS = 0
EXIT_CODE_FAILURE = 1
