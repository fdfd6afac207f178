"""Typed manifest parsing for package documents.

This module decodes JSON or YAML manifest documents into an immutable
``Manifest``. The field set is fixed: ``name``, ``ver``, ``targets`` and
``packages``. Unknown fields are ignored, and absent lists are empty.
File existence and dependency availability are not checked here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence, cast

import yaml

from core.constants import (
    MANIFEST_NAME_FIELD,
    MANIFEST_PACKAGES_FIELD,
    MANIFEST_TARGETS_FIELD,
    MANIFEST_VERSION_FIELD,
    SUPPORTED_MANIFEST_FORMATS,
    YAML_MANIFEST_EXTENSIONS,
)
from core.errors import MalformedManifestError, ManifestError
from core.types import DependencyRef, Manifest


def load_manifest(manifest_path: str | Path) -> Manifest:
    """Read and parse a manifest file from disk.

    Args:
        manifest_path: Path to a ``.json`` or ``.yaml``/``.yml`` manifest.

    Returns:
        Parsed manifest.

    Raises:
        ManifestError: If the file cannot be read.
        MalformedManifestError: If the document has an invalid shape.
    """
    manifest_file = Path(manifest_path).expanduser()
    try:
        document = manifest_file.read_bytes()
    except OSError as error:
        raise ManifestError(
            f"Failed to read manifest at {manifest_file}: {error}. "
            "Check the manifest path and file permissions."
        ) from error
    return parse_manifest(document, manifest_format_for(manifest_file))


def manifest_format_for(manifest_path: Path) -> str:
    """Return the document format implied by a manifest file extension."""
    if manifest_path.suffix.lower() in YAML_MANIFEST_EXTENSIONS:
        return "yaml"
    return "json"


def parse_manifest(document: bytes, document_format: str = "json") -> Manifest:
    """Decode a manifest document into a typed model.

    Args:
        document: Raw manifest bytes.
        document_format: ``json`` or ``yaml``.

    Returns:
        Parsed manifest.

    Raises:
        MalformedManifestError: If decoding fails or required fields are
            missing or mistyped.
    """
    payload = _decode_document(document, document_format)
    root_mapping = _expect_mapping(payload, "manifest root")
    return Manifest(
        name=_required_string(root_mapping, MANIFEST_NAME_FIELD, "manifest"),
        version=_required_string(root_mapping, MANIFEST_VERSION_FIELD, "manifest"),
        files=_parse_targets(root_mapping),
        dependencies=_parse_packages(root_mapping),
    )


def _decode_document(document: bytes, document_format: str) -> object:
    if document_format not in SUPPORTED_MANIFEST_FORMATS:
        supported_rows = ", ".join(SUPPORTED_MANIFEST_FORMATS)
        raise MalformedManifestError(
            f"Unsupported manifest format '{document_format}'. Use one of: {supported_rows}."
        )
    try:
        text = document.decode("utf-8")
    except UnicodeDecodeError as error:
        raise MalformedManifestError(
            f"Manifest is not valid UTF-8 text: {error}. Re-save the manifest as UTF-8."
        ) from error
    if document_format == "yaml":
        try:
            return cast(object, yaml.safe_load(text))
        except yaml.YAMLError as error:
            raise MalformedManifestError(
                f"Failed to parse YAML manifest: {error}. Fix YAML syntax and retry."
            ) from error
    try:
        return cast(object, json.loads(text))
    except json.JSONDecodeError as error:
        raise MalformedManifestError(
            f"Failed to parse JSON manifest: {error.msg} at line {error.lineno}. "
            "Fix JSON syntax and retry."
        ) from error


def _parse_targets(root_mapping: Mapping[str, object]) -> tuple[str, ...]:
    raw_targets = root_mapping.get(MANIFEST_TARGETS_FIELD)
    if raw_targets is None:
        return ()
    target_rows = _expect_sequence(raw_targets, f"manifest field '{MANIFEST_TARGETS_FIELD}'")
    targets = []
    for index, target in enumerate(target_rows):
        if not isinstance(target, str) or not target:
            raise MalformedManifestError(
                f"Invalid manifest target #{index + 1}: expected a non-empty path string."
            )
        targets.append(target)
    return tuple(targets)


def _parse_packages(root_mapping: Mapping[str, object]) -> tuple[DependencyRef, ...]:
    raw_packages = root_mapping.get(MANIFEST_PACKAGES_FIELD)
    if raw_packages is None:
        return ()
    package_rows = _expect_sequence(raw_packages, f"manifest field '{MANIFEST_PACKAGES_FIELD}'")
    dependencies = []
    for index, package_value in enumerate(package_rows):
        context = f"manifest package #{index + 1}"
        package_mapping = _expect_mapping(package_value, context)
        dependencies.append(
            DependencyRef(
                name=_required_string(package_mapping, MANIFEST_NAME_FIELD, context),
                version=_required_string(package_mapping, MANIFEST_VERSION_FIELD, context),
            )
        )
    return tuple(dependencies)


def _required_string(mapping: Mapping[str, object], field_name: str, context: str) -> str:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        raise MalformedManifestError(f"Invalid {context}: missing required field '{field_name}'.")
    if not isinstance(raw_value, str):
        raise MalformedManifestError(
            f"Invalid {context}: field '{field_name}' must be a string, "
            f"got {type(raw_value).__name__}. Quote the value in the manifest."
        )
    if not raw_value.strip():
        raise MalformedManifestError(f"Invalid {context}: field '{field_name}' must not be blank.")
    return raw_value


def _expect_mapping(value: object, context: str) -> Mapping[str, object]:
    if isinstance(value, Mapping):
        return cast(Mapping[str, object], value)
    raise MalformedManifestError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise MalformedManifestError(f"Invalid {context}: expected list, got {type(value).__name__}.")
