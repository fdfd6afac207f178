"""Unit tests for manifest parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import MalformedManifestError, ManifestError
from core.types import DependencyRef, Manifest
from manifest.manifest_parser import load_manifest, parse_manifest
from tests.fixture_paths import fixture_path


def test_load_manifest_reads_json_fields() -> None:
    """JSON manifests should map onto the typed model in order."""
    manifest = load_manifest(fixture_path("manifests/app.json"))

    assert manifest == Manifest(
        name="app",
        version="1.2.0",
        files=("bin/run.sh", "lib/util.txt"),
        dependencies=(DependencyRef("base", "1"), DependencyRef("extras", "2.0")),
    )


def test_load_manifest_reads_yaml_like_json() -> None:
    """YAML manifests should parse to the same model as JSON ones."""
    yaml_manifest = load_manifest(fixture_path("manifests/app.yaml"))

    assert yaml_manifest == load_manifest(fixture_path("manifests/app.json"))


def test_parse_manifest_treats_absent_lists_as_empty() -> None:
    """Missing targets and packages should be empty, not errors."""
    manifest = parse_manifest(fixture_path("manifests/minimal.json").read_bytes())

    assert (manifest.files, manifest.dependencies) == ((), ())


def test_parse_manifest_ignores_unknown_fields() -> None:
    """Unknown top-level fields should be ignored."""
    manifest = parse_manifest(b'{"name": "app", "ver": "1", "license": "MIT", "targets": null}')

    assert manifest.name == "app" and manifest.files == ()


def test_parse_manifest_raises_for_missing_version() -> None:
    """A manifest without a version should be malformed."""
    with pytest.raises(MalformedManifestError):
        parse_manifest(fixture_path("manifests/missing_version.json").read_bytes())


def test_parse_manifest_raises_for_incomplete_package() -> None:
    """Dependency entries must carry both name and version."""
    with pytest.raises(MalformedManifestError, match="package #1"):
        parse_manifest(fixture_path("manifests/bad_package.json").read_bytes())


def test_parse_manifest_raises_for_invalid_json() -> None:
    """Undecodable documents should be malformed."""
    with pytest.raises(MalformedManifestError):
        parse_manifest(b'{"name": "app",')


def test_parse_manifest_raises_for_non_object_root() -> None:
    """The document root must be a mapping."""
    with pytest.raises(MalformedManifestError):
        parse_manifest(b'["app", "1"]')


def test_parse_manifest_raises_for_numeric_version() -> None:
    """Versions must be strings so archive names stay exact."""
    with pytest.raises(MalformedManifestError, match="must be a string"):
        parse_manifest(b'{"name": "app", "ver": 1}')


def test_parse_manifest_raises_for_string_targets() -> None:
    """Targets must be a list rather than a single string."""
    with pytest.raises(MalformedManifestError):
        parse_manifest(b'{"name": "app", "ver": "1", "targets": "a.txt"}')


def test_parse_manifest_raises_for_unknown_format() -> None:
    """Only json and yaml documents are supported."""
    with pytest.raises(MalformedManifestError):
        parse_manifest(b"name = 'app'", document_format="toml")


def test_load_manifest_raises_for_missing_file(tmp_path: Path) -> None:
    """Unreadable manifest files should raise a manifest error."""
    missing_path = tmp_path / "absent.json"

    with pytest.raises(ManifestError):
        load_manifest(missing_path)

    assert missing_path.exists() is False
