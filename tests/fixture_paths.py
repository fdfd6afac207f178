"""Shared fixture path helpers for tests."""

from __future__ import annotations

import io
import json
from pathlib import Path
import zipfile


def fixture_path(relative_path: str) -> Path:
    """Resolve a fixture path relative to tests/fixtures.

    Args:
        relative_path: Path under fixtures root.

    Returns:
        Absolute fixture path.
    """
    tests_root = Path(__file__).resolve().parent
    return tests_root / "fixtures" / relative_path


def write_manifest(
    directory: Path,
    payload: dict[str, object],
    file_name: str = "parcel.json",
) -> Path:
    """Write a JSON manifest document for a test.

    Args:
        directory: Destination directory.
        payload: Manifest document fields.
        file_name: Manifest file name.

    Returns:
        Written manifest path.
    """
    manifest_path = directory / file_name
    manifest_path.write_text(json.dumps(payload), encoding="utf-8")
    return manifest_path


def zip_bytes(entries: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive with entries in insertion order."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for stored_path, content in entries.items():
            archive.writestr(stored_path, content)
    return buffer.getvalue()
