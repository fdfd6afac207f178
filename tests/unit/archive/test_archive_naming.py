"""Unit tests for archive naming."""

from __future__ import annotations

from pathlib import Path

from archive.archive_naming import archive_handle_for, archive_name, archive_name_for
from core.types import DependencyRef, Manifest


def test_archive_name_joins_name_and_version() -> None:
    """Plain names should use the name_version.zip layout."""
    assert archive_name("app", "1.2.0") == "app_1.2.0.zip"


def test_archive_name_differs_when_separator_moves() -> None:
    """Pairs that concatenate to the same text must not collide."""
    assert archive_name("a_b", "c") != archive_name("a", "b_c")


def test_archive_name_differs_for_distinct_pairs() -> None:
    """Distinct name/version pairs should map to distinct names."""
    pairs = [("app", "1"), ("app", "2"), ("app1", ""), ("ap", "p1"), ("a%5Fb", "c"), ("a_b", "c")]

    names = {archive_name(name, version) for name, version in pairs}

    assert len(names) == len(pairs)


def test_archive_name_has_no_path_separators() -> None:
    """Names containing slashes should stay flat file names."""
    name = archive_name("../evil", "1/2")

    assert "/" not in name and "\\" not in name


def test_manifest_and_dependency_share_names() -> None:
    """Build and fetch sides should derive identical names."""
    manifest = Manifest(name="base", version="3")

    assert archive_name_for(manifest) == archive_name_for(DependencyRef("base", "3"))


def test_archive_handle_for_places_archive_in_directory(tmp_path: Path) -> None:
    """Handles should point at the archive inside the directory."""
    handle = archive_handle_for(DependencyRef("base", "3"), tmp_path)

    assert handle.path == tmp_path / "base_3.zip"
