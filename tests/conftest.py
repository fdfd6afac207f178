"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_PARCEL_ENV_VARS = (
    "PARCEL_WORK_DIR",
    "PARCEL_REMOTE_URI",
    "PARCEL_S3_REGION",
    "PARCEL_S3_PROFILE",
    "PARCEL_S3_ENDPOINT_URL",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolate_parcel_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host PARCEL_* settings out of config built during tests."""
    for variable_name in _PARCEL_ENV_VARS:
        monkeypatch.delenv(variable_name, raising=False)
