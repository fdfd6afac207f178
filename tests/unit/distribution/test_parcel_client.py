"""Unit tests for the SDK client."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from core.config import ParcelConfig
from distribution.client import ParcelClient
from tests.fixture_paths import write_manifest
from tests.transport_fakes import RecordingTransport
from transport.directory_transport import DirectoryTransport


def test_client_builds_transport_from_config(tmp_path: Path) -> None:
    """Clients without a transport should build one from config."""
    config = replace(ParcelConfig.from_env(), work_dir=tmp_path, remote_uri=str(tmp_path / "s"))
    client = ParcelClient(config)
    (tmp_path / "a.txt").write_text("alpha", encoding="utf-8")
    manifest_path = write_manifest(tmp_path, {"name": "app", "ver": "1", "targets": ["a.txt"]})

    client.create(manifest_path)

    assert (tmp_path / "s" / "app_1.zip").is_file()


def test_client_create_then_update_shares_store(tmp_path: Path) -> None:
    """A package created by one client should be applied by another."""
    transport = RecordingTransport()
    producer_dir = tmp_path / "producer"
    consumer_dir = tmp_path / "consumer"
    producer_dir.mkdir()
    consumer_dir.mkdir()
    (producer_dir / "a.txt").write_text("alpha", encoding="utf-8")
    producer = ParcelClient(replace(ParcelConfig.from_env(), work_dir=producer_dir), transport)
    consumer = ParcelClient(replace(ParcelConfig.from_env(), work_dir=consumer_dir), transport)
    producer.create(
        write_manifest(producer_dir, {"name": "lib", "ver": "1", "targets": ["a.txt"]})
    )
    consumer_manifest = write_manifest(
        consumer_dir,
        {"name": "app", "ver": "1", "packages": [{"name": "lib", "ver": "1"}]},
    )

    consumer.update(consumer_manifest)

    assert (consumer_dir / "a.txt").read_text(encoding="utf-8") == "alpha"


def test_client_uses_injected_transport(tmp_path: Path) -> None:
    """An injected transport should be used instead of the config store."""
    transport = DirectoryTransport(tmp_path / "injected")
    config = replace(ParcelConfig.from_env(), work_dir=tmp_path, remote_uri=str(tmp_path / "cfg"))
    manifest_path = write_manifest(tmp_path, {"name": "app", "ver": "1"})

    ParcelClient(config, transport).create(manifest_path)

    assert (tmp_path / "injected" / "app_1.zip").is_file()
    assert not (tmp_path / "cfg").exists()
