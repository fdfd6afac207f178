"""Python SDK for package distribution.

This module exposes the create and update commands bound to one runtime
configuration and one remote transport.
"""

from __future__ import annotations

from pathlib import Path

from core.config import ParcelConfig
from core.types import CreateResult, UpdateResult
from distribution.create_flow import create_package
from distribution.update_flow import update_packages
from transport.remote_transport import RemoteTransport
from transport.transport_factory import create_transport


class ParcelClient:
    """Primary SDK entry point for distribution workflows."""

    def __init__(
        self,
        config: ParcelConfig | None = None,
        transport: RemoteTransport | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            transport: Optional transport, built from ``config`` when omitted.
        """
        self._config = config or ParcelConfig.from_env()
        self._transport = transport or create_transport(self._config)

    @property
    def config(self) -> ParcelConfig:
        """Runtime configuration used by this client."""
        return self._config

    def create(self, manifest_path: str | Path) -> CreateResult:
        """Build a manifest's archive and upload it to the remote store.

        Raises:
            PackageCreateError: If any create stage fails.
        """
        return create_package(manifest_path, self._config.work_dir, self._transport)

    def update(self, manifest_path: str | Path, resume: bool = False) -> UpdateResult:
        """Fetch and extract a manifest's dependencies into the work dir.

        Raises:
            PackageUpdateError: If the manifest cannot be parsed.
            UpdateAbortedError: If a dependency fails.
        """
        return update_packages(
            manifest_path, self._config.work_dir, self._transport, resume=resume
        )
