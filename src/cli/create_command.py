"""Create command wiring for Parcel CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.constants import EXIT_CODE_SUCCESS
from distribution.client import ParcelClient


def add_create_command(subparsers: Any) -> None:
    """Register create subcommand."""
    parser = subparsers.add_parser(
        "create",
        help="Build a package archive from a manifest and upload it",
    )
    parser.add_argument("manifest", help="Manifest file (.json, .yaml or .yml)")


def run_create_command(client: ParcelClient, args: argparse.Namespace) -> int:
    """Handle create command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.create(args.manifest)
    print(f"archive={result.handle.name}")
    print(f"archive_path={result.handle.path}")
    return EXIT_CODE_SUCCESS
