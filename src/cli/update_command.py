"""Update command wiring for Parcel CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.constants import EXIT_CODE_SUCCESS
from distribution.client import ParcelClient


def add_update_command(subparsers: Any) -> None:
    """Register update subcommand."""
    parser = subparsers.add_parser(
        "update",
        help="Fetch and extract every dependency listed in a manifest",
    )
    parser.add_argument("manifest", help="Manifest file (.json, .yaml or .yml)")
    parser.add_argument(
        "--resume",
        action="store_true",
        help="Record progress and skip dependencies an earlier --resume run extracted",
    )


def run_update_command(client: ParcelClient, args: argparse.Namespace) -> int:
    """Handle update command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.update(args.manifest, resume=args.resume)
    for dependency in result.skipped:
        print(f"skipped={dependency.name}@{dependency.version}")
    for dependency in result.applied:
        print(f"applied={dependency.name}@{dependency.version}")
    return EXIT_CODE_SUCCESS
