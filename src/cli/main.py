"""Parcel CLI entry points.
This module exposes the create and update package commands.
It maps argparse commands onto SDK calls and errors onto exit codes.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Sequence

from cli.create_command import add_create_command, run_create_command
from cli.update_command import add_update_command, run_update_command
from core.config import ParcelConfig
from core.constants import EXIT_CODE_FAILURE
from core.errors import ParcelError
from distribution.client import ParcelClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="parcel", description="Parcel package distribution CLI")
    parser.add_argument("--work-dir", help="Override PARCEL_WORK_DIR for this command")
    parser.add_argument("--remote", help="Override PARCEL_REMOTE_URI for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_create_command(subparsers)
    add_update_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Parcel CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.work_dir, args.remote)
        if args.command == "create":
            return run_create_command(client, args)
        if args.command == "update":
            return run_update_command(client, args)
    except ParcelError as error:
        print(f"error={error}", file=sys.stderr)
        return EXIT_CODE_FAILURE
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(work_dir: str | None, remote_uri: str | None) -> ParcelClient:
    """Build SDK client with optional overrides.

    Args:
        work_dir: Optional working directory override.
        remote_uri: Optional remote store override.

    Returns:
        Configured SDK client.
    """
    config = ParcelConfig.from_env()
    if work_dir:
        config = replace(config, work_dir=Path(work_dir).expanduser().resolve())
    if remote_uri:
        config = replace(config, remote_uri=remote_uri)
    return ParcelClient(config)
