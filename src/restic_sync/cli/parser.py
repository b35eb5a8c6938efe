"""CLI parser construction."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version


def _package_version() -> str:
    try:
        return version("restic-sync")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restic-sync",
        description="Synchronize a restic REST repository to another.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    parser.add_argument("--source", default=None, help="Source restic REST repository URL [env: REST_SYNC_SOURCE]")
    parser.add_argument("--dest", default=None, help="Destination restic REST repository URL [env: REST_SYNC_DEST]")
    parser.add_argument(
        "--prune",
        action="store_true",
        default=None,
        help="Delete files in the destination that do not exist in the source [env: REST_SYNC_PRUNE]",
    )
    parser.add_argument(
        "--cron",
        default=None,
        help='Cron expression for periodic sync, e.g. "0 0 * * * *" [env: REST_SYNC_CRON]',
    )
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument("--dry-run", action="store_true", help="Preview mode: verify and plan without writing")
    parser.add_argument("--max-retries", type=int, default=None, help="Retries for transient HTTP failures")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP request timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


__all__ = ["build_parser"]
