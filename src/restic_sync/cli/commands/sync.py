"""Sync command execution and formatting."""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal

from restic_sync import CATEGORY_ORDER, ConfigSyncOutcome, SyncConfig, SyncResult
from restic_sync.cli.progress.rich import RichSyncProgress

_LOG = logging.getLogger(__name__)

_CONFIG_LABELS = {
    ConfigSyncOutcome.WRITTEN: "written",
    ConfigSyncOutcome.ALREADY_MATCHING: "matches source",
    ConfigSyncOutcome.MISSING_AT_SOURCE: "not present in source",
    ConfigSyncOutcome.MISMATCH: "MISMATCH",
}


def config_overrides(args: argparse.Namespace) -> dict[str, object]:
    return {
        "source": args.source,
        "dest": args.dest,
        "prune": args.prune,
        "cron": args.cron,
        "max_retries": args.max_retries,
        "timeout": args.timeout,
    }


def format_sync_summary(result: SyncResult) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"restic-sync - sync complete ({mode})",
        "",
        f"  Source:    {result.source}",
        f"  Dest:      {result.dest}",
        f"  Prune:     {'yes' if result.prune else 'no'}",
        f"  Config:    {_CONFIG_LABELS[result.config]}",
        "",
    ]

    for category in CATEGORY_ORDER:
        category_result = result.categories.get(category)
        if category_result is None:
            continue
        line = f"  {category:<10} {category_result.transferred} transferred"
        if result.prune:
            line += f", {category_result.deleted} deleted"
        if category_result.bytes_transferred:
            line += f" ({category_result.bytes_transferred} bytes)"
        lines.append(line)

    lines.append("")
    if result.up_to_date:
        lines.append("  Status:    all objects up to date")
    else:
        lines.append(f"  Total:     {result.total_transferred} transferred, {result.total_deleted} deleted")

    if result.dry_run:
        lines.append("")
        lines.append("  [dry-run] No changes were made")

    lines.append("")
    return "\n".join(lines)


async def run_sync(args: argparse.Namespace, config: SyncConfig) -> SyncResult:
    import restic_sync.cli as cli

    if not args.verbose:
        with RichSyncProgress() as progress:
            result = await cli.ResticSync.from_config(config, progress=progress).sync(dry_run=args.dry_run)
    else:
        result = await cli.ResticSync.from_config(config).sync(dry_run=args.dry_run)

    print(cli._format_summary(result))
    return result


async def run_scheduled(args: argparse.Namespace, config: SyncConfig) -> None:
    import restic_sync.cli as cli

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)
    try:
        await cli.ResticSync.from_config(config).run_scheduled(stop_event=stop_event, dry_run=args.dry_run)
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


__all__ = ["config_overrides", "format_sync_summary", "run_scheduled", "run_sync"]
