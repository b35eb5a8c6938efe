"""Command-line interface for restic-sync."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from restic_sync import ResticSync as ResticSync
from restic_sync import resolve_config as resolve_config
from restic_sync.cli.app import main as main
from restic_sync.cli.commands import sync as sync_command
from restic_sync.cli.parser import build_parser as build_parser

_config_overrides = sync_command.config_overrides
_format_summary = sync_command.format_sync_summary
_run_sync = sync_command.run_sync
_run_scheduled = sync_command.run_scheduled
