"""SDK composition root for restic-sync."""

from __future__ import annotations

import asyncio

import httpx

from restic_sync.core.config import load_config, resolve_config
from restic_sync.core.contracts.config import SyncConfig
from restic_sync.core.contracts.exceptions import ConfigError
from restic_sync.core.contracts.repository import Repository
from restic_sync.core.contracts.sync import SyncResult
from restic_sync.core.engine import SyncEngine
from restic_sync.core.engine.progress import SyncProgress
from restic_sync.core.repositories import DryRunRepository, RestRepository, create_http_client
from restic_sync.core.scheduler import CronSchedule, run_scheduled


class ResticSync:
    """restic-sync SDK public API."""

    def __init__(
        self,
        *,
        config: SyncConfig,
        progress: SyncProgress | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._progress = progress
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: SyncConfig,
        *,
        progress: SyncProgress | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ResticSync:
        return cls(config=config, progress=progress, transport=transport)

    @property
    def config(self) -> SyncConfig:
        return self._config

    async def sync(self, *, dry_run: bool = False) -> SyncResult:
        """Run one full reconciliation of the destination against the source."""
        async with create_http_client(
            max_retries=self._config.max_retries,
            timeout=self._config.timeout,
            transport=self._transport,
        ) as http:
            source = RestRepository(self._config.source, http)
            dest: Repository = RestRepository(self._config.dest, http)
            if dry_run:
                dest = DryRunRepository(dest)
            engine = SyncEngine(source, dest, prune=self._config.prune, dry_run=dry_run, progress=self._progress)
            return await engine.sync()

    async def run_scheduled(self, *, stop_event: asyncio.Event, dry_run: bool = False) -> None:
        """Run :meth:`sync` on the configured cron schedule until *stop_event* is set."""
        if self._config.cron is None:
            raise ConfigError("scheduled mode requires a cron expression")
        schedule = CronSchedule(self._config.cron)
        await run_scheduled(lambda: self.sync(dry_run=dry_run), schedule, stop_event=stop_event)


__all__ = ["ResticSync", "load_config", "resolve_config"]
