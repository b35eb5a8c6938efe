"""Core sync pipeline engine."""

from __future__ import annotations

import logging

from restic_sync.core.contracts.exceptions import ConfigMismatchError
from restic_sync.core.contracts.repository import CATEGORY_ORDER, Category, Repository
from restic_sync.core.contracts.sync import CategoryResult, ConfigSyncOutcome, SyncResult
from restic_sync.core.engine.config_sync import reconcile_config
from restic_sync.core.engine.listing import fetch_listing
from restic_sync.core.engine.planner import plan_category
from restic_sync.core.engine.progress import NullSyncProgress, SyncProgress
from restic_sync.core.engine.transfer import delete_blob, transfer_blob

_LOG = logging.getLogger(__name__)


class SyncEngine:
    """Replicates *source* into *dest*, one category and one object at a time.

    The first failure aborts the run; remaining categories are not attempted.
    Objects already written stay valid, so a failed run is simply re-run.
    """

    def __init__(
        self,
        source: Repository,
        dest: Repository,
        *,
        prune: bool = False,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
    ) -> None:
        self._source = source
        self._dest = dest
        self._prune = prune
        self._dry_run = dry_run
        self._progress: SyncProgress = progress or NullSyncProgress()

    async def sync(self) -> SyncResult:
        _LOG.info("Source: %s", self._source.url)
        _LOG.info("Dest: %s", self._dest.url)
        _LOG.info("Prune: %s", self._prune)

        await self._init_dest()
        config_outcome = await self._sync_config()

        categories: dict[Category, CategoryResult] = {}
        for category in CATEGORY_ORDER:
            categories[category] = await self._sync_category(category)

        _LOG.info("Synchronization complete.")
        return SyncResult(
            source=self._source.url,
            dest=self._dest.url,
            prune=self._prune,
            dry_run=self._dry_run,
            config=config_outcome,
            categories=categories,
        )

    async def _init_dest(self) -> None:
        self._progress.phase_start("Init")
        try:
            await self._dest.create()
        except BaseException as exc:
            self._progress.phase_error("Init", exc)
            raise
        self._progress.phase_done("Init")

    async def _sync_config(self) -> ConfigSyncOutcome:
        self._progress.phase_start("Config")
        try:
            outcome = await reconcile_config(self._source, self._dest)
            if outcome == ConfigSyncOutcome.MISMATCH:
                raise ConfigMismatchError(
                    f"destination config at {self._dest.url} already exists and does not match the source config; "
                    "aborting to prevent repository corruption"
                )
        except BaseException as exc:
            self._progress.phase_error("Config", exc)
            raise
        self._progress.phase_done("Config", detail=str(outcome))
        return outcome

    async def _sync_category(self, category: Category) -> CategoryResult:
        phase = str(category)
        result = CategoryResult(category=category)
        self._progress.phase_start(phase)
        try:
            source_listing = await fetch_listing(self._source, category)
            dest_listing = await fetch_listing(self._dest, category)
            plan = plan_category(category, source_listing, dest_listing, prune=self._prune)

            _LOG.info(
                "[%s] Found %d missing blobs, %d extra blobs",
                category,
                len(plan.to_transfer),
                len(plan.to_delete),
            )
            self._progress.phase_planned(phase, to_transfer=len(plan.to_transfer), to_delete=len(plan.to_delete))

            for name in plan.to_transfer:
                size = await transfer_blob(self._source, self._dest, category, name)
                result.bytes_transferred += size
                result.transferred += 1
                self._progress.object_done(phase, size=size)

            for name in plan.to_delete:
                await delete_blob(self._dest, category, name)
                result.deleted += 1
                self._progress.object_done(phase)
        except BaseException as exc:
            self._progress.phase_error(phase, exc)
            raise
        self._progress.phase_done(phase)
        return result
