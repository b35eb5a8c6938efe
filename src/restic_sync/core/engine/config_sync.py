"""Repository config reconciliation."""

from __future__ import annotations

import logging

from restic_sync.core.contracts.exceptions import RepositoryError
from restic_sync.core.contracts.repository import Repository
from restic_sync.core.contracts.sync import ConfigSyncOutcome

_LOG = logging.getLogger(__name__)


async def reconcile_config(source: Repository, dest: Repository) -> ConfigSyncOutcome:
    """Bring the destination config in line with the source config.

    The destination config is never overwritten: when the destination refuses
    the write because a config already exists, the existing bytes are fetched
    and compared with the source bytes. The caller decides what to do with a
    ``MISMATCH`` outcome. Request failures propagate as ``RepositoryError``.
    """
    config = await source.get_config()
    if config is None:
        _LOG.warning("Config file not found in source repository %s", source.url)
        return ConfigSyncOutcome.MISSING_AT_SOURCE

    if await dest.create_config(config):
        _LOG.info("Config file written to %s", dest.url)
        return ConfigSyncOutcome.WRITTEN

    _LOG.debug("Config file already exists at %s; comparing with source config", dest.url)
    existing = await dest.get_config()
    if existing is None:
        raise RepositoryError(
            f"destination {dest.url} refused the config write but has no readable config",
            url=f"{dest.url}config",
        )
    if existing != config:
        return ConfigSyncOutcome.MISMATCH

    _LOG.info("Destination config file matches source config")
    return ConfigSyncOutcome.ALREADY_MATCHING
