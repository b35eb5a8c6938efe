"""Category listing snapshots."""

from __future__ import annotations

import logging

from restic_sync.core.contracts.repository import Category, ListingSnapshot, Repository

_LOG = logging.getLogger(__name__)


async def fetch_listing(repository: Repository, category: Category) -> ListingSnapshot:
    """Fetch the name -> declared size mapping of *category* in *repository*.

    A category the repository never materialized yields an empty snapshot.
    """
    snapshot: ListingSnapshot = {}
    for info in await repository.list_objects(category):
        snapshot[info.name] = info.size
    _LOG.debug("[%s] %d object(s) at %s", category, len(snapshot), repository.url)
    return snapshot
