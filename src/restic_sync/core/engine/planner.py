"""Per-category reconciliation planning."""

from __future__ import annotations

from restic_sync.core.contracts.repository import Category, ListingSnapshot
from restic_sync.core.contracts.sync import TransferPlan


def plan_category(
    category: Category,
    source: ListingSnapshot,
    dest: ListingSnapshot,
    *,
    prune: bool = False,
) -> TransferPlan:
    """Compute which objects to copy to, and optionally delete from, the destination.

    An object is transferred when the destination lacks it or declares a
    different size. Equal declared sizes are taken as an already-correct copy;
    the destination content is not re-hashed. Deletions are only planned when
    *prune* is set and never depend on sizes.
    """
    to_transfer = sorted(name for name, size in source.items() if dest.get(name) != size)
    to_delete = sorted(name for name in dest if name not in source) if prune else []
    return TransferPlan(category=category, to_transfer=to_transfer, to_delete=to_delete)
