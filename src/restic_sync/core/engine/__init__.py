"""Reconciliation engine."""

from restic_sync.core.engine.config_sync import reconcile_config
from restic_sync.core.engine.engine import SyncEngine
from restic_sync.core.engine.listing import fetch_listing
from restic_sync.core.engine.planner import plan_category
from restic_sync.core.engine.progress import NullSyncProgress, SyncProgress
from restic_sync.core.engine.transfer import content_hash, delete_blob, transfer_blob

__all__ = [
    "NullSyncProgress",
    "SyncEngine",
    "SyncProgress",
    "content_hash",
    "delete_blob",
    "fetch_listing",
    "plan_category",
    "reconcile_config",
    "transfer_blob",
]
