"""Public contracts for restic-sync."""

from restic_sync.core.contracts.config import SyncConfig, normalize_url
from restic_sync.core.contracts.exceptions import (
    BlobVerificationError,
    ConfigError,
    ConfigMismatchError,
    ListingError,
    RepositoryError,
    ResticSyncError,
    SyncError,
)
from restic_sync.core.contracts.repository import CATEGORY_ORDER, Category, ListingSnapshot, ObjectInfo, Repository
from restic_sync.core.contracts.sync import CategoryResult, ConfigSyncOutcome, SyncResult, TransferPlan

__all__ = [
    "CATEGORY_ORDER",
    "BlobVerificationError",
    "Category",
    "CategoryResult",
    "ConfigError",
    "ConfigMismatchError",
    "ConfigSyncOutcome",
    "ListingError",
    "ListingSnapshot",
    "ObjectInfo",
    "Repository",
    "RepositoryError",
    "ResticSyncError",
    "SyncConfig",
    "SyncError",
    "SyncResult",
    "TransferPlan",
    "normalize_url",
]
