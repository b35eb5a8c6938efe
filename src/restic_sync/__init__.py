"""Public API surface for restic-sync."""

__version__ = "0.1.0"

from restic_sync.core.config import load_config, resolve_config
from restic_sync.core.contracts import (
    CATEGORY_ORDER,
    BlobVerificationError,
    Category,
    CategoryResult,
    ConfigError,
    ConfigMismatchError,
    ConfigSyncOutcome,
    ListingError,
    ListingSnapshot,
    ObjectInfo,
    Repository,
    RepositoryError,
    ResticSyncError,
    SyncConfig,
    SyncError,
    SyncResult,
    TransferPlan,
)
from restic_sync.core.engine import SyncEngine, SyncProgress, plan_category
from restic_sync.core.repositories import DryRunRepository, RestRepository
from restic_sync.core.scheduler import CronSchedule
from restic_sync.sdk import ResticSync

__all__ = [
    "CATEGORY_ORDER",
    "BlobVerificationError",
    "Category",
    "CategoryResult",
    "ConfigError",
    "ConfigMismatchError",
    "ConfigSyncOutcome",
    "CronSchedule",
    "DryRunRepository",
    "ListingError",
    "ListingSnapshot",
    "ObjectInfo",
    "Repository",
    "RepositoryError",
    "ResticSync",
    "ResticSyncError",
    "RestRepository",
    "SyncConfig",
    "SyncEngine",
    "SyncError",
    "SyncProgress",
    "SyncResult",
    "TransferPlan",
    "__version__",
    "load_config",
    "plan_category",
    "resolve_config",
]
