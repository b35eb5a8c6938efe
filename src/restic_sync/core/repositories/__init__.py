"""Repository adapters."""

from restic_sync.core.repositories._retrying_transport import RetryingTransport
from restic_sync.core.repositories.dry_run import DryRunOperation, DryRunRepository
from restic_sync.core.repositories.rest import LISTING_V2_MEDIA_TYPE, RestRepository, create_http_client

__all__ = [
    "LISTING_V2_MEDIA_TYPE",
    "DryRunOperation",
    "DryRunRepository",
    "RestRepository",
    "RetryingTransport",
    "create_http_client",
]
