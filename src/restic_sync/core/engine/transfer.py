"""Verified blob transfer and deletion."""

from __future__ import annotations

import hashlib
import logging

from restic_sync.core.contracts.exceptions import BlobVerificationError
from restic_sync.core.contracts.repository import Category, Repository

_LOG = logging.getLogger(__name__)


def content_hash(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest restic uses as object name."""
    return hashlib.sha256(data).hexdigest()


async def transfer_blob(source: Repository, dest: Repository, category: Category, name: str) -> int:
    """Copy one object from *source* to *dest* after checking its content hash.

    Returns:
        Number of bytes uploaded.

    Raises:
        BlobVerificationError: If the downloaded bytes do not hash to *name*.
            Nothing is written to *dest* in that case.
        RepositoryError: If the download or the upload fails.
    """
    _LOG.info("[%s] Syncing file: %s", category, name)
    data = await source.get_object(category, name)

    actual = content_hash(data)
    if actual != name:
        raise BlobVerificationError(
            f"blob verification failed for {category}/{name}: expected hash {name}, got {actual}",
            name=name,
            actual=actual,
        )

    await dest.create_object(category, name, data)
    return len(data)


async def delete_blob(dest: Repository, category: Category, name: str) -> None:
    _LOG.info("[%s] Deleting extra file: %s", category, name)
    await dest.delete_object(category, name)
