"""Exception hierarchy for restic-sync."""

from __future__ import annotations


class ResticSyncError(Exception):
    """Base exception for all restic-sync errors."""


class ConfigError(ResticSyncError):
    """Configuration loading or validation failure."""


class RepositoryError(ResticSyncError):
    """A repository request failed or answered with an unexpected status."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ListingError(RepositoryError):
    """A category listing could not be parsed."""

    def __init__(self, message: str, *, url: str | None = None, category: str | None = None) -> None:
        super().__init__(message, url=url)
        self.category = category


class SyncError(ResticSyncError):
    """Engine-level synchronization failure."""


class BlobVerificationError(SyncError):
    """Downloaded bytes do not hash to the object's name."""

    def __init__(self, message: str, *, name: str, actual: str) -> None:
        super().__init__(message)
        self.name = name
        self.actual = actual


class ConfigMismatchError(SyncError):
    """Destination already holds a config that differs from the source config."""
