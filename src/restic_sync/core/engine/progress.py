"""Progress reporting for a sync run.

A run has an ``Init`` phase (destination create), a ``Config`` phase and one
phase per object category. Category phases start before their listings are
fetched; ``phase_planned`` follows once the listing diff is known, so a listing
failure still reports against a started phase.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SyncProgress(ABC):
    """Observer interface for sync run progress events."""

    @abstractmethod
    def phase_start(self, phase: str) -> None:
        """*phase* has started; its size is not known yet."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_planned(self, phase: str, *, to_transfer: int, to_delete: int) -> None:
        """The listing diff for a category phase is known."""
        ...  # pragma: no cover

    @abstractmethod
    def object_done(self, phase: str, *, size: int = 0) -> None:
        """One object was copied (*size* bytes) or deleted (*size* 0)."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_done(self, phase: str, *, detail: str | None = None) -> None:
        """*phase* finished; *detail* is a short outcome such as the config result."""
        ...  # pragma: no cover

    @abstractmethod
    def phase_error(self, phase: str, error: BaseException) -> None:
        """*phase* was aborted by *error*; the run stops after this."""
        ...  # pragma: no cover


class NullSyncProgress(SyncProgress):
    """Used when no progress display is requested."""

    def phase_start(self, phase: str) -> None:
        pass

    def phase_planned(self, phase: str, *, to_transfer: int, to_delete: int) -> None:
        pass

    def object_done(self, phase: str, *, size: int = 0) -> None:
        pass

    def phase_done(self, phase: str, *, detail: str | None = None) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass
