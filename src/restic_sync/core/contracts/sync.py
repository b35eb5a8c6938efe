"""Sync plan and result contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from restic_sync.core.contracts.repository import Category


class ConfigSyncOutcome(StrEnum):
    WRITTEN = "written"
    ALREADY_MATCHING = "already-matching"
    MISSING_AT_SOURCE = "missing-at-source"
    MISMATCH = "mismatch"


class TransferPlan(BaseModel):
    category: Category
    to_transfer: list[str] = Field(default_factory=list)
    to_delete: list[str] = Field(default_factory=list)


class CategoryResult(BaseModel):
    category: Category
    transferred: int = 0
    deleted: int = 0
    bytes_transferred: int = 0


class SyncResult(BaseModel):
    source: str
    dest: str
    prune: bool = False
    dry_run: bool = False
    config: ConfigSyncOutcome
    categories: dict[Category, CategoryResult] = Field(default_factory=dict)

    @property
    def total_transferred(self) -> int:
        return sum(result.transferred for result in self.categories.values())

    @property
    def total_deleted(self) -> int:
        return sum(result.deleted for result in self.categories.values())

    @property
    def up_to_date(self) -> bool:
        return self.total_transferred == 0 and self.total_deleted == 0 and self.config != ConfigSyncOutcome.WRITTEN
