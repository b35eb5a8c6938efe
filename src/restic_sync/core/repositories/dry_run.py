"""Dry-run repository wrapper."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from restic_sync.core.contracts.repository import Category, ObjectInfo, Repository

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class DryRunOperation:
    """Deterministic dry-run operation log entry."""

    sequence: int
    name: str
    category: Category | None = None
    object_name: str | None = None
    size: int | None = None


class DryRunRepository(Repository):
    """Delegates reads to *inner* and records writes instead of sending them."""

    def __init__(self, inner: Repository) -> None:
        self._inner = inner
        self.operations: list[DryRunOperation] = []

    @property
    def url(self) -> str:
        return self._inner.url

    async def create(self) -> None:
        self._record("create")

    async def list_objects(self, category: Category) -> list[ObjectInfo]:
        return await self._inner.list_objects(category)

    async def get_object(self, category: Category, name: str) -> bytes:
        return await self._inner.get_object(category, name)

    async def create_object(self, category: Category, name: str, data: bytes) -> None:
        self._record("create_object", category=category, object_name=name, size=len(data))

    async def delete_object(self, category: Category, name: str) -> None:
        self._record("delete_object", category=category, object_name=name)

    async def get_config(self) -> bytes | None:
        return await self._inner.get_config()

    async def create_config(self, data: bytes) -> bool:
        if await self._inner.get_config() is not None:
            return False
        self._record("create_config", size=len(data))
        return True

    def _record(
        self,
        name: str,
        *,
        category: Category | None = None,
        object_name: str | None = None,
        size: int | None = None,
    ) -> None:
        operation = DryRunOperation(
            sequence=len(self.operations) + 1,
            name=name,
            category=category,
            object_name=object_name,
            size=size,
        )
        _LOG.info("[dry-run] %s %s", name, "/".join(str(part) for part in (category, object_name) if part))
        self.operations.append(operation)
