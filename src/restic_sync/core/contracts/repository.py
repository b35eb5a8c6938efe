"""Repository contracts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel, Field


class Category(StrEnum):
    DATA = "data"
    KEYS = "keys"
    LOCKS = "locks"
    SNAPSHOTS = "snapshots"
    INDEX = "index"


CATEGORY_ORDER: tuple[Category, ...] = (
    Category.DATA,
    Category.KEYS,
    Category.LOCKS,
    Category.SNAPSHOTS,
    Category.INDEX,
)

# Object name -> declared size for one (repository, category) pair.
ListingSnapshot = dict[str, int]


class ObjectInfo(BaseModel):
    """One entry of a v2 category listing."""

    # Lowercase hex content hash.
    name: str = Field(pattern=r"^[0-9a-f]+$")
    size: int = Field(ge=0)


class Repository(ABC):
    """A content-addressed backup repository reachable over some transport."""

    @property
    @abstractmethod
    def url(self) -> str: ...  # pragma: no cover

    @abstractmethod
    async def create(self) -> None: ...  # pragma: no cover

    @abstractmethod
    async def list_objects(self, category: Category) -> list[ObjectInfo]: ...  # pragma: no cover

    @abstractmethod
    async def get_object(self, category: Category, name: str) -> bytes: ...  # pragma: no cover

    @abstractmethod
    async def create_object(self, category: Category, name: str, data: bytes) -> None: ...  # pragma: no cover

    @abstractmethod
    async def delete_object(self, category: Category, name: str) -> None: ...  # pragma: no cover

    @abstractmethod
    async def get_config(self) -> bytes | None:
        """Return the config bytes, or ``None`` when the repository has none."""
        ...  # pragma: no cover

    @abstractmethod
    async def create_config(self, data: bytes) -> bool:
        """Create the config object.

        Returns:
            ``True`` when the config was written, ``False`` when the repository
            refused because a config already exists.
        """
        ...  # pragma: no cover
