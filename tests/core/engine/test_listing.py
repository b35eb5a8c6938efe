from __future__ import annotations

import pytest

from restic_sync.core.contracts.repository import Category
from restic_sync.core.engine.listing import fetch_listing
from tests.fakes.repository import FakeRepository


@pytest.mark.asyncio
async def test_fetch_listing_maps_names_to_declared_sizes() -> None:
    repo = FakeRepository()
    first = repo.put(Category.SNAPSHOTS, b"one")
    second = repo.put(Category.SNAPSHOTS, b"three")
    repo.size_overrides[(Category.SNAPSHOTS, second)] = 99

    snapshot = await fetch_listing(repo, Category.SNAPSHOTS)

    assert snapshot == {first: 3, second: 99}


@pytest.mark.asyncio
async def test_fetch_listing_of_empty_category_is_empty() -> None:
    assert await fetch_listing(FakeRepository(), Category.LOCKS) == {}
