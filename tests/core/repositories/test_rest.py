from __future__ import annotations

import json

import httpx
import pytest

from restic_sync.core.contracts.exceptions import ListingError, RepositoryError
from restic_sync.core.contracts.repository import Category, ObjectInfo
from restic_sync.core.repositories.rest import LISTING_V2_MEDIA_TYPE, RestRepository, create_http_client
from tests.fakes.rest_server import FakeRestServer


def _client(handler) -> httpx.AsyncClient:  # type: ignore[no-untyped-def]
    return create_http_client(max_retries=0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_url_is_normalized_with_trailing_slash() -> None:
    async with _client(lambda request: httpx.Response(200)) as http:
        assert RestRepository("http://host/repo", http).url == "http://host/repo/"
        assert RestRepository("http://host/repo/", http).url == "http://host/repo/"


@pytest.mark.asyncio
async def test_create_posts_create_flag() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    async with _client(handler) as http:
        await RestRepository("http://host/repo", http).create()

    assert seen[0].method == "POST"
    assert str(seen[0].url) == "http://host/repo/?create=true"


@pytest.mark.asyncio
async def test_create_failure_carries_status() -> None:
    async with _client(lambda request: httpx.Response(401)) as http:
        with pytest.raises(RepositoryError, match="failed to create/verify repository") as exc_info:
            await RestRepository("http://host/repo", http).create()

    assert exc_info.value.status_code == 401
    assert exc_info.value.url == "http://host/repo/?create=true"


@pytest.mark.asyncio
async def test_list_objects_requests_v2_format() -> None:
    seen: list[httpx.Request] = []
    payload = [{"name": "aa", "size": 3}, {"name": "bb", "size": 0}]

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=json.dumps(payload).encode())

    async with _client(handler) as http:
        entries = await RestRepository("http://host/repo", http).list_objects(Category.INDEX)

    assert entries == [ObjectInfo(name="aa", size=3), ObjectInfo(name="bb", size=0)]
    assert str(seen[0].url) == "http://host/repo/index/"
    assert seen[0].headers["Accept"] == LISTING_V2_MEDIA_TYPE


@pytest.mark.asyncio
async def test_list_objects_not_found_is_empty() -> None:
    async with _client(lambda request: httpx.Response(404)) as http:
        assert await RestRepository("http://host/repo", http).list_objects(Category.LOCKS) == []


@pytest.mark.asyncio
async def test_list_objects_other_status_is_fatal() -> None:
    async with _client(lambda request: httpx.Response(500)) as http:
        with pytest.raises(RepositoryError, match="http://host/repo/data/") as exc_info:
            await RestRepository("http://host/repo", http).list_objects(Category.DATA)

    assert exc_info.value.status_code == 500


@pytest.mark.parametrize(
    "body",
    [
        b"not json",
        b'["aa", "bb"]',
        b'[{"name": "aa"}]',
        b'[{"name": "aa", "size": -1}]',
        b'{"name": "aa", "size": 1}',
        b'[{"name": "../config", "size": 1}]',
        b'[{"name": "AB12", "size": 1}]',
        b'[{"name": "", "size": 1}]',
    ],
)
@pytest.mark.asyncio
async def test_list_objects_malformed_payload_raises_listing_error(body: bytes) -> None:
    async with _client(lambda request: httpx.Response(200, content=body)) as http:
        with pytest.raises(ListingError, match="for type snapshots") as exc_info:
            await RestRepository("http://host/repo", http).list_objects(Category.SNAPSHOTS)

    assert exc_info.value.category == "snapshots"
    assert exc_info.value.url == "http://host/repo/snapshots/"


@pytest.mark.asyncio
async def test_object_round_trip_against_fake_server() -> None:
    server = FakeRestServer()
    server.repo("host")

    async with create_http_client(max_retries=0, transport=server.transport()) as http:
        repo = RestRepository("http://host/repo", http)
        await repo.create_object(Category.DATA, "abc", b"bytes")
        assert await repo.get_object(Category.DATA, "abc") == b"bytes"
        await repo.delete_object(Category.DATA, "abc")
        with pytest.raises(RepositoryError, match="failed to download") as exc_info:
            await repo.get_object(Category.DATA, "abc")

    assert exc_info.value.status_code == 404
    upload = next(request for request in server.requests if request.method == "POST")
    assert upload.headers["Content-Type"] == "application/octet-stream"


@pytest.mark.asyncio
async def test_upload_and_delete_failures_are_fatal() -> None:
    async with _client(lambda request: httpx.Response(400)) as http:
        repo = RestRepository("http://host/repo", http)
        with pytest.raises(RepositoryError, match="failed to upload to http://host/repo/keys/k1"):
            await repo.create_object(Category.KEYS, "k1", b"x")
        with pytest.raises(RepositoryError, match="failed to delete http://host/repo/keys/k1"):
            await repo.delete_object(Category.KEYS, "k1")


@pytest.mark.asyncio
async def test_get_config_not_found_returns_none() -> None:
    async with _client(lambda request: httpx.Response(404)) as http:
        assert await RestRepository("http://host/repo", http).get_config() is None


@pytest.mark.asyncio
async def test_get_config_other_status_is_fatal() -> None:
    async with _client(lambda request: httpx.Response(500)) as http:
        with pytest.raises(RepositoryError, match="failed to fetch config"):
            await RestRepository("http://host/repo", http).get_config()


@pytest.mark.parametrize(("status", "expected"), [(200, True), (403, False)])
@pytest.mark.asyncio
async def test_create_config_distinguishes_already_exists(status: int, expected: bool) -> None:
    async with _client(lambda request: httpx.Response(status)) as http:
        assert await RestRepository("http://host/repo", http).create_config(b"cfg") is expected


@pytest.mark.asyncio
async def test_create_config_other_status_is_fatal() -> None:
    async with _client(lambda request: httpx.Response(409)) as http:
        with pytest.raises(RepositoryError, match="failed to save config") as exc_info:
            await RestRepository("http://host/repo", http).create_config(b"cfg")

    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_transport_error_is_wrapped_with_method_and_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as http:
        with pytest.raises(RepositoryError, match="GET http://host/repo/config failed") as exc_info:
            await RestRepository("http://host/repo", http).get_config()

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_client_sends_user_agent() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(404)

    async with _client(handler) as http:
        await RestRepository("http://host/repo", http).get_config()

    assert seen[0].headers["User-Agent"].startswith("restic-sync/")
