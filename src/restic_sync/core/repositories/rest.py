"""Repository adapter for the restic REST server protocol."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

import httpx
from pydantic import TypeAdapter, ValidationError

from restic_sync.core.contracts.config import normalize_url
from restic_sync.core.contracts.exceptions import ListingError, RepositoryError
from restic_sync.core.contracts.repository import Category, ObjectInfo, Repository
from restic_sync.core.repositories._retrying_transport import RetryingTransport

_LOG = logging.getLogger(__name__)

LISTING_V2_MEDIA_TYPE = "application/vnd.x.restic.rest.v2"
_OCTET_STREAM = {"Content-Type": "application/octet-stream"}
# rest-server answers 403 when a config already exists.
_ALREADY_EXISTS_STATUS = 403
_NOT_FOUND_STATUS = 404

_LISTING_ADAPTER = TypeAdapter(list[ObjectInfo])


def _package_version() -> str:
    try:
        return version("restic-sync")
    except PackageNotFoundError:
        return "0.0.0"


def create_http_client(
    *,
    max_retries: int = 5,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Build the shared HTTP client used by both repositories of a run."""
    return httpx.AsyncClient(
        transport=RetryingTransport(transport=transport, max_retries=max_retries),
        headers={"User-Agent": f"restic-sync/{_package_version()}"},
        limits=httpx.Limits(max_connections=4, max_keepalive_connections=4),
        timeout=httpx.Timeout(timeout),
    )


class RestRepository(Repository):
    """A restic repository served by rest-server (or a compatible endpoint)."""

    def __init__(self, url: str, http: httpx.AsyncClient) -> None:
        self._url = normalize_url(url)
        self._http = http

    @property
    def url(self) -> str:
        return self._url

    async def create(self) -> None:
        url = f"{self._url}?create=true"
        _LOG.info("Ensuring destination repository exists: %s", url)
        response = await self._request("POST", url)
        if not response.is_success:
            raise self._status_error("failed to create/verify repository", url, response)

    async def list_objects(self, category: Category) -> list[ObjectInfo]:
        url = f"{self._url}{category}/"
        _LOG.debug("Listing %s: %s", category, url)
        response = await self._request("GET", url, headers={"Accept": LISTING_V2_MEDIA_TYPE})
        if response.status_code == _NOT_FOUND_STATUS:
            return []
        if not response.is_success:
            raise self._status_error("failed to list", url, response)

        try:
            return _LISTING_ADAPTER.validate_json(response.content)
        except ValidationError as exc:
            raise ListingError(
                f"failed to parse v2 listing from {url} for type {category}: {exc}",
                url=url,
                category=str(category),
            ) from exc

    async def get_object(self, category: Category, name: str) -> bytes:
        url = self._object_url(category, name)
        response = await self._request("GET", url)
        if not response.is_success:
            raise self._status_error("failed to download", url, response)
        return response.content

    async def create_object(self, category: Category, name: str, data: bytes) -> None:
        url = self._object_url(category, name)
        response = await self._request("POST", url, content=data, headers=_OCTET_STREAM)
        if not response.is_success:
            raise self._status_error("failed to upload to", url, response)

    async def delete_object(self, category: Category, name: str) -> None:
        url = self._object_url(category, name)
        response = await self._request("DELETE", url)
        if not response.is_success:
            raise self._status_error("failed to delete", url, response)

    async def get_config(self) -> bytes | None:
        url = f"{self._url}config"
        response = await self._request("GET", url)
        if response.status_code == _NOT_FOUND_STATUS:
            return None
        if not response.is_success:
            raise self._status_error("failed to fetch config from", url, response)
        return response.content

    async def create_config(self, data: bytes) -> bool:
        url = f"{self._url}config"
        response = await self._request("POST", url, content=data, headers=_OCTET_STREAM)
        if response.is_success:
            return True
        if response.status_code == _ALREADY_EXISTS_STATUS:
            return False
        raise self._status_error("failed to save config to", url, response)

    def _object_url(self, category: Category, name: str) -> str:
        return f"{self._url}{category}/{name}"

    async def _request(
        self,
        method: str,
        url: str,
        *,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._http.request(method, url, content=content, headers=headers)
        except httpx.HTTPError as exc:
            raise RepositoryError(f"{method} {url} failed: {exc}", url=url) from exc

    @staticmethod
    def _status_error(action: str, url: str, response: httpx.Response) -> RepositoryError:
        return RepositoryError(
            f"{action} {url}: HTTP {response.status_code} {response.reason_phrase}".rstrip(),
            url=url,
            status_code=response.status_code,
        )
