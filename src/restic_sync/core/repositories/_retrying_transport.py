"""httpx async transport wrapper with retry and exponential backoff."""

from __future__ import annotations

import asyncio
import logging
import random

import httpx

_LOG = logging.getLogger(__name__)

# Status codes considered transient and eligible for automatic retry.
_RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with automatic retry on transient failures.

    Features:
    - Retry with exponential backoff + jitter (up to *max_retries* extra attempts)
    - Retry on 408 / 429 / 500 / 502 / 503 / 504, honoring ``Retry-After``
    - Retry on transport-level errors (connection reset, timeout, etc.)

    When retries are exhausted the last response is returned unchanged so the
    caller can classify its status, or the last transport error is re-raised.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 5,
        backoff_cap: float = 30.0,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_retries = max_retries
        self._backoff_cap = backoff_cap

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        for attempt in range(self._max_retries + 1):
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError as exc:
                if attempt >= self._max_retries:
                    raise
                _LOG.warning("%s %s failed: %s", request.method, request.url, exc)
                await self._sleep_backoff(attempt)
                continue

            if response.status_code in _RETRYABLE_STATUS_CODES and attempt < self._max_retries:
                _LOG.warning("%s %s returned %d", request.method, request.url, response.status_code)
                retry_after = self._parse_retry_after(response)
                await response.aclose()
                if retry_after > 0:
                    await asyncio.sleep(retry_after)
                await self._sleep_backoff(attempt)
                continue

            return response

        raise httpx.TransportError("Request failed after retries")  # pragma: no cover

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 0.0
        try:
            return max(0.0, float(raw))
        except ValueError:
            return 0.0

    async def _sleep_backoff(self, attempt: int) -> None:
        seconds = min(self._backoff_cap, float(2**attempt)) + random.uniform(0.0, 0.25)
        _LOG.warning("Retrying repository request (attempt %d of %d)", attempt + 1, self._max_retries)
        await asyncio.sleep(seconds)
