import asyncio
import time
from typing import Any

import httpx

USER_AGENT = "stakesync/0.1"


class RateLimitedClient:
    """Async HTTP client with simple interval-based rate limiting."""

    def __init__(
        self,
        rate_per_second: float = 10.0,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second
        self._last_request_time = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
        )

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval:
                await asyncio.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        await self._wait_for_slot()
        return await self._client.request(method, url, **kwargs)

    async def get(
        self, url: str, params: dict | None = None, auth: tuple[str, str] | None = None
    ) -> httpx.Response:
        return await self.request("GET", url, params=params, auth=auth)

    async def post(
        self, url: str, json: dict | list | None = None, auth: tuple[str, str] | None = None
    ) -> httpx.Response:
        return await self.request("POST", url, json=json, auth=auth)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
