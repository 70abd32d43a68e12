import asyncio
import time

import httpx


class RateLimitedClient:
    """Async HTTP client with interval-based rate limiting.

    A 429 response carrying a numeric Retry-After header holds back the next
    request until the server's window has passed.
    """

    def __init__(
        self,
        rate_per_second: float = 5.0,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._min_interval = 1.0 / rate_per_second
        self._next_slot = 0.0
        self._lock = asyncio.Lock()
        self._client = httpx.AsyncClient(timeout=timeout, headers=headers or {})

    async def _wait_for_slot(self) -> None:
        async with self._lock:
            delay = self._next_slot - time.monotonic()
            if delay > 0:
                await asyncio.sleep(delay)
            self._next_slot = time.monotonic() + self._min_interval

    def _honor_retry_after(self, resp: httpx.Response) -> None:
        if resp.status_code != 429:
            return
        retry_after = resp.headers.get("Retry-After", "").strip()
        if retry_after.isdigit():
            self._next_slot = max(self._next_slot, time.monotonic() + int(retry_after))

    async def get(
        self, url: str, params: dict | None = None, headers: dict[str, str] | None = None
    ) -> httpx.Response:
        await self._wait_for_slot()
        resp = await self._client.get(url, params=params, headers=headers)
        self._honor_retry_after(resp)
        return resp

    async def post(
        self, url: str, json: dict | list | None = None, headers: dict[str, str] | None = None
    ) -> httpx.Response:
        await self._wait_for_slot()
        resp = await self._client.post(url, json=json, headers=headers)
        self._honor_retry_after(resp)
        return resp

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RateLimitedClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
