"""Tenderly trace API client: fetches logs, call tree and asset changes for one transaction."""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tracerecon.domain.models.trace import TraceResult
from tracerecon.exceptions import ConfigurationError, ExternalServiceError, TraceFetchError
from tracerecon.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

NETWORK_IDS: dict[str, int] = {
    "ethereum": 1,
    "optimism": 10,
    "polygon": 137,
    "sonic": 146,
    "fraxtal": 252,
    "base": 8453,
    "arbitrum": 42161,
}


def network_id(network: str) -> int:
    """Tenderly network id for a network name or numeric id string."""
    key = network.lower()
    if key in NETWORK_IDS:
        return NETWORK_IDS[key]
    if key.isdigit():
        return int(key)
    raise ConfigurationError(f"Unsupported network: {network}")


class TenderlyClient:
    def __init__(
        self,
        access_key: str,
        http_client: RateLimitedClient,
        account_slug: str = "me",
        project_slug: str = "project",
        base_url: str = "https://api.tenderly.co/api/v1",
        timeout: float = 60.0,
    ) -> None:
        if not access_key:
            raise ConfigurationError("TENDERLY_ACCESS_KEY must be set to fetch traces from Tenderly")
        self._access_key = access_key
        self._http = http_client
        self._account = account_slug
        self._project = project_slug
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _trace_url(self, tx_hash: str, network: str) -> str:
        return (
            f"{self._base_url}/account/{self._account}/project/{self._project}"
            f"/network/{network_id(network)}/trace/{tx_hash}"
        )

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _call(self, url: str) -> dict[str, Any]:
        try:
            resp = await self._http.get(url, headers={"X-Access-Key": self._access_key})
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Tenderly request failed: {exc}") from exc

        if resp.status_code in (401, 403):
            raise TraceFetchError(f"Tenderly rejected the access key (HTTP {resp.status_code})")
        if resp.status_code == 429 or resp.status_code >= 500:
            raise ExternalServiceError(f"Tenderly HTTP {resp.status_code}")
        if resp.status_code != 200:
            raise TraceFetchError(f"Tenderly HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise TraceFetchError(f"Tenderly returned a non-JSON body: {resp.text[:200]}") from exc
        if isinstance(data, dict) and "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise TraceFetchError(f"Tenderly API error: {msg}")
        if not isinstance(data, dict):
            raise TraceFetchError("Tenderly returned a non-object trace payload")
        return data

    async def trace_transaction(self, tx_hash: str, network: str) -> TraceResult:
        """Fetch and validate the trace. Raises TraceFetchError on any failure, including timeout."""
        url = self._trace_url(tx_hash, network)
        logger.info("Fetching Tenderly trace for %s on %s", tx_hash, network)
        try:
            data = await asyncio.wait_for(self._call(url), timeout=self._timeout)
        except TimeoutError as exc:
            raise TraceFetchError(f"Tenderly trace request timed out after {self._timeout:g}s") from exc
        except ExternalServiceError as exc:
            raise TraceFetchError(str(exc)) from exc

        try:
            result = parse_trace_payload(data)
        except ValidationError as exc:
            raise TraceFetchError(f"Unexpected Tenderly trace shape: {exc}") from exc

        logger.info("Fetched %d logs and %d top-level calls", len(result.logs), len(result.trace))
        return result


def parse_trace_payload(data: dict[str, Any]) -> TraceResult:
    """Map a Tenderly trace response onto TraceResult.

    Logs arrive either flat ({address, topics, data}) or wrapped under "raw";
    the call tree is either a single root object or already a list.
    """
    info = data.get("transaction", {}).get("transaction_info", {}) if isinstance(data.get("transaction"), dict) else {}

    raw_logs = data.get("logs") or info.get("logs") or []
    logs = [item.get("raw", item) if isinstance(item, dict) else item for item in raw_logs]

    call_trace = data.get("call_trace") or data.get("trace") or info.get("call_trace") or []
    trace = [call_trace] if isinstance(call_trace, dict) else call_trace

    asset_changes = data.get("asset_changes") or info.get("asset_changes") or []

    return TraceResult.model_validate({"logs": logs, "trace": trace, "asset_changes": asset_changes})
