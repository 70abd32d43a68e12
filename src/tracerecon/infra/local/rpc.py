"""Local reproduction fetched from a running dev node (Hardhat/Anvil) over JSON-RPC."""

import logging

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tracerecon.domain.models.repro import LocalReproResult
from tracerecon.exceptions import ConfigurationError, ExternalServiceError
from tracerecon.infra.http.rate_limited_client import RateLimitedClient
from tracerecon.infra.local.base import LocalReproSource

logger = logging.getLogger(__name__)


class RPCReceiptSource(LocalReproSource):
    """Fetches the receipt of an already-mined reproduction transaction.

    Token and emitter addresses cannot be recovered from a receipt, so they are
    supplied by the scenario.
    """

    def __init__(
        self,
        rpc_url: str,
        tx_hash: str,
        http_client: RateLimitedClient,
        token_addresses: dict[str, str] | None = None,
        emitters: dict[str, str] | None = None,
    ) -> None:
        if not tx_hash:
            raise ConfigurationError("LOCAL_TX_HASH must be set to read the reproduction from a node")
        self._rpc_url = rpc_url
        self._tx_hash = tx_hash
        self._http = http_client
        self._token_addresses = {k: v.lower() for k, v in (token_addresses or {}).items()}
        self._emitters = {k: v.lower() for k, v in (emitters or {}).items()}

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(5),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _call(self, method: str, params: list) -> dict | list | str | None:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }
        try:
            resp = await self._http.post(self._rpc_url, json=payload)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(f"Local node unreachable at {self._rpc_url}: {exc}") from exc
        try:
            data = resp.json()
        except ValueError as exc:
            raise ExternalServiceError(f"Local node at {self._rpc_url} returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise ExternalServiceError(f"Local RPC returned a non-object response ({method})")

        if "error" in data:
            error = data["error"]
            msg = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ExternalServiceError(f"Local RPC error ({method}): {msg}")

        return data.get("result")

    async def run(self) -> LocalReproResult:
        receipt = await self._call("eth_getTransactionReceipt", [self._tx_hash])
        if not isinstance(receipt, dict):
            raise ConfigurationError(f"No receipt for local transaction {self._tx_hash} at {self._rpc_url}")
        if receipt.get("status") == "0x0":
            logger.warning("Local reproduction %s reverted; comparing its (empty) logs anyway", self._tx_hash)

        logs = [
            {"address": log.get("address", ""), "topics": log.get("topics", []), "data": log.get("data", "0x")}
            for log in receipt.get("logs", [])
        ]
        return LocalReproResult(
            tx_hash=receipt.get("transactionHash", self._tx_hash),
            logs=logs,
            token_addresses=self._token_addresses,
            emitters=self._emitters,
        )
