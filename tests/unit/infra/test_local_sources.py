"""Tests for the local reproduction sources (harness export and JSON-RPC receipt)."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from tenacity import wait_none

from tracerecon.exceptions import ConfigurationError, ExternalServiceError
from tracerecon.infra.local.harness import HarnessExportSource
from tracerecon.infra.local.rpc import RPCReceiptSource

LOCAL_TX = "0x" + "ab" * 32


def _mock_response(data: dict):
    resp = MagicMock()
    resp.json.return_value = data
    return resp


class TestHarnessExportSource:
    async def test_reads_export(self, tmp_path):
        path = tmp_path / "repro.json"
        path.write_text(json.dumps({
            "txHash": LOCAL_TX,
            "logs": [{"address": "0xtoken", "topics": ["0x01"], "data": "0x"}],
            "tokenAddresses": {"dUSD": "0xDUSD"},
            "emitters": {"router": "0xROUTER"},
            "customEvents": [{"address": "0xrouter", "event": "CollateralPulled", "args": {"amount": "1"}}],
        }))

        result = await HarnessExportSource(path).run()

        assert result.tx_hash == LOCAL_TX
        assert len(result.logs) == 1
        assert result.token_addresses == {"dUSD": "0xdusd"}
        assert result.emitters == {"router": "0xrouter"}
        assert result.custom_events[0].event == "CollateralPulled"

    async def test_optional_sections(self, tmp_path):
        path = tmp_path / "repro.json"
        path.write_text(json.dumps({"txHash": LOCAL_TX}))

        result = await HarnessExportSource(path).run()
        assert result.logs == []
        assert result.custom_events == []

    async def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            await HarnessExportSource(tmp_path / "missing.json").run()

    async def test_invalid_json(self, tmp_path):
        path = tmp_path / "repro.json"
        path.write_text("not json")
        with pytest.raises(ConfigurationError):
            await HarnessExportSource(path).run()

    async def test_missing_tx_hash(self, tmp_path):
        path = tmp_path / "repro.json"
        path.write_text(json.dumps({"logs": []}))
        with pytest.raises(ConfigurationError, match="Malformed"):
            await HarnessExportSource(path).run()


class TestRPCReceiptSource:
    @pytest.fixture()
    def mock_http(self):
        return AsyncMock()

    async def test_reads_receipt_logs(self, mock_http):
        receipt = {
            "transactionHash": LOCAL_TX,
            "status": "0x1",
            "logs": [{"address": "0xtoken", "topics": ["0x01"], "data": "0x02", "logIndex": "0x0"}],
        }
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "result": receipt})
        source = RPCReceiptSource("http://127.0.0.1:8545", LOCAL_TX, mock_http, token_addresses={"dUSD": "0xDUSD"})

        result = await source.run()

        assert result.tx_hash == LOCAL_TX
        assert result.logs[0].data == "0x02"
        assert result.token_addresses == {"dUSD": "0xdusd"}
        payload = mock_http.post.call_args[1]["json"]
        assert payload["method"] == "eth_getTransactionReceipt"
        assert payload["params"] == [LOCAL_TX]

    async def test_reverted_receipt_still_returned(self, mock_http):
        receipt = {"transactionHash": LOCAL_TX, "status": "0x0", "logs": []}
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "result": receipt})

        result = await RPCReceiptSource("http://node", LOCAL_TX, mock_http).run()
        assert result.logs == []

    async def test_missing_receipt(self, mock_http):
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "result": None})

        with pytest.raises(ConfigurationError, match="No receipt"):
            await RPCReceiptSource("http://node", LOCAL_TX, mock_http).run()

    def test_requires_tx_hash(self, mock_http):
        with pytest.raises(ConfigurationError, match="LOCAL_TX_HASH"):
            RPCReceiptSource("http://node", "", mock_http)

    async def test_non_json_body_retried_then_raised(self, mock_http, monkeypatch):
        monkeypatch.setattr(RPCReceiptSource._call.retry, "wait", wait_none())
        resp = MagicMock()
        resp.json.side_effect = ValueError("Expecting value")
        mock_http.post.return_value = resp

        with pytest.raises(ExternalServiceError, match="non-JSON"):
            await RPCReceiptSource("http://node", LOCAL_TX, mock_http).run()
        assert mock_http.post.call_count == 5

    async def test_rpc_error_string(self, mock_http, monkeypatch):
        monkeypatch.setattr(RPCReceiptSource._call.retry, "wait", wait_none())
        mock_http.post.return_value = _mock_response({"jsonrpc": "2.0", "id": 1, "error": "node is syncing"})

        with pytest.raises(ExternalServiceError, match="node is syncing"):
            await RPCReceiptSource("http://node", LOCAL_TX, mock_http).run()
