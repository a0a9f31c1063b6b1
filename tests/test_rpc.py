"""Unit tests for the JSON-RPC client using httpx.MockTransport."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import pytest

from courier.config import Config
from courier.errors import ClientError
from courier.pneuma import rpc

_REAL_CLIENT = httpx.Client


def _mock_client(handler):
    def factory(*args, **kwargs):
        return _REAL_CLIENT(*args, transport=httpx.MockTransport(handler), **kwargs)
    return factory


def _result(value):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": value})
    return handler


CONFIG = Config(url="http://node.test", retries=2, timeout=5)


class TestRpcCall:
    def test_returns_result(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x2a"})

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)):
            assert rpc.get_gas_price(CONFIG) == 42
        assert seen[0]["method"] == "eth_gasPrice"
        assert seen[0]["params"] == []

    def test_rpc_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000}})

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)):
            with pytest.raises(ClientError, match="RPC error"):
                rpc.send_raw_transaction("0x00", CONFIG)

    def test_http_error_not_retried(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)):
            with pytest.raises(ClientError, match="HTTP 503"):
                rpc.get_gas_price(CONFIG)
        assert len(calls) == 1

    def test_invalid_json(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"<html>")

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)):
            with pytest.raises(ClientError, match="invalid JSON"):
                rpc.get_gas_price(CONFIG)

    def test_transport_errors_retried(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x1"})

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)), \
                patch("courier.pneuma.rpc.time.sleep"):
            assert rpc.get_nonce("0xabc", CONFIG) == 1
        assert len(calls) == 3

    def test_retries_exhausted(self) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)), \
                patch("courier.pneuma.rpc.time.sleep"):
            with pytest.raises(ClientError, match="after 3 attempts"):
                rpc.get_gas_price(CONFIG)
        assert len(calls) == 3


class TestHelpers:
    def test_chain_id_from_config(self) -> None:
        assert rpc.get_chain_id(Config(chain_id=10)) == 10

    def test_chain_id_from_node(self) -> None:
        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(_result("0x7a69"))):
            assert rpc.get_chain_id(CONFIG) == 31337

    def test_eth_call_params(self) -> None:
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": "0x"})

        with patch("courier.pneuma.rpc.httpx.Client", _mock_client(handler)):
            assert rpc.eth_call("0xabc", "0x1234", CONFIG) == "0x"
        assert seen[0]["params"] == [{"to": "0xabc", "data": "0x1234"}, "latest"]

    def test_wait_for_receipt_polls(self) -> None:
        receipts = iter([None, None, {"status": "0x1"}])
        with patch("courier.pneuma.rpc._rpc_call", side_effect=lambda *a, **k: next(receipts)), \
                patch("courier.pneuma.rpc.time.sleep"):
            assert rpc.wait_for_receipt("0xhash", config=CONFIG) == {"status": "0x1"}

    def test_wait_for_receipt_timeout(self) -> None:
        with patch("courier.pneuma.rpc._rpc_call", return_value=None), \
                patch("courier.pneuma.rpc.time.sleep"), \
                patch("courier.pneuma.rpc.time.time", side_effect=[0, 0, 10, 200]):
            with pytest.raises(TimeoutError):
                rpc.wait_for_receipt("0xhash", timeout=120, config=CONFIG)
