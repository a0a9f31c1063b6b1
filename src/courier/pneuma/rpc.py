"""
JSON-RPC Client.

Lightweight alternative to web3.py: uses httpx for HTTP.  Transport errors
are retried up to ``retries`` times; JSON-RPC error responses are not.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import httpx

from ..config import Config
from ..errors import ClientError

logger = logging.getLogger(__name__)

RETRY_BACKOFF = 0.5


def _rpc_call(method: str, params: list, config: Optional[Config] = None) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "eth_call")
        params: RPC parameters
        config: Endpoint, timeout and retry settings

    Returns:
        Result field from the RPC response

    Raises:
        ClientError: If the endpoint is unreachable or returns an error
    """
    config = config or Config()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    attempt = 0
    while True:
        attempt += 1
        logger.debug("rpc %s -> %s (attempt %d)", method, config.url, attempt)
        try:
            with httpx.Client(timeout=config.timeout) as client:
                response = client.post(config.url, json=payload)
                response.raise_for_status()
                data = response.json()
            break
        except httpx.TransportError as exc:
            if attempt > config.retries:
                raise ClientError(f"RPC {method} failed after {attempt} attempts: {exc}") from exc
            logger.debug("rpc %s transport error: %s; retrying", method, exc)
            time.sleep(RETRY_BACKOFF * attempt)
        except httpx.HTTPStatusError as exc:
            raise ClientError(f"RPC {method} failed: HTTP {exc.response.status_code}") from exc
        except ValueError as exc:
            raise ClientError(f"RPC {method} returned invalid JSON: {exc}") from exc

    if "error" in data:
        raise ClientError(f"RPC error: {data['error']}")

    return data.get("result")


def get_chain_id(config: Optional[Config] = None) -> int:
    """Get the chain ID from configuration or the node."""
    if config is not None and config.chain_id is not None:
        return config.chain_id
    return int(_rpc_call("eth_chainId", [], config), 16)


def get_nonce(address: str, config: Optional[Config] = None) -> int:
    """Get the pending transaction count for an address."""
    result = _rpc_call("eth_getTransactionCount", [address, "pending"], config)
    return int(result, 16)


def get_gas_price(config: Optional[Config] = None) -> int:
    """Get current gas price in wei."""
    return int(_rpc_call("eth_gasPrice", [], config), 16)


def estimate_gas(tx: dict, config: Optional[Config] = None) -> int:
    """Estimate gas for a call object (``from``/``to``/``data``/``value``)."""
    return int(_rpc_call("eth_estimateGas", [tx], config), 16)


def eth_call(to: str, data: str, config: Optional[Config] = None) -> str:
    """Execute a read-only call against the latest block."""
    return _rpc_call("eth_call", [{"to": to, "data": data}, "latest"], config)


def send_raw_transaction(raw_tx: str, config: Optional[Config] = None) -> str:
    """
    Send a signed raw transaction.

    Args:
        raw_tx: 0x-prefixed hex encoded signed transaction

    Returns:
        Transaction hash (0x-prefixed hex)
    """
    return _rpc_call("eth_sendRawTransaction", [raw_tx], config)


def wait_for_receipt(
    tx_hash: str,
    timeout: int = 120,
    poll_interval: float = 2.0,
    config: Optional[Config] = None,
) -> dict:
    """
    Wait for a transaction receipt.

    Raises:
        TimeoutError: If receipt not found within timeout
    """
    start = time.time()
    while time.time() - start < timeout:
        receipt = _rpc_call("eth_getTransactionReceipt", [tx_hash], config)
        if receipt is not None:
            return receipt
        time.sleep(poll_interval)

    raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")
