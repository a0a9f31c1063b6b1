"""
Contract Client - Build, sign, decode and submit contract call messages.

Uses eth-abi for encoding, eth-account for signing and the httpx-based
JSON-RPC client for anything that needs the chain.  A message body is an
RLP transaction: signed when a private key is supplied, otherwise the
EIP-155 signing payload for a later offline signer.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import rlp
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_account import Account
from eth_utils import to_checksum_address

from ..config import Config
from ..errors import BodyDecodeError, ClientError, SchemaError
from ..missive.envelope import Envelope
from ..utils import U32_MAX, Clock, hex_to_bytes, keccak_hex, unix_now
from . import rpc
from .abi import ArrayKind, ContractAbi, FunctionSignature, IntKind, OtherKind, Param
from .message import ChainMessage

logger = logging.getLogger(__name__)

DEFAULT_GAS_LIMIT = 500_000


def expiration_header(lifetime: int, clock: Clock = unix_now) -> dict[str, int]:
    """Message header that expires ``lifetime`` seconds from ``clock()``."""
    return {"expire": clock() + lifetime}


# ---------------------------------------------------------------------------
# Argument normalization (structured-argument JSON -> eth-abi values)
# ---------------------------------------------------------------------------

def _parse_int(value: Any, param: Param) -> int:
    if isinstance(value, bool):
        raise ClientError(f"argument {param.name!r} must be an integer")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip(), 0)
    except ValueError:
        try:
            return int(str(value).strip(), 10)
        except ValueError as exc:
            raise ClientError(f"argument {param.name!r} is not an integer: {value!r}") from exc


def _maybe_json(value: Any) -> Any:
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass
    return value


def _normalize(value: Any, param: Param) -> Any:
    kind = param.kind
    if isinstance(kind, IntKind):
        return _parse_int(value, param)
    if isinstance(kind, ArrayKind):
        items = _maybe_json(value)
        if not isinstance(items, list):
            raise ClientError(f"argument {param.name!r} must be an array")
        element = Param(param.name, str(kind.element), kind.element, param.components)
        return [_normalize(item, element) for item in items]
    if isinstance(kind, OtherKind):
        typ = kind.type
        if typ.startswith("("):
            items = _maybe_json(value)
            if isinstance(items, dict):
                items = [items.get(c.name) for c in param.components]
            if not isinstance(items, list) or len(items) != len(param.components):
                raise ClientError(f"argument {param.name!r} must be a tuple of {len(param.components)}")
            return tuple(_normalize(item, c) for item, c in zip(items, param.components))
        if typ == "bool":
            if isinstance(value, bool):
                return value
            if str(value).lower() in ("true", "1"):
                return True
            if str(value).lower() in ("false", "0"):
                return False
            raise ClientError(f"argument {param.name!r} must be true or false")
        if typ == "address":
            try:
                return to_checksum_address(str(value))
            except ValueError as exc:
                raise ClientError(f"argument {param.name!r} is not an address: {value!r}") from exc
        if typ.startswith("bytes"):
            if isinstance(value, str):
                try:
                    return hex_to_bytes(value)
                except ValueError as exc:
                    raise ClientError(f"argument {param.name!r} is not hex: {value!r}") from exc
        return value
    return value


def encode_arguments(func: FunctionSignature, params: str) -> bytes:
    """ABI-encode structured-argument JSON text into calldata."""
    try:
        values = json.loads(params) if params.strip() else {}
    except json.JSONDecodeError as exc:
        raise ClientError(f"arguments are not valid JSON: {exc}") from exc
    if not isinstance(values, dict):
        raise ClientError("arguments must be a JSON object")

    unknown = set(values) - {p.name for p in func.inputs}
    if unknown:
        raise ClientError(f"unknown arguments for {func.name}: {', '.join(sorted(unknown))}")

    args = []
    for param in func.inputs:
        if param.name not in values:
            raise ClientError(f'argument "{param.name}" of type "{param.kind}" not found')
        args.append(_normalize(values[param.name], param))

    try:
        encoded = encode(func.input_types, args) if args else b""
    except (EncodingError, TypeError, ValueError, OverflowError) as exc:
        raise ClientError(f"failed to encode arguments for {func.name}: {exc}") from exc
    return func.selector + encoded


def _present(value: Any, param: Param) -> Any:
    """Shape a decoded value for display: checksummed addresses, hex bytes."""
    kind = param.kind
    if isinstance(kind, ArrayKind):
        element = Param(param.name, str(kind.element), kind.element, param.components)
        return [_present(v, element) for v in value]
    if isinstance(kind, OtherKind):
        if kind.type == "address":
            return to_checksum_address(value)
        if kind.type.startswith("("):
            return [_present(v, c) for v, c in zip(value, param.components)]
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return value


def _named(params: tuple[Param, ...], values: tuple) -> dict[str, Any]:
    return {
        (p.name or f"value{i}"): _present(v, p)
        for i, (p, v) in enumerate(zip(params, values))
    }


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class ContractClient:
    """Facade over the chain node for a single configuration."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config or Config()

    def build_call_message(
        self,
        address: str,
        abi: str,
        method: str,
        header: Optional[dict[str, Any]],
        params: str,
        private_key: Optional[str] = None,
    ) -> Envelope:
        """
        Build an inbound call message for ``method`` on ``address``.

        Args:
            address: 0x-prefixed contract address
            abi: ABI JSON text
            method: Function to call
            header: Optional ``expire``, ``nonce``, ``gas_price``, ``gas``,
                ``chain_id`` and ``value`` fields; absent network fields are
                fetched over JSON-RPC
            params: Structured-argument JSON text
            private_key: Signs the message when given

        Raises:
            SchemaError: If the ABI is malformed or lacks ``method``
            ClientError: If arguments or header fields are invalid, or RPC fails
        """
        header = dict(header or {})
        expire = header.get("expire")
        if expire is not None and not 0 <= expire <= U32_MAX:
            raise ClientError(f"expire {expire} does not fit in an unsigned 32-bit timestamp")
        func = ContractAbi.load(abi).function(method)
        calldata = encode_arguments(func, params)

        try:
            to = to_checksum_address(address)
        except ValueError as exc:
            raise ClientError(f"failed to parse address: {address!r}") from exc

        sender = Account.from_key(private_key).address if private_key else None
        nonce = header.get("nonce")
        if nonce is None:
            if sender is None:
                raise ClientError("nonce is required for unsigned messages")
            nonce = rpc.get_nonce(sender, self.config)

        value = int(header.get("value", 0))
        chain_id = header.get("chain_id")
        if chain_id is None:
            chain_id = rpc.get_chain_id(self.config)
        gas_price = header.get("gas_price")
        if gas_price is None:
            gas_price = rpc.get_gas_price(self.config)
        gas = header.get("gas")
        if gas is None:
            gas = self._estimate_gas(sender, to, calldata, value)

        tx = {
            "nonce": int(nonce),
            "gasPrice": int(gas_price),
            "gas": int(gas),
            "to": to,
            "value": value,
            "data": calldata,
            "chainId": int(chain_id),
        }

        if private_key:
            signed = Account.sign_transaction(tx, private_key)
            body = bytes(signed.raw_transaction)
        else:
            body = rlp.encode([
                tx["nonce"],
                tx["gasPrice"],
                tx["gas"],
                hex_to_bytes(to),
                tx["value"],
                calldata,
                tx["chainId"],
                0,
                0,
            ])

        envelope = Envelope(
            message_id=keccak_hex(body),
            message_body=body,
            expire=expire,
        )
        logger.debug("built %s message %s for %s", "signed" if private_key else "unsigned",
                     envelope.message_id, func.signature)
        return envelope

    def _estimate_gas(self, sender: Optional[str], to: str, calldata: bytes, value: int) -> int:
        call: dict[str, Any] = {"to": to, "data": "0x" + calldata.hex(), "value": hex(value)}
        if sender:
            call["from"] = sender
        try:
            return rpc.estimate_gas(call, self.config)
        except ClientError as exc:
            logger.debug("gas estimation failed (%s); using %d", exc, DEFAULT_GAS_LIMIT)
            return DEFAULT_GAS_LIMIT

    def decode_input_body(self, abi: str, calldata: bytes) -> tuple[str, dict[str, Any]]:
        """
        Recover the function name and named arguments from calldata.

        Raises:
            SchemaError: If the ABI text itself is malformed
            BodyDecodeError: If no function matches or the arguments don't decode
        """
        contract = ContractAbi.load(abi)
        if len(calldata) < 4:
            raise BodyDecodeError("couldn't decode message body: calldata shorter than a selector")
        try:
            func = contract.by_selector(calldata[:4])
        except SchemaError as exc:
            raise BodyDecodeError(f"couldn't decode message body: {exc}") from exc
        try:
            values = decode(func.input_types, calldata[4:]) if func.inputs else ()
        except (DecodingError, ValueError, OverflowError) as exc:
            raise BodyDecodeError(f"couldn't decode message body: {exc}") from exc
        return func.name, _named(func.inputs, values)

    def run_local(self, address: str, abi: str, method: str, params: str) -> Any:
        """Run ``method`` read-only with ``eth_call`` and decode its outputs."""
        func = ContractAbi.load(abi).function(method)
        calldata = encode_arguments(func, params)
        result = rpc.eth_call(address, "0x" + calldata.hex(), self.config)
        if not func.outputs or result in (None, "0x"):
            return None
        try:
            values = decode(func.output_types, hex_to_bytes(result))
        except (DecodingError, ValueError, OverflowError) as exc:
            raise ClientError(f"couldn't decode result of {method}: {exc}") from exc
        return _named(func.outputs, values)

    def process_message(
        self,
        envelope: Envelope,
        private_key: Optional[str] = None,
        wait: bool = True,
    ) -> dict[str, Any]:
        """
        Submit a message, signing it first if it is unsigned.

        Returns:
            Dict with tx_hash and, when waiting, receipt and status
        """
        message = ChainMessage.deserialize(envelope.message_body)
        raw = envelope.message_body
        if not message.signed:
            if not private_key:
                raise ClientError("message is unsigned; a signing key is required to send it")
            raw = bytes(Account.sign_transaction(message.transaction(), private_key).raw_transaction)

        tx_hash = rpc.send_raw_transaction("0x" + raw.hex(), self.config)
        logger.debug("submitted %s", tx_hash)
        result: dict[str, Any] = {"tx_hash": tx_hash}

        if wait:
            receipt = rpc.wait_for_receipt(
                tx_hash, timeout=int(self.config.timeout * 4), config=self.config
            )
            result["receipt"] = receipt
            result["status"] = int(receipt.get("status", "0x0"), 16)

        return result
