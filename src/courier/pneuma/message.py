"""
Chain message (transaction) deserializer.

A message body is an RLP-encoded transaction, either signed or in the
unsigned form an offline signer consumes:

- legacy: ``[nonce, gasPrice, gas, to, value, data, v, r, s]``; unsigned
  bodies carry the EIP-155 signing payload ``v=chainId, r=s=0``
- 0x01: ``[chainId, nonce, gasPrice, gas, to, value, data, accessList, (yParity, r, s)]``
- 0x02: ``[chainId, nonce, maxPriorityFee, maxFee, gas, to, value, data, accessList, (yParity, r, s)]``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import rlp
from eth_utils import to_checksum_address
from rlp.exceptions import RLPException

from ..errors import DeserializeError

# tx type -> RLP field names ahead of the signature
_LAYOUTS: dict[int, tuple[str, ...]] = {
    0: ("nonce", "gasPrice", "gas", "to", "value", "data"),
    1: ("chainId", "nonce", "gasPrice", "gas", "to", "value", "data", "accessList"),
    2: (
        "chainId",
        "nonce",
        "maxPriorityFeePerGas",
        "maxFeePerGas",
        "gas",
        "to",
        "value",
        "data",
        "accessList",
    ),
}

_INT_FIELDS = {
    "chainId",
    "nonce",
    "gasPrice",
    "gas",
    "value",
    "maxPriorityFeePerGas",
    "maxFeePerGas",
}


def _to_int(value: Any) -> int:
    if not isinstance(value, bytes):
        raise DeserializeError("expected an integer field, found a list")
    return int.from_bytes(value, "big")


@dataclass(frozen=True)
class ChainMessage:
    tx_type: int
    fields: dict[str, Any]
    signature: Optional[tuple[int, int, int]] = None

    @classmethod
    def deserialize(cls, raw: bytes) -> "ChainMessage":
        """
        Parse a message body.

        Raises:
            DeserializeError: If the bytes are not a supported RLP transaction
        """
        if not raw:
            raise DeserializeError("message body is empty")

        tx_type = 0
        payload = raw
        if raw[0] <= 0x7F:
            tx_type = raw[0]
            payload = raw[1:]
            if tx_type not in _LAYOUTS:
                raise DeserializeError(f"unsupported transaction type 0x{tx_type:02x}")

        try:
            items = rlp.decode(payload)
        except RLPException as exc:
            raise DeserializeError(f"couldn't deserialize message: {exc}") from exc
        if not isinstance(items, list):
            raise DeserializeError("message body is not an RLP list")

        names = _LAYOUTS[tx_type]
        if tx_type == 0:
            if len(items) != 9:
                raise DeserializeError(f"legacy transaction must have 9 fields, found {len(items)}")
            body, tail = items[:6], items[6:]
        elif len(items) == len(names):
            body, tail = items, []
        elif len(items) == len(names) + 3:
            body, tail = items[: len(names)], items[len(names):]
        else:
            raise DeserializeError(
                f"type 0x{tx_type:02x} transaction has unexpected field count {len(items)}"
            )

        fields: dict[str, Any] = {}
        for name, value in zip(names, body):
            if name in _INT_FIELDS:
                fields[name] = _to_int(value)
            elif name == "to":
                if not isinstance(value, bytes) or len(value) not in (0, 20):
                    raise DeserializeError("invalid recipient address")
                fields[name] = to_checksum_address(value) if value else None
            elif name == "data":
                if not isinstance(value, bytes):
                    raise DeserializeError("invalid calldata field")
                fields[name] = value
            else:
                fields[name] = value

        signature = None
        if tail:
            v, r, s = (_to_int(x) for x in tail)
            if tx_type == 0 and r == 0 and s == 0:
                # EIP-155 signing payload: v holds the chain id.
                fields["chainId"] = v
            else:
                signature = (v, r, s)
                if tx_type == 0 and v >= 35:
                    fields["chainId"] = (v - 35) // 2

        return cls(tx_type=tx_type, fields=fields, signature=signature)

    @property
    def signed(self) -> bool:
        return self.signature is not None

    def body(self) -> bytes:
        """Return the calldata carried by the message."""
        return self.fields["data"]

    def transaction(self) -> dict[str, Any]:
        """Return the eth-account transaction dict for signing this message."""
        tx = {k: v for k, v in self.fields.items() if k != "accessList"}
        if tx.get("to") is None:
            tx.pop("to", None)
        if self.tx_type:
            tx["type"] = self.tx_type
            tx["accessList"] = [
                {
                    "address": to_checksum_address(entry[0]),
                    "storageKeys": ["0x" + key.hex() for key in entry[1]],
                }
                for entry in self.fields.get("accessList", [])
            ]
        return tx
