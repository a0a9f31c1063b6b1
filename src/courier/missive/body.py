"""
Call body decoding: recovers the invoked method and its arguments from a
received message body so it can be shown before resubmission.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..errors import RenderError
from ..pneuma.message import ChainMessage

if TYPE_CHECKING:
    from ..pneuma.tx import ContractClient


@dataclass(frozen=True)
class DecodedCall:
    function: str
    parameters: str


def _default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_output(value: Any) -> str:
    """
    Pretty-print decoded values as JSON for display.

    Raises:
        RenderError: If a value has no JSON representation
    """
    try:
        return json.dumps(value, indent=2, default=_default, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise RenderError(f"couldn't render decoded output: {exc}") from exc


def decode_call_body(client: "ContractClient", body: bytes, abi: str) -> DecodedCall:
    """
    Decode the function name and arguments carried in a message body.

    Raises:
        DeserializeError: If ``body`` is not a chain message
        BodyDecodeError: If the ABI doesn't describe the carried calldata
        RenderError: If the decoded values can't be rendered
    """
    message = ChainMessage.deserialize(body)
    function, output = client.decode_input_body(abi, message.body())
    return DecodedCall(function=function, parameters=render_output(output))
