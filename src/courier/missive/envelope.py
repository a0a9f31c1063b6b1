"""
Envelope codec: packs a built message and its target method into a single
hex Transport Token and back.

Token layout (hex of UTF-8 JSON, keys sorted)::

    {"method": "...", "msg": {"expire": 1700000000, "message_body": "<hex>", "message_id": "..."}}
"""

from __future__ import annotations

import binascii
import json
from dataclasses import dataclass
from typing import Any, Optional

from ..errors import CorruptToken, DecodeError, FieldMissing, MalformedToken
from ..utils import U32_MAX, Clock, format_timestamp, unix_now


@dataclass(frozen=True)
class Envelope:
    message_id: str
    message_body: bytes
    expire: Optional[int] = None


def pack_envelope(envelope: Envelope, method: str) -> str:
    record = {
        "msg": {
            "message_id": envelope.message_id,
            "message_body": envelope.message_body.hex(),
            "expire": envelope.expire,
        },
        "method": method,
    }
    text = json.dumps(record, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8").hex()


def _field(record: Any, key: str) -> Any:
    return record.get(key) if isinstance(record, dict) else None


def unpack_envelope(token: str) -> tuple[Envelope, str]:
    """
    Recover the envelope and method name from a Transport Token.

    Raises:
        MalformedToken: If the token is not hex
        CorruptToken: If the decoded bytes are not UTF-8, or the message
            body inside is not hex
        DecodeError: If the text is not JSON, or ``expire`` is not a u32
        FieldMissing: If ``method``, ``message_id`` or ``message_body`` is
            absent or not a string
    """
    try:
        raw = binascii.unhexlify(token.strip())
    except (binascii.Error, ValueError) as exc:
        raise MalformedToken(f"couldn't unpack message: {exc}") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CorruptToken(f"message is corrupted: {exc}") from exc

    try:
        record = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"couldn't decode message: {exc}") from exc

    method = _field(record, "method")
    if not isinstance(method, str):
        raise FieldMissing("method")

    msg = _field(record, "msg")
    message_id = _field(msg, "message_id")
    if not isinstance(message_id, str):
        raise FieldMissing("message_id")

    body_hex = _field(msg, "message_body")
    if not isinstance(body_hex, str):
        raise FieldMissing("message_body")
    try:
        message_body = binascii.unhexlify(body_hex)
    except (binascii.Error, ValueError) as exc:
        raise CorruptToken(f"message body is not valid hex: {exc}") from exc

    expire = _field(msg, "expire")
    if expire is not None:
        if isinstance(expire, bool) or not isinstance(expire, int) or not 0 <= expire <= U32_MAX:
            raise DecodeError(f"message expire must be an unsigned 32-bit integer, got {expire!r}")

    return Envelope(message_id=message_id, message_body=message_body, expire=expire), method


def is_expired(envelope: Envelope, clock: Clock = unix_now) -> bool:
    return envelope.expire is not None and clock() >= envelope.expire


def format_envelope(envelope: Envelope) -> str:
    expire_at = format_timestamp(envelope.expire) if envelope.expire is not None else "unknown"
    return f"MessageId: {envelope.message_id}\nExpire at: {expire_at}"
