from __future__ import annotations

import time
from datetime import datetime
from email.utils import format_datetime
from typing import Callable

from eth_utils import keccak

Clock = Callable[[], int]

U32_MAX = 2**32 - 1


def unix_now() -> int:
    return int(time.time())


def keccak_hex(data: bytes) -> str:
    return "0x" + keccak(data).hex()


def strip_0x(value: str) -> str:
    return value[2:] if value[:2] in ("0x", "0X") else value


def hex_to_bytes(value: str) -> bytes:
    return bytes.fromhex(strip_0x(value))


def format_timestamp(ts: int) -> str:
    """Render a unix timestamp as an RFC 2822 date in local time."""
    local = datetime.fromtimestamp(ts).astimezone()
    return format_datetime(local)
