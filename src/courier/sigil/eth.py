"""
ECDSA / secp256k1 key loading for message signing.

A signing key source may be:
- a 0x-prefixed (or bare) 64-character hex private key
- a path to a file holding such a key
- a path to a dotenv file defining PRIVATE_KEY
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

_KEY_RE = re.compile(r"^(0x)?[0-9a-fA-F]{64}$")


def _normalize_key(value: str) -> str:
    value = value.strip()
    if not _KEY_RE.match(value):
        raise ValueError("Private key must be 32 bytes of hex")
    if not value.startswith("0x"):
        value = "0x" + value
    return value


def load_keypair(source: str) -> str:
    """
    Resolve a signing key source to a 0x-prefixed hex private key.

    Raises:
        FileNotFoundError: If ``source`` looks like a path that doesn't exist
        ValueError: If no valid private key can be found
    """
    if _KEY_RE.match(source.strip()):
        return _normalize_key(source)

    path = Path(source).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Key file not found: {path}")

    env = dotenv_values(path)
    if env.get("PRIVATE_KEY"):
        return _normalize_key(env["PRIVATE_KEY"])

    return _normalize_key(path.read_text(encoding="utf-8"))


def load_optional_keypair(source: Optional[str]) -> Optional[str]:
    """Like ``load_keypair`` but returns None when no source is given."""
    if not source:
        return None
    return load_keypair(source)

