"""Shared fixtures: a small token ABI and a deterministic signing key."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

TOKEN_ABI: list[dict] = [
    {
        "type": "function",
        "name": "transfer",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "balanceOf",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
    },
    {
        "type": "function",
        "name": "batchMint",
        "inputs": [
            {"name": "ids", "type": "uint256[]"},
            {"name": "labels", "type": "string[]"},
            {"name": "delta", "type": "int64"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "pause",
        "inputs": [],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
        "anonymous": False,
    },
]

CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
RECIPIENT = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

# Well-known development key (never holds real funds).
PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
SENDER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

HEADER = {"nonce": 3, "gas": 60_000, "gas_price": 1_000_000_000, "chain_id": 31337}


@pytest.fixture()
def abi_text() -> str:
    return json.dumps(TOKEN_ABI)


@pytest.fixture()
def abi_file(tmp_path: Path, abi_text: str) -> Path:
    path = tmp_path / "Token.abi.json"
    path.write_text(abi_text, encoding="utf-8")
    return path
