"""
Pneuma - On-chain interaction layer for Courier.

Provides ABI parsing, transaction (message) deserialization, a JSON-RPC
client and the contract client that builds and submits call messages.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
