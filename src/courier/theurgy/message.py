"""
Theurgy Message - Build a call message for out-of-band delivery.

The message is printed as a Transport Token which ``courier send`` can
later replay, possibly from another machine.
"""

from __future__ import annotations

from typing import Any, Optional

import click

from ..config import Config
from ..errors import ConfigError, CourierError
from ..missive import coerce_parameters, format_envelope, pack_envelope
from ..pneuma.abi import load_abi_file
from ..pneuma.tx import ContractClient, expiration_header
from ..sigil.eth import load_optional_keypair
from . import PASSTHROUGH, abort


@click.command(context_settings=PASSTHROUGH)
@click.option("--abi", "abi_path", required=True,
              type=click.Path(exists=True, dir_okay=False), help="Contract ABI file")
@click.option("--sign", "key_source", default=None,
              help="Private key, key file or .env file with PRIVATE_KEY")
@click.option("--lifetime", type=int, default=None, help="Seconds until the message expires")
@click.option("--nonce", type=int, default=None, help="Sender nonce (required when unsigned)")
@click.option("--gas", type=int, default=None, help="Gas limit")
@click.option("--gas-price", type=int, default=None, help="Gas price in wei")
@click.option("--chain-id", type=int, default=None, help="Chain ID")
@click.option("--value", type=int, default=0, help="Value in wei")
@click.argument("address")
@click.argument("method")
@click.argument("params", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def message(
    config: Config,
    abi_path: str,
    key_source: Optional[str],
    lifetime: Optional[int],
    nonce: Optional[int],
    gas: Optional[int],
    gas_price: Optional[int],
    chain_id: Optional[int],
    value: int,
    address: str,
    method: str,
    params: tuple[str, ...],
) -> None:
    """Generate a message calling METHOD on ADDRESS and print its token."""
    try:
        abi = load_abi_file(abi_path)
        args = coerce_parameters(list(params), abi, method, config.decimals)
        keys = load_optional_keypair(key_source)
    except (CourierError, ValueError, FileNotFoundError) as exc:
        abort(exc)

    if lifetime is None:
        lifetime = config.lifetime
    elif lifetime <= 0:
        abort(ConfigError("lifetime must be positive"))

    header: dict[str, Any] = expiration_header(lifetime)
    header["value"] = value
    for key, field in (("nonce", nonce), ("gas", gas), ("gas_price", gas_price),
                       ("chain_id", chain_id if chain_id is not None else config.chain_id)):
        if field is not None:
            header[key] = field

    try:
        envelope = ContractClient(config).build_call_message(address, abi, method, header, args, keys)
    except CourierError as exc:
        abort(exc)

    click.echo()
    click.echo(format_envelope(envelope))
    click.echo(f"Signed: {'yes' if keys else 'no'}")

    click.echo(f"Message: {pack_envelope(envelope, method)}")
    click.echo()
