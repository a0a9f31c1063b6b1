"""
Theurgy Call - Run a contract method.

Parameters are given either as one JSON object or as ``--name value`` pairs
after the method name.  Integer values ending in ``T`` are token amounts.
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from ..config import Config
from ..errors import CourierError
from ..missive import coerce_parameters, format_envelope, render_output
from ..pneuma.abi import load_abi_file
from ..pneuma.tx import ContractClient
from ..sigil.eth import load_optional_keypair
from . import PASSTHROUGH, abort


@click.command(context_settings=PASSTHROUGH)
@click.option("--abi", "abi_path", required=True,
              type=click.Path(exists=True, dir_okay=False), help="Contract ABI file")
@click.option("--sign", "key_source", default=None,
              help="Private key, key file or .env file with PRIVATE_KEY")
@click.option("--local", is_flag=True, help="Run read-only via eth_call")
@click.argument("address")
@click.argument("method")
@click.argument("params", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def call(
    config: Config,
    abi_path: str,
    key_source: Optional[str],
    local: bool,
    address: str,
    method: str,
    params: tuple[str, ...],
) -> None:
    """
    Call METHOD of the contract at ADDRESS.

    \b
    Examples:
      courier call --abi Token.abi.json 0xAbC... balanceOf --account 0x123...
      courier call --abi Token.abi.json --sign key.env 0xAbC... transfer --to 0x123... --amount 1.5T
    """
    try:
        abi = load_abi_file(abi_path)
        args = coerce_parameters(list(params), abi, method, config.decimals)
        keys = load_optional_keypair(key_source)
    except (CourierError, ValueError, FileNotFoundError) as exc:
        abort(exc)

    click.echo(f"Connecting to {config.url}")
    client = ContractClient(config)

    try:
        if local:
            click.echo("Running get-method...")
            result = client.run_local(address, abi, method, args)
        else:
            click.echo("Generating external inbound message...")
            envelope = client.build_call_message(address, abi, method, None, args, keys)
            click.echo()
            click.echo(format_envelope(envelope))
            click.echo("Processing... ")
            result = client.process_message(envelope, keys)
            if result.get("status") != 1:
                click.secho("FAILED: Transaction reverted", fg="red")
                click.echo(f"  TX: {result.get('tx_hash', 'unknown')}")
                sys.exit(1)
    except (CourierError, TimeoutError) as exc:
        abort(exc)

    click.secho("Succeeded.", fg="green")
    if result is not None:
        try:
            click.echo(f"Result: {render_output(result)}")
        except CourierError as exc:
            abort(exc)
