"""
Theurgy Send - Replay a message carried as a Transport Token.

``decode`` only shows what a token would do; ``send`` also submits it,
signing unsigned messages with the supplied key.
"""

from __future__ import annotations

import sys
from typing import Optional

import click

from ..config import Config
from ..errors import CourierError, ExpiredMessage
from ..missive import decode_call_body, format_envelope, is_expired, render_output, unpack_envelope
from ..missive.envelope import Envelope
from ..pneuma.abi import load_abi_file
from ..pneuma.tx import ContractClient
from ..sigil.eth import load_optional_keypair
from . import abort


def _show(client: ContractClient, envelope: Envelope, abi: str) -> None:
    click.echo()
    click.echo(format_envelope(envelope))
    decoded = decode_call_body(client, envelope.message_body, abi)
    click.echo(f"Calling method {decoded.function} with parameters:")
    click.echo(decoded.parameters)


@click.command()
@click.option("--abi", "abi_path", required=True,
              type=click.Path(exists=True, dir_okay=False), help="Contract ABI file")
@click.argument("token")
@click.pass_obj
def decode(config: Config, abi_path: str, token: str) -> None:
    """Show the call carried by TOKEN without sending it."""
    try:
        abi = load_abi_file(abi_path)
        envelope, method = unpack_envelope(token)
        click.echo(f"Method: {method}")
        _show(ContractClient(config), envelope, abi)
    except CourierError as exc:
        abort(exc)

    if is_expired(envelope):
        click.secho("Message has expired.", fg="yellow")


@click.command()
@click.option("--abi", "abi_path", required=True,
              type=click.Path(exists=True, dir_okay=False), help="Contract ABI file")
@click.option("--sign", "key_source", default=None,
              help="Key used to sign an unsigned message")
@click.option("--no-wait", is_flag=True, help="Don't wait for the receipt")
@click.argument("token")
@click.pass_obj
def send(
    config: Config,
    abi_path: str,
    key_source: Optional[str],
    no_wait: bool,
    token: str,
) -> None:
    """Submit the message carried by TOKEN."""
    click.echo(f"Connecting to {config.url}")
    client = ContractClient(config)

    try:
        abi = load_abi_file(abi_path)
        keys = load_optional_keypair(key_source)
        envelope, method = unpack_envelope(token)
        _show(client, envelope, abi)
        if is_expired(envelope):
            raise ExpiredMessage(f"message {envelope.message_id} has expired")
        click.echo("Processing... ")
        result = client.process_message(envelope, keys, wait=not no_wait)
    except (CourierError, ValueError, FileNotFoundError, TimeoutError) as exc:
        abort(exc)

    click.echo(f"  TX: {result['tx_hash']}")
    if no_wait:
        click.secho("Submitted.", fg="green")
        return
    if result.get("status") != 1:
        click.secho(f"FAILED: {method} reverted", fg="red")
        sys.exit(1)

    click.secho("Succeeded.", fg="green")
    click.echo(f"Result: {render_output(result['receipt'])}")
