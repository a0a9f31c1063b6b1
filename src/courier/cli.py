"""
Courier CLI

Command-line interface for preparing, carrying and replaying contract calls.

Commands:
  call     - Call a contract method (send a message or run locally)
  message  - Build a call message and print it as a transport token
  send     - Submit a message carried by a transport token
  decode   - Show the call carried by a transport token
  convert  - Convert a token amount to base units
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from .config import Config
from .errors import CourierError
from .missive import convert_token_amount
from .theurgy import abort


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="courier")
@click.option("--url", envvar="COURIER_RPC_URL", default=None, help="JSON-RPC endpoint")
@click.option("--retries", type=int, default=None, help="Retries on transport errors")
@click.option("--timeout", type=float, default=None, help="RPC timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Log RPC traffic")
@click.pass_context
def cli(
    ctx: click.Context,
    url: Optional[str],
    retries: Optional[int],
    timeout: Optional[float],
    verbose: bool,
) -> None:
    """Courier: prepare, carry and replay contract calls."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    try:
        ctx.obj = Config.load().with_overrides(url=url, retries=retries, timeout=timeout)
    except CourierError as exc:
        abort(exc)


# ============ Top-level Commands ============

from .theurgy.call import call
from .theurgy.message import message
from .theurgy.send import decode, send

cli.add_command(call)
cli.add_command(message)
cli.add_command(send)
cli.add_command(decode)


@cli.command()
@click.option("--decimals", type=int, default=None, help="Token decimals (default: config)")
@click.argument("amount")
@click.pass_obj
def convert(config: Config, decimals: Optional[int], amount: str) -> None:
    """Convert a token AMOUNT to base units."""
    try:
        click.echo(convert_token_amount(amount, config.decimals if decimals is None else decimals))
    except CourierError as exc:
        abort(exc)


# ============ Entry Points ============


def main() -> None:
    """Courier CLI entry point."""
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
