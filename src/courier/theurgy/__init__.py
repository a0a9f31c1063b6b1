"""
Theurgy - Courier CLI commands.

Exports: call, message, send, decode
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click


def abort(exc: Exception) -> NoReturn:
    """Print ``exc`` as a CLI error and exit with its exit code."""
    click.secho(f"ERROR: {exc}", fg="red")
    sys.exit(getattr(exc, "exit_code", 1))


PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}
