"""Token amount conversion from human-readable decimals to base units."""

from __future__ import annotations

import re

from ..config import DEFAULT_DECIMALS
from ..errors import ConversionError

_AMOUNT_RE = re.compile(r"^([0-9]*)(?:\.([0-9]*))?$")


def convert_token_amount(amount: str, decimals: int = DEFAULT_DECIMALS) -> str:
    """
    Convert a decimal token amount into its base-unit integer string.

    ``"1.5"`` with 18 decimals becomes ``"1500000000000000000"``.  The
    fractional part may not carry more digits than ``decimals``.

    Raises:
        ConversionError: If ``amount`` is not a non-negative decimal numeral
    """
    text = amount.strip()
    match = _AMOUNT_RE.match(text)
    if not match or not (match.group(1) or match.group(2)):
        raise ConversionError(f"invalid token amount {amount!r}")

    whole, fraction = match.group(1), match.group(2) or ""
    if len(fraction) > decimals:
        raise ConversionError(
            f"token amount {amount!r} has more than {decimals} fractional digits"
        )

    return str(int((whole or "0") + fraction.ljust(decimals, "0")))
