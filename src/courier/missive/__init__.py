"""
Missive - Codecs for contract call messages.

Turns CLI arguments into ABI call arguments, packs built messages into
transport tokens for out-of-band carriage, and decodes received call
bodies for display.
"""

from .amount import convert_token_amount
from .body import DecodedCall, decode_call_body, render_output
from .envelope import Envelope, format_envelope, is_expired, pack_envelope, unpack_envelope
from .params import ArgumentObject, IntegerArg, SequenceArg, TextArg, coerce_parameters

__all__ = [
    "ArgumentObject",
    "DecodedCall",
    "Envelope",
    "IntegerArg",
    "SequenceArg",
    "TextArg",
    "coerce_parameters",
    "convert_token_amount",
    "decode_call_body",
    "format_envelope",
    "is_expired",
    "pack_envelope",
    "render_output",
    "unpack_envelope",
]
