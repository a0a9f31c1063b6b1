"""
Parameter coercion: CLI-style ``--name value`` pairs to ABI call arguments.

The coerced arguments are held as tagged values in an ordered mapping and
serialized once, at the end, to compact JSON object text.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Sequence, Union

from ..config import DEFAULT_DECIMALS
from ..errors import MissingArgument, MissingArgumentValue
from ..pneuma.abi import ArrayKind, ContractAbi, IntKind, Param, ParamKind
from .amount import convert_token_amount

_ARRAY_DELIMITERS = re.compile(r"[,\[\]]")

TOKEN_SUFFIX = "T"


@dataclass(frozen=True)
class IntegerArg:
    value: str


@dataclass(frozen=True)
class TextArg:
    value: str


@dataclass(frozen=True)
class SequenceArg:
    items: tuple["ArgValue", ...]


ArgValue = Union[IntegerArg, TextArg, SequenceArg]


def _to_json_value(value: ArgValue):
    if isinstance(value, SequenceArg):
        return [_to_json_value(item) for item in value.items]
    return value.value


class ArgumentObject:
    """Ordered parameter name -> tagged value mapping."""

    def __init__(self, entries: Sequence[tuple[str, ArgValue]] = ()) -> None:
        self._entries = dict(entries)

    def __getitem__(self, name: str) -> ArgValue:
        return self._entries[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def to_json(self) -> str:
        payload = {name: _to_json_value(v) for name, v in self._entries.items()}
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def parse_integer_param(value: str, decimals: int = DEFAULT_DECIMALS) -> str:
    """Coerce one integer argument; a trailing ``T`` marks a token amount."""
    value = value.strip('"')
    if value.endswith(TOKEN_SUFFIX):
        return convert_token_amount(value.rstrip(TOKEN_SUFFIX), decimals)
    return value


def coerce_value(kind: ParamKind, value: str, decimals: int = DEFAULT_DECIMALS) -> ArgValue:
    if isinstance(kind, IntKind):
        return IntegerArg(parse_integer_param(value, decimals))
    if isinstance(kind, ArrayKind):
        element = kind.element
        if isinstance(element, IntKind) and not element.signed:
            return SequenceArg(tuple(
                IntegerArg(parse_integer_param(fragment, decimals))
                for fragment in _ARRAY_DELIMITERS.split(value)
                if fragment != ""
            ))
        return TextArg(value)
    return TextArg(value)


def _find_value(raw_args: Sequence[str], param: Param) -> str:
    for index, token in enumerate(raw_args):
        if token.lstrip("-") == param.name:
            if index + 1 >= len(raw_args):
                raise MissingArgumentValue(param.name, param.kind)
            return raw_args[index + 1]
    raise MissingArgument(param.name, param.kind)


def build_arguments(
    raw_args: Sequence[str],
    abi: str,
    method: str,
    decimals: int = DEFAULT_DECIMALS,
) -> ArgumentObject:
    """
    Match ``--name value`` pairs against a function's declared inputs.

    Raises:
        SchemaError: If the ABI is malformed or ``method`` is absent
        MissingArgument: If a declared input has no ``--name`` token
        MissingArgumentValue: If a ``--name`` token is the last element
        ConversionError: If a token amount is malformed
    """
    func = ContractAbi.load(abi).function(method)
    entries = []
    for param in func.inputs:
        value = _find_value(raw_args, param)
        entries.append((param.name, coerce_value(param.kind, value, decimals)))
    return ArgumentObject(entries)


def coerce_parameters(
    raw_args: Sequence[str],
    abi: str,
    method: str,
    decimals: int = DEFAULT_DECIMALS,
) -> str:
    """
    Turn raw CLI arguments into structured-argument JSON text.

    A single argument is taken to be pre-built JSON and returned unchanged.
    """
    if len(raw_args) == 1:
        return raw_args[0]
    return build_arguments(raw_args, abi, method, decimals).to_json()
