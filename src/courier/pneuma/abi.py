"""
ABI Loader - Parses contract ABI JSON into typed function signatures.

Accepted shapes:
- a bare list of entries (solc / Foundry ``abi`` field)
- an object with a ``functions`` list
- a build artifact object with an ``abi`` list

Parameter type strings are parsed into a closed set of kinds
(``IntKind``, ``ArrayKind``, ``OtherKind``) so callers can dispatch on them
exhaustively.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from eth_utils import keccak

from ..errors import SchemaError

_INT_RE = re.compile(r"^(u?)int(\d*)$")
_ARRAY_RE = re.compile(r"^(.+)\[(\d*)\]$")


@dataclass(frozen=True)
class IntKind:
    signed: bool
    bits: int = 256

    def __str__(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"


@dataclass(frozen=True)
class ArrayKind:
    element: "ParamKind"
    length: Optional[int] = None

    def __str__(self) -> str:
        size = "" if self.length is None else str(self.length)
        return f"{self.element}[{size}]"


@dataclass(frozen=True)
class OtherKind:
    type: str

    def __str__(self) -> str:
        return self.type


ParamKind = Union[IntKind, ArrayKind, OtherKind]


def parse_kind(type_str: str) -> ParamKind:
    """Parse a canonical ABI type string into its kind."""
    type_str = type_str.strip()

    array = _ARRAY_RE.match(type_str)
    if array:
        inner, size = array.groups()
        return ArrayKind(parse_kind(inner), int(size) if size else None)

    integer = _INT_RE.match(type_str)
    if integer:
        unsigned, bits = integer.groups()
        width = int(bits) if bits else 256
        if not 1 <= width <= 256:
            raise SchemaError(f"invalid integer width in type {type_str!r}")
        return IntKind(signed=not unsigned, bits=width)

    return OtherKind(type_str)


def canonical_type(entry: dict[str, Any]) -> str:
    """Resolve an ABI parameter type, expanding tuple components recursively."""
    typ = entry.get("type")
    if not isinstance(typ, str) or not typ:
        raise SchemaError(f"parameter {entry.get('name', '')!r} has no type")
    if typ.startswith("tuple"):
        components = entry.get("components") or []
        inner = ",".join(canonical_type(c) for c in components)
        return f"({inner}){typ[len('tuple'):]}"
    return typ


@dataclass(frozen=True)
class Param:
    name: str
    type: str
    kind: ParamKind
    components: tuple["Param", ...] = ()

    @classmethod
    def from_entry(cls, entry: Any) -> "Param":
        if not isinstance(entry, dict):
            raise SchemaError(f"parameter entry must be an object, got {type(entry).__name__}")
        typ = canonical_type(entry)
        components = tuple(cls.from_entry(c) for c in entry.get("components") or [])
        return cls(
            name=str(entry.get("name") or ""),
            type=typ,
            kind=parse_kind(typ),
            components=components,
        )


@dataclass(frozen=True)
class FunctionSignature:
    name: str
    inputs: tuple[Param, ...] = ()
    outputs: tuple[Param, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
        return keccak(text=self.signature)[:4]

    @property
    def input_types(self) -> list[str]:
        return [p.type for p in self.inputs]

    @property
    def output_types(self) -> list[str]:
        return [p.type for p in self.outputs]


@dataclass(frozen=True)
class ContractAbi:
    functions: dict[str, FunctionSignature] = field(default_factory=dict)

    @classmethod
    def load(cls, text: Union[str, bytes]) -> "ContractAbi":
        """
        Parse ABI JSON text.

        Raises:
            SchemaError: If the text is not JSON or not a recognised ABI shape
        """
        try:
            payload = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SchemaError(f"failed to parse ABI: {exc}") from exc

        entries = _extract_entries(payload)

        functions: dict[str, FunctionSignature] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                raise SchemaError("failed to parse ABI: entries must be objects")
            if entry.get("type", "function") != "function":
                continue
            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise SchemaError("failed to parse ABI: function without a name")
            # Overloads keep the first declaration.
            if name in functions:
                continue
            functions[name] = FunctionSignature(
                name=name,
                inputs=tuple(Param.from_entry(p) for p in entry.get("inputs") or []),
                outputs=tuple(Param.from_entry(p) for p in entry.get("outputs") or []),
            )
        return cls(functions)

    def function(self, name: str) -> FunctionSignature:
        try:
            return self.functions[name]
        except KeyError:
            raise SchemaError(f"function {name!r} not found in ABI") from None

    def by_selector(self, selector: bytes) -> FunctionSignature:
        for func in self.functions.values():
            if func.selector == selector:
                return func
        raise SchemaError(f"no function with selector 0x{selector.hex()} in ABI")


def _extract_entries(payload: Any) -> list:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("functions", "abi"):
            if isinstance(payload.get(key), list):
                return payload[key]
    raise SchemaError("failed to parse ABI: expected a list of entries or an object with 'functions'")


def load_abi_file(path: Union[str, Path]) -> str:
    """Read ABI text from a file, for use with ``ContractAbi.load``."""
    with Path(path).open("r", encoding="utf-8") as f:
        return f.read()
