"""Interface descriptor primitives and definition typing.

Defines lightweight dataclasses to describe a contract interface:
- `ParameterSpec`: one typed (optionally indexed) parameter
- `InterfaceDescriptor`: one function or event with its derived identifier
- `InterfaceDefinition`: ordered tuple of descriptors (a parsed ABI)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from eth_utils import event_signature_to_log_topic, function_signature_to_4byte_selector

DescriptorKind = Literal["function", "event"]

# Solidity shorthands that must be expanded before hashing a signature.
_TYPE_ALIASES = {
    "uint": "uint256",
    "int": "int256",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
    "byte": "bytes1",
}
_ALIAS_RE = re.compile(r"\b(" + "|".join(_TYPE_ALIASES) + r")\b(?![0-9x])")


def split_types(params_str: str) -> list[str]:
    """Split a comma-separated list while respecting nested tuple types."""
    items: list[str] = []
    depth = 0
    buf: list[str] = []
    for ch in params_str:
        if ch == "(":
            depth += 1
            buf.append(ch)
        elif ch == ")":
            depth -= 1
            buf.append(ch)
        elif ch == "," and depth == 0:
            items.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if buf:
        items.append("".join(buf).strip())
    return [i for i in items if i]


def normalize_type(abi_type: str) -> str:
    """Return the canonical spelling of an ABI type (`uint` → `uint256`, no spaces)."""
    compact = "".join(abi_type.split())
    return _ALIAS_RE.sub(lambda m: _TYPE_ALIASES[m.group(1)], compact)


def is_reference_type(abi_type: str) -> bool:
    """True for types stored as a keccak hash when used as an indexed topic."""
    return abi_type in ("string", "bytes") or abi_type.endswith("]") or abi_type.startswith("(")


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """Describe one parameter (canonical ABI type, `indexed` only meaningful for events)."""

    name: str
    type: str  # e.g., "address", "uint256", "(address,uint256)[]"
    indexed: bool = False


@dataclass(frozen=True, slots=True)
class InterfaceDescriptor:
    """One function or event definition.

    `identifier` is derived from the canonical signature: the 4-byte selector
    for functions, the full 32-byte topic hash for events.
    """

    kind: DescriptorKind
    name: str
    parameters: tuple[ParameterSpec, ...] = ()
    anonymous: bool = False
    identifier: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.kind == "function":
            ident = function_signature_to_4byte_selector(self.canonical_signature)
        elif self.kind == "event":
            ident = event_signature_to_log_topic(self.canonical_signature)
        else:
            raise ValueError(f"unsupported descriptor kind: {self.kind!r}")
        object.__setattr__(self, "identifier", bytes(ident))

    @property
    def canonical_signature(self) -> str:
        return f"{self.name}({','.join(p.type for p in self.parameters)})"

    @property
    def selector(self) -> bytes:
        """Leading 4 bytes of the identifier (the key used by candidate stores)."""
        return self.identifier[:4]

    @property
    def indexed_parameters(self) -> tuple[ParameterSpec, ...]:
        return tuple(p for p in self.parameters if p.indexed)

    @property
    def data_parameters(self) -> tuple[ParameterSpec, ...]:
        return tuple(p for p in self.parameters if not p.indexed)


# A parsed ABI: descriptors in declaration order.
InterfaceDefinition = tuple[InterfaceDescriptor, ...]
