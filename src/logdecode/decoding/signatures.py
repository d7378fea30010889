"""Build interface descriptors from human-readable signature strings.

This module provides:
- `descriptor_from_signature()` for one signature such as
  "Transfer(address indexed from, address indexed to, uint256 value)"
- `make_definition()` for one or many signatures
"""

from __future__ import annotations

from logdecode.decoding.specs import (
    DescriptorKind,
    InterfaceDefinition,
    InterfaceDescriptor,
    ParameterSpec,
    normalize_type,
    split_types,
)
from logdecode.errors import InvalidInterface


def _parse_param(p: str, fallback_name: str) -> ParameterSpec:
    """Parse one parameter fragment into a `ParameterSpec`."""
    s = " ".join(p.strip().split())  # normalize spaces
    indexed = False
    if " indexed " in f" {s} ":
        indexed = True
        s = f" {s} ".replace(" indexed ", " ").strip()
    # Drop data-location keywords that may appear in copied Solidity code
    tokens = [t for t in s.split() if t not in ("memory", "calldata", "storage")]
    if not tokens:
        raise InvalidInterface(f"empty parameter in {p!r}")
    if len(tokens) == 1 or tokens[-1].endswith(")") or tokens[-1].endswith("]"):
        # Unnamed parameter
        return ParameterSpec(fallback_name, normalize_type(" ".join(tokens)), indexed)
    # Last token is the name, the rest is the type (can include tuple syntax)
    return ParameterSpec(tokens[-1], normalize_type(" ".join(tokens[:-1])), indexed)


def descriptor_from_signature(
    signature: str,
    kind: DescriptorKind = "event",
    *,
    anonymous: bool = False,
) -> InterfaceDescriptor:
    """Build an `InterfaceDescriptor` from a Solidity-style signature string.

    Example input:
      "Transfer(address indexed from, address indexed to, uint256 value)"
    """
    sig = signature.strip()
    open_paren = sig.find("(")
    close_paren = sig.rfind(")")
    if open_paren <= 0 or close_paren == -1 or close_paren < open_paren:
        raise InvalidInterface(f"Invalid signature: {signature}")
    name = sig[:open_paren].strip()
    if kind == "event" and name.startswith("event "):
        name = name[len("event "):].strip()
    elif kind == "function" and name.startswith("function "):
        name = name[len("function "):].strip()
    params_str = sig[open_paren + 1 : close_paren]

    params = tuple(
        _parse_param(part, fallback_name=f"arg{i}") for i, part in enumerate(split_types(params_str))
    )
    if kind == "function" and any(p.indexed for p in params):
        raise InvalidInterface(f"function parameters cannot be indexed: {signature}")
    return InterfaceDescriptor(kind=kind, name=name, parameters=params, anonymous=anonymous)


def make_definition(
    signatures: str | list[str],
    kind: DescriptorKind = "event",
) -> InterfaceDefinition:
    """Create an interface definition from one or multiple signatures.

    Args:
        signatures: Single signature string or list of signature strings
        kind: Whether the signatures describe events or functions

    Returns:
        InterfaceDefinition with one descriptor per signature, in order
    """
    sig_list = [signatures] if isinstance(signatures, str) else signatures
    return tuple(descriptor_from_signature(s, kind) for s in sig_list)
