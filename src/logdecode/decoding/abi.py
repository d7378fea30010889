"""Parse ABI JSON documents into interface definitions."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from logdecode.decoding.specs import InterfaceDefinition, InterfaceDescriptor, ParameterSpec, normalize_type
from logdecode.errors import InvalidInterface


class AbiParam(BaseModel):
    name: str = ""
    type: str
    indexed: bool = False
    internalType: str | None = None
    components: list[AbiParam] | None = None


AbiParam.model_rebuild()


class AbiEntry(BaseModel):
    type: str = "function"  # solc omits it for functions in old ABIs
    name: str = ""
    inputs: list[AbiParam] = Field(default_factory=list)
    anonymous: bool = False


def get_canonical_type(param: AbiParam) -> str:
    """Expand tuple components into `(t1,t2,...)` keeping any array suffix."""
    if param.type.startswith("tuple"):
        inner = ",".join(get_canonical_type(c) for c in param.components or [])
        return f"({inner}){param.type[len('tuple'):]}"
    return normalize_type(param.type)


def get_descriptor(entry: AbiEntry) -> InterfaceDescriptor:
    is_event = entry.type == "event"
    return InterfaceDescriptor(
        kind="event" if is_event else "function",
        name=entry.name,
        parameters=tuple(
            ParameterSpec(p.name or f"arg{i}", get_canonical_type(p), p.indexed and is_event)
            for i, p in enumerate(entry.inputs)
        ),
        anonymous=entry.anonymous and is_event,
    )


AbiJson = Iterable[Mapping[str, Any]]
AbiSpec = AbiJson | Mapping[str, Any] | Path | str


def load_abi(abi: AbiSpec) -> list[Mapping[str, Any]]:
    """Load raw ABI entries from a path, JSON text, a single entry or a list."""
    if isinstance(abi, Path):
        abi = abi.read_text()
    if isinstance(abi, str):
        try:
            abi = json.loads(abi)
        except json.JSONDecodeError as e:
            raise InvalidInterface(f"ABI is not valid JSON: {e}") from e
    if isinstance(abi, Mapping):
        # Etherscan-style wrappers and single fragments
        abi = abi.get("abi", [abi])
    if not isinstance(abi, Iterable):
        raise InvalidInterface(f"ABI must be a list of entries, got {type(abi).__name__}")
    return list(abi)


def get_entries(abi: AbiSpec) -> list[AbiEntry]:
    """Validate the function and event entries of an ABI."""
    entries: list[AbiEntry] = []
    for raw in load_abi(abi):
        if not isinstance(raw, Mapping):
            raise InvalidInterface(f"ABI entry must be an object, got {type(raw).__name__}")
        try:
            entry = AbiEntry.model_validate(raw)
        except ValidationError as e:
            raise InvalidInterface(f"invalid ABI entry {raw.get('name', '?')!r}: {e}") from e
        if entry.type in ("function", "event") and entry.name:
            entries.append(entry)
    return entries


def parse_interface(abi: AbiSpec) -> InterfaceDefinition:
    """Parse an ABI into descriptors, skipping constructors, errors and fallbacks."""
    return tuple(get_descriptor(entry) for entry in get_entries(abi))
