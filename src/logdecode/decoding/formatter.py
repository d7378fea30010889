from __future__ import annotations

from collections.abc import Iterable

from logdecode.core.models import Decoded, DecodedArgument
from logdecode.decoding.matcher import Match


def format_call(name: str, mapping: Iterable[DecodedArgument]) -> str:
    """Render `name(type [indexed ]name, ...)`; argument values are ignored."""
    params = ", ".join(
        f"{arg.type} {'indexed ' if arg.indexed else ''}{arg.name}" for arg in mapping
    )
    return f"{name}({params})"


def build_decoded(match: Match) -> Decoded:
    """Turn a successful match into a `Decoded` result (lowercase hex identifier)."""
    return Decoded(
        identifier_hex=match.descriptor.identifier.hex(),
        signature_text=format_call(match.descriptor.name, match.mapping),
        mapping=match.mapping,
    )
