"""Interface parsing, matching and signature formatting.

This package provides:
- Descriptor primitives (ParameterSpec, InterfaceDescriptor, InterfaceDefinition)
- ABI JSON and signature-string parsers producing definitions
- The interface matcher that decodes a raw log against one definition
- The signature formatter for decoded argument mappings
"""

from logdecode.decoding.abi import AbiEntry, AbiParam, load_abi, parse_interface
from logdecode.decoding.formatter import format_call
from logdecode.decoding.matcher import Match, MatchResult, NoMatch, NoMatchReason, match_interface
from logdecode.decoding.signatures import descriptor_from_signature, make_definition
from logdecode.decoding.specs import InterfaceDefinition, InterfaceDescriptor, ParameterSpec

__all__ = [
    "AbiEntry",
    "AbiParam",
    "load_abi",
    "parse_interface",
    "format_call",
    "Match",
    "MatchResult",
    "NoMatch",
    "NoMatchReason",
    "match_interface",
    "descriptor_from_signature",
    "make_definition",
    "InterfaceDefinition",
    "InterfaceDescriptor",
    "ParameterSpec",
]
