import json
from pathlib import Path
from typing import Any

import pytest
from eth_abi import encode

from logdecode.core.models import RawLog
from logdecode.decoding.abi import parse_interface
from logdecode.decoding.specs import InterfaceDefinition

ABI_DIR = Path(__file__).parent / "abi"

TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
APPROVAL_TOPIC = "0x8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
TRANSFER_SELECTOR = "a9059cbb"

ALICE = "0x1234567890123456789012345678901234567890"
BOB = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"
TX_HASH = "0x53bd884872de3e488692881baeec262e7b95234d3965248c39fe992fffd433e5"


def address_topic(address: str) -> str:
    return "0x" + "0" * 24 + address[2:].lower()


@pytest.fixture
def erc20_abi() -> list[dict[str, Any]]:
    return json.loads((ABI_DIR / "erc20.json").read_text())


@pytest.fixture
def erc20_interface(erc20_abi: list[dict[str, Any]]) -> InterfaceDefinition:
    return parse_interface(erc20_abi)


@pytest.fixture
def transfer_log() -> RawLog:
    """ERC20 Transfer(ALICE → BOB, 1000)."""
    return RawLog(
        first_topic=TRANSFER_TOPIC,
        second_topic=address_topic(ALICE),
        third_topic=address_topic(BOB),
        data=encode(["uint256"], [1000]),
        address="0x8bf38d4764929064f2d4d3a56520a76ab3df415b",
    )


@pytest.fixture
def transfer_call_log() -> RawLog:
    """Function-call style log: selector-prefixed first topic, arguments in data."""
    return RawLog(
        first_topic="0x" + TRANSFER_SELECTOR + "0" * 56,
        data=encode(["address", "uint256"], [BOB, 42]),
    )
