import json
from pathlib import Path

from click.testing import CliRunner

from logdecode.cli import cli

from .conftest import ABI_DIR, ALICE, BOB, TRANSFER_SELECTOR, TRANSFER_TOPIC, TX_HASH, address_topic

TOKEN = "0x8bf38d4764929064f2d4d3a56520a76ab3df415b"
VALUE_1000 = "0x" + (1000).to_bytes(32, "big").hex()


def transfer_args() -> list[str]:
    return [
        "--topic", TRANSFER_TOPIC,
        "--topic", address_topic(ALICE),
        "--topic", address_topic(BOB),
        "--data", VALUE_1000,
        "--tx-hash", TX_HASH,
    ]


def test_selector_command() -> None:
    result = CliRunner().invoke(cli, ["selector", "0x" + TRANSFER_SELECTOR + "0" * 56])
    assert result.exit_code == 0
    assert result.output.strip() == "0x" + TRANSFER_SELECTOR


def test_selector_command_rejects_bad_topic() -> None:
    result = CliRunner().invoke(cli, ["selector", "0x01"])
    assert result.exit_code != 0


def test_decode_with_verified_abi() -> None:
    args = ["decode", *transfer_args(), "--target", TOKEN, "--abi", str(ABI_DIR / "erc20.json"), "--json"]

    result = CliRunner().invoke(cli, args)

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["status"] == "decoded"
    assert payload["signature"] == "Transfer(address indexed from, address indexed to, uint256 value)"
    assert [a["value"] for a in payload["arguments"]][2] == 1000


def test_decode_without_target() -> None:
    result = CliRunner().invoke(cli, ["decode", *transfer_args(), "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"status": "failed", "reason": "no_target"}


def test_import_abi_then_decode_unverified(tmp_path: Path) -> None:
    runner = CliRunner()
    jsonl = tmp_path / "candidates.jsonl"

    imported = runner.invoke(cli, ["import-abi", str(ABI_DIR / "erc20.json"), "--jsonl", str(jsonl)])
    assert imported.exit_code == 0, imported.output
    assert len(jsonl.read_text().splitlines()) == 5

    result = runner.invoke(cli, ["decode", *transfer_args(), "--target", TOKEN, "--candidates", str(jsonl)])

    assert result.exit_code == 0, result.output
    assert "unverified, best guess" in result.output


def test_import_abi_into_duckdb(tmp_path: Path) -> None:
    runner = CliRunner()
    db = tmp_path / "candidates.duckdb"

    imported = runner.invoke(cli, ["import-abi", str(ABI_DIR / "erc20.json"), "--db", str(db)])
    assert imported.exit_code == 0, imported.output

    result = runner.invoke(cli, ["decode", *transfer_args(), "--target", TOKEN, "--db", str(db), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["status"] == "unverified"
    assert payload["candidates"][0]["identifier"] == TRANSFER_TOPIC[2:]


def test_decode_from_rpc_log_json(tmp_path: Path) -> None:
    log_file = tmp_path / "log.json"
    log_file.write_text(
        json.dumps({
            "address": TOKEN,
            "topics": [TRANSFER_TOPIC, address_topic(ALICE), address_topic(BOB)],
            "data": VALUE_1000,
            "transactionHash": TX_HASH,
        })
    )

    result = CliRunner().invoke(
        cli, ["decode", "--log-json", str(log_file), "--target", TOKEN, "--abi", str(ABI_DIR / "erc20.json"), "--json"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["status"] == "decoded"


def test_decode_rejects_bad_data() -> None:
    result = CliRunner().invoke(cli, ["decode", "--topic", TRANSFER_TOPIC, "--data", "0xabc", "--target", TOKEN])
    assert result.exit_code != 0
    assert "invalid hex" in result.output


def test_decode_rejects_two_stores(tmp_path: Path) -> None:
    jsonl = tmp_path / "c.jsonl"
    jsonl.write_text("")
    result = CliRunner().invoke(
        cli, ["decode", "--topic", TRANSFER_TOPIC, "--candidates", str(jsonl), "--db", str(tmp_path / "x.duckdb")]
    )
    assert result.exit_code == 2
