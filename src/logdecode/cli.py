import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from logdecode.core.models import (
    Decoded,
    DecodeResult,
    Failed,
    RawLog,
    TransactionContext,
    Unverified,
    describe_result,
)
from logdecode.errors import LogDecodeError

console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _arguments_table(decoded: Decoded) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("name")
    table.add_column("type")
    table.add_column("indexed")
    table.add_column("value", overflow="fold")
    for arg in decoded.mapping:
        table.add_row(arg.name, arg.type, "yes" if arg.indexed else "", str(arg.value))
    return table


def _render(result: DecodeResult) -> None:
    match result:
        case Decoded():
            console.print(f"[bold green]decoded[/] 0x{result.identifier_hex}: {result.signature_text}")
            console.print(_arguments_table(result))
        case Unverified(candidates=(best, *_)):
            console.print(f"[bold yellow]unverified, best guess[/] 0x{best.identifier_hex}: {best.signature_text}")
            console.print(_arguments_table(best))
        case Unverified() | Failed():
            console.print(f"[bold red]{describe_result(result)}[/]")


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug diagnostics")
def cli(verbose: bool) -> None:
    """logdecode: turn raw EVM event logs into readable calls."""
    _setup_logging(verbose)


@cli.command("decode")
@click.option("--topic", "topics", multiple=True, help="Log topic (0x…); repeat in order, up to 4")
@click.option("--data", default="0x", show_default=True, help="Log data payload (0x…)")
@click.option(
    "--log-json",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON-RPC log object; replaces --topic/--data",
)
@click.option("--target", default=None, help="Transaction target (contract) address")
@click.option("--tx-hash", default=None, help="Transaction hash, used in diagnostics")
@click.option(
    "--abi",
    "abi_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Verified ABI of the target contract (JSON)",
)
@click.option(
    "--candidates",
    "candidates_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSONL file of candidate fragments",
)
@click.option("--db", "db_path", type=click.Path(dir_okay=False, path_type=Path), help="DuckDB candidate store")
@click.option("--candidate-limit", type=int, default=3, show_default=True, help="Fragments fetched per identifier")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON")
def decode_cmd(
    topics: tuple[str, ...],
    data: str,
    log_json: Path | None,
    target: str | None,
    tx_hash: str | None,
    abi_path: Path | None,
    candidates_path: Path | None,
    db_path: Path | None,
    candidate_limit: int,
    as_json: bool,
) -> None:
    """Decode one log against a verified ABI or the candidate store."""
    from logdecode.core.config import DecoderConfig, StoreConfig
    from logdecode.decoding.abi import parse_interface
    from logdecode.hexcodec import decode_hex
    from logdecode.orchestration.orchestrator import LogDecoder
    from logdecode.storage import DuckDBCandidateStore, InMemoryCandidateStore

    if candidates_path and db_path:
        raise click.UsageError("Pass either --candidates or --db, not both")

    try:
        if log_json is not None:
            entry = json.loads(log_json.read_text())
            log = RawLog.from_rpc(entry)
            tx_hash = tx_hash or entry.get("transactionHash")
        else:
            log = RawLog.from_topics(list(topics), decode_hex(data))

        known = parse_interface(abi_path) if abi_path else None
        if db_path:
            store = DuckDBCandidateStore(StoreConfig(path=db_path, read_only=db_path.exists()))
        elif candidates_path:
            store = InMemoryCandidateStore.from_jsonl(candidates_path)
        else:
            store = InMemoryCandidateStore()

        try:
            decoder = LogDecoder(store, config=DecoderConfig(candidate_limit=candidate_limit))
            tx = TransactionContext(hash=tx_hash, target_address=target, known_interface=known)
            result = decoder.decode(log, tx)
        finally:
            if isinstance(store, DuckDBCandidateStore):
                store.close()
    except (LogDecodeError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        _render(result)


@cli.command("import-abi")
@click.argument("abi_paths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--db", "db_path", type=click.Path(dir_okay=False, path_type=Path), help="DuckDB candidate store")
@click.option("--jsonl", "jsonl_path", type=click.Path(dir_okay=False, path_type=Path), help="JSONL candidate file")
def import_abi_cmd(abi_paths: tuple[Path, ...], db_path: Path | None, jsonl_path: Path | None) -> None:
    """Record the functions and events of verified ABIs as candidate fragments."""
    from logdecode.core.config import StoreConfig
    from logdecode.storage import DuckDBCandidateStore, InMemoryCandidateStore

    if bool(db_path) == bool(jsonl_path):
        raise click.UsageError("Pass exactly one of --db or --jsonl")

    try:
        if db_path:
            with DuckDBCandidateStore(StoreConfig(path=db_path)) as store:
                added = sum(store.upsert_from_abi(p) for p in abi_paths)
                total = store.count()
        else:
            store = (
                InMemoryCandidateStore.from_jsonl(jsonl_path) if jsonl_path.exists() else InMemoryCandidateStore()
            )
            added = sum(store.upsert_from_abi(p) for p in abi_paths)
            store.to_jsonl(jsonl_path)
            total = len(store)
    except LogDecodeError as e:
        raise click.ClickException(str(e)) from e

    console.print(f"[bold]imported[/]: {added} new fragments • {total} total")


@cli.command("selector")
@click.argument("topic")
def selector_cmd(topic: str) -> None:
    """Show the 4-byte identifier the candidate lookup derives from TOPIC."""
    from logdecode.resolution.selector import derive_selector_from_topic

    selector = derive_selector_from_topic(topic)
    if selector is None:
        raise click.ClickException(f"cannot derive an identifier from {topic!r}")
    click.echo("0x" + selector.hex())
