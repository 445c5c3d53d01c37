import json
import logging
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from govdecode.constants import STABLECOIN_DECIMALS
from govdecode.core.config import KnownAddresses, TokenDecimals
from govdecode.core.errors import GovDecodeError
from govdecode.core.models import (
    ClassifiedTransaction,
    DropParams,
    Erc20Transfer,
    Erc721Transfer,
    ProposalAnalysis,
    selector_of,
)
from govdecode.droposals import find_droposals
from govdecode.export import analysis_to_dict, to_jsonable, write_parquet
from govdecode.formatting import format_ether, format_token_amount, format_units, requested_usd_total, royalty_percent
from govdecode.logging_utils import configure_logging
from govdecode.pipeline import EngineConfig, analyze_proposal

console = Console()
logger = logging.getLogger(__name__)


def registry_options(f):
    """Known-address registry options shared by every command."""
    f = click.option("--drop-factory", envvar="GOVDECODE_DROP_FACTORY", help="NFT-drop factory address")(f)
    f = click.option("--nft-collection", envvar="GOVDECODE_NFT_COLLECTION", help="Primary NFT collection address")(f)
    f = click.option("--stablecoin", envvar="GOVDECODE_STABLECOIN", help="Stablecoin token address")(f)
    f = click.option(
        "--registry",
        "registry_path",
        envvar="GOVDECODE_REGISTRY",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="JSON file with stablecoinAddress / nftCollectionAddress / dropFactoryAddress",
    )(f)
    return f


def _engine_config(
    registry_path: Path | None,
    stablecoin: str | None,
    nft_collection: str | None,
    drop_factory: str | None,
) -> EngineConfig:
    base = KnownAddresses.from_json_file(registry_path) if registry_path else KnownAddresses()
    addresses = base.merged(stablecoin=stablecoin, nft_collection=nft_collection, drop_factory=drop_factory)
    logger.debug("registry: %s", addresses)
    return EngineConfig(addresses=addresses)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path}: invalid JSON ({e})") from e


def _details(tx: ClassifiedTransaction, decimals: TokenDecimals) -> str:
    """One-line human summary of a transaction's decoded parameters."""
    if tx.error is not None:
        return f"[red]decode error[/]: {escape(tx.error.reason)}"
    match tx.decoded:
        case Erc20Transfer(to=to, amount=amount):
            return f"{format_token_amount(tx.target, amount, decimals)} → {to}"
        case Erc721Transfer(from_=from_, to=to, token_id=token_id):
            return f"#{token_id} {from_} → {to}"
        case DropParams() as drop:
            return (
                f"{escape(drop.name)} ({escape(drop.symbol)}) • edition {drop.edition_size} • "
                f"{format_ether(drop.sale_config.price_wei)} ETH • royalty {royalty_percent(drop.royalty_bps)}"
            )
        case None:
            if tx.raw_calldata:
                return f"selector {selector_of(tx.raw_calldata)} • {len(tx.raw_calldata)} bytes"
            return ""
    raise RuntimeError(f"Unsupported decoded record: {tx.decoded!r}")


def _render(analysis: ProposalAnalysis, decimals: TokenDecimals, explain: bool) -> Table:
    table = Table(title="Proposal transactions", expand=True)
    table.add_column("#", justify="right")
    table.add_column("kind")
    table.add_column("target")
    table.add_column("value (ETH)", justify="right")
    table.add_column("details")
    if explain:
        table.add_column("rule")
    for tx in analysis.transactions:
        row = [str(tx.index), tx.kind.label, tx.target or "[red]<malformed>[/]", format_ether(tx.value), _details(tx, decimals)]
        if explain:
            row.append(tx.rule or "")
        table.add_row(*row)
    return table


@click.group()
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    envvar="GOVDECODE_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
def cli(log_level: str) -> None:
    """Classify, decode and total DAO proposal calls."""
    configure_logging(log_level.upper())


@cli.command("classify")
@click.argument("proposal_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@registry_options
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON instead of a table")
@click.option("--explain", is_flag=True, help="Show which classification rule fired")
@click.option("--parquet", "parquet_path", type=click.Path(dir_okay=False, path_type=Path), help="Also write a Parquet file")
@click.option("--eth-price", type=str, default=None, help="ETH price in USD for a requested-total estimate")
@click.option(
    "--token-decimals",
    "token_decimals_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON object mapping token address → display decimals",
)
def classify_cmd(
    proposal_json: Path,
    registry_path: Path | None,
    stablecoin: str | None,
    nft_collection: str | None,
    drop_factory: str | None,
    as_json: bool,
    explain: bool,
    parquet_path: Path | None,
    eth_price: str | None,
    token_decimals_path: Path | None,
) -> None:
    """Classify every call of one proposal and print its funding totals."""
    try:
        config = _engine_config(registry_path, stablecoin, nft_collection, drop_factory)
        decimals = TokenDecimals()
        if token_decimals_path:
            decimals = TokenDecimals.from_mapping(_load_json(token_decimals_path))
        if config.addresses.stablecoin:
            decimals = TokenDecimals(
                decimals={**decimals.decimals, config.addresses.stablecoin: STABLECOIN_DECIMALS}, default=decimals.default
            )
        analysis = analyze_proposal(_load_json(proposal_json), config)
    except (GovDecodeError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    if parquet_path:
        write_parquet(analysis, parquet_path)

    usd = requested_usd_total(analysis.totals, eth_price) if eth_price is not None else None

    if as_json:
        out = analysis_to_dict(analysis)
        if usd is not None:
            out["requestedUsd"] = str(usd)
        click.echo(json.dumps(out, indent=2))
        return

    console.print(_render(analysis, decimals, explain))
    totals = analysis.totals
    console.print(
        f"[bold]totals[/]: {format_ether(totals.total_native_wei)} ETH "
        f"({totals.total_native_wei} wei) • "
        f"{format_units(totals.total_stablecoin_minor_units, STABLECOIN_DECIMALS)} USDC "
        f"({totals.total_stablecoin_minor_units} minor units)"
    )
    if usd is not None:
        console.print(f"[bold]requested[/]: ~${usd:,.2f}")
    for index, warning in analysis.warnings:
        console.print(f"[yellow]warning[/] call {index}: malformed {warning.field} ({warning.reason})")
    if parquet_path:
        console.print(f"[green]wrote[/] {parquet_path}")


@cli.command("droposals")
@click.argument("proposals_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@registry_options
@click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON instead of a table")
def droposals_cmd(
    proposals_json: Path,
    registry_path: Path | None,
    stablecoin: str | None,
    nft_collection: str | None,
    drop_factory: str | None,
    as_json: bool,
) -> None:
    """List proposals that create an NFT drop (one entry per proposal)."""
    data = _load_json(proposals_json)
    proposals = data.get("proposals", []) if isinstance(data, dict) else data
    if not isinstance(proposals, list):
        raise click.ClickException("expected a JSON list of proposals or an object with a 'proposals' list")
    try:
        config = _engine_config(registry_path, stablecoin, nft_collection, drop_factory)
        listings = find_droposals(proposals, config)
    except (GovDecodeError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(to_jsonable(listings), indent=2))
        return

    table = Table(title="Droposals", expand=True)
    for col in ("proposal", "title", "name", "edition", "price (ETH)"):
        table.add_column(col)
    for item in listings:
        p = item.params
        table.add_row(
            str(item.proposal_number if item.proposal_number is not None else item.proposal_id),
            escape(item.title),
            f"{escape(p.name)} ({escape(p.symbol)})" if p else "[red]undecodable[/]",
            str(p.edition_size) if p else "",
            format_ether(p.sale_config.price_wei) if p else "",
        )
    console.print(table)


@cli.command("selectors")
def selectors_cmd() -> None:
    """Print the built-in selector table."""
    table = Table(title="Built-in decoders")
    table.add_column("selector")
    table.add_column("signature")
    for selector, spec in sorted(EngineConfig().functions.items()):
        table.add_row(selector, spec.signature)
    console.print(table)
