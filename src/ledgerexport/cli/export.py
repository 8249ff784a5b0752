#!/usr/bin/env python3
"""
Export CLI - Actual Budget to Beancount

Commands for rendering the ledger, caching Actual data locally, and checking
a mapping file against the data.
"""

from datetime import datetime
from pathlib import Path

import click

from ..actual.sources import (
    CacheDataSource,
    DataSource,
    DataSourceError,
    HttpDataSource,
    fetch_actual_data,
    save_cache,
)
from ..core.config import Config, ConfigurationError, get_config
from ..core.currency import is_valid_currency_code
from ..core.dates import FinancialDate
from ..beancount.directives import LedgerStyle
from ..beancount.exporter import run_export
from ..beancount.mapper import MappingError, MappingTable, NameMapper


def build_source(config: Config, cache_dir: Path | None) -> DataSource:
    """
    Pick the data source for a command.

    A cache directory needs no credentials; the live source refuses to start
    without them.
    """
    if cache_dir is not None:
        return CacheDataSource(cache_dir)

    config.require_credentials()
    return HttpDataSource(config.actual)


def _parse_today(value: str | None) -> FinancialDate | None:
    if value is None:
        return None
    try:
        return FinancialDate.from_string(value)
    except ValueError as e:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint="--today") from e


@click.command()
@click.option(
    "--mappings",
    "mappings_file",
    type=click.Path(path_type=Path),
    help="Mapping file (JSON or YAML); defaults to LEDGEREXPORT_MAPPINGS",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(path_type=Path),
    help="Beancount file to write; defaults to LEDGEREXPORT_OUTPUT",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    help="Read Actual data from a cache written by 'sync' instead of the server",
)
@click.option("--currency", help="Commodity code for every posting (default: LEDGEREXPORT_CURRENCY)")
@click.option("--today", help="Date for balance assertions, YYYY-MM-DD (default: today)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def export(
    ctx: click.Context,
    mappings_file: Path | None,
    output_file: Path | None,
    cache_dir: Path | None,
    currency: str | None,
    today: str | None,
    verbose: bool,
) -> None:
    """
    Export all Actual transactions as a Beancount ledger.

    Examples:
      ledgerexport export
      ledgerexport export --cache-dir data/actual --output ledger.beancount
    """
    ctx.ensure_object(dict)
    config = get_config()
    verbose = verbose or ctx.obj.get("verbose", False)

    mappings_path = mappings_file or config.export.mappings_file
    output_path = output_file or config.export.output_file
    currency = (currency or config.export.currency).upper()
    if not is_valid_currency_code(currency):
        raise click.BadParameter(f"not a valid commodity code: {currency}", param_hint="--currency")

    style = LedgerStyle(currency=currency, column_width=config.export.column_width)
    as_of = _parse_today(today)

    if verbose:
        click.echo("Actual → Beancount export")
        click.echo(f"Source: {cache_dir if cache_dir else config.actual.server_url}")
        click.echo(f"Mappings: {mappings_path}")
        click.echo(f"Output: {output_path}")
        click.echo()

    try:
        mapper = NameMapper(MappingTable.load(mappings_path))
        source = build_source(config, cache_dir)
        result = run_export(source, mapper, output_path, style=style, today=as_of)
    except (ConfigurationError, DataSourceError) as e:
        raise click.ClickException(str(e)) from e

    stats = result.stats
    click.echo(f"✅ Exported {stats.total_rendered} transactions to {result.output_path}")
    click.echo(f"   Accounts opened: {len(result.opened_accounts)}")
    click.echo(f"   Balance assertions: {stats.balances}")
    if stats.total_skipped:
        click.echo(f"   ⚠️  Skipped: {stats.total_skipped} (see warnings above)")

    if verbose:
        for kind, count in sorted(stats.rendered.items()):
            click.echo(f"   {kind}: {count}")


@click.command()
@click.option(
    "--cache-dir",
    required=True,
    type=click.Path(path_type=Path, file_okay=False),
    help="Directory to write the Actual data cache to",
)
@click.pass_context
def sync(ctx: click.Context, cache_dir: Path) -> None:
    """
    Fetch Actual data from the server and save it as a local cache.

    Example:
      ledgerexport sync --cache-dir data/actual
    """
    config = get_config()

    try:
        source = build_source(config, None)
        source.open()
        try:
            data = fetch_actual_data(source)
        finally:
            source.close()
    except (ConfigurationError, DataSourceError) as e:
        raise click.ClickException(str(e)) from e

    save_cache(data, cache_dir)

    click.echo(f"✅ Cached {len(data.transactions)} transactions from {len(data.accounts)} accounts")
    click.echo(f"   Saved to: {cache_dir}")
    click.echo(f"   Synced at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


@click.command("validate-mappings")
@click.option(
    "--mappings",
    "mappings_file",
    type=click.Path(path_type=Path),
    help="Mapping file (JSON or YAML); defaults to LEDGEREXPORT_MAPPINGS",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    help="Read Actual data from a cache written by 'sync' instead of the server",
)
@click.pass_context
def validate_mappings(ctx: click.Context, mappings_file: Path | None, cache_dir: Path | None) -> None:
    """
    Check that every Actual account and category has a mapping.

    Example:
      ledgerexport validate-mappings --cache-dir data/actual
    """
    config = get_config()
    mappings_path = mappings_file or config.export.mappings_file

    try:
        mapper = NameMapper(MappingTable.load(mappings_path))
        source = build_source(config, cache_dir)
        source.open()
        try:
            data = fetch_actual_data(source)
        finally:
            source.close()
    except (ConfigurationError, DataSourceError) as e:
        raise click.ClickException(str(e)) from e

    missing_accounts, missing_categories = mapper.find_missing(data)
    if not missing_accounts and not missing_categories:
        click.echo(
            f"✅ All {len(data.accounts)} accounts and {len(data.categories)} categories are mapped"
        )
        return

    for name in missing_accounts:
        click.echo(f'[Account] "{name}" has no mapped account name')
    for name in missing_categories:
        click.echo(f'[Category] "{name}" has no mapped category name')

    raise click.ClickException(
        str(MappingError.for_missing(missing_accounts, missing_categories)).splitlines()[0]
    )
