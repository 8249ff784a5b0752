#!/usr/bin/env python3
"""
Main CLI Entry Point for the Ledger Exporter

Provides the unified command-line interface for exporting Actual Budget data.
"""

import logging
import os

import click

from ..core.config import ConfigurationError, get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Ledger Exporter - Actual Budget to Beancount

    Exports every transaction of an Actual Budget file as balanced
    double-entry records, with account openings and closing balance
    assertions.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["LEDGEREXPORT_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = get_config()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("ledgerexport").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Actual server: {config.actual.server_url}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from ledgerexport import __version__

    click.echo(f"Ledger Exporter v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    settings = ctx.obj["config"].to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {settings['environment']}")
    click.echo(f"  Actual Server: {settings['actual']['server_url']}")
    click.echo(f"  Sync ID: {settings['actual']['sync_id'] or '(not set)'}")
    click.echo(f"  API Key: {settings['actual']['api_key'] or '(not set)'}")
    click.echo(f"  Mappings File: {settings['export']['mappings_file']}")
    click.echo(f"  Output File: {settings['export']['output_file']}")
    click.echo(f"  Currency: {settings['export']['currency']}")
    click.echo(f"  Log Level: {settings['log_level']}")


from .export import export, sync, validate_mappings  # noqa: E402

main.add_command(export)
main.add_command(sync)
main.add_command(validate_mappings)


if __name__ == "__main__":
    main()
