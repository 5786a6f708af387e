#!/usr/bin/env python3
"""
Main CLI Entry Point for FinanceFlow Trends

Global options adjust the environment before the configuration is loaded, so
every subcommand sees the same Config through the click context.
"""

import logging
import os

import click

from .. import __author__, __version__
from ..core.config import Config, get_config, reload_config
from .trends import trends

ENVIRONMENTS = ("development", "test", "production")


def _echo_config(config: Config) -> None:
    analysis = config.analysis
    rows = [
        ("Environment", config.environment.value),
        ("Debug Mode", config.debug),
        ("Log Level", config.log_level),
        ("Trend Slope Threshold", analysis.trend_slope_threshold),
        ("Trend Minimum R²", analysis.trend_min_r_squared),
        ("Anomaly Z-Score Threshold", analysis.anomaly_z_threshold),
        ("Breakpoint Change Threshold", analysis.breakpoint_change_threshold),
        ("Forecast Periods", analysis.forecast_periods),
        ("Forecast Confidence", analysis.forecast_confidence),
        ("Cache TTL (seconds)", config.cache.ttl_seconds),
    ]
    click.echo("Current Configuration:")
    for label, value in rows:
        click.echo(f"  {label}: {value}")


@click.group()
@click.option("--config-env", type=click.Choice(ENVIRONMENTS), help="Override FINANCEFLOW_ENV")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    FinanceFlow Trends - Financial Trend and Forecast Analysis

    Classifies expense and income trends, detects seasonality and anomalies,
    and forecasts future cash flow from a transaction export.
    """
    ctx.ensure_object(dict)

    if config_env or debug:
        if config_env:
            os.environ["FINANCEFLOW_ENV"] = config_env
        if debug:
            os.environ["LOG_LEVEL"] = "DEBUG"
        config = reload_config()
    else:
        config = get_config()

    if debug:
        logging.getLogger("financeflow").setLevel(logging.DEBUG)

    ctx.obj.update(config=config, verbose=verbose, debug=debug)

    if verbose:
        click.echo(f"Environment: {config.environment.value}")


@main.command()
def version() -> None:
    """Show version information."""
    click.echo(f"FinanceFlow Trends v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command(name="config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the active analysis thresholds and settings."""
    _echo_config(ctx.obj["config"])


main.add_command(trends)


if __name__ == "__main__":
    main()
