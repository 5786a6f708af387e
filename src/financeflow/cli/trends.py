#!/usr/bin/env python3
"""
Trends CLI - Trend Analysis and Forecast Commands

Reads a JSON transaction export, aggregates it into expense and income series
and runs the trend analysis engine over them.

Input format: a JSON array of transactions (or an object with a "transactions"
array). Each transaction needs "date" (YYYY-MM-DD) and "amount"; "type"
("expense", "income" or "transfer") defaults to expense. Amounts are positive;
the type decides which series a transaction belongs to. Seasonality and anomaly
detection run over expense transactions only.
"""

from datetime import date, datetime
from pathlib import Path

import click

from ..analysis import TrendAnalysisEngine
from ..core.config import get_config
from ..core.json_utils import read_json, write_json
from ..core.models import AnalysisOptions, FinancialTrendReport, TransactionPoint, TransactionType
from ..core.periods import (
    GRANULARITIES,
    aggregate_by_period,
    filter_since,
    granularity_for_range,
    start_date_for_range,
)

DATE_RANGES = ("week", "month", "quarter", "year", "all")


def load_transactions(input_file: Path) -> list[TransactionPoint]:
    """
    Load transactions from a JSON export.

    Raises:
        click.ClickException: If the file is not a valid transaction export
    """
    try:
        data = read_json(input_file)
    except ValueError as e:
        raise click.ClickException(f"Invalid JSON in {input_file}: {e}") from e

    records = data.get("transactions") if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise click.ClickException(f"Expected a list of transactions in {input_file}")

    transactions = []
    for index, record in enumerate(records):
        try:
            transactions.append(TransactionPoint.from_dict(record))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise click.ClickException(f"Invalid transaction #{index} in {input_file}: {e}") from e
    return transactions


def _select_window(
    transactions: list[TransactionPoint], date_range: str, as_of: str | None
) -> tuple[list[TransactionPoint], str | None]:
    if date_range == "all":
        return transactions, None

    as_of_date = date.fromisoformat(as_of) if as_of else date.today()
    start = start_date_for_range(date_range, as_of_date)
    return filter_since(transactions, start), start.isoformat()


def _echo_summary(report: FinancialTrendReport, verbose: bool) -> None:
    overall = report.overall_trends

    click.echo("\n[TRENDS] Trend Summary:")
    click.echo(
        f"   Expenses: {report.expense_trends.trend.value} "
        f"(slope {report.expense_trends.slope:,.2f}, R² {report.expense_trends.r_squared:.2f})"
    )
    click.echo(
        f"   Income: {report.income_trends.trend.value} "
        f"(slope {report.income_trends.slope:,.2f}, R² {report.income_trends.r_squared:.2f})"
    )
    if overall.net_cash_flow is not None:
        click.echo(
            f"   Net Cash Flow: {overall.net_cash_flow.trend.value} "
            f"(average {overall.net_cash_flow.average_net:,.2f}/period)"
        )
    click.echo(f"   Financial Health: {overall.financial_health}/100")
    click.echo(f"   Risk Level: {overall.risk_level.value}")
    for factor in overall.risk_factors:
        click.echo(f"     - {factor}")
    click.echo(f"   Sustainability: {overall.sustainability.sustainability.value}")

    if report.insights or overall.recommendations:
        click.echo("\n[INSIGHTS]")
        for insight in [*report.insights, *overall.recommendations]:
            click.echo(f"   [{insight.priority.value}] {insight.title}: {insight.message}")

    if report.anomalies:
        click.echo(f"\n[ANOMALIES] {len(report.anomalies)} unusual transactions")
        shown = report.anomalies if verbose else report.anomalies[:5]
        for anomaly in shown:
            click.echo(
                f"   {anomaly.transaction.date} {anomaly.transaction.amount:,.2f} "
                f"{anomaly.severity.value} {anomaly.type.value}: {anomaly.explanation}"
            )

    if report.predictions is not None and report.predictions.net_cash_flow is not None:
        click.echo("\n[FORECAST] Net Cash Flow:")
        for point in report.predictions.net_cash_flow.predictions:
            click.echo(
                f"   {point.period_label}: income {point.predicted_income:,.2f}, "
                f"expenses {point.predicted_expense:,.2f}, net {point.predicted_net:,.2f}"
            )


@click.group()
def trends() -> None:
    """Financial trend analysis and forecasting commands."""
    pass


@trends.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--date-range",
    type=click.Choice(DATE_RANGES),
    default="all",
    help="Look-back window ending at --as-of (default: all data)",
)
@click.option("--as-of", help="End of the look-back window (YYYY-MM-DD), defaults to today")
@click.option(
    "--granularity",
    type=click.Choice(GRANULARITIES),
    help="Aggregation period; defaults to the one implied by --date-range (month for all data)",
)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), help="Write the JSON report to this file")
@click.option("--no-predictions", is_flag=True, help="Skip forecasts")
@click.option("--no-seasonality", is_flag=True, help="Skip seasonality analysis")
@click.option("--no-anomalies", is_flag=True, help="Skip anomaly detection")
@click.option("--confidence-level", type=float, help="Forecast confidence level (default from config)")
@click.option("--periods-ahead", type=click.IntRange(min=1), help="Periods to forecast (default from config)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def analyze(
    ctx: click.Context,
    input_file: Path,
    date_range: str,
    as_of: str | None,
    granularity: str | None,
    output: Path | None,
    no_predictions: bool,
    no_seasonality: bool,
    no_anomalies: bool,
    confidence_level: float | None,
    periods_ahead: int | None,
    verbose: bool,
) -> None:
    """
    Run the full trend analysis over a transaction export.

    Examples:
      financeflow trends analyze transactions.json
      financeflow trends analyze transactions.json --date-range year --as-of 2024-12-31
      financeflow trends analyze transactions.json --granularity week --output report.json
    """
    ctx.ensure_object(dict)
    verbose = verbose or ctx.obj.get("verbose", False)
    config = get_config()

    transactions = load_transactions(input_file)
    try:
        window, start = _select_window(transactions, date_range, as_of)
    except ValueError as e:
        raise click.ClickException(f"Invalid --as-of date: {e}") from e

    if granularity is None:
        granularity = "month" if date_range == "all" else granularity_for_range(date_range)

    expense_series = aggregate_by_period(window, granularity, TransactionType.EXPENSE)
    income_series = aggregate_by_period(window, granularity, TransactionType.INCOME)
    expense_transactions = [t for t in window if t.type == TransactionType.EXPENSE]

    if verbose:
        click.echo("Trend Analysis")
        click.echo(f"Input: {input_file}")
        click.echo(f"Date range: {date_range}" + (f" (since {start})" if start else ""))
        click.echo(f"Granularity: {granularity}")
        click.echo(f"Transactions: {len(window)} of {len(transactions)}")
        click.echo(f"Expense periods: {len(expense_series)}, income periods: {len(income_series)}")

    engine = TrendAnalysisEngine(config.analysis)
    defaults = engine.default_options()
    options = AnalysisOptions(
        include_predictions=not no_predictions,
        include_seasonality=not no_seasonality,
        include_anomalies=not no_anomalies,
        confidence_level=confidence_level if confidence_level is not None else defaults.confidence_level,
        periods_ahead=periods_ahead if periods_ahead is not None else defaults.periods_ahead,
    )

    click.echo("[ANALYSIS] Analyzing financial trends...")
    report = engine.analyze_financial_trends(
        expense_series,
        income_series,
        expense_transactions,
        options=options,
        metadata={
            "source": str(input_file),
            "date_range": date_range,
            "granularity": granularity,
            "analyzed_at": datetime.now().isoformat(),
        },
    )

    _echo_summary(report, verbose)

    if output:
        write_json(output, report)
        click.echo(f"\n✅ Report saved to: {output}")


@trends.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--type",
    "series_type",
    type=click.Choice(["expense", "income"]),
    default="expense",
    help="Series to forecast (default: expense)",
)
@click.option(
    "--granularity",
    type=click.Choice(GRANULARITIES),
    default="month",
    help="Aggregation period (default: month)",
)
@click.option("--periods-ahead", type=click.IntRange(min=1), help="Periods to forecast (default from config)")
@click.option("--confidence-level", type=float, help="Forecast confidence level (default from config)")
def forecast(
    input_file: Path,
    series_type: str,
    granularity: str,
    periods_ahead: int | None,
    confidence_level: float | None,
) -> None:
    """
    Forecast one series from a transaction export.

    Examples:
      financeflow trends forecast transactions.json
      financeflow trends forecast transactions.json --type income --periods-ahead 6
    """
    config = get_config()
    transactions = load_transactions(input_file)
    series = aggregate_by_period(transactions, granularity, TransactionType(series_type))

    engine = TrendAnalysisEngine(config.analysis)
    predictions = engine.predict_future(series, periods_ahead, confidence_level)

    if predictions is None:
        click.echo(f"Forecast unavailable: need at least 3 {granularity} periods of {series_type} data, got {len(series)}")
        return

    click.echo(f"[FORECAST] {series_type.capitalize()} forecast ({granularity}, {len(series)} periods of history):")
    for point in predictions:
        interval = point.confidence_interval
        click.echo(
            f"   {point.period_label}: {point.predicted_value:,.2f} "
            f"[{interval.lower:,.2f} - {interval.upper:,.2f}] @ {point.confidence:.0%}"
        )
