#!/usr/bin/env python3
"""
Period Aggregation

Turns raw transactions into the chronologically ordered (period, amount)
series consumed by the trend engine. The engine never calls this module; it
exists so that callers (and the CLI) can build series from a transaction export.
"""

from collections.abc import Iterable
from datetime import date, timedelta

import pandas as pd

from .dates import FinancialDate
from .models import SeriesPoint, TransactionPoint, TransactionType

GRANULARITIES = ("day", "week", "month", "quarter")

# Look-back window -> bucket size used when aggregating for that window
DATE_RANGE_GRANULARITY = {
    "week": "day",
    "month": "day",
    "quarter": "quarter",
    "year": "month",
}


def period_key(value: FinancialDate, granularity: str) -> str:
    """
    Build the sortable period key for a date.

    Args:
        value: Transaction date
        granularity: One of "day", "week", "month", "quarter"

    Returns:
        "YYYY-MM-DD", "YYYY-Www", "YYYY-MM" or "YYYY-Qn"
    """
    if granularity == "day":
        return value.to_iso_string()
    if granularity == "week":
        return value.week_key()
    if granularity == "month":
        return value.month_key()
    if granularity == "quarter":
        return value.quarter_key()
    raise ValueError(f"Unknown granularity: {granularity}. Expected one of {', '.join(GRANULARITIES)}")


def granularity_for_range(date_range: str) -> str:
    """Bucket size used for a look-back window, defaulting to daily buckets."""
    return DATE_RANGE_GRANULARITY.get(date_range, "day")


def start_date_for_range(date_range: str, as_of: date) -> date:
    """
    First date included in a look-back window.

    "week" is the trailing seven days; "month", "quarter" and "year" start at
    the beginning of the calendar month, quarter or year containing as_of.
    Unknown ranges behave like "month".
    """
    if date_range == "week":
        return as_of - timedelta(days=7)
    if date_range == "quarter":
        return date(as_of.year, ((as_of.month - 1) // 3) * 3 + 1, 1)
    if date_range == "year":
        return date(as_of.year, 1, 1)
    return date(as_of.year, as_of.month, 1)


def filter_since(transactions: Iterable[TransactionPoint], start: date) -> list[TransactionPoint]:
    """Keep transactions dated on or after start, preserving order."""
    return [t for t in transactions if t.date.date >= start]


def aggregate_by_period(
    transactions: Iterable[TransactionPoint],
    granularity: str = "month",
    transaction_type: TransactionType | None = None,
) -> list[SeriesPoint]:
    """
    Sum transaction amounts per period.

    Args:
        transactions: Raw transactions
        granularity: Bucket size ("day", "week", "month", "quarter")
        transaction_type: Only include transactions of this type (default: all)

    Returns:
        SeriesPoints sorted by period key

    Raises:
        ValueError: If granularity is unknown
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"Unknown granularity: {granularity}. Expected one of {', '.join(GRANULARITIES)}")

    rows = [
        {"period": period_key(t.date, granularity), "amount": t.amount}
        for t in transactions
        if transaction_type is None or t.type == transaction_type
    ]
    if not rows:
        return []

    df = pd.DataFrame(rows)
    totals = df.groupby("period", sort=True)["amount"].sum()

    return [SeriesPoint(period=str(period), amount=float(amount)) for period, amount in totals.items()]
