#!/usr/bin/env python3
"""
Synthetic Data Builders

Small helpers that turn plain amount lists into series points, transactions and
JSON transaction exports. All data is synthetic.
"""

import json
from pathlib import Path

from financeflow.core.dates import FinancialDate
from financeflow.core.models import SeriesPoint, TransactionPoint, TransactionType


def make_series(amounts: list[float], start_year: int = 2024) -> list[SeriesPoint]:
    """Build a monthly series (YYYY-MM periods) from a list of amounts."""
    points = []
    for i, amount in enumerate(amounts):
        year = start_year + i // 12
        month = i % 12 + 1
        points.append(SeriesPoint(period=f"{year}-{month:02d}", amount=amount))
    return points


def make_transactions(
    amounts: list[float], transaction_type: TransactionType = TransactionType.EXPENSE
) -> list[TransactionPoint]:
    """Build transactions on consecutive days (28 per month) starting 2024-01-01."""
    return [
        TransactionPoint(
            date=FinancialDate.from_string(f"2024-{i // 28 + 1:02d}-{i % 28 + 1:02d}"),
            amount=amount,
            type=transaction_type,
            id=f"txn-{i}",
        )
        for i, amount in enumerate(amounts)
    ]


def generate_monthly_export(months: int = 6) -> list[dict]:
    """
    Transaction export with one salary and one rising expense per month.

    Expenses start at 1000 and grow by 100 per month; income is 3000 every
    month. Income dates use ISO timestamps to exercise date trimming.
    """
    records = []
    for month in range(1, months + 1):
        records.append(
            {
                "id": f"exp-{month}",
                "date": f"2024-{month:02d}-10",
                "amount": 1000.0 + (month - 1) * 100.0,
                "type": "expense",
                "description": "Rent and groceries",
            }
        )
        records.append(
            {
                "id": f"inc-{month}",
                "date": f"2024-{month:02d}-01T09:00:00Z",
                "amount": 3000.0,
                "type": "income",
                "description": "Salary",
            }
        )
    return records


def save_export(path: Path, records: list[dict]) -> Path:
    """Write a transaction export to disk and return its path."""
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")
    return path
