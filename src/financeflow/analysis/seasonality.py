#!/usr/bin/env python3
"""
Seasonality Analysis

Two views of seasonality:
- analyze_seasonality() buckets raw transactions by calendar month and reports
  how strongly the monthly totals vary and which months stand out.
- detect_seasonal_pattern() looks for periodic structure in a per-period
  amount series using lagged products up to a one-year lag.
"""

from collections.abc import Sequence

import numpy as np
import pandas as pd

from ..core.models import SeasonalityResult, SeasonalPattern, SeasonalStrengthLevel, TransactionPoint

MAX_SEASONAL_LAG = 12
MIN_SEASONAL_POINTS = 12
HIGHLIGHT_MONTHS = 3


def group_by_month(transactions: Sequence[TransactionPoint]) -> dict[str, float]:
    """Sum amounts per YYYY-MM bucket, in chronological order."""
    if not transactions:
        return {}

    df = pd.DataFrame(
        {
            "month": [t.date.month_key() for t in transactions],
            "amount": [t.amount for t in transactions],
        }
    )
    totals = df.groupby("month", sort=True)["amount"].sum()
    return {str(month): float(total) for month, total in totals.items()}


def calculate_seasonal_strength(seasonal_index: dict[str, float]) -> float:
    """Coefficient of variation of the monthly totals (0 if undefined)."""
    values = np.asarray(list(seasonal_index.values()), dtype=np.float64)
    if len(values) < 2:
        return 0.0

    mean = float(np.mean(values))
    if mean == 0:
        return 0.0

    return float(np.std(values)) / mean


def classify_seasonal_pattern(strength: float) -> SeasonalStrengthLevel:
    """Map seasonal strength onto weak/moderate/strong."""
    if strength > 0.5:
        return SeasonalStrengthLevel.STRONG
    if strength > 0.2:
        return SeasonalStrengthLevel.MODERATE
    return SeasonalStrengthLevel.WEAK


def find_peak_months(seasonal_index: dict[str, float], count: int = HIGHLIGHT_MONTHS) -> list[str]:
    """Months with the largest totals; ties keep chronological order."""
    ranked = sorted(seasonal_index.items(), key=lambda item: item[1], reverse=True)
    return [month for month, _ in ranked[:count]]


def find_low_months(seasonal_index: dict[str, float], count: int = HIGHLIGHT_MONTHS) -> list[str]:
    """Months with the smallest totals; ties keep chronological order."""
    ranked = sorted(seasonal_index.items(), key=lambda item: item[1])
    return [month for month, _ in ranked[:count]]


def analyze_seasonality(transactions: Sequence[TransactionPoint]) -> SeasonalityResult | None:
    """
    Monthly seasonality of raw transactions.

    Args:
        transactions: Raw transactions (signed amounts are summed as given)

    Returns:
        SeasonalityResult, or None when there are no transactions
    """
    if not transactions:
        return None

    seasonal_index = group_by_month(transactions)
    strength = calculate_seasonal_strength(seasonal_index)

    return SeasonalityResult(
        seasonal_index=seasonal_index,
        seasonal_strength=strength,
        peak_months=find_peak_months(seasonal_index),
        low_months=find_low_months(seasonal_index),
        pattern=classify_seasonal_pattern(strength),
    )


def calculate_autocorrelation(values: Sequence[float], max_lag: int = MAX_SEASONAL_LAG) -> list[float]:
    """
    Mean lagged product sum(v[i] * v[i + lag]) / (n - lag) for lag = 0..max_lag.

    The values are not centred or normalised. Lags that leave no overlapping
    pairs (lag >= n) are omitted.
    """
    data = np.asarray(values, dtype=np.float64)
    n = len(data)

    return [float(np.sum(data[: n - lag] * data[lag:])) / (n - lag) for lag in range(min(max_lag, n - 1) + 1)]


def detect_seasonal_pattern(values: Sequence[float]) -> SeasonalPattern:
    """
    Classify periodic structure in a per-period series.

    Needs at least twelve periods. The strongest lagged product over lags
    1..12 decides the label.
    """
    if len(values) < MIN_SEASONAL_POINTS:
        return SeasonalPattern.INSUFFICIENT_DATA

    autocorr = calculate_autocorrelation(values, MAX_SEASONAL_LAG)
    seasonal_strength = max(autocorr[1:])

    if seasonal_strength > 0.7:
        return SeasonalPattern.STRONG_SEASONAL
    if seasonal_strength > 0.4:
        return SeasonalPattern.MODERATE_SEASONAL
    return SeasonalPattern.NO_SEASONAL
