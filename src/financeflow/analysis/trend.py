#!/usr/bin/env python3
"""
Trend Classification, Volatility and Confidence

Turns a regression fit into a trend label and the supporting quality measures
(coefficient of variation, sample-size-adjusted confidence, trend strength).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from ..core.models import SeriesPoint, TrendDirection, TrendResult
from .breakpoints import detect_breakpoints
from .regression import fit_indexed
from .seasonality import detect_seasonal_pattern

# Slope magnitude at which trend strength saturates
SLOPE_STRENGTH_SCALE = 0.1


@dataclass(frozen=True)
class TrendThresholds:
    """Thresholds shared by the trend, breakpoint and insight calculations."""

    slope: float = 0.05
    min_r_squared: float = 0.1
    breakpoint_change: float = 0.3


DEFAULT_THRESHOLDS = TrendThresholds()


def classify_trend(
    slope: float,
    r_squared: float,
    threshold: float = DEFAULT_THRESHOLDS.slope,
    min_r_squared: float = DEFAULT_THRESHOLDS.min_r_squared,
) -> TrendDirection:
    """
    Label a fitted line as increasing, decreasing or stable.

    A weak fit (R-squared at or below min_r_squared) is always stable, whatever
    the slope. Otherwise slopes smaller than threshold in magnitude are stable.
    """
    if r_squared <= min_r_squared:
        return TrendDirection.STABLE
    if abs(slope) < threshold:
        return TrendDirection.STABLE
    if slope > threshold:
        return TrendDirection.INCREASING
    return TrendDirection.DECREASING


def calculate_volatility(values: Sequence[float]) -> float:
    """
    Coefficient of variation (population standard deviation / mean).

    Returns 0 for fewer than two values or a zero mean.
    """
    if len(values) < 2:
        return 0.0

    data = np.asarray(values, dtype=np.float64)
    mean = float(np.mean(data))
    if mean == 0:
        return 0.0

    return float(np.std(data)) / mean


def calculate_confidence(r_squared: float, sample_size: int) -> float:
    """Adjusted R-squared clamped to [0, 1]; 0 below three samples."""
    if sample_size < 3:
        return 0.0

    adjusted = 1 - (1 - r_squared) * (sample_size - 1) / (sample_size - 2)
    return max(0.0, min(1.0, adjusted))


def calculate_trend_strength(slope: float, r_squared: float) -> float:
    """Average of the normalised slope magnitude and the fit quality."""
    slope_strength = min(1.0, abs(slope) / SLOPE_STRENGTH_SCALE)
    return (slope_strength + r_squared) / 2


def sort_series(series: Iterable[SeriesPoint]) -> list[SeriesPoint]:
    """Order points chronologically by their period key."""
    return sorted(series, key=lambda point: point.period)


def analyze_trend(
    series: Iterable[SeriesPoint],
    thresholds: TrendThresholds = DEFAULT_THRESHOLDS,
) -> TrendResult:
    """
    Analyze one expense or income series.

    Points are ordered by period and indexed 0..n-1 before fitting.

    Args:
        series: Period/amount points from the aggregator
        thresholds: Trend and breakpoint thresholds

    Returns:
        TrendResult; an empty series yields a stable, all-zero result
    """
    points = sort_series(series)
    if not points:
        return TrendResult.empty()

    amounts = [point.amount for point in points]
    regression = fit_indexed(amounts)

    return TrendResult(
        trend=classify_trend(
            regression.slope,
            regression.r_squared,
            threshold=thresholds.slope,
            min_r_squared=thresholds.min_r_squared,
        ),
        slope=regression.slope,
        intercept=regression.intercept,
        r_squared=regression.r_squared,
        volatility=calculate_volatility(amounts),
        confidence=calculate_confidence(regression.r_squared, len(amounts)),
        trend_strength=calculate_trend_strength(regression.slope, regression.r_squared),
        seasonal_pattern=detect_seasonal_pattern(amounts),
        breakpoints=detect_breakpoints(amounts, change_threshold=thresholds.breakpoint_change),
        data_points=len(amounts),
    )
