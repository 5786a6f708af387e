#!/usr/bin/env python3
"""
Forecasting

Projects expense and income series forward along their fitted trend line,
pairs the projections into a net cash flow forecast and derives fixed
optimistic/realistic/pessimistic scenarios from them.
"""

import math
from collections.abc import Iterable, Sequence

import numpy as np

from ..core.models import (
    ConfidenceInterval,
    Forecast,
    NetCashFlowPoint,
    NetCashFlowPrediction,
    PredictionAssumption,
    PredictionPoint,
    PredictionReport,
    RegressionResult,
    Scenario,
    SeriesPoint,
)
from .regression import fit_indexed
from .trend import DEFAULT_THRESHOLDS, TrendThresholds, analyze_trend, sort_series

MIN_FORECAST_POINTS = 3
DEFAULT_PERIODS_AHEAD = 3
DEFAULT_CONFIDENCE_LEVEL = 0.95

# Fixed critical value; the interval width does not change with the requested
# confidence level, which is reported alongside each prediction as given.
T_VALUE = 1.96

# name -> (description, expense multiplier, income multiplier)
SCENARIOS = {
    "optimistic": ("Income rises and expenses fall", 0.9, 1.1),
    "realistic": ("Current trends continue", 1.0, 1.0),
    "pessimistic": ("Income falls and expenses rise", 1.1, 0.9),
}


def calculate_confidence_interval(regression: RegressionResult, values: Sequence[float], x: float) -> ConfidenceInterval:
    """
    Approximate prediction interval around the fitted value at x.

    This is a simplified standard error, not the textbook prediction interval:
    the x-spread term uses the variance of 0..n-1 and centres on n/2, and the
    residual variance uses n - 2 degrees of freedom. Downstream consumers rely
    on its magnitude, so keep it as is. Both bounds are clamped at zero.

    Args:
        regression: Fit over values indexed 0..n-1 (n >= 3)
        values: Historical amounts
        x: Index being predicted
    """
    data = np.asarray(values, dtype=np.float64)
    n = len(data)

    fitted = regression.slope * np.arange(n, dtype=np.float64) + regression.intercept
    residual_variance = float(np.sum((data - fitted) ** 2)) / (n - 2)
    x_spread = n * (n * n - 1) / 12

    standard_error = math.sqrt(residual_variance * (1 + 1 / n + (x - n / 2) ** 2 / x_spread))
    center = regression.predict(x)

    return ConfidenceInterval(
        lower=max(0.0, center - T_VALUE * standard_error),
        upper=max(0.0, center + T_VALUE * standard_error),
    )


def forecast_series(
    series: Iterable[SeriesPoint],
    periods_ahead: int = DEFAULT_PERIODS_AHEAD,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> Forecast | None:
    """
    Project a series periods_ahead steps past its last point.

    Step i is evaluated at index n + i and labelled "future_i". Predicted
    values are clamped at zero.

    Returns:
        Forecast, or None when fewer than three points are available
    """
    points = sort_series(series)
    if len(points) < MIN_FORECAST_POINTS:
        return None

    amounts = [point.amount for point in points]
    regression = fit_indexed(amounts)
    n = len(amounts)

    predictions = []
    for i in range(1, periods_ahead + 1):
        x = n + i
        predictions.append(
            PredictionPoint(
                period_label=f"future_{i}",
                predicted_value=max(0.0, regression.predict(x)),
                confidence_interval=calculate_confidence_interval(regression, amounts, x),
                confidence=confidence_level,
            )
        )

    return Forecast(predictions=predictions, model=regression)


def predict_future(
    series: Iterable[SeriesPoint],
    periods_ahead: int = DEFAULT_PERIODS_AHEAD,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> list[PredictionPoint] | None:
    """Predicted points for a series, or None when a forecast is unavailable."""
    forecast = forecast_series(series, periods_ahead, confidence_level)
    return forecast.predictions if forecast else None


def predict_net_cash_flow(
    expense_forecast: Forecast | None,
    income_forecast: Forecast | None,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> NetCashFlowPrediction | None:
    """Pair expense and income predictions step by step into net cash flow."""
    if expense_forecast is None or income_forecast is None:
        return None

    net_points = [
        NetCashFlowPoint(
            period_label=expense.period_label,
            predicted_net=income.predicted_value - expense.predicted_value,
            predicted_income=income.predicted_value,
            predicted_expense=expense.predicted_value,
            confidence=confidence_level,
        )
        for expense, income in zip(expense_forecast.predictions, income_forecast.predictions, strict=False)
    ]
    average_net = sum(p.predicted_net for p in net_points) / len(net_points) if net_points else 0.0

    return NetCashFlowPrediction(predictions=net_points, average_net=average_net)


def generate_scenarios(
    expense_forecast: Forecast | None,
    income_forecast: Forecast | None,
) -> list[Scenario] | None:
    """
    Scale the central forecasts by the fixed scenario multipliers.

    Deterministic: each scenario is the realistic projection with expenses and
    income multiplied by constants.
    """
    if expense_forecast is None or income_forecast is None:
        return None

    scenarios = []
    for name, (description, expense_multiplier, income_multiplier) in SCENARIOS.items():
        points = []
        for expense, income in zip(expense_forecast.predictions, income_forecast.predictions, strict=False):
            predicted_expense = expense.predicted_value * expense_multiplier
            predicted_income = income.predicted_value * income_multiplier
            points.append(
                NetCashFlowPoint(
                    period_label=expense.period_label,
                    predicted_net=predicted_income - predicted_expense,
                    predicted_income=predicted_income,
                    predicted_expense=predicted_expense,
                    confidence=expense.confidence,
                )
            )
        scenarios.append(
            Scenario(
                name=name,
                description=description,
                expense_multiplier=expense_multiplier,
                income_multiplier=income_multiplier,
                predictions=points,
            )
        )

    return scenarios


def generate_prediction_assumptions(
    expense_series: Sequence[SeriesPoint],
    income_series: Sequence[SeriesPoint],
    thresholds: TrendThresholds = DEFAULT_THRESHOLDS,
) -> list[PredictionAssumption]:
    """State which trends the forecasts assume will continue."""
    assumptions = []

    if expense_series:
        expense_trend = analyze_trend(expense_series, thresholds)
        assumptions.append(
            PredictionAssumption(
                type="expense",
                assumption=f"Expense trend continues as {expense_trend.trend.value}",
                confidence=expense_trend.confidence,
            )
        )

    if income_series:
        income_trend = analyze_trend(income_series, thresholds)
        assumptions.append(
            PredictionAssumption(
                type="income",
                assumption=f"Income trend continues as {income_trend.trend.value}",
                confidence=income_trend.confidence,
            )
        )

    return assumptions


def generate_predictions(
    expense_series: Sequence[SeriesPoint],
    income_series: Sequence[SeriesPoint],
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    periods_ahead: int = DEFAULT_PERIODS_AHEAD,
    thresholds: TrendThresholds = DEFAULT_THRESHOLDS,
) -> PredictionReport:
    """Forecast both series and derive net cash flow and scenarios."""
    expense_forecast = forecast_series(expense_series, periods_ahead, confidence_level)
    income_forecast = forecast_series(income_series, periods_ahead, confidence_level)

    return PredictionReport(
        expenses=expense_forecast,
        income=income_forecast,
        net_cash_flow=predict_net_cash_flow(expense_forecast, income_forecast, confidence_level),
        confidence=confidence_level,
        assumptions=generate_prediction_assumptions(expense_series, income_series, thresholds),
        scenarios=generate_scenarios(expense_forecast, income_forecast),
    )
