#!/usr/bin/env python3
"""
Trend Analysis Engine

Facade over the pure analysis functions. It applies the configured thresholds,
assembles the full FinancialTrendReport and reports progress through an
injected logger. It keeps no state between calls, so one instance can be
shared freely.
"""

import logging
from collections.abc import Iterable
from typing import Any

from ..core.config import AnalysisConfig, Config, get_config
from ..core.models import (
    AnalysisOptions,
    AnomalyRecord,
    FinancialTrendReport,
    OverallTrends,
    PredictionPoint,
    PredictionReport,
    SeasonalityResult,
    SeriesPoint,
    TransactionPoint,
    TrendResult,
)
from .anomalies import detect_anomalies
from .forecast import generate_predictions, predict_future
from .insights import analyze_overall_trends, generate_trend_insights
from .seasonality import analyze_seasonality
from .trend import TrendThresholds, analyze_trend


class TrendAnalysisEngine:
    """
    Financial trend analysis over expense/income series and raw transactions.

    Example Usage:
        engine = TrendAnalysisEngine(logger=logging.getLogger("myapp.trends"))
        report = engine.analyze_financial_trends(expenses, income, transactions)
        print(report.overall_trends.risk_level.value)
    """

    def __init__(self, config: AnalysisConfig | None = None, logger: logging.Logger | None = None):
        """Initialize engine with analysis thresholds and an optional logger."""
        self.config = config or AnalysisConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.thresholds = TrendThresholds(
            slope=self.config.trend_slope_threshold,
            min_r_squared=self.config.trend_min_r_squared,
            breakpoint_change=self.config.breakpoint_change_threshold,
        )

    @classmethod
    def from_config(cls, config: Config | None = None, logger: logging.Logger | None = None) -> "TrendAnalysisEngine":
        """Create an engine from the application configuration."""
        config = config or get_config()
        return cls(config.analysis, logger)

    def default_options(self) -> AnalysisOptions:
        """Analysis options using the configured forecast defaults."""
        return AnalysisOptions(
            confidence_level=self.config.forecast_confidence,
            periods_ahead=self.config.forecast_periods,
        )

    def analyze_trend(self, series: Iterable[SeriesPoint]) -> TrendResult:
        """Trend of one expense or income series."""
        return analyze_trend(series, self.thresholds)

    def analyze_seasonality(self, transactions: Iterable[TransactionPoint]) -> SeasonalityResult | None:
        """Monthly seasonality of raw transactions."""
        return analyze_seasonality(list(transactions))

    def detect_anomalies(self, transactions: Iterable[TransactionPoint]) -> list[AnomalyRecord]:
        """Transactions with unusual amounts, highest z-score first."""
        return detect_anomalies(list(transactions), threshold=self.config.anomaly_z_threshold)

    def predict_future(
        self,
        series: Iterable[SeriesPoint],
        periods_ahead: int | None = None,
        confidence_level: float | None = None,
    ) -> list[PredictionPoint] | None:
        """Forecast one series; None when it has fewer than three points."""
        return predict_future(
            series,
            periods_ahead if periods_ahead is not None else self.config.forecast_periods,
            confidence_level if confidence_level is not None else self.config.forecast_confidence,
        )

    def generate_predictions(
        self,
        expense_series: Iterable[SeriesPoint],
        income_series: Iterable[SeriesPoint],
        confidence_level: float | None = None,
        periods_ahead: int | None = None,
    ) -> PredictionReport:
        """Forecasts for both series plus net cash flow and scenarios."""
        return generate_predictions(
            list(expense_series),
            list(income_series),
            confidence_level if confidence_level is not None else self.config.forecast_confidence,
            periods_ahead if periods_ahead is not None else self.config.forecast_periods,
            self.thresholds,
        )

    def analyze_overall_trends(
        self,
        expense_series: Iterable[SeriesPoint],
        income_series: Iterable[SeriesPoint],
    ) -> OverallTrends:
        """Combined expense/income view with health score, risk and recommendations."""
        return analyze_overall_trends(list(expense_series), list(income_series), self.thresholds)

    def analyze_financial_trends(
        self,
        expense_series: Iterable[SeriesPoint],
        income_series: Iterable[SeriesPoint],
        transactions: Iterable[TransactionPoint] = (),
        options: AnalysisOptions | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> FinancialTrendReport:
        """
        Run the complete trend analysis.

        Args:
            expense_series: Expense amounts per period
            income_series: Income amounts per period
            transactions: Raw transactions for seasonality and anomaly detection
            options: Which optional sections to compute (default: all, with
                the configured forecast settings)
            metadata: Caller-supplied context (user id, date range, timestamps)
                copied into the report

        Returns:
            FinancialTrendReport
        """
        options = options or self.default_options()
        expenses = list(expense_series)
        income = list(income_series)
        raw = list(transactions)

        self.logger.debug(
            "Analyzing trends: %d expense points, %d income points, %d transactions",
            len(expenses),
            len(income),
            len(raw),
        )

        overall = analyze_overall_trends(expenses, income, self.thresholds)

        seasonality = analyze_seasonality(raw) if options.include_seasonality else None
        anomalies = (
            detect_anomalies(raw, threshold=self.config.anomaly_z_threshold) if options.include_anomalies else None
        )
        predictions = (
            generate_predictions(expenses, income, options.confidence_level, options.periods_ahead, self.thresholds)
            if options.include_predictions
            else None
        )

        if anomalies:
            self.logger.debug("Detected %d anomalous transactions", len(anomalies))
        if predictions is not None and predictions.net_cash_flow is None:
            self.logger.debug("Net cash flow forecast unavailable: each series needs at least 3 points")

        report = FinancialTrendReport(
            expense_trends=overall.expense_trends,
            income_trends=overall.income_trends,
            overall_trends=overall,
            seasonality=seasonality,
            anomalies=anomalies,
            predictions=predictions,
            insights=generate_trend_insights(overall.expense_trends, overall.income_trends),
            metadata={**(metadata or {}), "options": options.to_dict()},
        )

        self.logger.info(
            "Trend analysis complete: expenses %s, income %s, risk %s, health %d",
            overall.expense_trends.trend.value,
            overall.income_trends.trend.value,
            overall.risk_level.value,
            overall.financial_health,
        )
        return report
