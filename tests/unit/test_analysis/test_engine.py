#!/usr/bin/env python3
"""Tests for the TrendAnalysisEngine facade."""

import json
import logging

import pytest

from financeflow.analysis import TrendAnalysisEngine
from financeflow.core.config import AnalysisConfig, Config, Environment
from financeflow.core.json_utils import format_json
from financeflow.core.models import AnalysisOptions, FinancialTrendReport, RiskLevel, TrendDirection, TrendResult
from tests.fixtures.synthetic_data import make_series, make_transactions


@pytest.fixture
def engine() -> TrendAnalysisEngine:
    return TrendAnalysisEngine()


class TestTrendAnalysisEngine:
    """Test TrendAnalysisEngine class."""

    def test_default_options_follow_config(self):
        """Test default options use the configured forecast settings."""
        engine = TrendAnalysisEngine(AnalysisConfig(forecast_periods=6, forecast_confidence=0.8))

        options = engine.default_options()

        assert options.periods_ahead == 6
        assert options.confidence_level == 0.8
        assert options.include_predictions

    def test_from_config(self):
        """Test construction from the application configuration."""
        config = Config(environment=Environment.TEST, analysis=AnalysisConfig(trend_slope_threshold=0.2))

        engine = TrendAnalysisEngine.from_config(config)

        assert engine.thresholds.slope == 0.2

    def test_full_report(self, engine, rising_expenses, flat_income):
        """Test every section is computed by default."""
        transactions = make_transactions([100.0] * 10 + [1000.0])

        report = engine.analyze_financial_trends(rising_expenses, flat_income, transactions)

        assert report.expense_trends.trend == TrendDirection.INCREASING
        assert report.income_trends.trend == TrendDirection.STABLE
        assert report.overall_trends.risk_level == RiskLevel.HIGH
        assert report.seasonality is not None
        assert len(report.anomalies) == 1
        assert report.predictions.net_cash_flow is not None
        assert [i.title for i in report.insights] == ["Spending is rising"]
        assert report.metadata["options"]["periods_ahead"] == 3

    def test_options_skip_sections(self, engine, rising_expenses, flat_income):
        """Test disabled sections are left empty."""
        options = AnalysisOptions(include_predictions=False, include_seasonality=False, include_anomalies=False)

        report = engine.analyze_financial_trends(rising_expenses, flat_income, [], options=options)

        assert report.seasonality is None
        assert report.anomalies is None
        assert report.predictions is None
        assert report.overall_trends is not None

    def test_metadata_is_copied(self, engine, rising_expenses, flat_income):
        """Test caller metadata is carried into the report."""
        report = engine.analyze_financial_trends(
            rising_expenses, flat_income, metadata={"user_id": "user-1", "date_range": "month"}
        )

        assert report.metadata["user_id"] == "user-1"
        assert report.metadata["date_range"] == "month"
        assert "options" in report.metadata

    def test_configured_anomaly_threshold(self, rising_expenses, flat_income):
        """Test the anomaly threshold comes from the engine configuration."""
        transactions = make_transactions([100.0] * 6 + [1000.0])

        default = TrendAnalysisEngine().detect_anomalies(transactions)
        sensitive = TrendAnalysisEngine(AnalysisConfig(anomaly_z_threshold=2.0)).detect_anomalies(transactions)

        assert default == []
        assert len(sensitive) == 1

    def test_predict_future_defaults(self, rising_expenses):
        """Test forecast defaults come from the configuration."""
        engine = TrendAnalysisEngine(AnalysisConfig(forecast_periods=5, forecast_confidence=0.9))

        predictions = engine.predict_future(rising_expenses)

        assert len(predictions) == 5
        assert predictions[0].confidence == 0.9
        assert len(engine.predict_future(rising_expenses, periods_ahead=2)) == 2

    def test_deterministic(self, engine, rising_expenses, flat_income):
        """Test identical input gives identical output."""
        transactions = make_transactions([120.0, 80.0, 95.0, 300.0, 110.0])

        first = engine.analyze_financial_trends(rising_expenses, flat_income, transactions)
        second = engine.analyze_financial_trends(rising_expenses, flat_income, transactions)

        assert first.to_dict() == second.to_dict()

    def test_logs_through_injected_logger(self, rising_expenses, flat_income, caplog):
        """Test progress is reported through the supplied logger."""
        logger = logging.getLogger("tests.trend_engine")
        engine = TrendAnalysisEngine(logger=logger)

        with caplog.at_level(logging.DEBUG, logger="tests.trend_engine"):
            engine.analyze_financial_trends(rising_expenses, flat_income)

        assert "Analyzing trends: 4 expense points, 4 income points, 0 transactions" in caplog.text
        assert "Trend analysis complete" in caplog.text

    def test_handles_empty_input(self, engine):
        """Test an analysis with no data still produces a report."""
        report = engine.analyze_financial_trends([], [])

        assert report.expense_trends.data_points == 0
        assert report.seasonality is None
        assert report.anomalies == []
        assert report.predictions.expenses is None
        assert report.insights == []


class TestReportSerialization:
    """Test reports survive a JSON round trip."""

    def test_report_round_trip(self, engine, rising_expenses, flat_income):
        """Test a report rebuilt from JSON equals the original."""
        transactions = make_transactions([100.0] * 10 + [1000.0])
        report = engine.analyze_financial_trends(rising_expenses, flat_income, transactions)

        rebuilt = FinancialTrendReport.from_dict(json.loads(format_json(report)))

        assert rebuilt.to_dict() == report.to_dict()

    def test_trend_result_round_trip(self, engine):
        """Test a trend result keeps every field through to_dict/from_dict."""
        result = engine.analyze_trend(make_series([100.0] * 10 + [200.0] * 10))

        assert TrendResult.from_dict(result.to_dict()) == result
