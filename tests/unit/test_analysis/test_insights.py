#!/usr/bin/env python3
"""Tests for net cash flow trends, health score, risk and insights."""

import pytest

from financeflow.analysis.insights import (
    analyze_overall_trends,
    assess_financial_risk,
    assess_trend_sustainability,
    calculate_financial_health_score,
    calculate_net_cash_flow_trends,
    generate_trend_insights,
    generate_trend_recommendations,
    sort_insights,
)
from financeflow.analysis.trend import TrendThresholds
from financeflow.core.models import (
    Insight,
    InsightType,
    Priority,
    RiskLevel,
    SeasonalPattern,
    SeriesPoint,
    Sustainability,
    TrendDirection,
    TrendResult,
)


def make_trend(
    trend: TrendDirection = TrendDirection.STABLE,
    slope: float = 0.0,
    volatility: float = 0.4,
    confidence: float = 0.9,
    data_points: int = 6,
) -> TrendResult:
    """TrendResult with only the fields the insight rules look at."""
    return TrendResult(
        trend=trend,
        slope=slope,
        intercept=0.0,
        r_squared=0.9,
        volatility=volatility,
        confidence=confidence,
        trend_strength=0.5,
        seasonal_pattern=SeasonalPattern.INSUFFICIENT_DATA,
        data_points=data_points,
    )


class TestNetCashFlowTrends:
    """Test calculate_net_cash_flow_trends function."""

    def test_rising_expenses_against_flat_income(self, rising_expenses, flat_income):
        """Test net cash flow falls as expenses rise."""
        result = calculate_net_cash_flow_trends(rising_expenses, flat_income)

        assert [d.net for d in result.data] == [400.0, 300.0, 200.0, 100.0]
        assert result.trend == TrendDirection.DECREASING
        assert result.slope == pytest.approx(-100.0)
        assert result.average_net == pytest.approx(250.0)

    def test_missing_periods_count_as_zero(self):
        """Test periods present on one side only."""
        expenses = [SeriesPoint("2024-01", 100.0), SeriesPoint("2024-02", 100.0)]
        income = [SeriesPoint("2024-02", 300.0), SeriesPoint("2024-03", 300.0)]

        result = calculate_net_cash_flow_trends(expenses, income)

        assert [d.period for d in result.data] == ["2024-01", "2024-02", "2024-03"]
        assert [(d.income, d.expense, d.net) for d in result.data] == [
            (0.0, 100.0, -100.0),
            (300.0, 100.0, 200.0),
            (300.0, 0.0, 300.0),
        ]

    def test_duplicate_period_uses_first_amount(self):
        """Test a repeated period keeps its first amount."""
        expenses = [SeriesPoint("2024-01", 100.0), SeriesPoint("2024-01", 999.0)]

        result = calculate_net_cash_flow_trends(expenses, [])

        assert len(result.data) == 1
        assert result.data[0].expense == 100.0

    def test_no_periods(self):
        """Test two empty series give no net trend."""
        assert calculate_net_cash_flow_trends([], []) is None


class TestFinancialHealthScore:
    """Test calculate_financial_health_score function."""

    def test_neutral(self):
        """Test stable trends with moderate volatility keep the base score."""
        assert calculate_financial_health_score(make_trend(), make_trend(), None) == 50

    def test_best_case(self):
        """Test every favorable signal adds up to 100."""
        net = calculate_net_cash_flow_trends([], [SeriesPoint(f"2024-0{m}", m * 100.0) for m in range(1, 5)])
        expense = make_trend(TrendDirection.DECREASING, volatility=0.1)
        income = make_trend(TrendDirection.INCREASING)

        assert net.trend == TrendDirection.INCREASING
        assert calculate_financial_health_score(expense, income, net) == 100

    def test_worst_case(self, rising_expenses, flat_income):
        """Test every unfavorable signal brings the score down to 0."""
        net = calculate_net_cash_flow_trends(rising_expenses, flat_income)
        expense = make_trend(TrendDirection.INCREASING, volatility=0.9)
        income = make_trend(TrendDirection.DECREASING)

        assert calculate_financial_health_score(expense, income, net) == 0


class TestAssessFinancialRisk:
    """Test assess_financial_risk function."""

    def test_no_factors(self):
        """Test reliable stable trends are low risk."""
        level, factors = assess_financial_risk(make_trend(), make_trend())

        assert level == RiskLevel.LOW
        assert factors == []

    def test_one_factor(self):
        """Test a single factor raises risk to medium."""
        level, factors = assess_financial_risk(make_trend(TrendDirection.INCREASING, slope=10.0), make_trend())

        assert level == RiskLevel.MEDIUM
        assert factors == ["Expenses are trending up"]

    def test_escalation_caps_at_high(self):
        """Test every factor present still gives high risk."""
        expense = make_trend(TrendDirection.INCREASING, volatility=0.9, confidence=0.2)
        income = make_trend(TrendDirection.DECREASING)

        level, factors = assess_financial_risk(expense, income)

        assert level == RiskLevel.HIGH
        assert factors == [
            "High expense volatility",
            "Income is trending down",
            "Expenses are trending up",
            "Low trend reliability",
        ]

    def test_low_income_reliability(self):
        """Test low confidence on either series is a risk factor."""
        _, factors = assess_financial_risk(make_trend(), make_trend(confidence=0.1))

        assert factors == ["Low trend reliability"]


class TestSustainability:
    """Test assess_trend_sustainability function."""

    def test_sustainable(self):
        """Test stable trends are sustainable."""
        result = assess_trend_sustainability(make_trend(), make_trend())

        assert result.sustainability == Sustainability.SUSTAINABLE
        assert result.factors == []

    def test_fast_growing_expenses(self):
        """Test expenses growing faster than the slope limit are unsustainable."""
        result = assess_trend_sustainability(make_trend(TrendDirection.INCREASING, slope=25.0), make_trend())

        assert result.sustainability == Sustainability.UNSUSTAINABLE

    def test_volatility_overrides(self):
        """Test high volatility marks the trends risky even when unsustainable."""
        expense = make_trend(TrendDirection.INCREASING, slope=25.0)
        income = make_trend(volatility=0.85)

        result = assess_trend_sustainability(expense, income)

        assert result.sustainability == Sustainability.RISKY
        assert len(result.factors) == 2


class TestInsightsAndRecommendations:
    """Test insight and recommendation generation."""

    def test_recommendations_priority_order(self):
        """Test critical recommendations come first."""
        expense = make_trend(TrendDirection.INCREASING, volatility=0.65)
        income = make_trend(TrendDirection.DECREASING)

        recommendations = generate_trend_recommendations(expense, income)

        assert [r.priority for r in recommendations] == [Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM]
        assert recommendations[0].type == InsightType.DANGER

    def test_no_recommendations_when_healthy(self):
        """Test stable, calm trends need no recommendations."""
        assert generate_trend_recommendations(make_trend(), make_trend()) == []

    def test_insights(self):
        """Test insights for rising expenses and falling income."""
        insights = generate_trend_insights(
            make_trend(TrendDirection.INCREASING), make_trend(TrendDirection.DECREASING)
        )

        assert [i.title for i in insights] == ["Income is falling", "Spending is rising"]
        assert insights[0].priority == Priority.HIGH
        assert insights[1].details["slope"] == 0.0

    def test_insights_skip_empty_series(self):
        """Test series without data points produce no insights."""
        empty = make_trend(volatility=0.9, data_points=0)

        assert generate_trend_insights(empty, empty) == []

    def test_sort_is_stable(self):
        """Test equal priorities keep their input order."""
        first = Insight(InsightType.INFO, "first", "", Priority.MEDIUM)
        second = Insight(InsightType.INFO, "second", "", Priority.MEDIUM)
        urgent = Insight(InsightType.DANGER, "urgent", "", Priority.CRITICAL)

        assert [i.title for i in sort_insights([first, second, urgent])] == ["urgent", "first", "second"]


class TestAnalyzeOverallTrends:
    """Test analyze_overall_trends function."""

    def test_rising_expenses_with_flat_income(self, rising_expenses, flat_income):
        """Test the combined view of rising expenses and flat income."""
        result = analyze_overall_trends(rising_expenses, flat_income)

        assert result.expense_trends.trend == TrendDirection.INCREASING
        assert result.income_trends.trend == TrendDirection.STABLE
        assert result.net_cash_flow.trend == TrendDirection.DECREASING
        # 50 - 15 (rising expenses) - 10 (falling net)
        assert result.financial_health == 25
        assert result.risk_level == RiskLevel.HIGH
        assert result.risk_factors == ["Expenses are trending up", "Low trend reliability"]
        assert result.sustainability.sustainability == Sustainability.UNSUSTAINABLE
        assert [r.title for r in result.recommendations] == ["Spending control"]

    def test_empty_series(self):
        """Test empty input yields neutral trends and no net cash flow."""
        result = analyze_overall_trends([], [])

        assert result.net_cash_flow is None
        assert result.expense_trends.data_points == 0
        assert 0 <= result.financial_health <= 100

    def test_health_stays_in_range(self):
        """Test health score bounds for extreme inputs."""
        spiky = [SeriesPoint(f"2024-{m:02d}", amount) for m, amount in enumerate([5.0, 900.0, 1.0, 1200.0], 1)]
        result = analyze_overall_trends(spiky, [])

        assert 0 <= result.financial_health <= 100

    def test_thresholds_change_classification(self, rising_expenses, flat_income):
        """Test thresholds flow through to every trend."""
        result = analyze_overall_trends(rising_expenses, flat_income, TrendThresholds(slope=1000.0))

        assert result.expense_trends.trend == TrendDirection.STABLE
        assert result.net_cash_flow.trend == TrendDirection.STABLE
