#!/usr/bin/env python3
"""
Insights, Risk and Financial Health

Combines the expense, income and net cash flow trends into a health score, a
risk level, a sustainability verdict and prioritized insight records.
"""

from collections.abc import Iterable, Sequence

from ..core.models import (
    Insight,
    InsightType,
    NetCashFlowPeriod,
    NetCashFlowTrend,
    OverallTrends,
    Priority,
    RiskLevel,
    SeriesPoint,
    Sustainability,
    SustainabilityAssessment,
    TrendDirection,
    TrendResult,
)
from .regression import fit_indexed
from .trend import DEFAULT_THRESHOLDS, TrendThresholds, analyze_trend, classify_trend

BASE_HEALTH_SCORE = 50
TREND_SCORE = 15
STABILITY_SCORE = 10

HIGH_VOLATILITY = 0.7
LOW_VOLATILITY = 0.3
LOW_CONFIDENCE = 0.5
UNSUSTAINABLE_SLOPE = 0.1
RISKY_VOLATILITY = 0.8
UNSTABLE_SPENDING_VOLATILITY = 0.6
VOLATILE_SPENDING_INSIGHT = 0.5

PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}

RISK_LEVELS = (RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH)


def sort_insights(insights: Iterable[Insight]) -> list[Insight]:
    """Order insights critical first; equal priorities keep their order."""
    return sorted(insights, key=lambda insight: PRIORITY_RANK[insight.priority])


def _trend_details(trend: TrendResult) -> dict[str, float]:
    return {
        "slope": trend.slope,
        "r_squared": trend.r_squared,
        "volatility": trend.volatility,
        "confidence": trend.confidence,
    }


def calculate_net_cash_flow_trends(
    expense_series: Sequence[SeriesPoint],
    income_series: Sequence[SeriesPoint],
    thresholds: TrendThresholds = DEFAULT_THRESHOLDS,
) -> NetCashFlowTrend | None:
    """
    Trend of income minus expense over the union of both series' periods.

    A period present on only one side counts the other side as zero. If a
    period repeats within a series, its first amount is used.

    Returns:
        NetCashFlowTrend, or None when neither series has any points
    """
    expenses: dict[str, float] = {}
    for point in expense_series:
        expenses.setdefault(point.period, point.amount)
    incomes: dict[str, float] = {}
    for point in income_series:
        incomes.setdefault(point.period, point.amount)

    periods = sorted(set(expenses) | set(incomes))
    if not periods:
        return None

    data = []
    for period in periods:
        expense = expenses.get(period, 0.0)
        income = incomes.get(period, 0.0)
        data.append(NetCashFlowPeriod(period=period, net=income - expense, income=income, expense=expense))

    net_amounts = [d.net for d in data]
    regression = fit_indexed(net_amounts)

    return NetCashFlowTrend(
        data=data,
        trend=classify_trend(
            regression.slope,
            regression.r_squared,
            threshold=thresholds.slope,
            min_r_squared=thresholds.min_r_squared,
        ),
        slope=regression.slope,
        r_squared=regression.r_squared,
        average_net=sum(net_amounts) / len(net_amounts),
    )


def calculate_financial_health_score(
    expense: TrendResult,
    income: TrendResult,
    net: NetCashFlowTrend | None,
) -> int:
    """Score from 0 to 100, starting at 50 and adjusted by trend direction and volatility."""
    score = BASE_HEALTH_SCORE

    if expense.trend == TrendDirection.DECREASING:
        score += TREND_SCORE
    elif expense.trend == TrendDirection.INCREASING:
        score -= TREND_SCORE

    if income.trend == TrendDirection.INCREASING:
        score += TREND_SCORE
    elif income.trend == TrendDirection.DECREASING:
        score -= TREND_SCORE

    if expense.volatility < LOW_VOLATILITY:
        score += STABILITY_SCORE
    elif expense.volatility > HIGH_VOLATILITY:
        score -= STABILITY_SCORE

    if net is not None:
        if net.trend == TrendDirection.INCREASING:
            score += STABILITY_SCORE
        elif net.trend == TrendDirection.DECREASING:
            score -= STABILITY_SCORE

    return max(0, min(100, score))


def assess_financial_risk(expense: TrendResult, income: TrendResult) -> tuple[RiskLevel, list[str]]:
    """
    Risk level and the factors behind it.

    Each factor present raises the level one step (low -> medium -> high).
    """
    risk_factors = []

    if expense.volatility > HIGH_VOLATILITY:
        risk_factors.append("High expense volatility")
    if income.trend == TrendDirection.DECREASING:
        risk_factors.append("Income is trending down")
    if expense.trend == TrendDirection.INCREASING:
        risk_factors.append("Expenses are trending up")
    if expense.confidence < LOW_CONFIDENCE or income.confidence < LOW_CONFIDENCE:
        risk_factors.append("Low trend reliability")

    risk_level = RISK_LEVELS[min(len(risk_factors), len(RISK_LEVELS) - 1)]
    return risk_level, risk_factors


def assess_trend_sustainability(expense: TrendResult, income: TrendResult) -> SustainabilityAssessment:
    """Whether the current trends can continue; high volatility overrides to risky."""
    factors = []
    sustainability = Sustainability.SUSTAINABLE

    if expense.trend == TrendDirection.INCREASING and expense.slope > UNSUSTAINABLE_SLOPE:
        factors.append("Expenses are growing quickly")
        sustainability = Sustainability.UNSUSTAINABLE

    if income.trend == TrendDirection.DECREASING and income.slope < -UNSUSTAINABLE_SLOPE:
        factors.append("Income is falling quickly")
        sustainability = Sustainability.UNSUSTAINABLE

    if expense.volatility > RISKY_VOLATILITY or income.volatility > RISKY_VOLATILITY:
        factors.append("High volatility")
        sustainability = Sustainability.RISKY

    return SustainabilityAssessment(sustainability=sustainability, factors=factors)


def generate_trend_recommendations(expense: TrendResult, income: TrendResult) -> list[Insight]:
    """Actionable recommendations, highest priority first."""
    recommendations = []

    if expense.trend == TrendDirection.INCREASING:
        recommendations.append(
            Insight(
                type=InsightType.WARNING,
                title="Spending control",
                message="Your expenses are trending up. Review your budget plan.",
                priority=Priority.HIGH,
                details=_trend_details(expense),
            )
        )

    if income.trend == TrendDirection.DECREASING:
        recommendations.append(
            Insight(
                type=InsightType.DANGER,
                title="Grow your income",
                message="Your income is trending down. Look for new sources of income.",
                priority=Priority.CRITICAL,
                details=_trend_details(income),
            )
        )

    if expense.volatility > UNSTABLE_SPENDING_VOLATILITY:
        recommendations.append(
            Insight(
                type=InsightType.WARNING,
                title="Stabilize spending",
                message="Your spending fluctuates strongly. Set up a regular spending plan.",
                priority=Priority.MEDIUM,
                details={"volatility": expense.volatility},
            )
        )

    return sort_insights(recommendations)


def generate_trend_insights(expense: TrendResult, income: TrendResult) -> list[Insight]:
    """Observations about the expense and income trends, highest priority first."""
    insights = []

    if expense.data_points:
        if expense.trend == TrendDirection.INCREASING:
            insights.append(
                Insight(
                    type=InsightType.WARNING,
                    title="Spending is rising",
                    message="Your expenses keep increasing. If this continues it may strain your finances.",
                    priority=Priority.MEDIUM,
                    details=_trend_details(expense),
                )
            )
        elif expense.trend == TrendDirection.DECREASING:
            insights.append(
                Insight(
                    type=InsightType.SUCCESS,
                    title="Spending is falling",
                    message="Your expenses are trending down, a sign of good financial management.",
                    priority=Priority.LOW,
                    details=_trend_details(expense),
                )
            )

    if income.data_points:
        if income.trend == TrendDirection.INCREASING:
            insights.append(
                Insight(
                    type=InsightType.SUCCESS,
                    title="Income is rising",
                    message="Your income is trending up.",
                    priority=Priority.LOW,
                    details=_trend_details(income),
                )
            )
        elif income.trend == TrendDirection.DECREASING:
            insights.append(
                Insight(
                    type=InsightType.DANGER,
                    title="Income is falling",
                    message="Your income is trending down. Consider reviewing your income sources.",
                    priority=Priority.HIGH,
                    details=_trend_details(income),
                )
            )

    if expense.data_points and expense.volatility > VOLATILE_SPENDING_INSIGHT:
        insights.append(
            Insight(
                type=InsightType.WARNING,
                title="Volatile spending",
                message="Your spending varies a lot between periods, which makes budgeting harder.",
                priority=Priority.MEDIUM,
                details={"volatility": expense.volatility},
            )
        )

    return sort_insights(insights)


def analyze_overall_trends(
    expense_series: Sequence[SeriesPoint],
    income_series: Sequence[SeriesPoint],
    thresholds: TrendThresholds = DEFAULT_THRESHOLDS,
) -> OverallTrends:
    """
    Combined trend view of an expense series and an income series.

    Args:
        expense_series: Expense amounts per period
        income_series: Income amounts per period
        thresholds: Trend and breakpoint thresholds

    Returns:
        OverallTrends with both series' trends, net cash flow trend, health
        score, risk, sustainability and recommendations
    """
    expense = analyze_trend(expense_series, thresholds)
    income = analyze_trend(income_series, thresholds)
    net = calculate_net_cash_flow_trends(expense_series, income_series, thresholds)
    risk_level, risk_factors = assess_financial_risk(expense, income)

    return OverallTrends(
        expense_trends=expense,
        income_trends=income,
        net_cash_flow=net,
        financial_health=calculate_financial_health_score(expense, income, net),
        risk_level=risk_level,
        risk_factors=risk_factors,
        sustainability=assess_trend_sustainability(expense, income),
        recommendations=generate_trend_recommendations(expense, income),
    )
