"""
Financial Trend Analysis Package

Statistical analysis of expense and income series: trend classification,
volatility, seasonality, anomalies, breakpoints and forecasts.

Key Components:
- regression: Ordinary least-squares fit over an indexed series
- trend: Trend labels, volatility, confidence and trend strength
- seasonality: Monthly totals and lagged-product seasonality detection
- anomalies: Z-score outlier detection with severity tiers
- breakpoints: Sliding-window mean-shift detection
- forecast: Projections with confidence intervals, net cash flow and scenarios
- insights: Health score, risk, sustainability and recommendations
- engine: TrendAnalysisEngine facade producing the full report
- cache: Optional caller-owned report cache

The analysis functions are pure and deterministic; the cache is the only
stateful component and is owned by the caller.
"""

from .anomalies import classify_anomaly_severity, detect_anomalies
from .breakpoints import detect_breakpoints
from .cache import CachedTrendAnalyzer, TrendAnalysisCache
from .engine import TrendAnalysisEngine
from .forecast import (
    calculate_confidence_interval,
    forecast_series,
    generate_predictions,
    generate_scenarios,
    predict_future,
    predict_net_cash_flow,
)
from .insights import (
    analyze_overall_trends,
    assess_financial_risk,
    assess_trend_sustainability,
    calculate_financial_health_score,
    calculate_net_cash_flow_trends,
    generate_trend_insights,
    generate_trend_recommendations,
    sort_insights,
)
from .regression import calculate_linear_regression
from .seasonality import analyze_seasonality, calculate_autocorrelation, detect_seasonal_pattern
from .trend import (
    TrendThresholds,
    analyze_trend,
    calculate_confidence,
    calculate_trend_strength,
    calculate_volatility,
    classify_trend,
)

__all__ = [
    "CachedTrendAnalyzer",
    "TrendAnalysisCache",
    "TrendAnalysisEngine",
    "TrendThresholds",
    "analyze_overall_trends",
    "analyze_seasonality",
    "analyze_trend",
    "assess_financial_risk",
    "assess_trend_sustainability",
    "calculate_autocorrelation",
    "calculate_confidence",
    "calculate_confidence_interval",
    "calculate_financial_health_score",
    "calculate_linear_regression",
    "calculate_net_cash_flow_trends",
    "calculate_trend_strength",
    "calculate_volatility",
    "classify_anomaly_severity",
    "classify_trend",
    "detect_anomalies",
    "detect_breakpoints",
    "detect_seasonal_pattern",
    "forecast_series",
    "generate_predictions",
    "generate_scenarios",
    "generate_trend_insights",
    "generate_trend_recommendations",
    "predict_future",
    "predict_net_cash_flow",
    "sort_insights",
]
