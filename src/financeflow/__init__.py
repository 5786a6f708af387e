"""
FinanceFlow Trends - Financial Trend and Forecast Analysis

Statistical analysis of personal-finance time series: given per-period expense
and income amounts (and the raw transactions behind them) it classifies trends,
measures volatility, detects seasonality, anomalies and breakpoints, and
projects future values with confidence bounds.

Key Features:
- Least-squares trend classification with fit-quality gating
- Coefficient-of-variation volatility and adjusted-R² confidence
- Monthly seasonality and z-score anomaly detection
- Multi-period forecasts, net cash flow projection and scenarios
- Financial health score, risk level and prioritized insights

Domain Packages:
- core: Data models, configuration, dates and period aggregation
- analysis: The trend analysis engine
- cli: Command-line interface

Example Usage:
    from financeflow import TrendAnalysisEngine, SeriesPoint

    engine = TrendAnalysisEngine()
    overall = engine.analyze_overall_trends(expense_series, income_series)
"""

__version__ = "0.3.0"
__author__ = "FinanceFlow Team"

from .analysis import (
    CachedTrendAnalyzer,
    TrendAnalysisCache,
    TrendAnalysisEngine,
    analyze_overall_trends,
    analyze_seasonality,
    analyze_trend,
    detect_anomalies,
    predict_future,
)
from .core.config import Environment, get_config
from .core.models import FinancialTrendReport, SeriesPoint, TransactionPoint, TransactionType

__all__ = [
    # Engine
    "CachedTrendAnalyzer",
    "TrendAnalysisCache",
    "TrendAnalysisEngine",
    # Analysis functions
    "analyze_overall_trends",
    "analyze_seasonality",
    "analyze_trend",
    "detect_anomalies",
    "predict_future",
    # Models
    "FinancialTrendReport",
    "SeriesPoint",
    "TransactionPoint",
    "TransactionType",
    # Configuration
    "Environment",
    "get_config",
]
