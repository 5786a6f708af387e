"""
Core Utilities Package

Shared data models, configuration and utilities used by the analysis engine
and the command-line interface.

This package provides:
- Data models for series points, transactions and analysis results
- Configuration management for environment-specific settings
- Date handling and period aggregation of raw transactions
- JSON helpers for transaction exports and reports
"""

from .config import (
    AnalysisConfig,
    CacheConfig,
    Config,
    Environment,
    get_config,
    is_test,
    reload_config,
)
from .dates import FinancialDate
from .models import (
    AnalysisOptions,
    AnomalyRecord,
    AnomalySeverity,
    AnomalyType,
    Breakpoint,
    ConfidenceInterval,
    FinancialTrendReport,
    Forecast,
    Insight,
    InsightType,
    NetCashFlowPeriod,
    NetCashFlowPoint,
    NetCashFlowPrediction,
    NetCashFlowTrend,
    OverallTrends,
    PredictionAssumption,
    PredictionPoint,
    PredictionReport,
    Priority,
    RegressionResult,
    RiskLevel,
    Scenario,
    SeasonalityResult,
    SeasonalPattern,
    SeasonalStrengthLevel,
    SeriesPoint,
    Sustainability,
    SustainabilityAssessment,
    TransactionPoint,
    TransactionType,
    TrendDirection,
    TrendResult,
)
from .periods import aggregate_by_period, granularity_for_range, period_key, start_date_for_range

__all__ = [
    # Configuration
    "AnalysisConfig",
    "CacheConfig",
    "Config",
    "Environment",
    "get_config",
    "is_test",
    "reload_config",
    # Dates and periods
    "FinancialDate",
    "aggregate_by_period",
    "granularity_for_range",
    "period_key",
    "start_date_for_range",
    # Data models
    "AnalysisOptions",
    "AnomalyRecord",
    "AnomalySeverity",
    "AnomalyType",
    "Breakpoint",
    "ConfidenceInterval",
    "FinancialTrendReport",
    "Forecast",
    "Insight",
    "InsightType",
    "NetCashFlowPeriod",
    "NetCashFlowPoint",
    "NetCashFlowPrediction",
    "NetCashFlowTrend",
    "OverallTrends",
    "PredictionAssumption",
    "PredictionPoint",
    "PredictionReport",
    "Priority",
    "RegressionResult",
    "RiskLevel",
    "Scenario",
    "SeasonalPattern",
    "SeasonalStrengthLevel",
    "SeasonalityResult",
    "SeriesPoint",
    "Sustainability",
    "SustainabilityAssessment",
    "TransactionPoint",
    "TransactionType",
    "TrendDirection",
    "TrendResult",
]
