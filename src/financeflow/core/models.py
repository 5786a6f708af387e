#!/usr/bin/env python3
"""
Core Data Models for FinanceFlow Trend Analysis

Input records (series points, transactions) and the result types produced by
the analysis engine. Amounts are float64 throughout; every result type can be
rendered to a plain dict with to_dict() and rebuilt with from_dict() without
any loss of numeric precision.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .dates import FinancialDate


class TransactionType(Enum):
    """Types of financial transactions."""

    EXPENSE = "expense"
    INCOME = "income"
    TRANSFER = "transfer"


class TrendDirection(Enum):
    """Direction of a fitted trend line."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class SeasonalPattern(Enum):
    """Autocorrelation-based seasonality of a per-period series."""

    INSUFFICIENT_DATA = "insufficient_data"
    NO_SEASONAL = "no_seasonal"
    MODERATE_SEASONAL = "moderate_seasonal"
    STRONG_SEASONAL = "strong_seasonal"


class SeasonalStrengthLevel(Enum):
    """Spread of monthly totals around their mean."""

    WEAK = "weak"  # <= 0.2
    MODERATE = "moderate"  # 0.2 - 0.5
    STRONG = "strong"  # > 0.5


class AnomalySeverity(Enum):
    """Severity tiers for flagged transactions, by z-score."""

    LOW = "low"
    MEDIUM = "medium"  # > 2.5
    HIGH = "high"  # > 3
    CRITICAL = "critical"  # > 4


class AnomalyType(Enum):
    """Whether an anomalous amount lies above or below the mean."""

    SPIKE = "spike"
    DROP = "drop"


class InsightType(Enum):
    """Tone of an insight or recommendation."""

    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    INFO = "info"


class Priority(Enum):
    """Priority of an insight or recommendation."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskLevel(Enum):
    """Overall financial risk."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Sustainability(Enum):
    """Whether the current expense/income trends can continue."""

    SUSTAINABLE = "sustainable"
    RISKY = "risky"
    UNSUSTAINABLE = "unsustainable"


@dataclass(frozen=True)
class SeriesPoint:
    """One (period, amount) observation produced by the period aggregator."""

    period: str
    amount: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"period": self.period, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeriesPoint":
        """Create SeriesPoint from dictionary."""
        return cls(period=str(data["period"]), amount=float(data["amount"]))


@dataclass(frozen=True)
class TransactionPoint:
    """
    Raw transaction record consumed by seasonality and anomaly detection.

    Amounts keep the sign convention of the upstream source; the detectors
    never take absolute values.
    """

    date: FinancialDate
    amount: float
    type: TransactionType = TransactionType.EXPENSE
    id: str | None = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "date": self.date.to_iso_string(),
            "amount": self.amount,
            "type": self.type.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransactionPoint":
        """
        Create TransactionPoint from dictionary.

        Raises:
            KeyError: If "date" or "amount" is missing
            ValueError: If the date, amount or type cannot be parsed
        """
        return cls(
            date=FinancialDate.coerce(data["date"]),
            amount=float(data["amount"]),
            type=TransactionType(data.get("type") or TransactionType.EXPENSE.value),
            id=str(data["id"]) if data.get("id") is not None else None,
            description=data.get("description"),
        )


@dataclass(frozen=True)
class RegressionResult:
    """Ordinary least-squares fit of amount against period index."""

    slope: float = 0.0
    intercept: float = 0.0
    r_squared: float = 0.0

    def predict(self, x: float) -> float:
        """Evaluate the fitted line at x."""
        return self.slope * x + self.intercept

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"slope": self.slope, "intercept": self.intercept, "r_squared": self.r_squared}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegressionResult":
        """Create RegressionResult from dictionary."""
        return cls(slope=data["slope"], intercept=data["intercept"], r_squared=data["r_squared"])


@dataclass(frozen=True)
class Breakpoint:
    """Index in a series where the local mean shifts significantly."""

    index: int
    change: float  # relative to before_mean
    before_mean: float
    after_mean: float
    significance: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "change": self.change,
            "before_mean": self.before_mean,
            "after_mean": self.after_mean,
            "significance": self.significance,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Breakpoint":
        """Create Breakpoint from dictionary."""
        return cls(
            index=data["index"],
            change=data["change"],
            before_mean=data["before_mean"],
            after_mean=data["after_mean"],
            significance=data["significance"],
        )


@dataclass(frozen=True)
class TrendResult:
    """Trend analysis of a single (expense or income) series."""

    trend: TrendDirection
    slope: float
    intercept: float
    r_squared: float
    volatility: float
    confidence: float
    trend_strength: float
    seasonal_pattern: SeasonalPattern
    breakpoints: list[Breakpoint] = field(default_factory=list)
    data_points: int = 0

    @classmethod
    def empty(cls) -> "TrendResult":
        """Result for a series with no data points."""
        return cls(
            trend=TrendDirection.STABLE,
            slope=0.0,
            intercept=0.0,
            r_squared=0.0,
            volatility=0.0,
            confidence=0.0,
            trend_strength=0.0,
            seasonal_pattern=SeasonalPattern.INSUFFICIENT_DATA,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "trend": self.trend.value,
            "slope": self.slope,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "volatility": self.volatility,
            "confidence": self.confidence,
            "trend_strength": self.trend_strength,
            "seasonal_pattern": self.seasonal_pattern.value,
            "breakpoints": [bp.to_dict() for bp in self.breakpoints],
            "data_points": self.data_points,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TrendResult":
        """Create TrendResult from dictionary."""
        return cls(
            trend=TrendDirection(data["trend"]),
            slope=data["slope"],
            intercept=data["intercept"],
            r_squared=data["r_squared"],
            volatility=data["volatility"],
            confidence=data["confidence"],
            trend_strength=data["trend_strength"],
            seasonal_pattern=SeasonalPattern(data["seasonal_pattern"]),
            breakpoints=[Breakpoint.from_dict(bp) for bp in data.get("breakpoints", [])],
            data_points=data.get("data_points", 0),
        )


@dataclass(frozen=True)
class AnomalyRecord:
    """A transaction whose amount lies unusually far from the mean."""

    transaction: TransactionPoint
    z_score: float
    severity: AnomalySeverity
    type: AnomalyType
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "transaction": self.transaction.to_dict(),
            "z_score": self.z_score,
            "severity": self.severity.value,
            "type": self.type.value,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnomalyRecord":
        """Create AnomalyRecord from dictionary."""
        return cls(
            transaction=TransactionPoint.from_dict(data["transaction"]),
            z_score=data["z_score"],
            severity=AnomalySeverity(data["severity"]),
            type=AnomalyType(data["type"]),
            explanation=data["explanation"],
        )


@dataclass(frozen=True)
class SeasonalityResult:
    """Monthly totals and the months that stand out."""

    seasonal_index: dict[str, float]
    seasonal_strength: float
    peak_months: list[str]
    low_months: list[str]
    pattern: SeasonalStrengthLevel

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "seasonal_index": dict(self.seasonal_index),
            "seasonal_strength": self.seasonal_strength,
            "peak_months": list(self.peak_months),
            "low_months": list(self.low_months),
            "pattern": self.pattern.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeasonalityResult":
        """Create SeasonalityResult from dictionary."""
        return cls(
            seasonal_index=dict(data["seasonal_index"]),
            seasonal_strength=data["seasonal_strength"],
            peak_months=list(data["peak_months"]),
            low_months=list(data["low_months"]),
            pattern=SeasonalStrengthLevel(data["pattern"]),
        )


@dataclass(frozen=True)
class ConfidenceInterval:
    """Lower/upper bounds around a predicted value."""

    lower: float
    upper: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"lower": self.lower, "upper": self.upper}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConfidenceInterval":
        """Create ConfidenceInterval from dictionary."""
        return cls(lower=data["lower"], upper=data["upper"])


@dataclass(frozen=True)
class PredictionPoint:
    """Projected value for one future period."""

    period_label: str
    predicted_value: float
    confidence_interval: ConfidenceInterval
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "period_label": self.period_label,
            "predicted_value": self.predicted_value,
            "confidence_interval": self.confidence_interval.to_dict(),
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PredictionPoint":
        """Create PredictionPoint from dictionary."""
        return cls(
            period_label=data["period_label"],
            predicted_value=data["predicted_value"],
            confidence_interval=ConfidenceInterval.from_dict(data["confidence_interval"]),
            confidence=data["confidence"],
        )


@dataclass(frozen=True)
class Forecast:
    """Predictions for one series together with the model that produced them."""

    predictions: list[PredictionPoint]
    model: RegressionResult

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "predictions": [p.to_dict() for p in self.predictions],
            "model": self.model.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Forecast":
        """Create Forecast from dictionary."""
        return cls(
            predictions=[PredictionPoint.from_dict(p) for p in data["predictions"]],
            model=RegressionResult.from_dict(data["model"]),
        )


@dataclass(frozen=True)
class NetCashFlowPoint:
    """Projected income, expense and their difference for one future period."""

    period_label: str
    predicted_net: float
    predicted_income: float
    predicted_expense: float
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "period_label": self.period_label,
            "predicted_net": self.predicted_net,
            "predicted_income": self.predicted_income,
            "predicted_expense": self.predicted_expense,
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetCashFlowPoint":
        """Create NetCashFlowPoint from dictionary."""
        return cls(
            period_label=data["period_label"],
            predicted_net=data["predicted_net"],
            predicted_income=data["predicted_income"],
            predicted_expense=data["predicted_expense"],
            confidence=data["confidence"],
        )


@dataclass(frozen=True)
class NetCashFlowPrediction:
    """Net cash flow projection built from paired income/expense forecasts."""

    predictions: list[NetCashFlowPoint]
    average_net: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "predictions": [p.to_dict() for p in self.predictions],
            "average_net": self.average_net,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetCashFlowPrediction":
        """Create NetCashFlowPrediction from dictionary."""
        return cls(
            predictions=[NetCashFlowPoint.from_dict(p) for p in data["predictions"]],
            average_net=data["average_net"],
        )


@dataclass(frozen=True)
class Scenario:
    """Central forecasts scaled by fixed expense/income multipliers."""

    name: str
    description: str
    expense_multiplier: float
    income_multiplier: float
    predictions: list[NetCashFlowPoint]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "expense_multiplier": self.expense_multiplier,
            "income_multiplier": self.income_multiplier,
            "predictions": [p.to_dict() for p in self.predictions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Scenario":
        """Create Scenario from dictionary."""
        return cls(
            name=data["name"],
            description=data["description"],
            expense_multiplier=data["expense_multiplier"],
            income_multiplier=data["income_multiplier"],
            predictions=[NetCashFlowPoint.from_dict(p) for p in data["predictions"]],
        )


@dataclass(frozen=True)
class PredictionAssumption:
    """Statement of the trend a forecast assumes will continue."""

    type: str
    assumption: str
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"type": self.type, "assumption": self.assumption, "confidence": self.confidence}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PredictionAssumption":
        """Create PredictionAssumption from dictionary."""
        return cls(type=data["type"], assumption=data["assumption"], confidence=data["confidence"])


@dataclass(frozen=True)
class PredictionReport:
    """All forecasts for an expense/income pair."""

    expenses: Forecast | None
    income: Forecast | None
    net_cash_flow: NetCashFlowPrediction | None
    confidence: float
    assumptions: list[PredictionAssumption] = field(default_factory=list)
    scenarios: list[Scenario] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "expenses": self.expenses.to_dict() if self.expenses else None,
            "income": self.income.to_dict() if self.income else None,
            "net_cash_flow": self.net_cash_flow.to_dict() if self.net_cash_flow else None,
            "confidence": self.confidence,
            "assumptions": [a.to_dict() for a in self.assumptions],
            "scenarios": [s.to_dict() for s in self.scenarios] if self.scenarios is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PredictionReport":
        """Create PredictionReport from dictionary."""
        return cls(
            expenses=Forecast.from_dict(data["expenses"]) if data.get("expenses") else None,
            income=Forecast.from_dict(data["income"]) if data.get("income") else None,
            net_cash_flow=(
                NetCashFlowPrediction.from_dict(data["net_cash_flow"]) if data.get("net_cash_flow") else None
            ),
            confidence=data["confidence"],
            assumptions=[PredictionAssumption.from_dict(a) for a in data.get("assumptions", [])],
            scenarios=(
                [Scenario.from_dict(s) for s in data["scenarios"]] if data.get("scenarios") is not None else None
            ),
        )


@dataclass(frozen=True)
class Insight:
    """Human-facing insight or recommendation."""

    type: InsightType
    title: str
    message: str
    priority: Priority
    details: dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "priority": self.priority.value,
            "details": dict(self.details),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Insight":
        """Create Insight from dictionary."""
        return cls(
            type=InsightType(data["type"]),
            title=data["title"],
            message=data["message"],
            priority=Priority(data["priority"]),
            details=dict(data.get("details", {})),
        )


@dataclass(frozen=True)
class NetCashFlowPeriod:
    """Historical income, expense and net for one period."""

    period: str
    net: float
    income: float
    expense: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"period": self.period, "net": self.net, "income": self.income, "expense": self.expense}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetCashFlowPeriod":
        """Create NetCashFlowPeriod from dictionary."""
        return cls(period=data["period"], net=data["net"], income=data["income"], expense=data["expense"])


@dataclass(frozen=True)
class NetCashFlowTrend:
    """Trend of historical net cash flow (income minus expense)."""

    data: list[NetCashFlowPeriod]
    trend: TrendDirection
    slope: float
    r_squared: float
    average_net: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "data": [d.to_dict() for d in self.data],
            "trend": self.trend.value,
            "slope": self.slope,
            "r_squared": self.r_squared,
            "average_net": self.average_net,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetCashFlowTrend":
        """Create NetCashFlowTrend from dictionary."""
        return cls(
            data=[NetCashFlowPeriod.from_dict(d) for d in data["data"]],
            trend=TrendDirection(data["trend"]),
            slope=data["slope"],
            r_squared=data["r_squared"],
            average_net=data["average_net"],
        )


@dataclass(frozen=True)
class SustainabilityAssessment:
    """Sustainability verdict and the factors behind it."""

    sustainability: Sustainability
    factors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"sustainability": self.sustainability.value, "factors": list(self.factors)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SustainabilityAssessment":
        """Create SustainabilityAssessment from dictionary."""
        return cls(sustainability=Sustainability(data["sustainability"]), factors=list(data["factors"]))


@dataclass(frozen=True)
class OverallTrends:
    """Combined view of the expense and income trends."""

    expense_trends: TrendResult
    income_trends: TrendResult
    net_cash_flow: NetCashFlowTrend | None
    financial_health: int
    risk_level: RiskLevel
    risk_factors: list[str]
    sustainability: SustainabilityAssessment
    recommendations: list[Insight]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "expense_trends": self.expense_trends.to_dict(),
            "income_trends": self.income_trends.to_dict(),
            "net_cash_flow": self.net_cash_flow.to_dict() if self.net_cash_flow else None,
            "financial_health": self.financial_health,
            "risk_level": self.risk_level.value,
            "risk_factors": list(self.risk_factors),
            "sustainability": self.sustainability.to_dict(),
            "recommendations": [r.to_dict() for r in self.recommendations],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OverallTrends":
        """Create OverallTrends from dictionary."""
        return cls(
            expense_trends=TrendResult.from_dict(data["expense_trends"]),
            income_trends=TrendResult.from_dict(data["income_trends"]),
            net_cash_flow=NetCashFlowTrend.from_dict(data["net_cash_flow"]) if data.get("net_cash_flow") else None,
            financial_health=data["financial_health"],
            risk_level=RiskLevel(data["risk_level"]),
            risk_factors=list(data["risk_factors"]),
            sustainability=SustainabilityAssessment.from_dict(data["sustainability"]),
            recommendations=[Insight.from_dict(r) for r in data["recommendations"]],
        )


@dataclass(frozen=True)
class AnalysisOptions:
    """Switches for the optional parts of a full trend analysis."""

    include_predictions: bool = True
    include_seasonality: bool = True
    include_anomalies: bool = True
    confidence_level: float = 0.95
    periods_ahead: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "include_predictions": self.include_predictions,
            "include_seasonality": self.include_seasonality,
            "include_anomalies": self.include_anomalies,
            "confidence_level": self.confidence_level,
            "periods_ahead": self.periods_ahead,
        }


@dataclass(frozen=True)
class FinancialTrendReport:
    """Complete output of a trend analysis run."""

    expense_trends: TrendResult
    income_trends: TrendResult
    overall_trends: OverallTrends
    seasonality: SeasonalityResult | None
    anomalies: list[AnomalyRecord] | None
    predictions: PredictionReport | None
    insights: list[Insight]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "expense_trends": self.expense_trends.to_dict(),
            "income_trends": self.income_trends.to_dict(),
            "overall_trends": self.overall_trends.to_dict(),
            "seasonality": self.seasonality.to_dict() if self.seasonality else None,
            "anomalies": [a.to_dict() for a in self.anomalies] if self.anomalies is not None else None,
            "predictions": self.predictions.to_dict() if self.predictions else None,
            "insights": [i.to_dict() for i in self.insights],
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FinancialTrendReport":
        """Create FinancialTrendReport from dictionary."""
        return cls(
            expense_trends=TrendResult.from_dict(data["expense_trends"]),
            income_trends=TrendResult.from_dict(data["income_trends"]),
            overall_trends=OverallTrends.from_dict(data["overall_trends"]),
            seasonality=SeasonalityResult.from_dict(data["seasonality"]) if data.get("seasonality") else None,
            anomalies=(
                [AnomalyRecord.from_dict(a) for a in data["anomalies"]] if data.get("anomalies") is not None else None
            ),
            predictions=PredictionReport.from_dict(data["predictions"]) if data.get("predictions") else None,
            insights=[Insight.from_dict(i) for i in data.get("insights", [])],
            metadata=dict(data.get("metadata", {})),
        )
