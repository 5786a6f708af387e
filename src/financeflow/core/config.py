#!/usr/bin/env python3
"""
Configuration Management for FinanceFlow Trends

Handles environment-based configuration of the analysis thresholds, forecast
defaults and logging. Supports multiple environments (development, test,
production).
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class AnalysisConfig:
    """Thresholds used by the trend analysis engine."""

    trend_slope_threshold: float = 0.05
    trend_min_r_squared: float = 0.1
    anomaly_z_threshold: float = 2.5
    breakpoint_change_threshold: float = 0.3
    forecast_periods: int = 3
    forecast_confidence: float = 0.95


@dataclass
class CacheConfig:
    """Result cache settings for callers that memoize analyses."""

    ttl_seconds: float = 3600.0


@dataclass
class Config:
    """
    Main configuration class for the trend analysis application.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Component configurations
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FINANCEFLOW_ENV", "development"))

        analysis = AnalysisConfig(
            trend_slope_threshold=float(os.getenv("TREND_SLOPE_THRESHOLD", "0.05")),
            trend_min_r_squared=float(os.getenv("TREND_MIN_R_SQUARED", "0.1")),
            anomaly_z_threshold=float(os.getenv("ANOMALY_Z_THRESHOLD", "2.5")),
            breakpoint_change_threshold=float(os.getenv("BREAKPOINT_CHANGE_THRESHOLD", "0.3")),
            forecast_periods=int(os.getenv("FORECAST_PERIODS", "3")),
            forecast_confidence=float(os.getenv("FORECAST_CONFIDENCE", "0.95")),
        )

        cache = CacheConfig(
            ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", "3600")),
        )

        return cls(
            environment=env,
            analysis=analysis,
            cache=cache,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.analysis.trend_slope_threshold < 0:
            errors.append("Trend slope threshold must be non-negative")
        if not 0 <= self.analysis.trend_min_r_squared <= 1:
            errors.append("Trend minimum R-squared must be between 0 and 1")
        if self.analysis.anomaly_z_threshold <= 0:
            errors.append("Anomaly z-score threshold must be positive")
        if self.analysis.breakpoint_change_threshold <= 0:
            errors.append("Breakpoint change threshold must be positive")
        if self.analysis.forecast_periods < 1:
            errors.append("Forecast periods must be at least 1")
        if not 0 < self.analysis.forecast_confidence < 1:
            errors.append("Forecast confidence must be between 0 and 1")
        if self.cache.ttl_seconds < 0:
            errors.append("Cache TTL must be non-negative")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("financeflow").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                result[field_name] = dict(field_value.__dict__)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
