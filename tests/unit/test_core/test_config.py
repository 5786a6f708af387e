#!/usr/bin/env python3
"""Tests for environment-based configuration."""

import pytest

from financeflow.core.config import (
    AnalysisConfig,
    Config,
    Environment,
    get_config,
    is_test,
    reload_config,
)


class TestConfig:
    """Test Config class."""

    def test_defaults(self):
        """Test default thresholds when no overrides are set."""
        config = Config.from_environment()

        assert config.environment == Environment.TEST
        assert config.analysis == AnalysisConfig()
        assert config.analysis.trend_slope_threshold == 0.05
        assert config.analysis.anomaly_z_threshold == 2.5
        assert config.cache.ttl_seconds == 3600.0
        assert config.log_level == "INFO"
        assert config.debug is False

    def test_environment_overrides(self, monkeypatch):
        """Test thresholds are read from environment variables."""
        monkeypatch.setenv("TREND_SLOPE_THRESHOLD", "0.2")
        monkeypatch.setenv("ANOMALY_Z_THRESHOLD", "3")
        monkeypatch.setenv("FORECAST_PERIODS", "6")
        monkeypatch.setenv("CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config.from_environment()

        assert config.analysis.trend_slope_threshold == 0.2
        assert config.analysis.anomaly_z_threshold == 3.0
        assert config.analysis.forecast_periods == 6
        assert config.cache.ttl_seconds == 60.0
        assert config.debug is True
        assert config.log_level == "DEBUG"

    def test_validate_defaults(self):
        """Test the default configuration is valid."""
        assert Config(environment=Environment.TEST).validate() == []

    def test_validate_errors(self):
        """Test out-of-range values are reported."""
        config = Config(
            environment=Environment.TEST,
            analysis=AnalysisConfig(trend_min_r_squared=1.5, forecast_periods=0, forecast_confidence=1.0),
            log_level="VERBOSE",
        )

        errors = config.validate()

        assert len(errors) == 4
        assert "Unknown log level: VERBOSE" in errors

    def test_to_dict(self):
        """Test configuration is flattened for display."""
        data = Config(environment=Environment.TEST).to_dict()

        assert data["environment"] == "test"
        assert data["analysis"]["forecast_confidence"] == 0.95
        assert data["cache"]["ttl_seconds"] == 3600.0


class TestGlobalConfig:
    """Test the global configuration accessors."""

    def test_get_config_is_cached(self):
        """Test repeated calls return the same instance."""
        assert get_config() is get_config()
        assert is_test()

    def test_reload_config(self, monkeypatch):
        """Test reload picks up environment changes."""
        first = get_config()
        monkeypatch.setenv("FORECAST_PERIODS", "12")

        reloaded = reload_config()

        assert reloaded is not first
        assert reloaded.analysis.forecast_periods == 12

    def test_invalid_environment_configuration(self, monkeypatch):
        """Test validation failures raise ValueError."""
        monkeypatch.setenv("FORECAST_CONFIDENCE", "1.5")

        with pytest.raises(ValueError, match="Configuration validation failed"):
            get_config()
