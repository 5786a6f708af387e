"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path

import pytest

from financeflow.core.models import SeriesPoint
from tests.fixtures.synthetic_data import make_series


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def rising_expenses() -> list[SeriesPoint]:
    """Four months of steadily rising expenses."""
    return make_series([100.0, 200.0, 300.0, 400.0])


@pytest.fixture
def flat_income() -> list[SeriesPoint]:
    """Four months of identical income."""
    return make_series([500.0, 500.0, 500.0, 500.0])


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("FINANCEFLOW_ENV", "test")
    for name in (
        "TREND_SLOPE_THRESHOLD",
        "TREND_MIN_R_SQUARED",
        "ANOMALY_Z_THRESHOLD",
        "BREAKPOINT_CHANGE_THRESHOLD",
        "FORECAST_PERIODS",
        "FORECAST_CONFIDENCE",
        "CACHE_TTL_SECONDS",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    # Each test starts from a fresh global configuration
    monkeypatch.setattr("financeflow.core.config._config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "forecast: Tests for forecasting and confidence intervals")
    config.addinivalue_line("markers", "anomalies: Tests for anomaly detection")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
