#!/usr/bin/env python3
"""
Trend Analysis Result Cache

Optional memoization layer owned by the caller. Reports are keyed by
(user_id, date_range) and expire after a time-to-live. The engine itself never
reads or writes this cache.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..core.config import CacheConfig, get_config
from ..core.models import AnalysisOptions, FinancialTrendReport, SeriesPoint, TransactionPoint
from .engine import TrendAnalysisEngine

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str]


@dataclass(frozen=True)
class CacheEntry:
    """Cached report and the clock reading when it was stored."""

    report: FinancialTrendReport
    stored_at: float


class TrendAnalysisCache:
    """
    In-memory report cache with a time-to-live.

    Not synchronized: each caller owns its own instance.
    """

    def __init__(self, ttl_seconds: float = 3600.0, clock: Callable[[], float] = time.monotonic):
        """Initialize cache with a TTL and a clock (seconds, monotonic by default)."""
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}

    @classmethod
    def from_config(cls, config: CacheConfig | None = None) -> "TrendAnalysisCache":
        """Create a cache using the configured TTL (default: global configuration)."""
        if config is None:
            config = get_config().cache
        return cls(ttl_seconds=config.ttl_seconds)

    def get(self, user_id: str, date_range: str) -> FinancialTrendReport | None:
        """Cached report, or None when missing or expired."""
        key = (user_id, date_range)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self.clock() - entry.stored_at > self.ttl_seconds:
            del self._entries[key]
            return None

        return entry.report

    def set(self, user_id: str, date_range: str, report: FinancialTrendReport) -> None:
        """Store a report."""
        self._entries[(user_id, date_range)] = CacheEntry(report=report, stored_at=self.clock())

    def invalidate(self, user_id: str | None = None) -> int:
        """
        Drop cached reports.

        Args:
            user_id: Only drop this user's reports (default: drop everything)

        Returns:
            Number of entries removed
        """
        if user_id is None:
            removed = len(self._entries)
            self._entries.clear()
            return removed

        keys = [key for key in self._entries if key[0] == user_id]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def clear(self) -> None:
        """Drop every cached report."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class CachedTrendAnalyzer:
    """Wraps a TrendAnalysisEngine with a per-(user, date range) report cache."""

    def __init__(self, engine: TrendAnalysisEngine, cache: TrendAnalysisCache | None = None):
        """Initialize with an engine and a cache (default: one built from the configured TTL)."""
        self.engine = engine
        self.cache = cache if cache is not None else TrendAnalysisCache.from_config()

    def analyze(
        self,
        user_id: str,
        date_range: str,
        expense_series: Iterable[SeriesPoint],
        income_series: Iterable[SeriesPoint],
        transactions: Iterable[TransactionPoint] = (),
        options: AnalysisOptions | None = None,
        force_refresh: bool = False,
    ) -> FinancialTrendReport:
        """
        Cached full trend analysis.

        The series are only analyzed on a cache miss (or when force_refresh is
        set); the resulting report is stored for later calls.
        """
        if not force_refresh:
            cached = self.cache.get(user_id, date_range)
            if cached is not None:
                logger.debug(f"Trend analysis cache hit for {user_id}/{date_range}")
                return cached

        report = self.engine.analyze_financial_trends(
            expense_series,
            income_series,
            transactions,
            options=options,
            metadata={"user_id": user_id, "date_range": date_range},
        )
        self.cache.set(user_id, date_range, report)
        return report
