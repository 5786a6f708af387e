#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with the period keys used to bucket transactions
(day, ISO week, month, quarter).
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        ISO timestamps ("2024-08-15T10:30:00Z") are accepted with the default
        format; only the calendar date is kept.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        if format == "%Y-%m-%d" and len(date_str) > 10 and date_str[10] in "T ":
            date_str = date_str[:10]
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def coerce(cls, value: "FinancialDate | date | str") -> "FinancialDate":
        """Build a FinancialDate from a date, datetime or ISO string."""
        if isinstance(value, FinancialDate):
            return value
        if isinstance(value, datetime):
            return cls(date=value.date())
        if isinstance(value, date):
            return cls(date=value)
        return cls.from_string(str(value))

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Format as YYYY-MM."""
        return f"{self.date.year}-{self.date.month:02d}"

    def quarter_key(self) -> str:
        """Format as YYYY-Qn."""
        return f"{self.date.year}-Q{(self.date.month - 1) // 3 + 1}"

    def week_key(self) -> str:
        """Format as ISO week YYYY-Www (the ISO year can differ from the calendar year)."""
        iso_year, iso_week, _ = self.date.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()
