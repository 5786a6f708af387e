"""Shared synthetic test data for the trend analysis test suite."""
