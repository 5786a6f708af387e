#!/usr/bin/env python3
"""
Regression Core

Closed-form ordinary least-squares fit of amounts against their period index.
"""

from collections.abc import Sequence

import numpy as np

from ..core.models import RegressionResult


def calculate_linear_regression(x: Sequence[float], y: Sequence[float]) -> RegressionResult:
    """
    Fit y = slope * x + intercept by ordinary least squares.

    Args:
        x: Period indexes (0-based)
        y: Amounts

    Returns:
        RegressionResult with slope, intercept and R-squared. Fewer than two
        points or mismatched lengths give the all-zero result; a constant y
        gives slope 0 and R-squared 0. R-squared is clamped to [0, 1].
    """
    x_arr = np.asarray(x, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)
    n = len(x_arr)

    if n != len(y_arr) or n < 2:
        return RegressionResult()

    # Identical amounts: flat line, no variance to explain
    if np.all(y_arr == y_arr[0]):
        return RegressionResult(slope=0.0, intercept=float(y_arr[0]), r_squared=0.0)

    sum_x = float(np.sum(x_arr))
    sum_y = float(np.sum(y_arr))
    sum_xy = float(np.sum(x_arr * y_arr))
    sum_x2 = float(np.sum(x_arr * x_arr))

    denominator = n * sum_x2 - sum_x * sum_x
    # All x equal: no direction to fit
    slope = (n * sum_xy - sum_x * sum_y) / denominator if denominator != 0 else 0.0
    intercept = (sum_y - slope * sum_x) / n

    y_mean = sum_y / n
    ss_res = float(np.sum((y_arr - (slope * x_arr + intercept)) ** 2))
    ss_tot = float(np.sum((y_arr - y_mean) ** 2))
    r_squared = 1 - ss_res / ss_tot if ss_tot > 0 else 0.0
    r_squared = max(0.0, min(1.0, r_squared))

    return RegressionResult(slope=slope, intercept=intercept, r_squared=r_squared)


def fit_indexed(values: Sequence[float]) -> RegressionResult:
    """Fit values against their position 0..n-1."""
    return calculate_linear_regression(range(len(values)), values)
