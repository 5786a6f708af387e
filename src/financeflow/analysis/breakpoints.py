#!/usr/bin/env python3
"""
Breakpoint Detection

Sliding-window mean-shift detector: compares the mean of the window before each
index with the mean of the window starting at it.
"""

from collections.abc import Sequence

import numpy as np

from ..core.models import Breakpoint

MIN_BREAKPOINT_POINTS = 10
DEFAULT_CHANGE_THRESHOLD = 0.3


def calculate_breakpoint_significance(change: float, before: np.ndarray, after: np.ndarray) -> float:
    """Relative change divided by the average population std of both windows (0 if both are flat)."""
    average_std = (float(np.std(before)) + float(np.std(after))) / 2
    if average_std == 0:
        return 0.0
    return change / average_std


def detect_breakpoints(
    values: Sequence[float],
    change_threshold: float = DEFAULT_CHANGE_THRESHOLD,
) -> list[Breakpoint]:
    """
    Locate indexes where the local mean shifts by more than change_threshold.

    The window size is a quarter of the series length. A zero mean before the
    index makes the relative change undefined, and that index is skipped.

    Args:
        values: Ordered amounts
        change_threshold: Minimum relative change (exclusive)

    Returns:
        Breakpoints in index order; empty for fewer than ten values
    """
    data = np.asarray(values, dtype=np.float64)
    n = len(data)
    if n < MIN_BREAKPOINT_POINTS:
        return []

    window = n // 4
    breakpoints = []

    for i in range(window, n - window):
        before = data[i - window : i]
        after = data[i : i + window]

        before_mean = float(np.mean(before))
        after_mean = float(np.mean(after))
        if before_mean == 0:
            continue

        change = abs(after_mean - before_mean) / before_mean
        if change > change_threshold:
            breakpoints.append(
                Breakpoint(
                    index=i,
                    change=change,
                    before_mean=before_mean,
                    after_mean=after_mean,
                    significance=calculate_breakpoint_significance(change, before, after),
                )
            )

    return breakpoints
