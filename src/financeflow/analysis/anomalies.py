#!/usr/bin/env python3
"""
Anomaly Detection

Flags transactions whose amount lies more than a fixed number of population
standard deviations from the mean of all amounts.
"""

from collections.abc import Sequence

import numpy as np
from scipy import stats

from ..core.models import AnomalyRecord, AnomalySeverity, AnomalyType, TransactionPoint

DEFAULT_Z_THRESHOLD = 2.5


def classify_anomaly_severity(z_score: float) -> AnomalySeverity:
    """
    Severity tier for a z-score.

    With the default 2.5 threshold only medium, high and critical occur; low is
    returned for scores at or below 2.5 and is reachable only when the caller
    lowers the detection threshold.
    """
    if z_score > 4:
        return AnomalySeverity.CRITICAL
    if z_score > 3:
        return AnomalySeverity.HIGH
    if z_score > 2.5:
        return AnomalySeverity.MEDIUM
    return AnomalySeverity.LOW


def explain_anomaly(amount: float, mean: float, z_score: float) -> str:
    """Human-readable description of how far an amount is from the mean."""
    deviation = amount - mean
    direction = "above" if deviation > 0 else "below"
    sigma = f"{z_score:.2f} standard deviations"

    if mean == 0:
        return f"{direction.capitalize()} average ({sigma})"

    percentage = abs(deviation / mean) * 100
    return f"{percentage:.1f}% {direction} average ({sigma})"


def detect_anomalies(
    transactions: Sequence[TransactionPoint],
    threshold: float = DEFAULT_Z_THRESHOLD,
) -> list[AnomalyRecord]:
    """
    Find transactions with unusual amounts.

    Amounts are used with their sign, so spikes and drops follow the upstream
    sign convention.

    Args:
        transactions: Raw transactions
        threshold: Minimum z-score (exclusive) for a transaction to be flagged

    Returns:
        Anomalies sorted by z-score, highest first. Empty when there are no
        transactions or all amounts are equal.
    """
    if not transactions:
        return []

    amounts = np.asarray([t.amount for t in transactions], dtype=np.float64)
    if np.all(amounts == amounts[0]):
        return []

    mean = float(np.mean(amounts))
    z_scores = np.abs(stats.zscore(amounts))

    anomalies = []
    for transaction, z in zip(transactions, z_scores, strict=True):
        z_score = float(z)
        if z_score <= threshold:
            continue

        anomalies.append(
            AnomalyRecord(
                transaction=transaction,
                z_score=z_score,
                severity=classify_anomaly_severity(z_score),
                type=AnomalyType.SPIKE if transaction.amount > mean else AnomalyType.DROP,
                explanation=explain_anomaly(transaction.amount, mean, z_score),
            )
        )

    return sorted(anomalies, key=lambda record: record.z_score, reverse=True)
