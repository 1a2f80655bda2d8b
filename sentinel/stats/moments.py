"""
Moments and simple estimators over plain float sequences.

All functions are pure: inputs are never mutated and no state is kept
between calls. Degenerate inputs (empty, single observation, zero variance)
resolve to 0.0 instead of raising.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    from sentinel.anomaly.schema import Measurement

TAIL_LENGTH = 3


def mean(xs: Sequence[float]) -> float:
    if not xs:
        return 0.0
    return sum(xs) / len(xs)


def median(xs: Sequence[float]) -> float:
    """
    Median of a sequence; the average of the two central values for even
    lengths. Returns 0.0 for an empty sequence.
    """
    n = len(xs)
    if n == 0:
        return 0.0
    ordered = sorted(xs)
    lhs = (n - 1) // 2
    rhs = n // 2
    if lhs == rhs:
        return ordered[lhs]
    return (ordered[lhs] + ordered[rhs]) / 2.0


def covariance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Sample covariance (n - 1 denominator).

    Returns 0.0 when the samples are empty, not paired (different lengths),
    or hold a single observation.
    """
    n = len(a)
    if n == 0 or n != len(b) or n < 2:
        return 0.0
    a_mean = mean(a)
    b_mean = mean(b)
    total = 0.0
    for x, y in zip(a, b):
        total += (x - a_mean) * (y - b_mean)
    return total / (n - 1)


def variance(xs: Sequence[float]) -> float:
    return covariance(xs, xs)


def std(xs: Sequence[float]) -> float:
    return math.sqrt(variance(xs))


def tail_avg(xs: Sequence[float]) -> float:
    """
    Average of the last three points, or the last point when there are fewer.

    Smooths single-point noise at the cost of a short detection delay.
    """
    n = len(xs)
    if n == 0:
        return 0.0
    if n < TAIL_LENGTH:
        return xs[-1]
    return (xs[-1] + xs[-2] + xs[-3]) / 3


def linear_regression_lse(window: Sequence["Measurement"]) -> Tuple[float, float]:
    """
    Ordinary least squares fit of value on timestamp.

    Returns:
        (alpha, beta) where value ~= beta * timestamp + alpha

    Notes:
        - beta = cov(t, v) / var(t), alpha = mean(v) - beta * mean(t)
        - When every timestamp is equal, var(t) is 0; the fit degrades to a
          flat line through the mean (beta = 0.0).
    """
    times = [float(m.timestamp) for m in window]
    vals = [m.value for m in window]

    time_var = variance(times)
    if time_var == 0:
        return mean(vals), 0.0

    beta = covariance(times, vals) / time_var
    alpha = mean(vals) - beta * mean(times)
    return alpha, beta


def round_to(value: float, places: int) -> float:
    """Round half up to a fixed number of decimal places."""
    shift = math.pow(10, places)
    return math.floor(value * shift + 0.5) / shift
