"""
Distribution utilities: equal-width histograms, empirical CDF lookup and the
two-sample Kolmogorov-Smirnov test with its asymptotic distribution.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from typing import List, Sequence, Tuple

from sentinel.core.exceptions import InvalidArgumentError

# Boundary between the small-z series and the large-z alternating series.
KS_SERIES_SWITCH = 1.18


def histogram(series: Sequence[float], bins: int) -> Tuple[List[int], List[float]]:
    """
    Equal-width histogram.

    Edges start at min(series) with width (max - min) / bins. Edge generation
    stops early once an edge reaches max, then the theoretical final edge
    min + bins * width is appended. Buckets are [edge_i, edge_i+1) except the
    last, which is closed on both ends.

    Returns:
        (counts, edges); two empty lists for an empty series

    Raises:
        InvalidArgumentError: if bins is not positive
    """
    if bins < 1:
        raise InvalidArgumentError(f"histogram needs at least one bin, got {bins}")
    if not series:
        return [], []

    ordered = sorted(series)
    lo = ordered[0]
    hi = ordered[-1]
    width = (hi - lo) / bins

    edges: List[float] = []
    for i in range(bins):
        edges.append(width * i + lo)
        if edges[-1] >= hi:
            break
    edges.append(width * bins + lo)

    last = len(edges) - 2
    counts = [0] * (len(edges) - 1)
    for i in range(len(counts)):
        left, right = edges[i], edges[i + 1]
        for value in ordered:
            if left <= value < right:
                counts[i] += 1
            elif i == last and left <= value <= right:
                counts[i] += 1
    return counts, edges


def searchsorted_left(ordered: Sequence[float], key: float) -> int:
    """
    Leftmost insertion point of ``key`` in an ascending sequence, i.e. the
    number of elements strictly less than ``key``.
    """
    return bisect_left(ordered, key)


def two_sample_ks(a: Sequence[float], b: Sequence[float]) -> Tuple[float, float]:
    """
    Two-sample Kolmogorov-Smirnov test.

    Evaluates both empirical CDFs at every pooled observation and takes the
    largest absolute gap as the statistic D.

    Returns:
        (D, p_value) with p_value = qks(D * sqrt(n1 * n2 / (n1 + n2)))

    Raises:
        InvalidArgumentError: if either sample is empty
    """
    if not a or not b:
        raise InvalidArgumentError("two_sample_ks requires two non-empty samples")

    data1 = sorted(a)
    data2 = sorted(b)
    n1 = len(data1)
    n2 = len(data2)

    d = 0.0
    for value in data1 + data2:
        cdf1 = searchsorted_left(data1, value) / n1
        cdf2 = searchsorted_left(data2, value) / n2
        d = max(d, abs(cdf1 - cdf2))

    en = math.sqrt((n1 * n2) / (n1 + n2))
    return d, qks(en * d)


def qks(z: float) -> float:
    """
    Complementary cumulative Kolmogorov distribution, P(K > z).

    Raises:
        InvalidArgumentError: if z is negative
    """
    if z < 0:
        raise InvalidArgumentError(f"qks is undefined for negative z ({z})")
    if z == 0:
        return 1.0
    if z < KS_SERIES_SWITCH:
        return 1.0 - pks(z)
    x = math.exp(-2.0 * (z * z))
    return 2.0 * (x - x ** 4 + x ** 9)


def pks(z: float) -> float:
    """
    Cumulative Kolmogorov distribution, P(K <= z).

    Raises:
        InvalidArgumentError: if z is negative
    """
    if z < 0:
        raise InvalidArgumentError(f"pks is undefined for negative z ({z})")
    if z == 0:
        return 0.0
    if z < KS_SERIES_SWITCH:
        y = math.exp(-1.23370055013616983 / (z * z))
        return (
            2.25675833419102515
            * math.sqrt(-math.log(y))
            * (y + y ** 9 + y ** 25 + y ** 49)
        )
    x = math.exp(-2.0 * (z * z))
    return 1.0 - 2.0 * (x - x ** 4 + x ** 9)
