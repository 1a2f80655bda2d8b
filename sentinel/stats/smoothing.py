"""
Exponentially weighted moving statistics.

Undefined observations (NaN, +Inf, -Inf) are modelled explicitly as ``None``
in the output rather than left to propagate through arithmetic. A position
stays ``None`` only while no defined observation has been seen yet; after
that, undefined inputs forward-fill the previous estimate.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from sentinel.core.exceptions import InvalidArgumentError


def is_defined(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value)


def ewma(series: Sequence[float], com: float) -> List[Optional[float]]:
    """
    Exponentially weighted moving average with centre of mass ``com``.

    The recursive pass is r[i] = (com * r[i-1] + s[i]) / (1 + com), seeded
    with s[0] / (1 + com). A second pass removes the start-up bias by dividing
    the k-th defined estimate by 1 - (com / (1 + com)) ** k.

    Args:
        series: observations in chronological order
        com: centre of mass, >= 0

    Returns:
        One estimate per observation; ``None`` for leading undefined inputs.

    Raises:
        InvalidArgumentError: if com is negative
    """
    if com < 0:
        raise InvalidArgumentError(f"ewma centre of mass must be >= 0, got {com}")

    n = len(series)
    raw: List[Optional[float]] = [None] * n
    if n == 0:
        return raw

    old_weight = com / (1 + com)

    if is_defined(series[0]):
        raw[0] = series[0] / (1 + com)
    for i in range(1, n):
        cur = series[i]
        prev = raw[i - 1]
        if not is_defined(cur):
            raw[i] = prev
        elif prev is None:
            raw[i] = cur / (1 + com)
        else:
            raw[i] = (com * prev + cur) / (1 + com)

    adjustment = old_weight
    result: List[Optional[float]] = [None] * n
    for i, estimate in enumerate(raw):
        if estimate is not None:
            result[i] = estimate / (1.0 - adjustment)
            adjustment *= old_weight
        elif i > 0:
            result[i] = result[i - 1]
    return result


def ewm_std(series: Sequence[float], com: float) -> List[Optional[float]]:
    """
    Exponentially weighted moving (bias-corrected) standard deviation.

    variance_i = (ewma(s^2)_i - ewma(s)_i^2) * (1 + 2com) / (2com)

    Positions where either moment is undefined, or where rounding drives the
    variance below zero, are ``None``.

    Raises:
        InvalidArgumentError: if com is not strictly positive
    """
    if com <= 0:
        raise InvalidArgumentError(f"ewm_std centre of mass must be > 0, got {com}")

    first = ewma(series, com)
    second = ewma([value * value for value in series], com)

    result: List[Optional[float]] = []
    for m1, m2 in zip(first, second):
        if m1 is None or m2 is None:
            result.append(None)
            continue
        var = m2 - m1 * m1
        var *= (1.0 + 2.0 * com) / (2.0 * com)
        result.append(math.sqrt(var) if var >= 0 else None)
    return result
