"""
Detectors for statistical deviations in a metric's recent behaviour.

Every detector is a pure function taking a time-ordered measurement window
and returning True when the latest behaviour is anomalous. They share one
calling convention so a runner can invoke any subset of them:

    detector(window, now=None, full_duration=FULL_DURATION) -> bool

Detectors that do not partition by time ignore ``now`` and ``full_duration``.
Windows too short for a detector resolve to False rather than raising.
Thresholds are fixed constants, kept identical across deployments so
verdicts stay comparable.
"""

from __future__ import annotations

import logging
import math
import time
import warnings
from typing import Callable, Dict, List, Optional, Sequence

from scipy import stats as scipy_stats
from statsmodels.tsa.stattools import adfuller

from sentinel.stats import (
    ewm_std,
    ewma,
    histogram,
    linear_regression_lse,
    mean,
    median,
    std,
    tail_avg,
    two_sample_ks,
)

from .schema import Measurement
from .window import values

logger = logging.getLogger(__name__)

FULL_DURATION = 86400
ONE_HOUR = 3600
TEN_MINUTES = 600

MAD_THRESHOLD = 6
SIGMA = 3
EWMA_COM = 50
HISTOGRAM_BINS = 15
SPARSE_BIN_LIMIT = 20
KS_MIN_POINTS = 20
KS_D_THRESHOLD = 0.5
SIGNIFICANCE = 0.05
ADF_MAX_LAG = 10

Detector = Callable[..., bool]


def resolve_now(now: Optional[int]) -> int:
    """Evaluation time in unix seconds; the wall clock when ``now`` is None."""
    return int(time.time()) if now is None else now


def median_absolute_deviation(window: Sequence[Measurement], **_: object) -> bool:
    """
    Anomalous if the latest point's deviation from the median is more than
    six times the median of all deviations.
    """
    series = values(window)
    med = median(series)
    normalized = [abs(v - med) for v in series]
    median_deviation = median(normalized)
    if median_deviation == 0:
        return False
    return normalized[-1] / median_deviation > MAD_THRESHOLD


def first_hour_average(
    window: Sequence[Measurement],
    now: Optional[int] = None,
    full_duration: int = FULL_DURATION,
    **_: object,
) -> bool:
    """
    Compare the tail average against the oldest hour of the full duration.

    Points older than ``now - (full_duration - 3600)`` form the baseline; the
    window is anomalous if the tail average lies more than three baseline
    standard deviations from the baseline mean.
    """
    cutoff = resolve_now(now) - (full_duration - ONE_HOUR)
    baseline = [m.value for m in window if m.timestamp < cutoff]
    if len(baseline) < 2:
        return False
    return abs(tail_avg(values(window)) - mean(baseline)) > SIGMA * std(baseline)


def simple_stddev_from_moving_average(window: Sequence[Measurement], **_: object) -> bool:
    """
    Anomalous if the tail average is more than three standard deviations from
    the mean of the whole window. Not exponentially weighted, so it reacts to
    anomalies with respect to the entire series.
    """
    series = values(window)
    if len(series) < 2:
        return False
    return abs(tail_avg(series) - mean(series)) > SIGMA * std(series)


def stddev_from_moving_average(window: Sequence[Measurement], **_: object) -> bool:
    """
    Anomalous if the latest value is more than three exponentially weighted
    standard deviations from the exponentially weighted moving average
    (centre of mass 50). Sensitive to short-term trends.
    """
    series = values(window)
    if len(series) < 2:
        return False
    exp_average = ewma(series, EWMA_COM)[-1]
    exp_std = ewm_std(series, EWMA_COM)[-1]
    if exp_average is None or exp_std is None:
        return False
    return abs(series[-1] - exp_average) > SIGMA * exp_std


def mean_subtraction_cumulation(window: Sequence[Measurement], **_: object) -> bool:
    """
    Subtract the mean of all but the last point from every point; anomalous if
    the adjusted last point is more than three standard deviations of the
    adjusted history away from zero.

    Works on its own buffer; the caller's window is left untouched.
    """
    series = values(window)
    if len(series) < 3:
        return False
    history_mean = mean(series[:-1])
    adjusted = [v - history_mean for v in series]
    return abs(adjusted[-1]) > SIGMA * std(adjusted[:-1])


def least_squares(window: Sequence[Measurement], **_: object) -> bool:
    """
    Fit a least squares line and compare the average residual of the last
    three points against three standard deviations of all residuals.

    Fits whose residual spread or tail residual truncates to zero are treated
    as degenerate (e.g. perfectly flat series) and never flagged.
    """
    if len(window) < 3:
        return False
    alpha, beta = linear_regression_lse(window)
    errors = [m.value - (beta * m.timestamp + alpha) for m in window]

    std_dev = std(errors)
    tail = (errors[-1] + errors[-2] + errors[-3]) / 3
    if not (math.isfinite(std_dev) and math.isfinite(tail)):
        return False
    return abs(tail) > std_dev * SIGMA and math.trunc(std_dev) != 0 and math.trunc(tail) != 0


def histogram_bins(window: Sequence[Measurement], **_: object) -> bool:
    """
    Anomalous if the tail average falls into a sparsely populated bin (20 or
    fewer points) of a 15-bin histogram of the window.
    """
    series = values(window)
    if not series:
        return False
    t = tail_avg(series)
    counts, edges = histogram(series, HISTOGRAM_BINS)
    for i, count in enumerate(counts):
        if count > SPARSE_BIN_LIMIT:
            continue
        if i == 0:
            if t <= edges[0]:
                return True
        elif edges[i] < t < edges[i + 1]:
            return True
    return False


def _adf_p_value(reference: List[float]) -> float:
    """
    Augmented Dickey-Fuller p-value of the reference band.

    Newer statsmodels releases warn that the tuple return of ``adfuller`` is
    being replaced by a results object; both shapes are accepted.
    """
    max_lag = min(ADF_MAX_LAG, len(reference) // 2 - 2)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", FutureWarning)
        result = adfuller(reference, maxlag=max_lag)
    p_value = getattr(result, "pvalue", None)
    if p_value is None:
        p_value = result[1]
    return float(p_value)


def ks_test(window: Sequence[Measurement], now: Optional[int] = None, **_: object) -> bool:
    """
    Two-sample Kolmogorov-Smirnov test of the last ten minutes against the
    preceding fifty.

    Anomalous if the distributions differ (D > 0.5, p < 0.05) and the
    reference band is stationary according to an augmented Dickey-Fuller
    test; the KS test alone gives false positives on trending series.
    """
    current = resolve_now(now)
    hour_ago = current - ONE_HOUR
    ten_minutes_ago = current - TEN_MINUTES

    reference: List[float] = []
    probe: List[float] = []
    for m in window:
        if hour_ago <= m.timestamp < ten_minutes_ago:
            reference.append(m.value)
        elif ten_minutes_ago <= m.timestamp <= current:
            probe.append(m.value)

    if len(reference) < KS_MIN_POINTS or len(probe) < KS_MIN_POINTS:
        return False
    if not all(math.isfinite(v) for v in reference + probe):
        return False

    ks_d, ks_p_value = two_sample_ks(reference, probe)
    if ks_p_value >= SIGNIFICANCE or ks_d <= KS_D_THRESHOLD:
        return False

    # A flat reference band is stationary by definition; ADF rejects constant input.
    if min(reference) == max(reference):
        return True

    adf_p_value = _adf_p_value(reference)
    logger.debug(
        "KS distribution shift D=%.4f p=%.4g, reference ADF p=%.4g", ks_d, ks_p_value, adf_p_value
    )
    return bool(adf_p_value < SIGNIFICANCE)


def grubbs(window: Sequence[Measurement], **_: object) -> bool:
    """
    Anomalous if the z-score of the tail average exceeds the Grubbs critical
    value at the 5% level. Assumes a roughly normal, unimodal series.
    """
    series = values(window)
    n = len(series)
    if n < 3:
        return False
    std_dev = std(series)
    if std_dev == 0 or not math.isfinite(std_dev):
        return False
    z_score = (tail_avg(series) - mean(series)) / std_dev
    threshold = scipy_stats.t.ppf(1 - SIGNIFICANCE / (2 * n), n - 2)
    threshold_squared = threshold * threshold
    grubbs_score = ((n - 1) / math.sqrt(n)) * math.sqrt(
        threshold_squared / (n - 2 + threshold_squared)
    )
    return z_score > grubbs_score


DETECTORS: Dict[str, Detector] = {
    "median_absolute_deviation": median_absolute_deviation,
    "first_hour_average": first_hour_average,
    "simple_stddev_from_moving_average": simple_stddev_from_moving_average,
    "stddev_from_moving_average": stddev_from_moving_average,
    "mean_subtraction_cumulation": mean_subtraction_cumulation,
    "least_squares": least_squares,
    "histogram_bins": histogram_bins,
    "ks_test": ks_test,
    "grubbs": grubbs,
}
