"""
Stats module: numeric primitives shared by the detector library.

Pure, reentrant functions over float sequences: moments, least squares,
exponentially weighted statistics, histograms and the two-sample KS test.
"""

from .distribution import histogram, pks, qks, searchsorted_left, two_sample_ks
from .moments import (
    covariance,
    linear_regression_lse,
    mean,
    median,
    round_to,
    std,
    tail_avg,
    variance,
)
from .smoothing import ewm_std, ewma, is_defined

__all__ = [
    # Moments
    "mean",
    "median",
    "covariance",
    "variance",
    "std",
    "tail_avg",
    "linear_regression_lse",
    "round_to",

    # Smoothing
    "ewma",
    "ewm_std",
    "is_defined",

    # Distribution
    "histogram",
    "searchsorted_left",
    "two_sample_ks",
    "qks",
    "pks",
]
