"""
Measurement window helpers.

Builds windows from the shapes the storage side hands over (timestamp/value
tuples, pandas Series) and checks the chronological ordering every detector
relies on.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from sentinel.core.exceptions import DataValidationError

from .schema import Measurement

logger = logging.getLogger(__name__)


def values(window: Sequence[Measurement]) -> List[float]:
    return [m.value for m in window]


def timestamps(window: Sequence[Measurement]) -> List[int]:
    return [m.timestamp for m in window]


def validate_window(window: Sequence[Measurement]) -> None:
    """
    Ensure timestamps are non-decreasing.

    Raises:
        DataValidationError: on the first out-of-order measurement
    """
    for i in range(1, len(window)):
        if window[i].timestamp < window[i - 1].timestamp:
            raise DataValidationError(
                f"Window not chronological at index {i}: "
                f"{window[i].timestamp} < {window[i - 1].timestamp}"
            )


def window_from_pairs(pairs: Iterable[Tuple[int, float]]) -> List[Measurement]:
    """
    Build a window from (timestamp, value) tuples, the order used by the
    storage layer's persisted tuples.

    Raises:
        DataValidationError: if the resulting window is not chronological
    """
    window = [Measurement(timestamp=int(ts), value=float(val)) for ts, val in pairs]
    validate_window(window)
    return window


def window_from_series(series: pd.Series) -> List[Measurement]:
    """
    Build a window from a pandas Series.

    The index is either unix seconds (integers) or datetimes; naive datetimes
    are taken as UTC. The series is sorted by index first.

    Raises:
        DataValidationError: if the index cannot be read as timestamps
    """
    if series.empty:
        return []

    ordered = series.sort_index()
    index = ordered.index

    if isinstance(index, pd.DatetimeIndex):
        if index.tz is None:
            index = index.tz_localize("UTC")
        else:
            index = index.tz_convert("UTC")
        seconds = (index - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(seconds=1)
    elif pd.api.types.is_numeric_dtype(index):
        seconds = index
    else:
        raise DataValidationError(
            f"Unsupported index type for measurement window: {type(index).__name__}"
        )

    window = [
        Measurement(timestamp=int(ts), value=float(val))
        for ts, val in zip(seconds, ordered.to_numpy(dtype=float))
    ]
    logger.debug("Built window of %d measurements from series %s", len(window), series.name)
    return window
