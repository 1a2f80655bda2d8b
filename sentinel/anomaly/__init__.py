"""
Anomaly module: statistical anomaly detection over metric windows.

Implements the detector library, the detector runner and the trigger
history tracker.
"""

from .detectors import (
    DETECTORS,
    first_hour_average,
    grubbs,
    histogram_bins,
    ks_test,
    least_squares,
    mean_subtraction_cumulation,
    median_absolute_deviation,
    simple_stddev_from_moving_average,
    stddev_from_moving_average,
)
from .engine import AnomalyEngine, WindowSource
from .history import (
    InMemoryTriggerHistoryStore,
    TriggerHistoryStore,
    TriggerHistoryTracker,
    is_anomalously_anomalous,
)
from .schema import DetectionResult, Measurement, TriggerHistory, TriggerRecord
from .window import validate_window, window_from_pairs, window_from_series

__all__ = [
    # Schema
    "Measurement",
    "TriggerRecord",
    "TriggerHistory",
    "DetectionResult",

    # Windows
    "validate_window",
    "window_from_pairs",
    "window_from_series",

    # Detectors
    "DETECTORS",
    "median_absolute_deviation",
    "first_hour_average",
    "simple_stddev_from_moving_average",
    "stddev_from_moving_average",
    "mean_subtraction_cumulation",
    "least_squares",
    "histogram_bins",
    "ks_test",
    "grubbs",

    # Runner
    "AnomalyEngine",
    "WindowSource",

    # Trigger history
    "is_anomalously_anomalous",
    "TriggerHistoryStore",
    "InMemoryTriggerHistoryStore",
    "TriggerHistoryTracker",
]
