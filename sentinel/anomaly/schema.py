"""
Schema definitions for metric anomaly detection.

Measurements and trigger records are immutable once created. A measurement
window is any sequence of Measurement ordered by non-decreasing timestamp.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Measurement(BaseModel):
    """
    A single observation of a metric.

    Fields:
    - value: observed value (NaN/Inf accepted, treated as undefined)
    - timestamp: unix seconds
    """

    model_config = ConfigDict(frozen=True)

    value: float
    timestamp: int


class TriggerRecord(BaseModel):
    """
    A recorded anomaly trigger for a metric.

    Fields:
    - value: value that triggered
    - timestamp: unix seconds of the trigger
    """

    model_config = ConfigDict(frozen=True)

    value: float
    timestamp: int


TriggerHistory = List[TriggerRecord]


class DetectionResult(BaseModel):
    """
    Per-detector verdicts for one window of one metric.

    Fields:
    - metric: metric name
    - evaluated_at: reference "now" (unix seconds) used by time-partitioning detectors
    - window_size: number of measurements evaluated
    - verdicts: detector name -> anomalous
    - triggered: names of detectors that flagged the window, in evaluation order

    Verdicts are reported individually; combining them is left to the caller.
    """

    metric: str
    evaluated_at: int
    window_size: int = Field(ge=0)
    verdicts: Dict[str, bool]
    triggered: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def any_triggered(self) -> bool:
        return bool(self.triggered)
