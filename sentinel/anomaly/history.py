"""
Trigger history tracking.

Answers a meta-question about a metric: is this new anomaly trigger itself
unusual given when the metric has triggered before? Histories belong to the
caller, who passes them in and persists what comes back. Calls for the same
metric must be serialized by the caller (one writer per metric).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Protocol, Tuple

from sentinel.stats import mean, std

from .schema import TriggerHistory, TriggerRecord

logger = logging.getLogger(__name__)

DEDUP_WINDOW_SECONDS = 300
SIGMA = 3


def is_anomalously_anomalous(
    history: TriggerHistory, new_trigger: TriggerRecord
) -> Tuple[bool, TriggerHistory]:
    """
    Decide whether a new trigger is significant given past trigger timing.

    - Empty history: the trigger is recorded and is always significant.
    - Same value as the last trigger within 300 seconds: dropped, not significant.
    - Otherwise: appended; significant if the newest gap between triggers is
      more than three standard deviations from the mean gap.

    Returns:
        (significant, updated_history). The input list is never modified.
    """
    if not history:
        return True, [new_trigger]

    last = history[-1]
    if (
        new_trigger.value == last.value
        and new_trigger.timestamp - last.timestamp <= DEDUP_WINDOW_SECONDS
    ):
        return False, list(history)

    updated = list(history)
    updated.append(new_trigger)

    intervals = [
        float(updated[i + 1].timestamp - updated[i].timestamp)
        for i in range(len(updated) - 1)
    ]
    significant = abs(intervals[-1] - mean(intervals)) > SIGMA * std(intervals)
    return significant, updated


class TriggerHistoryStore(Protocol):
    """Caller-supplied persistence for per-metric trigger histories."""

    def get(self, metric: str) -> TriggerHistory:
        ...

    def put(self, metric: str, history: TriggerHistory) -> None:
        ...


@dataclass
class InMemoryTriggerHistoryStore:
    """
    Dict-backed trigger history store.

    Returns copies so callers cannot alter stored histories by accident.
    """

    _histories: Dict[str, List[TriggerRecord]] = field(default_factory=dict)

    def get(self, metric: str) -> TriggerHistory:
        return list(self._histories.get(metric, []))

    def put(self, metric: str, history: TriggerHistory) -> None:
        self._histories[metric] = list(history)

    def metrics(self) -> List[str]:
        return sorted(self._histories)


@dataclass
class TriggerHistoryTracker:
    """
    Reads a metric's history from the store, evaluates the new trigger and
    writes the updated history back.

    Holds no state of its own beyond the store reference.
    """

    store: TriggerHistoryStore

    def record(self, metric: str, trigger: TriggerRecord) -> bool:
        history = self.store.get(metric)
        significant, updated = is_anomalously_anomalous(history, trigger)
        if len(updated) != len(history):
            self.store.put(metric, updated)
        else:
            logger.debug(
                "Duplicate trigger for %s at %d dropped (value=%s)",
                metric,
                trigger.timestamp,
                trigger.value,
            )

        if significant:
            logger.info(
                "Significant trigger for %s at %d (history=%d)",
                metric,
                trigger.timestamp,
                len(updated),
            )
        return significant
