"""
Integration test for the detection flow.

Tests end-to-end flow from tabular samples to detector verdicts and trigger
significance.
"""

import pytest

from sentinel.anomaly import (
    AnomalyEngine,
    InMemoryTriggerHistoryStore,
    TriggerHistoryTracker,
    TriggerRecord,
)
from sentinel.core.config import DetectionConfig

NOW = 100_000


class DictWindowSource:
    """Window source backed by pre-built windows."""

    def __init__(self, windows):
        self.windows = windows

    def fetch(self, metric, lookback_seconds):
        cutoff = NOW - lookback_seconds
        return [m for m in self.windows[metric] if m.timestamp >= cutoff]


@pytest.mark.integration
class TestDetectionPipeline:
    """Test evaluation of realistic windows and trigger tracking."""

    def test_latency_spike_detected(self, sample_metric_windows):
        engine = AnomalyEngine(settings=DetectionConfig(full_duration=86400))
        source = DictWindowSource(sample_metric_windows)

        result = engine.evaluate_metric("latency_ms", source, now=NOW)

        assert result.window_size == 24 * 60
        assert result.verdicts["median_absolute_deviation"] is True
        assert result.verdicts["first_hour_average"] is True
        assert result.verdicts["mean_subtraction_cumulation"] is True
        assert result.verdicts["ks_test"] is False

    def test_periodic_cpu_is_quiet(self, sample_metric_windows):
        engine = AnomalyEngine(settings=DetectionConfig(full_duration=86400))
        source = DictWindowSource(sample_metric_windows)

        result = engine.evaluate_metric("cpu", source, now=NOW)

        assert result.triggered == []

    def test_triggers_feed_history(self, sample_metric_windows):
        engine = AnomalyEngine(settings=DetectionConfig(full_duration=86400))
        tracker = TriggerHistoryTracker(store=InMemoryTriggerHistoryStore())
        source = DictWindowSource(sample_metric_windows)

        significant = []
        for metric in ("latency_ms", "cpu"):
            result = engine.evaluate_metric(metric, source, now=NOW)
            if result.any_triggered:
                latest = sample_metric_windows[metric][-1]
                trigger = TriggerRecord(value=latest.value, timestamp=latest.timestamp)
                significant.append(tracker.record(metric, trigger))
                # Re-reporting the same trigger is deduplicated
                significant.append(tracker.record(metric, trigger))

        assert significant == [True, False]
        assert tracker.store.get("latency_ms") == [
            TriggerRecord(value=1000.0, timestamp=NOW)
        ]
        assert tracker.store.get("cpu") == []
