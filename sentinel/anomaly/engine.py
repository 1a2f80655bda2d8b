"""
Detector runner.

Evaluates a configured subset of the detector library against one
measurement window and reports every verdict individually. Combining the
verdicts (voting, weighting) is the caller's policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence

from sentinel.core.config import DetectionConfig, config
from sentinel.core.exceptions import ConfigurationError

from .detectors import DETECTORS, Detector, resolve_now
from .schema import DetectionResult, Measurement
from .window import validate_window

logger = logging.getLogger(__name__)


class WindowSource(Protocol):
    """Supplies a metric's recent measurements, oldest first."""

    def fetch(self, metric: str, lookback_seconds: int) -> Sequence[Measurement]:
        ...


@dataclass
class AnomalyEngine:
    """
    Runs enabled detectors over measurement windows.

    Notes:
    - Each detector receives its own copy of the window, so verdicts do not
      depend on evaluation order or on which other detectors run.
    - Windows are checked for chronological order before any detector runs.
    """

    settings: DetectionConfig = field(default_factory=lambda: config.detection)

    def __post_init__(self) -> None:
        unknown = [name for name in self.settings.enabled_detectors if name not in DETECTORS]
        if unknown:
            logger.warning("Rejecting unknown detectors in configuration: %s", unknown)
            raise ConfigurationError(f"Unknown detectors: {', '.join(unknown)}")
        self._detectors: Dict[str, Detector] = {
            name: DETECTORS[name] for name in self.settings.enabled_detectors
        }

    @property
    def detector_names(self) -> List[str]:
        return list(self._detectors)

    def evaluate(
        self,
        metric: str,
        window: Sequence[Measurement],
        now: Optional[int] = None,
    ) -> DetectionResult:
        validate_window(window)
        current = resolve_now(now)

        verdicts: Dict[str, bool] = {}
        for name, detector in self._detectors.items():
            verdicts[name] = detector(
                list(window),
                now=current,
                full_duration=self.settings.full_duration,
            )

        triggered = [name for name, anomalous in verdicts.items() if anomalous]
        logger.debug(
            "Evaluated %s over %d points: %d/%d detectors triggered %s",
            metric,
            len(window),
            len(triggered),
            len(verdicts),
            triggered,
        )

        return DetectionResult(
            metric=metric,
            evaluated_at=current,
            window_size=len(window),
            verdicts=verdicts,
            triggered=triggered,
        )

    def evaluate_metric(
        self,
        metric: str,
        source: WindowSource,
        now: Optional[int] = None,
    ) -> DetectionResult:
        """Fetch the metric's window over the configured full duration and evaluate it."""
        window = source.fetch(metric, self.settings.full_duration)
        return self.evaluate(metric, window, now=now)
