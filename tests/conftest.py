"""
Pytest configuration and shared fixtures.

Provides test configuration instances and sample measurement windows for
unit and integration tests.
"""

import random
from typing import Callable, List, Sequence, Tuple

import pandas as pd
import pytest

from sentinel.anomaly.schema import Measurement
from sentinel.anomaly.window import window_from_series
from sentinel.core.config import Config, DetectionConfig

NOW = 100_000


@pytest.fixture
def mock_config(tmp_path):
    """
    Fixture providing test configuration with explicit values (not from .env).

    Returns:
        Config: Test instance writing logs under a temporary directory
    """
    return Config(
        log_level="WARNING",
        logs_dir=tmp_path / "logs",
        detection=DetectionConfig(full_duration=86400),
    )


@pytest.fixture
def now() -> int:
    """Fixed evaluation time (unix seconds) for time-partitioning detectors."""
    return NOW


@pytest.fixture
def calibration_series() -> List[float]:
    """Reference series with known ewma, ewm_std, histogram and median outputs."""
    return [0.1, 1.2, 2.3, 3.4, 4.5, 5.6, 6.7, 7.8, 8.9, 9.01]


@pytest.fixture
def make_window() -> Callable[..., List[Measurement]]:
    """
    Factory building a window from values, one point every ``step`` seconds
    ending at ``end``.
    """

    def _make(values: Sequence[float], end: int = NOW, step: int = 60) -> List[Measurement]:
        start = end - step * (len(values) - 1)
        return [
            Measurement(value=float(v), timestamp=start + i * step)
            for i, v in enumerate(values)
        ]

    return _make


@pytest.fixture
def steady_values() -> List[float]:
    """Sixty points alternating between 10 and 11."""
    return [10.0 if i % 2 == 0 else 11.0 for i in range(60)]


@pytest.fixture
def spiked_values(steady_values) -> List[float]:
    """Steady series followed by three points at 100."""
    return steady_values + [100.0, 100.0, 100.0]


@pytest.fixture
def ks_bands() -> Callable[[float], Tuple[List[Measurement], List[Measurement]]]:
    """
    Factory for (reference, probe) measurement bands around NOW.

    Reference: 100 points in [NOW-3600, NOW-600), N(10, 1).
    Probe: 30 points in [NOW-600, NOW], N(probe_mean, 1).
    """

    def _make(probe_mean: float, probe_points: int = 30):
        rng = random.Random(42)
        reference = [
            Measurement(value=rng.gauss(10.0, 1.0), timestamp=NOW - 3600 + 30 * i)
            for i in range(100)
        ]
        probe = [
            Measurement(value=rng.gauss(probe_mean, 1.0), timestamp=NOW - 600 + 20 * i)
            for i in range(probe_points)
        ]
        return reference, probe

    return _make


@pytest.fixture
def sample_metric_dataframe() -> pd.DataFrame:
    """
    Fixture providing a day of per-minute samples for two metrics as a
    pandas DataFrame indexed by UTC datetime.
    """
    index = pd.date_range(end=pd.Timestamp(NOW, unit="s"), periods=24 * 60, freq="min")
    cpu = [50.0 + (i % 5) for i in range(len(index))]
    latency = [120.0 + (i % 7) for i in range(len(index))]
    latency[-3:] = [900.0, 950.0, 1000.0]
    return pd.DataFrame({"cpu": cpu, "latency_ms": latency}, index=index)


@pytest.fixture
def sample_metric_windows(sample_metric_dataframe):
    """Measurement windows built from sample_metric_dataframe, keyed by column."""
    return {
        column: window_from_series(sample_metric_dataframe[column])
        for column in sample_metric_dataframe.columns
    }


def pytest_configure(config):
    """
    Pytest hook for custom configuration.

    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
