"""
Metric sentinel: streaming anomaly detection for timestamped metrics.

    Measurement window (oldest first)
        ↓
    Detector library (sentinel/anomaly/detectors.py) → per-detector verdicts
        ↓
    Caller's combination policy
        ↓
    Trigger history tracker (sentinel/anomaly/history.py) → significance
"""

__version__ = "0.1.0"
