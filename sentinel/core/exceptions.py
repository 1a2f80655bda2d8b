"""
Custom exceptions for the metric sentinel.

These exceptions provide clear error semantics across the system.
Insufficient or degenerate data is never an error: detectors resolve it to
"not anomalous". Exceptions are reserved for broken contracts.
"""


class AnomalyDetectionError(Exception):
    """Base exception for anomaly detection failures."""
    pass


class InvalidArgumentError(AnomalyDetectionError, ValueError):
    """Raised when a numeric primitive is called outside its domain (e.g. negative KS statistic)."""
    pass


class DataValidationError(AnomalyDetectionError):
    """Raised when a measurement window fails validation."""
    pass


class ConfigurationError(AnomalyDetectionError):
    """Raised when configuration is invalid or names unknown detectors."""
    pass
