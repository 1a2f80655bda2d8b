"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, DetectionConfig, config
from .exceptions import (
    AnomalyDetectionError,
    ConfigurationError,
    DataValidationError,
    InvalidArgumentError,
)
from .logging_config import setup_logging

__all__ = [
    "Config",
    "DetectionConfig",
    "config",
    "setup_logging",
    "AnomalyDetectionError",
    "InvalidArgumentError",
    "DataValidationError",
    "ConfigurationError",
]
