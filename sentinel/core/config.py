"""
Application configuration for the metric sentinel.

Provides environment-aware settings with conservative defaults. Detector
thresholds are fixed constants in the detector library and are deliberately
not part of this configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DETECTORS = [
	"median_absolute_deviation",
	"first_hour_average",
	"simple_stddev_from_moving_average",
	"stddev_from_moving_average",
	"mean_subtraction_cumulation",
	"least_squares",
	"histogram_bins",
	"ks_test",
	"grubbs",
]


class DetectionConfig(BaseModel):
	"""
	Configuration for a detection cycle.

	Notes:
	- full_duration: lookback (seconds) requested from the window source; the
	  first-hour-average detector treats the oldest hour of it as baseline.
	- enabled_detectors: subset of registered detectors evaluated per window.
	"""

	full_duration: int = Field(86400, ge=3600, description="Lookback in seconds")
	enabled_detectors: List[str] = Field(default_factory=lambda: list(DEFAULT_DETECTORS))

	@field_validator("enabled_detectors")
	@classmethod
	def _no_duplicates(cls, value: List[str]) -> List[str]:
		if len(set(value)) != len(value):
			raise ValueError("enabled_detectors must not contain duplicates")
		return value


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.
	"""

	model_config = SettingsConfigDict(
		env_prefix="SENTINEL_",
		env_file=".env",
		env_nested_delimiter="__",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	log_to_file: bool = Field(True, description="Also write logs to a rotating file")
	log_max_bytes: int = Field(10 * 1024 * 1024, gt=0, description="Rotate log file at this size")
	log_backup_count: int = Field(5, ge=0, description="Rotated log files to keep")
	detection: DetectionConfig = DetectionConfig()

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


config = Config()
