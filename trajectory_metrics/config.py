"""
Configuration for trajectory metric evaluation.

This module provides:
- The MetricsConfig dataclass holding engine settings (windows, LCSS threshold,
  compared dimensions) and the precision grading thresholds
- Validation of those settings before any metric runs
- Loading and saving configurations as JSON files
"""

import copy
import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .constants import (
    ALL_METRICS,
    DEFAULT_JOHNEN_WINDOW,
    DEFAULT_LCSS_THRESHOLD,
    PRECISION_THRESHOLDS,
)
from .exceptions import ConfigurationError
from .metrics.dtw import validate_window
from .metrics.lcss import validate_threshold

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class MetricsConfig:
    """Settings shared by every metric run of an evaluation."""
    metrics: List[str] = field(default_factory=lambda: list(ALL_METRICS))
    dtw_window: Optional[int] = None
    johnen_window: Optional[int] = DEFAULT_JOHNEN_WINDOW
    lcss_threshold: float = DEFAULT_LCSS_THRESHOLD
    lcss_window: Optional[int] = None
    dimensions: Optional[int] = None  # leading coordinates compared, None = all
    precision_thresholds: Dict[str, Dict[str, float]] = field(
        default_factory=lambda: copy.deepcopy(PRECISION_THRESHOLDS)
    )
    log_level: str = "INFO"

    def validate(self) -> "MetricsConfig":
        """
        Check every setting, returning self for chaining.

        Raises:
            ConfigurationError: For unknown metrics, dimensions < 1, a bad log
                                level or malformed precision thresholds.
            InvalidWindowError: If a window is not a positive integer.
            InvalidThresholdError: If the LCSS threshold is not > 0.
        """
        if not self.metrics:
            raise ConfigurationError("At least one metric must be selected.")
        unknown = [m for m in self.metrics if m not in ALL_METRICS]
        if unknown:
            raise ConfigurationError(
                f"Unknown metric(s) {unknown}. Available metrics: {', '.join(ALL_METRICS)}."
            )
        validate_window(self.dtw_window)
        validate_window(self.johnen_window)
        validate_window(self.lcss_window)
        validate_threshold(self.lcss_threshold)
        if self.dimensions is not None and (
            isinstance(self.dimensions, bool)
            or not isinstance(self.dimensions, int)
            or self.dimensions < 1
        ):
            raise ConfigurationError(
                f"dimensions must be a positive integer or None, got {self.dimensions!r}."
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}."
            )
        for grade, limits in self.precision_thresholds.items():
            if not isinstance(limits, dict) or not {"average", "max"} <= set(limits):
                raise ConfigurationError(
                    f"Precision threshold '{grade}' needs 'average' and 'max' limits."
                )
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricsConfig":
        """Create a validated config from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown configuration key(s): {sorted(unknown)}.")
        return cls(**data).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> MetricsConfig:
    """
    Load a MetricsConfig from a JSON file.

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or holds
                            invalid settings.
    """
    config_file = Path(path)
    if not config_file.exists():
        raise ConfigurationError(f"Configuration file not found: {config_file}")
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {config_file}: {e}") from e
    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a JSON object.")

    config = MetricsConfig.from_dict(config_data)
    logger.info(f"Loaded configuration from {config_file}")
    return config


def save_config(config: MetricsConfig, path: Union[str, Path]) -> Path:
    """Validate ``config`` and write it to ``path`` as JSON."""
    config.validate()
    config_file = Path(path)
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.info(f"Saved configuration to {config_file}")
    return config_file
