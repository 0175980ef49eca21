"""
Configuration management for the gesture scoring engine.
"""
import logging
import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError
from .types import Finger

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"


@dataclass(frozen=True)
class CurlThresholds:
    """Bend limits (degrees) separating the three curl classes of one finger."""
    no_curl_max_deg: float = 60.0
    full_curl_min_deg: float = 140.0

    def __post_init__(self):
        """Validate configuration."""
        if not 0.0 < self.no_curl_max_deg < self.full_curl_min_deg:
            raise ConfigError(
                f"curl thresholds must satisfy 0 < no_curl_max_deg < full_curl_min_deg, "
                f"got {self.no_curl_max_deg} and {self.full_curl_min_deg}"
            )

    @property
    def half_band_deg(self) -> float:
        """Half the width of the half-curl band, used to normalize confidence."""
        return (self.full_curl_min_deg - self.no_curl_max_deg) / 2.0


@dataclass(frozen=True)
class CurlConfig:
    """Per-finger curl thresholds. The thumb reaches full curl earlier."""
    thumb: CurlThresholds = field(default_factory=lambda: CurlThresholds(45.0, 110.0))
    index: CurlThresholds = field(default_factory=CurlThresholds)
    middle: CurlThresholds = field(default_factory=CurlThresholds)
    ring: CurlThresholds = field(default_factory=CurlThresholds)
    pinky: CurlThresholds = field(default_factory=CurlThresholds)

    def for_finger(self, finger: Finger) -> CurlThresholds:
        return getattr(self, finger.value)


@dataclass(frozen=True)
class DirectionConfig:
    """Direction classifier settings."""
    y_axis_down: bool = True  # image coordinates: y grows towards the bottom
    min_magnitude: float = 1e-6

    def __post_init__(self):
        if not isinstance(self.y_axis_down, bool):
            raise ConfigError(f"direction.y_axis_down must be true or false, got {self.y_axis_down!r}")
        if not self.min_magnitude > 0.0:
            raise ConfigError("direction.min_magnitude must be positive")


@dataclass(frozen=True)
class ScoringConfig:
    """Criterion scoring settings."""
    partial_credit: float = 0.5  # best score a near miss can earn

    def __post_init__(self):
        if not 0.0 <= self.partial_credit < 1.0:
            raise ConfigError("scoring.partial_credit must be in [0, 1)")


@dataclass(frozen=True)
class EstimatorConfig:
    """Gesture estimator settings."""
    min_confidence: float = 0.0

    def __post_init__(self):
        if not math.isfinite(self.min_confidence) or self.min_confidence < 0.0:
            raise ConfigError("estimator.min_confidence must be a finite value >= 0")


@dataclass(frozen=True)
class PresentationConfig:
    """Acceptance threshold applied before a gesture is reported."""
    accept_confidence: float = 4.5

    def __post_init__(self):
        if not math.isfinite(self.accept_confidence) or self.accept_confidence < 0.0:
            raise ConfigError("presentation.accept_confidence must be a finite value >= 0")


@dataclass(frozen=True)
class TrackerConfig:
    """MediaPipe Hands configuration settings."""
    max_num_hands: int = 1
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.6

    def __post_init__(self):
        if isinstance(self.max_num_hands, bool) or not isinstance(self.max_num_hands, int):
            raise ConfigError(f"tracker.max_num_hands must be an integer, got {self.max_num_hands!r}")
        if self.max_num_hands < 1:
            raise ConfigError("tracker.max_num_hands must be >= 1")
        for name in ("min_detection_confidence", "min_tracking_confidence"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ConfigError(f"tracker.{name} must be in [0, 1]")


@dataclass(frozen=True)
class Cfg:
    """Main configuration class."""
    curl: CurlConfig = field(default_factory=CurlConfig)
    direction: DirectionConfig = field(default_factory=DirectionConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    estimator: EstimatorConfig = field(default_factory=EstimatorConfig)
    presentation: PresentationConfig = field(default_factory=PresentationConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)


def load_config(path: Optional[str] = None) -> Cfg:
    """
    Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses the packaged config.default.yaml

    Returns:
        Configuration object with all settings
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    cfg = _dict_to_config(data or {})
    logger.info(f"Loaded configuration from {config_path}")
    return cfg


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a mapping")
    return value


def _build(base, data: Dict[str, Any], where: str):
    """Overlay `data` on the defaults held by `base`."""
    if not isinstance(data, dict):
        raise ConfigError(f"Config section '{where}' must be a mapping")
    known = {f.name for f in fields(base)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown keys in '{where}': {', '.join(sorted(unknown))}")
    try:
        return replace(base, **data)
    except TypeError as e:
        raise ConfigError(f"Invalid value in '{where}': {e}") from e


def _dict_to_config(data: Dict[str, Any]) -> Cfg:
    """Convert dictionary to configuration object."""
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")

    curl_data = _section(data, 'curl')
    unknown = set(curl_data) - {finger.value for finger in Finger}
    if unknown:
        raise ConfigError(f"Unknown fingers in 'curl': {', '.join(sorted(unknown))}")
    defaults = Cfg()
    curl = replace(defaults.curl, **{
        name: _build(getattr(defaults.curl, name), thresholds or {}, f"curl.{name}")
        for name, thresholds in curl_data.items()
    })

    return Cfg(
        curl=curl,
        direction=_build(defaults.direction, _section(data, 'direction'), 'direction'),
        scoring=_build(defaults.scoring, _section(data, 'scoring'), 'scoring'),
        estimator=_build(defaults.estimator, _section(data, 'estimator'), 'estimator'),
        presentation=_build(defaults.presentation, _section(data, 'presentation'), 'presentation'),
        tracker=_build(defaults.tracker, _section(data, 'tracker'), 'tracker'),
    )
