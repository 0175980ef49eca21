"""
Hand Sign Gesture Scoring Engine

Scores 21-point hand landmark sets (as produced by MediaPipe Hands or the
handpose model) against hand-authored gesture templates using per-finger
curl and pointing-direction criteria.
"""

__version__ = "0.1.0"

from .types import (
    Curl,
    CurlReading,
    Detection,
    Direction,
    DirectionReading,
    EstimationResult,
    Finger,
    FingerPose,
    GesturePresenter,
    GestureScore,
    LandmarkSource,
    NO_GESTURE,
)
from .exceptions import ConfigError, HandSignError, InvalidLandmarksError, TemplateError
from .config import load_config, Cfg
from .templates import (
    ALL_FINGERS,
    GestureTemplate,
    TemplateBuilder,
    TemplateRegistry,
    default_registry,
    new_template,
    set_direction,
    set_full_curl,
    set_no_curl,
)
from .gestures import GestureEstimator, analyze_hand
from .presenter_mock import MockPresenter
from .recognizer import GestureRecognizer

__all__ = [
    "Curl",
    "CurlReading",
    "Detection",
    "Direction",
    "DirectionReading",
    "EstimationResult",
    "Finger",
    "FingerPose",
    "GesturePresenter",
    "GestureScore",
    "LandmarkSource",
    "NO_GESTURE",
    "ConfigError",
    "HandSignError",
    "InvalidLandmarksError",
    "TemplateError",
    "load_config",
    "Cfg",
    "ALL_FINGERS",
    "GestureTemplate",
    "TemplateBuilder",
    "TemplateRegistry",
    "default_registry",
    "new_template",
    "set_direction",
    "set_full_curl",
    "set_no_curl",
    "GestureEstimator",
    "analyze_hand",
    "MockPresenter",
    "GestureRecognizer",
]
