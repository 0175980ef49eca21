"""
Gesture estimation: score every registered template against one hand.
"""
import logging
from typing import Any, Dict, Optional

import numpy as np

from .config import Cfg
from .curl import classify_curl
from .direction import classify_direction
from .landmarks import finger_points, is_empty, to_landmark_array
from .templates import TemplateRegistry, default_registry
from .types import Detection, EstimationResult, Finger, FingerPose, GestureScore

logger = logging.getLogger(__name__)


def analyze_hand(points: np.ndarray, cfg: Cfg) -> Dict[Finger, FingerPose]:
    """
    Classify curl and direction of all five fingers.

    Args:
        points: Validated (21, 3) landmark array
        cfg: Configuration holding curl thresholds and direction settings

    Returns:
        FingerPose per finger, thumb first
    """
    poses = {}
    for finger in Finger:
        pts = finger_points(points, finger)
        poses[finger] = FingerPose(
            finger=finger,
            curl=classify_curl(pts, cfg.curl.for_finger(finger)),
            direction=classify_direction(pts, cfg.direction),
        )
    return poses


class GestureEstimator:
    """
    Matches landmark sets against a fixed registry of gesture templates.

    Stateless between calls: the registry and configuration are read-only, so
    one estimator can serve several threads.
    """

    def __init__(self, registry: Optional[TemplateRegistry] = None, cfg: Optional[Cfg] = None):
        """Initialize with a template registry (defaults to the eight built-in gestures)."""
        self.registry = registry if registry is not None else default_registry()
        self.cfg = cfg if cfg is not None else Cfg()

    def estimate(self, landmarks: Any, min_confidence: Optional[float] = None) -> EstimationResult:
        """
        Score all templates against one hand.

        Args:
            landmarks: 21 (x, y, z) landmarks, or None/empty when no hand was found
            min_confidence: Drop templates scoring below this; defaults to
                estimator.min_confidence. Zero scores are always dropped.

        Returns:
            EstimationResult in registry order

        Raises:
            InvalidLandmarksError: if landmarks are present but malformed
        """
        if is_empty(landmarks):
            return EstimationResult()

        if min_confidence is None:
            min_confidence = self.cfg.estimator.min_confidence

        points = to_landmark_array(landmarks)
        poses = analyze_hand(points, self.cfg)
        partial_credit = self.cfg.scoring.partial_credit

        scores = []
        for template in self.registry:
            confidence = template.match_against(poses, partial_credit)
            if confidence > 0.0 and confidence >= min_confidence:
                scores.append(GestureScore(template.name, confidence, template.max_confidence))

        if logger.isEnabledFor(logging.DEBUG):
            kept = ", ".join(f"{s.name}={s.confidence:.2f}" for s in scores)
            logger.debug(f"Scored {len(self.registry)} templates, kept {len(scores)}: {kept}")
        return EstimationResult(gestures=tuple(scores), poses=tuple(poses.values()))

    def detect(self, landmarks: Any, accept_confidence: Optional[float] = None) -> Detection:
        """
        Return the best gesture name and its confidence, or (None, 0.0).

        Args:
            landmarks: 21 (x, y, z) landmarks, or None/empty when no hand was found
            accept_confidence: Threshold the best score must exceed; defaults to
                presentation.accept_confidence
        """
        if accept_confidence is None:
            accept_confidence = self.cfg.presentation.accept_confidence
        return self.estimate(landmarks).best(accept_confidence)
