"""
Hand landmark topology, validation and MediaPipe-based extraction.
"""
import logging
from collections.abc import Sized
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .exceptions import InvalidLandmarksError
from .types import Finger

logger = logging.getLogger(__name__)

NUM_LANDMARKS = 21

# Landmark order used by MediaPipe Hands and the handpose model
HAND_LANDMARKS = [
    "wrist",
    "thumb_cmc", "thumb_mcp", "thumb_ip", "thumb_tip",
    "index_mcp", "index_pip", "index_dip", "index_tip",
    "middle_mcp", "middle_pip", "middle_dip", "middle_tip",
    "ring_mcp", "ring_pip", "ring_dip", "ring_tip",
    "pinky_mcp", "pinky_pip", "pinky_dip", "pinky_tip",
]

WRIST = 0

# Four landmark indices per finger, base -> tip
FINGER_LANDMARKS: Dict[Finger, Tuple[int, int, int, int]] = {
    Finger.THUMB: (1, 2, 3, 4),
    Finger.INDEX: (5, 6, 7, 8),
    Finger.MIDDLE: (9, 10, 11, 12),
    Finger.RING: (13, 14, 15, 16),
    Finger.PINKY: (17, 18, 19, 20),
}


def _coordinates(entry: Any, index: int) -> Tuple[Any, Any, Any]:
    if hasattr(entry, "x") and hasattr(entry, "y") and hasattr(entry, "z"):
        return (entry.x, entry.y, entry.z)
    if isinstance(entry, dict):
        try:
            return (entry["x"], entry["y"], entry["z"])
        except KeyError as e:
            raise InvalidLandmarksError(f"Landmark {index} is missing coordinate {e}") from e
    if isinstance(entry, (list, tuple, np.ndarray)) and len(entry) == 3:
        return (entry[0], entry[1], entry[2])
    raise InvalidLandmarksError(
        f"Landmark {index} must be an (x, y, z) point, got {type(entry).__name__}"
    )


def _point(entry: Any, index: int) -> Tuple[float, float, float]:
    x, y, z = _coordinates(entry, index)
    try:
        return (float(x), float(y), float(z))
    except (TypeError, ValueError) as e:
        raise InvalidLandmarksError(f"Landmark {index} has a non-numeric coordinate: {e}") from e


def is_empty(landmarks: Any) -> bool:
    """
    True when the model reported no hand (None or an empty sequence).

    Raises:
        InvalidLandmarksError: if `landmarks` is neither None nor a sized collection
    """
    if landmarks is None:
        return True
    if not isinstance(landmarks, Sized):
        raise InvalidLandmarksError(
            f"Expected a sequence of landmarks, got {type(landmarks).__name__}"
        )
    return len(landmarks) == 0


def to_landmark_array(landmarks: Any) -> np.ndarray:
    """
    Validate a landmark set and convert it to a read-only array.

    Args:
        landmarks: 21 points as an ndarray, (x, y, z) sequences, dicts with
            x/y/z keys, or objects with x/y/z attributes

    Returns:
        Read-only float array of shape (21, 3)

    Raises:
        InvalidLandmarksError: if the set does not hold exactly 21 finite 3-D points
    """
    if landmarks is None:
        raise InvalidLandmarksError("Expected 21 landmarks, got None")

    if isinstance(landmarks, np.ndarray):
        if landmarks.ndim != 2 or landmarks.shape[1] != 3:
            raise InvalidLandmarksError(f"Expected landmark array of shape (21, 3), got {landmarks.shape}")
        try:
            points = np.array(landmarks, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidLandmarksError(f"Landmark array is not numeric: {e}") from e
    elif isinstance(landmarks, Sized):
        points = np.array([_point(entry, i) for i, entry in enumerate(landmarks)], dtype=float)
    else:
        raise InvalidLandmarksError(
            f"Expected a sequence of landmarks, got {type(landmarks).__name__}"
        )

    if len(points) != NUM_LANDMARKS:
        raise InvalidLandmarksError(f"Expected {NUM_LANDMARKS} landmarks, got {len(points)}")
    if not np.all(np.isfinite(points)):
        raise InvalidLandmarksError("Landmarks contain non-finite coordinates")

    points.setflags(write=False)
    return points


def finger_points(points: np.ndarray, finger: Finger) -> np.ndarray:
    """Return the (4, 3) base -> tip landmarks of one finger."""
    return points[list(FINGER_LANDMARKS[finger])]


def landmarks_from_mediapipe(hand_landmarks: Any) -> List[Tuple[float, float, float]]:
    """Convert a MediaPipe NormalizedLandmarkList to 21 (x, y, z) tuples."""
    return [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands.

    Implements the LandmarkSource protocol. MediaPipe and OpenCV are only
    needed once a tracker is built (``pip install handsign[tracker]``).
    """

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.6,
                 min_tracking_conf: float = 0.6, hands: Optional[Any] = None):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
            hands: Prebuilt object with a MediaPipe-style ``process(rgb)``;
                a ``mediapipe.solutions.hands.Hands`` is created when omitted
        """
        if hands is None:
            import mediapipe as mp

            hands = mp.solutions.hands.Hands(
                static_image_mode=False,
                max_num_hands=max_num_hands,
                min_detection_confidence=min_detection_conf,
                min_tracking_confidence=min_tracking_conf
            )
            logger.info(f"MediaPipe Hands ready (max_num_hands={max_num_hands})")
        self.hands = hands

    @classmethod
    def from_config(cls, tracker_cfg) -> "HandsTracker":
        return cls(
            max_num_hands=tracker_cfg.max_num_hands,
            min_detection_conf=tracker_cfg.min_detection_confidence,
            min_tracking_conf=tracker_cfg.min_tracking_confidence,
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Tuple[float, float, float]]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 (x, y, z) coordinates, x/y in [0..1] range, or None if no hand detected
        """
        import cv2

        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # Return landmarks for the first detected hand
            return landmarks_from_mediapipe(results.multi_hand_landmarks[0])

        return None

    def estimate_hands(self, frame_bgr: np.ndarray) -> List[List[Tuple[float, float, float]]]:
        """Return a list holding zero or one hand."""
        landmarks = self.process(frame_bgr)
        return [] if landmarks is None else [landmarks]

    def close(self) -> None:
        """Release MediaPipe resources."""
        close = getattr(self.hands, "close", None)
        if close is not None:
            close()
