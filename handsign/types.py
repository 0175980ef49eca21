"""
Type definitions for hand sign recognition.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional, Protocol, Sequence, Tuple, runtime_checkable


class Finger(Enum):
    """The five fingers, thumb first."""
    THUMB = "thumb"
    INDEX = "index"
    MIDDLE = "middle"
    RING = "ring"
    PINKY = "pinky"


class Curl(Enum):
    """How bent a finger is."""
    NO_CURL = "no_curl"
    HALF_CURL = "half_curl"
    FULL_CURL = "full_curl"

    @property
    def rank(self) -> int:
        """Position in bend order (0 = straight)."""
        return _CURL_ORDER.index(self)


_CURL_ORDER = (Curl.NO_CURL, Curl.HALF_CURL, Curl.FULL_CURL)


class Direction(Enum):
    """Pointing direction of a finger, one per 45 degree sector."""
    HORIZONTAL_RIGHT = "horizontal_right"
    DIAGONAL_UP_RIGHT = "diagonal_up_right"
    VERTICAL_UP = "vertical_up"
    DIAGONAL_UP_LEFT = "diagonal_up_left"
    HORIZONTAL_LEFT = "horizontal_left"
    DIAGONAL_DOWN_LEFT = "diagonal_down_left"
    VERTICAL_DOWN = "vertical_down"
    DIAGONAL_DOWN_RIGHT = "diagonal_down_right"

    @property
    def sector(self) -> int:
        """Sector index counted counter-clockwise from the positive x-axis."""
        return SECTORS.index(self)

    @property
    def center_deg(self) -> float:
        """Angle of the sector centre in degrees."""
        return self.sector * 45.0


# Sector order: 0 deg = right, 90 deg = up
SECTORS = tuple(Direction)


@dataclass(frozen=True)
class CurlReading:
    """Curl classification of one finger.

    `curl` is None when the finger geometry is degenerate. `neighbor` is the
    curl on the other side of the nearest class boundary.
    """
    curl: Optional[Curl]
    confidence: float
    bend_deg: float = 0.0
    neighbor: Optional[Curl] = None


@dataclass(frozen=True)
class DirectionReading:
    """Direction classification of one finger.

    `direction` is None when the projected finger vector is too short.
    `neighbor` is the adjacent sector the angle leans towards.
    """
    direction: Optional[Direction]
    confidence: float
    angle_deg: float = 0.0
    neighbor: Optional[Direction] = None


INDETERMINATE_CURL = CurlReading(curl=None, confidence=0.0)
INDETERMINATE_DIRECTION = DirectionReading(direction=None, confidence=0.0)


@dataclass(frozen=True)
class FingerPose:
    """Curl and direction readings of a single finger."""
    finger: Finger
    curl: CurlReading
    direction: DirectionReading


@dataclass(frozen=True)
class GestureScore:
    """Weighted score of one template against one landmark set."""
    name: str
    confidence: float
    max_confidence: float = 0.0


@dataclass(frozen=True)
class Detection:
    """Best gesture of a tick, or no gesture."""
    gesture: Optional[str]
    confidence: float

    @property
    def detected(self) -> bool:
        return self.gesture is not None


NO_GESTURE = Detection(gesture=None, confidence=0.0)


@dataclass(frozen=True)
class EstimationResult:
    """Scores of every template that matched above zero, in registry order."""
    gestures: Tuple[GestureScore, ...] = ()
    poses: Tuple[FingerPose, ...] = field(default=(), compare=False)

    def __iter__(self) -> Iterator[GestureScore]:
        return iter(self.gestures)

    def __len__(self) -> int:
        return len(self.gestures)

    def __getitem__(self, index: int) -> GestureScore:
        return self.gestures[index]

    def ranked(self) -> List[GestureScore]:
        """Scores sorted by descending confidence; ties keep registry order."""
        return sorted(self.gestures, key=lambda score: score.confidence, reverse=True)

    def best(self, accept_confidence: float) -> Detection:
        """
        Pick the top-ranked gesture if it clears the acceptance threshold.

        Args:
            accept_confidence: Confidence the best score must strictly exceed

        Returns:
            Detection of the best gesture, or NO_GESTURE
        """
        ranked = self.ranked()
        if ranked and ranked[0].confidence > accept_confidence:
            return Detection(gesture=ranked[0].name, confidence=ranked[0].confidence)
        return NO_GESTURE


# Any accepted landmark input: ndarray, point sequences, dicts or objects with x/y/z
RawLandmarks = Sequence[Any]


@runtime_checkable
class LandmarkSource(Protocol):
    """Abstract protocol for hand-landmark models."""

    def estimate_hands(self, frame: Any) -> List[RawLandmarks]:
        """Return 0 or 1 hands, each as 21 ordered 3-D landmarks."""
        ...


@runtime_checkable
class GesturePresenter(Protocol):
    """Abstract protocol for consumers of per-tick detections."""

    async def show(self, detection: Detection) -> None:
        """Present the detected gesture name (or none) and its confidence."""
        ...
