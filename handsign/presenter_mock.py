"""
Mock presenter implementation for testing gesture detections.
"""
import logging
from typing import List

from .types import Detection

logger = logging.getLogger(__name__)


class MockPresenter:
    """Mock presenter that records and logs detections instead of rendering them."""

    def __init__(self):
        """Initialize the mock presenter."""
        self.shown: List[Detection] = []

    async def show(self, detection: Detection) -> None:
        """Record the detection and log it."""
        self.shown.append(detection)
        if detection.detected:
            logger.info(f"[MockPresenter] {detection.gesture} "
                        f"(confidence={detection.confidence:.2f}, call #{self.show_count})")
        else:
            logger.debug(f"[MockPresenter] no gesture (call #{self.show_count})")

    @property
    def show_count(self) -> int:
        return len(self.shown)

    @property
    def last(self) -> Detection:
        return self.shown[-1]

    def reset(self) -> None:
        """Reset recorded detections for testing."""
        self.shown.clear()
