"""
Per-tick glue between the hand-landmark model, the estimator and a presenter.
"""
import asyncio
import logging
from typing import Any, List, Optional

from .config import Cfg, load_config
from .gestures import GestureEstimator
from .presenter_mock import MockPresenter
from .types import NO_GESTURE, Detection, GesturePresenter, LandmarkSource, RawLandmarks

logger = logging.getLogger(__name__)


class GestureRecognizer:
    """Runs one detection per polling tick and hands the result to a presenter.

    A tick that starts while another is still in flight is discarded rather
    than queued.
    """

    def __init__(self, source: LandmarkSource, presenter: GesturePresenter,
                 estimator: Optional[GestureEstimator] = None, cfg: Optional[Cfg] = None):
        """
        Initialize the recognizer.

        Args:
            source: Hand-landmark model returning 0 or 1 hands per frame
            presenter: Consumer of the per-tick (gesture, confidence) pair
            estimator: Gesture estimator; built from `cfg` when omitted
            cfg: Configuration; defaults to built-in values
        """
        self.cfg = cfg if cfg is not None else Cfg()
        self.source = source
        self.presenter = presenter
        self.estimator = estimator if estimator is not None else GestureEstimator(cfg=self.cfg)
        self._busy = False
        self.skipped_ticks = 0

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "GestureRecognizer":
        """Build a recognizer backed by MediaPipe Hands and the mock presenter."""
        from .landmarks import HandsTracker

        cfg = load_config(config_path)
        return cls(HandsTracker.from_config(cfg.tracker), MockPresenter(), cfg=cfg)

    @property
    def busy(self) -> bool:
        return self._busy

    def detect_hands(self, hands: List[RawLandmarks]) -> Detection:
        """Detect the gesture of the first hand, or report no gesture."""
        if not hands:
            return NO_GESTURE
        return self.estimator.detect(hands[0], self.cfg.presentation.accept_confidence)

    async def tick(self, frame: Any) -> Optional[Detection]:
        """
        Process one frame.

        Args:
            frame: Image handed unchanged to the landmark source

        Returns:
            The detection shown to the presenter, or None if the tick was
            discarded because a previous one is still running
        """
        if self._busy:
            self.skipped_ticks += 1
            logger.debug(f"Tick discarded, previous tick still running ({self.skipped_ticks} skipped)")
            return None

        self._busy = True
        try:
            hands = await asyncio.to_thread(self.source.estimate_hands, frame)
            detection = self.detect_hands(hands)
            await self.presenter.show(detection)
            return detection
        finally:
            self._busy = False
