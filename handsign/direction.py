"""
Finger pointing-direction classification.
"""
import numpy as np

from .config import DirectionConfig
from .geometry import angle_2d, vector
from .types import INDETERMINATE_DIRECTION, SECTORS, Direction, DirectionReading

SECTOR_WIDTH_DEG = 360.0 / len(SECTORS)
HALF_SECTOR_DEG = SECTOR_WIDTH_DEG / 2.0


def classify_angle(angle_deg: float) -> DirectionReading:
    """
    Bucket a planar angle into one of the 8 direction sectors.

    Sectors are half-open, [centre - 22.5, centre + 22.5), so every angle
    belongs to exactly one of them.

    Args:
        angle_deg: Angle from the positive x-axis, counter-clockwise, "up" = 90

    Returns:
        DirectionReading with confidence 1.0 at the sector centre falling to 0
        at its edges
    """
    angle_deg = angle_deg % 360.0
    index = int(((angle_deg + HALF_SECTOR_DEG) % 360.0) // SECTOR_WIDTH_DEG) % len(SECTORS)
    offset = (angle_deg - index * SECTOR_WIDTH_DEG + 180.0) % 360.0 - 180.0
    confidence = max(0.0, 1.0 - abs(offset) / HALF_SECTOR_DEG)
    neighbor = SECTORS[(index + (1 if offset >= 0 else -1)) % len(SECTORS)]
    return DirectionReading(SECTORS[index], confidence, angle_deg, neighbor)


def classify_direction(points: np.ndarray, cfg: DirectionConfig) -> DirectionReading:
    """
    Classify where a finger points from its base and tip landmarks.

    The tip-minus-base vector is projected onto the camera-facing x/y plane.
    With `cfg.y_axis_down` the y component is flipped so "up" means towards
    the top of the image.
    """
    dx, dy, _ = vector(points[0], points[-1])
    if cfg.y_axis_down:
        dy = -dy
    if np.hypot(dx, dy) < cfg.min_magnitude:
        return INDETERMINATE_DIRECTION
    return classify_angle(angle_2d(dx, dy))


def score_direction(expected: Direction, reading: DirectionReading, partial_credit: float) -> float:
    """Score one direction criterion: 1.0 on match, partial for the leaning neighbour, else 0."""
    if reading.direction is None:
        return 0.0
    if reading.direction == expected:
        return 1.0
    if reading.neighbor == expected:
        return partial_credit * (1.0 - reading.confidence)
    return 0.0
