"""
Finger curl classification from joint angles.

A finger's bend is the sum of the angles between its three consecutive
segments (base -> joint -> joint -> tip), so a straight finger bends 0 degrees
and a tightly closed one well past 180.
"""
import math

import numpy as np

from .config import CurlThresholds
from .geometry import EPSILON, angle_between, magnitude, vector
from .types import INDETERMINATE_CURL, Curl, CurlReading


def bend_angle(points: np.ndarray) -> float:
    """
    Total bend of a finger in degrees.

    Args:
        points: (4, 3) landmarks of one finger, base -> tip

    Returns:
        Sum of the two inter-segment angles, or NaN if a segment has no length
    """
    segments = [vector(points[i], points[i + 1]) for i in range(3)]
    if any(magnitude(s) < EPSILON for s in segments):
        return math.nan
    return math.degrees(angle_between(segments[0], segments[1]) +
                        angle_between(segments[1], segments[2]))


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def classify_bend(bend_deg: float, thresholds: CurlThresholds) -> CurlReading:
    """Bucket a bend angle into a curl class with a boundary-distance confidence."""
    if math.isnan(bend_deg):
        return INDETERMINATE_CURL

    low = thresholds.no_curl_max_deg
    high = thresholds.full_curl_min_deg
    width = thresholds.half_band_deg

    if bend_deg < low:
        return CurlReading(Curl.NO_CURL, _clamp01((low - bend_deg) / width), bend_deg, Curl.HALF_CURL)
    if bend_deg >= high:
        return CurlReading(Curl.FULL_CURL, _clamp01((bend_deg - high) / width), bend_deg, Curl.HALF_CURL)

    to_low = bend_deg - low
    to_high = high - bend_deg
    if to_low <= to_high:
        return CurlReading(Curl.HALF_CURL, _clamp01(to_low / width), bend_deg, Curl.NO_CURL)
    return CurlReading(Curl.HALF_CURL, _clamp01(to_high / width), bend_deg, Curl.FULL_CURL)


def classify_curl(points: np.ndarray, thresholds: CurlThresholds) -> CurlReading:
    """Classify one finger's curl from its four landmarks."""
    return classify_bend(bend_angle(points), thresholds)


def score_curl(expected: Curl, reading: CurlReading, partial_credit: float) -> float:
    """
    Score one curl criterion against a reading.

    Args:
        expected: Curl the template asks for
        reading: Observed curl of the finger
        partial_credit: Score of a near miss right at the class boundary

    Returns:
        1.0 on a match, a partial score when the reading sits close to the
        boundary with the expected class, 0.0 otherwise
    """
    if reading.curl is None:
        return 0.0
    if reading.curl == expected:
        return 1.0
    if reading.neighbor == expected:
        return partial_credit * (1.0 - reading.confidence)
    return 0.0
