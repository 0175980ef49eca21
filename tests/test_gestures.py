"""
Test cases for gesture estimation with synthetic landmark sets.
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add project root and this directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from handsign.config import Cfg, EstimatorConfig, PresentationConfig, load_config
from handsign.exceptions import InvalidLandmarksError
from handsign.gestures import GestureEstimator, analyze_hand
from handsign.landmarks import FINGER_LANDMARKS, to_landmark_array
from handsign.templates import TemplateRegistry, default_registry, new_template
from handsign.types import NO_GESTURE, Curl, Direction, EstimationResult, Finger
from synthetic_hands import CANONICAL_POSES, FINGER_BASES, build_hand, canonical_hand, finger_chain


class TestCanonicalGestures(unittest.TestCase):
    """Every built-in gesture must win on a hand posed exactly like it."""

    def setUp(self):
        """Set up test configuration."""
        self.cfg = load_config()
        self.estimator = GestureEstimator(cfg=self.cfg)
        self.registry = default_registry()

    def test_poses_cover_all_templates(self):
        """Test that a synthetic pose exists for every registered gesture."""
        self.assertEqual(sorted(CANONICAL_POSES), sorted(self.registry.list_template_names()))

    def test_each_template_ranks_first(self):
        """Test that each canonical hand ranks its own template first at full confidence."""
        for name in self.registry.list_template_names():
            with self.subTest(gesture=name):
                result = self.estimator.estimate(canonical_hand(name))
                best = result.ranked()[0]
                self.assertEqual(best.name, name)
                self.assertAlmostEqual(best.confidence, self.registry.get(name).max_confidence, places=6)
                self.assertAlmostEqual(best.max_confidence, self.registry.get(name).max_confidence)

    def test_each_template_is_detected(self):
        """Test that the public (name, confidence) pair reports the canonical gesture."""
        for name in self.registry.list_template_names():
            with self.subTest(gesture=name):
                detection = self.estimator.detect(canonical_hand(name))
                self.assertEqual(detection.gesture, name)
                self.assertTrue(detection.detected)

    def test_runner_up_is_strictly_lower(self):
        """Test that no other template ties the canonical one."""
        for name in self.registry.list_template_names():
            with self.subTest(gesture=name):
                ranked = self.estimator.estimate(canonical_hand(name)).ranked()
                self.assertGreater(ranked[0].confidence, ranked[1].confidence + 0.5)


class TestGestureEstimator(unittest.TestCase):
    """Test estimator contract and edge cases."""

    def setUp(self):
        """Set up test configuration."""
        self.cfg = Cfg()
        self.estimator = GestureEstimator(cfg=self.cfg)

    def test_no_hand_returns_empty_result(self):
        """Test that missing landmarks short-circuit to an empty result."""
        for empty in (None, [], np.zeros((0, 3))):
            result = self.estimator.estimate(empty)
            self.assertIsInstance(result, EstimationResult)
            self.assertEqual(len(result), 0)
            self.assertEqual(result.poses, ())

    def test_no_hand_detects_nothing(self):
        """Test that no hand yields no gesture with zero confidence."""
        detection = self.estimator.detect([])
        self.assertEqual(detection, NO_GESTURE)
        self.assertIsNone(detection.gesture)
        self.assertEqual(detection.confidence, 0.0)

    def test_wrong_landmark_count_fails_fast(self):
        """Test that malformed landmark sets raise instead of being padded or truncated."""
        hand = canonical_hand("open_palm")
        with self.assertRaises(InvalidLandmarksError):
            self.estimator.estimate(hand[:20])
        with self.assertRaises(InvalidLandmarksError):
            self.estimator.estimate(np.vstack([hand, hand[:1]]))

    def test_malformed_input_raises_landmark_error(self):
        """Test that malformed values surface as InvalidLandmarksError from estimate."""
        generator = (tuple(p) for p in canonical_hand("victory").tolist())
        for landmarks in (5, generator, [["a", "b", "c"]] * 21, [{"x": None, "y": 0, "z": 0}] * 21):
            with self.subTest(landmarks=type(landmarks).__name__):
                with self.assertRaises(InvalidLandmarksError):
                    self.estimator.estimate(landmarks)

    def test_results_follow_registry_order(self):
        """Test that scores keep registry order, not confidence order."""
        result = self.estimator.estimate(canonical_hand("victory"))
        names = [score.name for score in result]
        order = default_registry().list_template_names()
        self.assertEqual(names, [name for name in order if name in names])

    def test_all_scores_positive(self):
        """Test that zero-score templates are left out."""
        result = self.estimator.estimate(canonical_hand("open_palm"))
        self.assertNotIn("closed_fist", [score.name for score in result])
        for score in result:
            self.assertGreater(score.confidence, 0.0)

    def test_min_confidence_filters(self):
        """Test that the estimator cutoff drops low-scoring templates."""
        result = self.estimator.estimate(canonical_hand("open_palm"), min_confidence=7.0)
        self.assertEqual([score.name for score in result], ["open_palm"])

    def test_min_confidence_from_config(self):
        """Test that the configured cutoff applies when none is passed."""
        estimator = GestureEstimator(cfg=Cfg(estimator=EstimatorConfig(min_confidence=7.0)))
        result = estimator.estimate(canonical_hand("open_palm"))
        self.assertEqual([score.name for score in result], ["open_palm"])

    def test_acceptance_threshold_is_independent(self):
        """Test that the display threshold does not change what estimate returns."""
        strict = GestureEstimator(cfg=Cfg(presentation=PresentationConfig(accept_confidence=20.0)))
        hand = canonical_hand("closed_fist")

        self.assertEqual(len(strict.estimate(hand)), len(self.estimator.estimate(hand)))
        self.assertEqual(strict.detect(hand), NO_GESTURE)
        self.assertEqual(self.estimator.detect(hand).gesture, "closed_fist")

    def test_acceptance_is_strict(self):
        """Test that a best score equal to the threshold is rejected."""
        hand = canonical_hand("closed_fist")
        self.assertEqual(self.estimator.detect(hand, accept_confidence=5.0), NO_GESTURE)
        self.assertEqual(self.estimator.detect(hand, accept_confidence=4.99).gesture, "closed_fist")

    def test_estimate_is_deterministic(self):
        """Test that identical input always yields identical output."""
        hand = canonical_hand("rock_on")
        first = self.estimator.estimate(hand)
        for _ in range(5):
            self.assertEqual(self.estimator.estimate(hand.copy()), first)
            self.assertEqual(self.estimator.estimate(hand.tolist()), first)

    def test_estimate_does_not_mutate_input(self):
        """Test that landmarks are left untouched."""
        hand = canonical_hand("call_me")
        before = hand.copy()
        self.estimator.estimate(hand)
        np.testing.assert_array_equal(hand, before)

    def test_poses_reported(self):
        """Test that the per-finger analysis is returned with the scores."""
        result = self.estimator.estimate(canonical_hand("point_up"))
        poses = {pose.finger: pose for pose in result.poses}
        self.assertEqual(list(poses), list(Finger))
        self.assertEqual(poses[Finger.INDEX].curl.curl, Curl.NO_CURL)
        self.assertEqual(poses[Finger.INDEX].direction.direction, Direction.VERTICAL_UP)
        self.assertEqual(poses[Finger.THUMB].curl.curl, Curl.HALF_CURL)
        self.assertEqual(poses[Finger.RING].curl.curl, Curl.FULL_CURL)

    def test_degenerate_hand_scores_nothing(self):
        """Test that a hand collapsed to one point gives indeterminate readings."""
        result = self.estimator.estimate(np.full((21, 3), 0.5))
        self.assertEqual(len(result), 0)
        for pose in result.poses:
            self.assertIsNone(pose.curl.curl)
            self.assertIsNone(pose.direction.direction)
            self.assertEqual(pose.curl.confidence, 0.0)

    def test_custom_registry(self):
        """Test estimation against a caller-built registry."""
        pinch = new_template("pinch").add_curl(Finger.INDEX, Curl.HALF_CURL).build()
        estimator = GestureEstimator(TemplateRegistry([pinch]), cfg=self.cfg)

        self.assertEqual([s.name for s in estimator.estimate(canonical_hand("ok_sign"))], ["pinch"])
        self.assertEqual(len(estimator.estimate(canonical_hand("open_palm"))), 0)


class TestPartialCredit(unittest.TestCase):
    """Test near-miss scoring through the estimator."""

    def setUp(self):
        self.cfg = Cfg()
        self.registry = TemplateRegistry([
            new_template("index_straight").add_curl(Finger.INDEX, Curl.NO_CURL).build(),
        ])
        self.estimator = GestureEstimator(self.registry, cfg=self.cfg)

    def _hand_with_index_bend(self, bend_deg: float) -> np.ndarray:
        hand = canonical_hand("open_palm")
        hand[list(FINGER_LANDMARKS[Finger.INDEX])] = finger_chain(FINGER_BASES[Finger.INDEX], 90.0, bend_deg / 2.0)
        return hand

    def test_near_boundary_earns_partial_score(self):
        """Test that a half curl just past the no-curl limit scores between 0 and 1."""
        result = self.estimator.estimate(self._hand_with_index_bend(70.0))
        self.assertEqual(len(result), 1)
        self.assertGreater(result[0].confidence, 0.0)
        self.assertLess(result[0].confidence, self.cfg.scoring.partial_credit)

    def test_partial_score_falls_with_distance(self):
        """Test that partial credit shrinks as the bend moves away from the boundary."""
        near = self.estimator.estimate(self._hand_with_index_bend(65.0))[0].confidence
        far = self.estimator.estimate(self._hand_with_index_bend(85.0))[0].confidence
        self.assertGreater(near, far)

    def test_clear_mismatch_scores_zero(self):
        """Test that a fully curled finger earns nothing for a no-curl criterion."""
        result = self.estimator.estimate(self._hand_with_index_bend(200.0))
        self.assertEqual(len(result), 0)


class TestAnalyzeHand(unittest.TestCase):
    """Test the shared per-finger analysis."""

    def test_one_pose_per_finger(self):
        """Test that each finger is analysed exactly once."""
        hand = build_hand(CANONICAL_POSES["thumbs_up"])
        poses = analyze_hand(to_landmark_array(hand), Cfg())
        self.assertEqual(list(poses), list(Finger))
        self.assertEqual(poses[Finger.THUMB].curl.curl, Curl.NO_CURL)
        self.assertEqual(poses[Finger.THUMB].direction.direction, Direction.VERTICAL_UP)
        for finger in (Finger.INDEX, Finger.MIDDLE, Finger.RING, Finger.PINKY):
            self.assertEqual(poses[finger].curl.curl, Curl.FULL_CURL)
            self.assertEqual(poses[finger].direction.direction, Direction.VERTICAL_DOWN)


if __name__ == '__main__':
    unittest.main()
