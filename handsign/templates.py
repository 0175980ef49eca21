"""
Gesture templates: named, weighted sets of per-finger curl and direction
expectations.

Templates are assembled with a TemplateBuilder and frozen by `build()`; the
resulting GestureTemplate and TemplateRegistry are read-only, so one registry
can be shared by every estimator and thread.

Example:
    builder = new_template("victory")
    set_no_curl(builder, [Finger.INDEX, Finger.MIDDLE])
    set_full_curl(builder, [Finger.RING, Finger.PINKY])
    builder.add_direction(Finger.INDEX, Direction.VERTICAL_UP)
    victory = builder.build()
"""
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from .curl import score_curl
from .direction import score_direction
from .exceptions import TemplateError
from .types import Curl, Direction, Finger, FingerPose

ALL_FINGERS = tuple(Finger)


@dataclass(frozen=True)
class CurlCriterion:
    finger: Finger
    curl: Curl
    weight: float = 1.0


@dataclass(frozen=True)
class DirectionCriterion:
    finger: Finger
    direction: Direction
    weight: float = 1.0


@dataclass(frozen=True)
class GestureTemplate:
    """Immutable gesture description. Build it with `new_template`."""
    name: str
    curls: Tuple[CurlCriterion, ...]
    directions: Tuple[DirectionCriterion, ...]

    @property
    def max_confidence(self) -> float:
        """Score of a perfect match: the sum of all criteria weights."""
        return math.fsum(c.weight for c in self.curls + self.directions)

    def match_against(self, poses: Mapping[Finger, FingerPose], partial_credit: float) -> float:
        """
        Score this template against analysed fingers.

        Args:
            poses: Curl and direction readings keyed by finger
            partial_credit: Score of a near miss right at a class boundary

        Returns:
            Weighted sum of criterion scores, independent of criteria order
        """
        terms = [
            c.weight * score_curl(c.curl, poses[c.finger].curl, partial_credit)
            for c in self.curls
        ]
        terms.extend(
            c.weight * score_direction(c.direction, poses[c.finger].direction, partial_credit)
            for c in self.directions
        )
        return math.fsum(terms)


def _check_weight(weight: float) -> float:
    weight = float(weight)
    if not math.isfinite(weight) or weight <= 0.0:
        raise TemplateError(f"Criterion weight must be a positive finite number, got {weight}")
    return weight


class TemplateBuilder:
    """Accumulates criteria for one gesture until `build()` freezes them."""

    def __init__(self, name: str):
        if not name:
            raise TemplateError("Gesture template name must not be empty")
        self.name = name
        self._curls: List[CurlCriterion] = []
        self._directions: List[DirectionCriterion] = []

    def add_curl(self, finger: Finger, curl: Curl, weight: float = 1.0) -> "TemplateBuilder":
        """Expect `finger` to show `curl`. Repeated calls add criteria, never replace."""
        self._curls.append(CurlCriterion(Finger(finger), Curl(curl), _check_weight(weight)))
        return self

    def add_direction(self, finger: Finger, direction: Direction, weight: float = 1.0) -> "TemplateBuilder":
        """Expect `finger` to point in `direction`. Repeated calls add criteria."""
        self._directions.append(
            DirectionCriterion(Finger(finger), Direction(direction), _check_weight(weight))
        )
        return self

    def build(self) -> GestureTemplate:
        if not self._curls and not self._directions:
            raise TemplateError(f"Gesture template '{self.name}' has no criteria")
        return GestureTemplate(self.name, tuple(self._curls), tuple(self._directions))


def new_template(name: str) -> TemplateBuilder:
    return TemplateBuilder(name)


def set_full_curl(builder: TemplateBuilder, fingers: Iterable[Finger]) -> TemplateBuilder:
    for finger in fingers:
        builder.add_curl(finger, Curl.FULL_CURL, 1.0)
    return builder


def set_no_curl(builder: TemplateBuilder, fingers: Iterable[Finger]) -> TemplateBuilder:
    for finger in fingers:
        builder.add_curl(finger, Curl.NO_CURL, 1.0)
    return builder


def set_direction(builder: TemplateBuilder, finger: Finger, direction: Direction,
                  weight: float = 1.0) -> TemplateBuilder:
    return builder.add_direction(finger, direction, weight)


class TemplateRegistry:
    """Fixed, ordered collection of templates with unique names."""

    def __init__(self, templates: Iterable[GestureTemplate]):
        self._templates: Tuple[GestureTemplate, ...] = tuple(templates)
        self._by_name: Dict[str, GestureTemplate] = {}
        for template in self._templates:
            if template.name in self._by_name:
                raise TemplateError(f"Duplicate gesture template name: {template.name}")
            self._by_name[template.name] = template

    def __iter__(self) -> Iterator[GestureTemplate]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> GestureTemplate:
        """Look up a template by name; raises KeyError for unknown names."""
        return self._by_name[name]

    def list_template_names(self) -> List[str]:
        return [template.name for template in self._templates]


def build_default_templates() -> List[GestureTemplate]:
    """The eight gestures recognised out of the box, in display order."""
    up = Direction.VERTICAL_UP

    victory = new_template('victory')
    set_no_curl(victory, [Finger.INDEX, Finger.MIDDLE])
    set_full_curl(victory, [Finger.RING, Finger.PINKY])
    set_direction(victory, Finger.INDEX, up)
    set_direction(victory, Finger.MIDDLE, up)
    victory.add_curl(Finger.THUMB, Curl.HALF_CURL)

    thumbs_up = new_template('thumbs_up')
    set_full_curl(thumbs_up, [Finger.INDEX, Finger.MIDDLE, Finger.RING, Finger.PINKY])
    thumbs_up.add_curl(Finger.THUMB, Curl.NO_CURL, 1.0)
    set_direction(thumbs_up, Finger.THUMB, up, 1.0)

    open_palm = new_template('open_palm')
    set_no_curl(open_palm, ALL_FINGERS)
    for finger in ALL_FINGERS:
        set_direction(open_palm, finger, up)

    closed_fist = new_template('closed_fist')
    set_full_curl(closed_fist, ALL_FINGERS)

    point_up = new_template('point_up')
    set_full_curl(point_up, [Finger.MIDDLE, Finger.RING, Finger.PINKY])
    point_up.add_curl(Finger.INDEX, Curl.NO_CURL, 1.0)
    point_up.add_curl(Finger.THUMB, Curl.HALF_CURL, 0.8)
    set_direction(point_up, Finger.INDEX, up)

    ok_sign = new_template('ok_sign')
    ok_sign.add_curl(Finger.INDEX, Curl.HALF_CURL, 1.0)
    ok_sign.add_curl(Finger.THUMB, Curl.HALF_CURL, 1.0)
    set_no_curl(ok_sign, [Finger.MIDDLE, Finger.RING, Finger.PINKY])
    for finger in (Finger.MIDDLE, Finger.RING, Finger.PINKY):
        set_direction(ok_sign, finger, up)

    rock_on = new_template('rock_on')
    set_no_curl(rock_on, [Finger.INDEX, Finger.PINKY])
    set_full_curl(rock_on, [Finger.MIDDLE, Finger.RING])
    set_direction(rock_on, Finger.INDEX, up)
    set_direction(rock_on, Finger.PINKY, up)
    rock_on.add_curl(Finger.THUMB, Curl.HALF_CURL)

    call_me = new_template('call_me')
    set_no_curl(call_me, [Finger.THUMB, Finger.PINKY])
    set_full_curl(call_me, [Finger.INDEX, Finger.MIDDLE, Finger.RING])
    set_direction(call_me, Finger.THUMB, Direction.DIAGONAL_UP_LEFT)
    set_direction(call_me, Finger.PINKY, Direction.HORIZONTAL_RIGHT)

    builders = [victory, thumbs_up, open_palm, closed_fist, point_up, ok_sign, rock_on, call_me]
    return [builder.build() for builder in builders]


_DEFAULT_REGISTRY = TemplateRegistry(build_default_templates())


def default_registry() -> TemplateRegistry:
    """Registry of the default gestures, built at import and shared."""
    return _DEFAULT_REGISTRY
