"""
Single-frame gesture classification from hand landmarks.
"""
import math
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .types import Gesture, LandmarkFrame
from .config import ClassifierConfig

PALM = 0
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

NUM_LANDMARKS = 21

DEFAULT_EXTENDED_THRESHOLD = 0.3
DEFAULT_PINCH_THRESHOLD = 0.1


@dataclass(frozen=True)
class FingerStates:
    """Extension flags for each finger plus the index/thumb gap."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool
    pinch_distance: float


def _distance(a, b) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def finger_states(landmarks: LandmarkFrame,
                  threshold: float = DEFAULT_EXTENDED_THRESHOLD) -> FingerStates:
    """
    Work out which fingers are extended.

    A finger is extended when its tip lies further than `threshold` from the
    palm point in normalized xy space.

    Args:
        landmarks: 21 hand landmarks
        threshold: Minimum tip-to-palm distance for an extended finger

    Returns:
        FingerStates for the frame
    """
    palm = landmarks[PALM]

    def extended(tip: int) -> bool:
        return _distance(landmarks[tip], palm) > threshold

    return FingerStates(
        thumb=extended(THUMB_TIP),
        index=extended(INDEX_TIP),
        middle=extended(MIDDLE_TIP),
        ring=extended(RING_TIP),
        pinky=extended(PINKY_TIP),
        pinch_distance=_distance(landmarks[INDEX_TIP], landmarks[THUMB_TIP]),
    )


Rule = Tuple[Callable[[FingerStates, float], bool], Gesture]

# Evaluated in order, first match wins. Point must stay ahead of Pinch.
RULES: Tuple[Rule, ...] = (
    (lambda f, _: f.index and not (f.middle or f.ring or f.pinky), Gesture.POINT),
    (lambda f, _: f.index and f.middle and f.ring and f.pinky, Gesture.PALM),
    (lambda f, _: f.index and f.middle and not (f.ring or f.pinky), Gesture.TWO_FINGERS),
    (lambda f, pinch: f.pinch_distance < pinch and f.index and f.thumb, Gesture.PINCH),
    (lambda f, _: not (f.index or f.middle or f.ring or f.pinky), Gesture.FIST),
)


def classify(landmarks: Optional[LandmarkFrame],
             cfg: Optional[ClassifierConfig] = None) -> Gesture:
    """
    Classify one landmark frame into a discrete gesture.

    Args:
        landmarks: 21 hand landmarks in normalized coordinates
        cfg: Classifier thresholds; defaults are used when omitted

    Returns:
        The first matching Gesture, or Gesture.UNKNOWN
    """
    if landmarks is None or len(landmarks) < NUM_LANDMARKS:
        return Gesture.UNKNOWN

    extended_threshold = cfg.extended_threshold if cfg else DEFAULT_EXTENDED_THRESHOLD
    pinch_threshold = cfg.pinch_threshold if cfg else DEFAULT_PINCH_THRESHOLD

    fingers = finger_states(landmarks, extended_threshold)
    for predicate, gesture in RULES:
        if predicate(fingers, pinch_threshold):
            return gesture
    return Gesture.UNKNOWN
