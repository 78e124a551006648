"""
Geometric gesture recognizer for gesture_stabilizer.

Classifies a single hand landmark frame as OPEN_HAND, FIST, OK_SIGN or
NONE using joint heights and 3D distances. Recognition is stateless:
temporal stabilization lives in gesture_state_machine.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from .config import GestureThresholds
from .hand_landmarks import HandLandmarks, Landmark, LandmarkIndex, MalformedFrameError
from .logger import get_logger

logger = get_logger("GestureRecognizer")


class GestureType(Enum):
    """Recognized gesture kinds."""
    OPEN_HAND = "OPEN_HAND"
    FIST = "FIST"
    OK_SIGN = "OK_SIGN"
    NONE = "NONE"


GESTURE_NAMES: dict[GestureType, dict[str, str]] = {
    GestureType.OPEN_HAND: {"en": "Open Hand", "zh": "张开手掌"},
    GestureType.FIST: {"en": "Fist", "zh": "握拳"},
    GestureType.OK_SIGN: {"en": "OK Gesture", "zh": "OK 手势"},
    GestureType.NONE: {"en": "None", "zh": "无"},
}


@dataclass(frozen=True)
class GestureResult:
    """Per-frame gesture candidate."""
    gesture: GestureType
    confidence: float = 0.0


NO_GESTURE = GestureResult(GestureType.NONE, 0.0)


@dataclass(frozen=True)
class FingerState:
    """Curl state of one non-thumb finger."""
    extended: bool
    folded: bool


# (tip, reference joint, mcp) per finger; curl is judged on the joint
# directly below the tip
FINGER_JOINTS: dict[str, tuple[int, int, int]] = {
    "index": (LandmarkIndex.INDEX_TIP, LandmarkIndex.INDEX_DIP, LandmarkIndex.INDEX_MCP),
    "middle": (LandmarkIndex.MIDDLE_TIP, LandmarkIndex.MIDDLE_DIP, LandmarkIndex.MIDDLE_MCP),
    "ring": (LandmarkIndex.RING_TIP, LandmarkIndex.RING_DIP, LandmarkIndex.RING_MCP),
    "pinky": (LandmarkIndex.PINKY_TIP, LandmarkIndex.PINKY_DIP, LandmarkIndex.PINKY_MCP),
}


def distance(a: Landmark, b: Landmark) -> float:
    """Euclidean 3D distance between two landmarks."""
    return float(np.linalg.norm(np.array(a.as_tuple()) - np.array(b.as_tuple())))


def _clamp01(value: float) -> float:
    return float(np.clip(value, 0.0, 1.0))


class GestureRecognizer:
    """
    Rule-based gesture recognizer.

    Tests run in fixed priority order OK_SIGN -> OPEN_HAND -> FIST and
    the first satisfied test wins.
    """

    def __init__(self, thresholds: Optional[GestureThresholds] = None):
        """
        Initialize gesture recognizer.

        Args:
            thresholds: Detection thresholds. Uses defaults if None.
        """
        self.thresholds = thresholds or GestureThresholds()

    def finger_states(self, frame: HandLandmarks) -> dict[str, FingerState]:
        """
        Compute extended/folded flags for index, middle, ring and pinky.

        Args:
            frame: Validated landmark frame.

        Returns:
            Mapping of finger name to FingerState.
        """
        states: dict[str, FingerState] = {}
        for name, (tip_i, joint_i, mcp_i) in FINGER_JOINTS.items():
            tip, joint, mcp = frame[tip_i], frame[joint_i], frame[mcp_i]
            extended = tip.y < joint.y and joint.y < mcp.y
            folded = tip.y > joint.y or distance(tip, mcp) < self.thresholds.fold_dist
            states[name] = FingerState(extended=extended, folded=folded)
        return states

    def classify(self, frame: Optional[HandLandmarks]) -> GestureResult:
        """
        Classify one landmark frame.

        Args:
            frame: Landmark frame, or None when no hand was detected.

        Returns:
            GestureResult with the winning gesture and its confidence.

        Raises:
            MalformedFrameError: If frame is neither None nor HandLandmarks.
        """
        if frame is None:
            return NO_GESTURE

        if not isinstance(frame, HandLandmarks):
            raise MalformedFrameError(
                f"Malformed frame: expected HandLandmarks or None, got {type(frame).__name__}"
            )

        fingers = self.finger_states(frame)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Finger states: " + ", ".join(
                    f"{name}(extended={s.extended}, folded={s.folded})"
                    for name, s in fingers.items()
                )
            )

        result = (
            self._detect_ok_sign(frame, fingers)
            or self._detect_open_hand(frame, fingers)
            or self._detect_fist(frame, fingers)
        )
        return result or NO_GESTURE

    def _detect_ok_sign(
        self, frame: HandLandmarks, fingers: dict[str, FingerState]
    ) -> Optional[GestureResult]:
        ok_dist = distance(frame.thumb_tip, frame.index_tip)
        if ok_dist >= self.thresholds.ok_dist:
            return None
        if not all(fingers[f].extended for f in ("middle", "ring", "pinky")):
            return None

        confidence = _clamp01(1.0 - ok_dist / self.thresholds.ok_confidence_normalizer)
        return GestureResult(GestureType.OK_SIGN, confidence)

    def _detect_open_hand(
        self, frame: HandLandmarks, fingers: dict[str, FingerState]
    ) -> Optional[GestureResult]:
        if not all(s.extended for s in fingers.values()):
            return None

        spread = distance(frame.index_tip, frame.pinky_tip)
        thumb_spread = distance(frame.thumb_tip, frame.index_tip)
        if spread <= self.thresholds.spread or thumb_spread <= self.thresholds.thumb_spread:
            return None

        confidence = _clamp01((spread + thumb_spread) * self.thresholds.open_confidence_gain)
        return GestureResult(GestureType.OPEN_HAND, confidence)

    def _detect_fist(
        self, frame: HandLandmarks, fingers: dict[str, FingerState]
    ) -> Optional[GestureResult]:
        if not all(s.folded for s in fingers.values()):
            return None

        palm = frame.palm_center
        thumb_tip = frame.thumb_tip
        thumb_ip = frame[LandmarkIndex.THUMB_IP]
        thumb_folded = (
            thumb_tip.y > thumb_ip.y
            or distance(thumb_tip, palm) < self.thresholds.palm_fold_dist
        )
        if not thumb_folded:
            return None

        tip_dists = [distance(frame[tip_i], palm) for tip_i, _, _ in FINGER_JOINTS.values()]
        avg_dist_to_palm = float(np.mean(tip_dists))
        confidence = _clamp01(1.0 - avg_dist_to_palm / self.thresholds.avg_palm_normalizer)
        return GestureResult(GestureType.FIST, confidence)


_default_recognizer = GestureRecognizer()


def classify(frame: Optional[HandLandmarks]) -> GestureResult:
    """Classify a frame with the default thresholds."""
    return _default_recognizer.classify(frame)
