"""
Configuration constants for gesture_stabilizer.

This module contains all tunable parameters for geometric gesture
classification, temporal stabilization and logging.
"""

from dataclasses import dataclass
from typing import Final


# Landmark frame layout
NUM_LANDMARKS: Final[int] = 21

# Gesture recognition thresholds (normalized landmark space)
OK_DIST_THRESHOLD: Final[float] = 0.05  # Thumb tip to index tip for OK sign
SPREAD_THRESHOLD: Final[float] = 0.18  # Index tip to pinky tip for open hand
THUMB_SPREAD_THRESHOLD: Final[float] = 0.08  # Thumb tip to index tip for open hand
FOLD_DIST: Final[float] = 0.10  # Tip to MCP distance below which a finger counts as folded
PALM_FOLD_DIST: Final[float] = 0.15  # Thumb tip to palm center for a folded thumb
AVG_PALM_NORMALIZER: Final[float] = 0.2  # Mean fingertip-to-palm distance at zero fist confidence

# Confidence scaling
OK_CONFIDENCE_NORMALIZER: Final[float] = 0.07  # okDist at which OK confidence reaches 0
OPEN_CONFIDENCE_GAIN: Final[float] = 3.0  # (spread + thumbSpread) multiplier

# Temporal stabilization
DWELL_MS: Final[int] = 400  # Continuous hold required before a gesture commits

# Logging
LOG_FILENAME: Final[str] = "gesture_stabilizer.log"
LOG_MAX_BYTES: Final[int] = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT: Final[int] = 3
LOG_DIR_ENV_VAR: Final[str] = "GESTURE_STABILIZER_LOG_DIR"
LOG_LEVEL_ENV_VAR: Final[str] = "GESTURE_STABILIZER_LOG_LEVEL"
LOG_CONSOLE_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(message)s"
LOG_CONSOLE_DATEFMT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s | %(levelname)-8s | %(name)s.%(funcName)s:%(lineno)d | %(message)s"
)
LOG_FILE_DATEFMT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Exit codes
EXIT_SUCCESS: Final[int] = 0
EXIT_PROFILE_ERROR: Final[int] = 1
EXIT_INPUT_ERROR: Final[int] = 2
EXIT_RUNTIME_ERROR: Final[int] = 3


@dataclass
class GestureThresholds:
    """Container for gesture detection thresholds."""

    ok_dist: float = OK_DIST_THRESHOLD
    spread: float = SPREAD_THRESHOLD
    thumb_spread: float = THUMB_SPREAD_THRESHOLD
    fold_dist: float = FOLD_DIST
    palm_fold_dist: float = PALM_FOLD_DIST
    avg_palm_normalizer: float = AVG_PALM_NORMALIZER
    ok_confidence_normalizer: float = OK_CONFIDENCE_NORMALIZER
    open_confidence_gain: float = OPEN_CONFIDENCE_GAIN


@dataclass
class StabilizerSettings:
    """Container for temporal stabilization settings."""

    dwell_ms: float = DWELL_MS


# Scene actions understood by the scene controller
ACTION_GROW: Final[str] = "grow"
ACTION_EXPLODE: Final[str] = "explode"
ACTION_CYCLE_LIGHT_MODE: Final[str] = "cycleLightMode"
ACTION_NONE: Final[str] = "none"

VALID_ACTIONS: Final[frozenset[str]] = frozenset({
    ACTION_GROW,
    ACTION_EXPLODE,
    ACTION_CYCLE_LIGHT_MODE,
    ACTION_NONE,
})

# Gesture to action mapping defaults
DEFAULT_GESTURE_MAPPINGS: dict[str, dict] = {
    "openHand": {"action": ACTION_GROW, "isEnabled": True},
    "fist": {"action": ACTION_EXPLODE, "isEnabled": True},
    "okSign": {"action": ACTION_CYCLE_LIGHT_MODE, "isEnabled": True},
}
