"""
Profile loader for gesture_stabilizer.

Loads and validates JSON profiles that tune recognition thresholds, the
dwell time and the gesture-to-action mapping. Profile properties use
camelCase keys.
"""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .config import (
    ACTION_NONE,
    DEFAULT_GESTURE_MAPPINGS,
    DWELL_MS,
    GestureThresholds,
    StabilizerSettings,
    VALID_ACTIONS,
)
from .gesture_recognizer import GestureType
from .logger import get_logger

logger = get_logger("ProfileLoader")

# Profile gesture keys for each recognizable gesture
GESTURE_PROFILE_KEYS: dict[GestureType, str] = {
    GestureType.OPEN_HAND: "openHand",
    GestureType.FIST: "fist",
    GestureType.OK_SIGN: "okSign",
}

# camelCase profile key -> GestureThresholds field
THRESHOLD_KEYS: dict[str, str] = {
    "okDist": "ok_dist",
    "spread": "spread",
    "thumbSpread": "thumb_spread",
    "foldDist": "fold_dist",
    "palmFoldDist": "palm_fold_dist",
    "avgPalmNormalizer": "avg_palm_normalizer",
}


class ProfileLoadError(Exception):
    """Raised when profile loading or validation fails."""
    pass


@dataclass
class GestureMapping:
    """Represents a single gesture-to-action mapping."""

    gesture: str
    action: str
    is_enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GestureMapping":
        """
        Create GestureMapping from dictionary with camelCase keys.

        Args:
            data: Dictionary with gesture, action and isEnabled keys.

        Returns:
            GestureMapping instance.

        Raises:
            ProfileLoadError: If isEnabled is not a JSON boolean.
        """
        is_enabled = data.get("isEnabled", True)
        if not isinstance(is_enabled, bool):
            raise ProfileLoadError(
                f"isEnabled must be true or false, got {is_enabled!r} "
                f"for gesture {data.get('gesture')!r}"
            )

        return cls(
            gesture=str(data.get("gesture", "")),
            action=str(data.get("action", ACTION_NONE)),
            is_enabled=is_enabled
        )


@dataclass
class GestureProfile:
    """
    Profile configuration loaded from JSON.

    Attributes:
        id: Unique identifier.
        name: Profile display name.
        thresholds: Recognition thresholds.
        stabilizer: Debounce settings.
        gesture_mappings: List of gesture-to-action mappings.
    """

    id: str
    name: str
    thresholds: GestureThresholds = field(default_factory=GestureThresholds)
    stabilizer: StabilizerSettings = field(default_factory=StabilizerSettings)
    gesture_mappings: list[GestureMapping] = field(default_factory=list)

    def get_mapping(self, gesture: Union[str, GestureType]) -> Optional[GestureMapping]:
        """
        Get the enabled mapping for a gesture.

        Args:
            gesture: Profile gesture key (case-insensitive) or GestureType.

        Returns:
            GestureMapping if found and enabled, None otherwise.
        """
        if isinstance(gesture, GestureType):
            key = GESTURE_PROFILE_KEYS.get(gesture)
            if key is None:
                return None
            gesture = key

        gesture_lower = gesture.lower()
        for mapping in self.gesture_mappings:
            if mapping.gesture.lower() == gesture_lower and mapping.is_enabled:
                return mapping
        return None

    def get_action(self, gesture: Union[str, GestureType]) -> Optional[str]:
        """
        Get the action for a gesture.

        Returns:
            Action string if found and enabled, None otherwise.
        """
        mapping = self.get_mapping(gesture)
        return mapping.action if mapping else None


def load_profile(profile_path: Union[str, Path]) -> GestureProfile:
    """
    Load and validate a profile from a JSON file.

    Args:
        profile_path: Path to the JSON profile file.

    Returns:
        Validated GestureProfile instance.

    Raises:
        ProfileLoadError: If file cannot be read or validation fails.
    """
    path = Path(profile_path)
    logger.info(f"Loading profile from: {path}")

    if not path.exists():
        raise ProfileLoadError(f"Profile file not found: {path}")

    if not path.is_file():
        raise ProfileLoadError(f"Profile path is not a file: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProfileLoadError(f"Invalid JSON in profile: {e}")
    except OSError as e:
        raise ProfileLoadError(f"Cannot read profile file: {e}")

    if not isinstance(data, dict):
        raise ProfileLoadError("Profile root must be a JSON object")

    return parse_profile(data)


def parse_profile(data: dict[str, Any]) -> GestureProfile:
    """
    Parse and validate profile data from dictionary.

    Args:
        data: Dictionary with camelCase profile properties.

    Returns:
        Validated GestureProfile instance.

    Raises:
        ProfileLoadError: If required fields are missing or invalid.
    """
    if "id" not in data:
        raise ProfileLoadError("Profile missing required field: id")

    if "name" not in data:
        raise ProfileLoadError("Profile missing required field: name")

    thresholds = _parse_thresholds(data.get("thresholds"))
    stabilizer = _parse_stabilizer(data)
    gesture_mappings = _parse_mappings(data.get("gestureMappings", []))

    profile = GestureProfile(
        id=str(data["id"]),
        name=str(data["name"]),
        thresholds=thresholds,
        stabilizer=stabilizer,
        gesture_mappings=gesture_mappings
    )

    logger.info(f"Loaded profile: {profile.name} (id={profile.id})")
    logger.debug(f"  Dwell: {profile.stabilizer.dwell_ms}ms")
    logger.debug(f"  Thresholds: {profile.thresholds}")
    logger.debug(f"  Gesture mappings: {len(profile.gesture_mappings)}")

    return profile


def _is_number(value: Any) -> bool:
    # bool is an int subclass, and json accepts NaN and Infinity
    return (
        not isinstance(value, bool)
        and isinstance(value, (int, float))
        and math.isfinite(value)
    )


def _parse_thresholds(thresholds_data: Any) -> GestureThresholds:
    thresholds = GestureThresholds()
    if thresholds_data is None:
        return thresholds

    if not isinstance(thresholds_data, dict):
        logger.warning("Invalid thresholds section, using defaults")
        return thresholds

    for key, value in thresholds_data.items():
        attr = THRESHOLD_KEYS.get(key)
        if attr is None:
            logger.warning(f"Ignoring unknown threshold: {key}")
            continue
        if not _is_number(value) or value <= 0:
            logger.warning(f"Invalid threshold {key}={value!r}, using default: {getattr(thresholds, attr)}")
            continue
        setattr(thresholds, attr, float(value))

    return thresholds


def _parse_stabilizer(data: dict[str, Any]) -> StabilizerSettings:
    dwell_ms = data.get("dwellMs", DWELL_MS)
    if not _is_number(dwell_ms) or dwell_ms < 0:
        logger.warning(f"Invalid dwellMs {dwell_ms!r}, using default: {DWELL_MS}")
        dwell_ms = DWELL_MS
    return StabilizerSettings(dwell_ms=float(dwell_ms))


def _parse_mappings(mappings_data: Any) -> list[GestureMapping]:
    gesture_mappings: list[GestureMapping] = []

    if isinstance(mappings_data, list):
        for mapping_dict in mappings_data:
            if isinstance(mapping_dict, dict):
                gesture_mappings.append(GestureMapping.from_dict(mapping_dict))
            else:
                logger.warning(f"Skipping invalid gesture mapping: {mapping_dict!r}")
    else:
        logger.warning("Invalid gestureMappings section, using defaults")

    # Gesture keys match case-insensitively and are stored in canonical form
    known_gestures = {key.lower(): key for key in GESTURE_PROFILE_KEYS.values()}
    for mapping in gesture_mappings:
        canonical = known_gestures.get(mapping.gesture.lower())
        if canonical is None:
            raise ProfileLoadError(f"Unknown gesture in mapping: {mapping.gesture!r}")
        mapping.gesture = canonical
        if mapping.action not in VALID_ACTIONS:
            raise ProfileLoadError(
                f"Unknown action {mapping.action!r} for gesture {mapping.gesture}"
            )

    # Apply defaults for missing gestures
    existing_gestures = {m.gesture for m in gesture_mappings}
    for gesture, defaults in DEFAULT_GESTURE_MAPPINGS.items():
        if gesture not in existing_gestures:
            gesture_mappings.append(GestureMapping(
                gesture=gesture,
                action=defaults["action"],
                is_enabled=defaults["isEnabled"]
            ))
            logger.debug(f"Applied default mapping for: {gesture}")

    enabled_gestures = [m.gesture for m in gesture_mappings if m.is_enabled]
    duplicate_gestures = sorted({g for g in enabled_gestures if enabled_gestures.count(g) > 1})
    if duplicate_gestures:
        raise ProfileLoadError(
            f"Duplicate enabled mapping for gesture(s): {', '.join(duplicate_gestures)}"
        )

    return gesture_mappings


def create_default_profile() -> GestureProfile:
    """
    Create a default profile with standard settings.

    Returns:
        GestureProfile with default values.
    """
    mappings = [
        GestureMapping(gesture=g, action=d["action"], is_enabled=d["isEnabled"])
        for g, d in DEFAULT_GESTURE_MAPPINGS.items()
    ]

    return GestureProfile(
        id="default",
        name="Default",
        gesture_mappings=mappings
    )
