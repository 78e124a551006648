import json
import logging

import pytest

from gesture_stabilizer.config import (
    DWELL_MS,
    OK_DIST_THRESHOLD,
    PALM_FOLD_DIST,
    SPREAD_THRESHOLD,
    THUMB_SPREAD_THRESHOLD,
)
from gesture_stabilizer.gesture_recognizer import GestureType
from gesture_stabilizer.gesture_session import GestureSession
from gesture_stabilizer.profile_loader import (
    GestureMapping,
    ProfileLoadError,
    create_default_profile,
    load_profile,
    parse_profile,
)


def write_profile(tmp_path, data):
    path = tmp_path / "profile.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_minimal_profile_gets_defaults(tmp_path):
    profile = load_profile(write_profile(tmp_path, {"id": "p1", "name": "Minimal"}))

    assert profile.id == "p1"
    assert profile.stabilizer.dwell_ms == DWELL_MS
    assert profile.thresholds.ok_dist == OK_DIST_THRESHOLD
    assert profile.get_action(GestureType.OPEN_HAND) == "grow"
    assert profile.get_action(GestureType.FIST) == "explode"
    assert profile.get_action(GestureType.OK_SIGN) == "cycleLightMode"
    assert profile.get_action(GestureType.NONE) is None


def test_overrides(tmp_path):
    profile = load_profile(write_profile(tmp_path, {
        "id": "p2",
        "name": "Tuned",
        "dwellMs": 250,
        "thresholds": {"okDist": 0.04, "spread": 0.2},
        "gestureMappings": [
            {"gesture": "fist", "action": "grow", "isEnabled": True},
            {"gesture": "okSign", "action": "cycleLightMode", "isEnabled": False},
        ],
    }))

    assert profile.stabilizer.dwell_ms == 250
    assert profile.thresholds.ok_dist == 0.04
    assert profile.thresholds.spread == 0.2
    assert profile.get_action("fist") == "grow"
    assert profile.get_action("FIST") == "grow"
    assert profile.get_action(GestureType.OK_SIGN) is None
    assert profile.get_action(GestureType.OPEN_HAND) == "grow"


def test_invalid_values_fall_back_to_defaults(caplog):
    with caplog.at_level(logging.WARNING, logger="gesture_stabilizer"):
        profile = parse_profile({
            "id": "p3",
            "name": "Bad values",
            "dwellMs": -10,
            "thresholds": {
                "spread": "wide",
                "okDist": 0,
                "foldDist": True,
                "thumbSpread": float("nan"),
                "palmFoldDist": float("inf"),
                "bogus": 1.0,
            },
        })

    assert profile.stabilizer.dwell_ms == DWELL_MS
    assert profile.thresholds.spread == SPREAD_THRESHOLD
    assert profile.thresholds.ok_dist == OK_DIST_THRESHOLD
    assert profile.thresholds.thumb_spread == THUMB_SPREAD_THRESHOLD
    assert profile.thresholds.palm_fold_dist == PALM_FOLD_DIST
    assert "Invalid threshold thumbSpread=nan" in caplog.text
    assert "Invalid dwellMs" in caplog.text
    assert "Ignoring unknown threshold: bogus" in caplog.text


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_dwell_falls_back_and_still_commits(tmp_path, open_hand_frame, literal):
    path = tmp_path / "profile.json"
    path.write_text(f'{{"id": "p", "name": "P", "dwellMs": {literal}}}', encoding="utf-8")

    profile = load_profile(path)
    session = GestureSession(profile, start_ms=0.0)
    events = [session.process(open_hand_frame, now_ms=t) for t in range(0, 1000, 20)]

    assert profile.stabilizer.dwell_ms == DWELL_MS
    assert [e.gesture for e in events if e] == [GestureType.OPEN_HAND]


def test_mapping_gestures_are_case_insensitive():
    profile = parse_profile({
        "id": "x",
        "name": "y",
        "gestureMappings": [{"gesture": "OpenHand", "action": "explode"}],
    })

    assert profile.gesture_mappings[0].gesture == "openHand"
    assert profile.get_action(GestureType.OPEN_HAND) == "explode"
    assert len([m for m in profile.gesture_mappings if m.gesture == "openHand"]) == 1


def test_duplicates_differing_only_in_case_are_rejected():
    with pytest.raises(ProfileLoadError, match="Duplicate"):
        parse_profile({
            "id": "x",
            "name": "y",
            "gestureMappings": [
                {"gesture": "fist", "action": "grow"},
                {"gesture": "FIST", "action": "explode"},
            ],
        })


@pytest.mark.parametrize("value", ["false", 0, None])
def test_is_enabled_must_be_boolean(value):
    with pytest.raises(ProfileLoadError, match="isEnabled"):
        parse_profile({
            "id": "x",
            "name": "y",
            "gestureMappings": [{"gesture": "fist", "action": "grow", "isEnabled": value}],
        })


@pytest.mark.parametrize("missing", ["id", "name"])
def test_required_fields(missing):
    data = {"id": "x", "name": "y"}
    del data[missing]

    with pytest.raises(ProfileLoadError, match=missing):
        parse_profile(data)


def test_duplicate_enabled_mappings_are_rejected():
    with pytest.raises(ProfileLoadError, match="Duplicate"):
        parse_profile({
            "id": "x",
            "name": "y",
            "gestureMappings": [
                {"gesture": "fist", "action": "grow"},
                {"gesture": "fist", "action": "explode"},
            ],
        })


def test_disabled_duplicate_is_allowed():
    profile = parse_profile({
        "id": "x",
        "name": "y",
        "gestureMappings": [
            {"gesture": "fist", "action": "grow", "isEnabled": False},
            {"gesture": "fist", "action": "explode"},
        ],
    })

    assert profile.get_action("fist") == "explode"


def test_unknown_action_is_rejected():
    with pytest.raises(ProfileLoadError, match="Unknown action"):
        parse_profile({
            "id": "x",
            "name": "y",
            "gestureMappings": [{"gesture": "fist", "action": "rightClick"}],
        })


def test_unknown_gesture_is_rejected():
    with pytest.raises(ProfileLoadError, match="Unknown gesture"):
        parse_profile({
            "id": "x",
            "name": "y",
            "gestureMappings": [{"gesture": "thumbsUp", "action": "grow"}],
        })


def test_missing_file(tmp_path):
    with pytest.raises(ProfileLoadError, match="not found"):
        load_profile(tmp_path / "nope.json")


def test_directory_is_rejected(tmp_path):
    with pytest.raises(ProfileLoadError, match="not a file"):
        load_profile(tmp_path)


def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ProfileLoadError, match="Invalid JSON"):
        load_profile(path)


def test_non_object_root(tmp_path):
    with pytest.raises(ProfileLoadError, match="JSON object"):
        load_profile(write_profile(tmp_path, [1, 2, 3]))


def test_default_profile():
    profile = create_default_profile()

    assert profile.id == "default"
    assert GestureMapping("openHand", "grow") in profile.gesture_mappings
    assert profile.stabilizer.dwell_ms == DWELL_MS
