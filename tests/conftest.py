"""Synthetic hand poses shared by the test suite."""

import pytest

from gesture_stabilizer.hand_landmarks import HandLandmarks, LandmarkIndex as L

BASE_POINT = (0.5, 0.8, 0.0)

# All four fingers straight up, index and pinky tips 0.22 apart,
# thumb tip 0.10 left of the index tip.
OPEN_HAND_POINTS = {
    L.THUMB_IP: (0.33, 0.40, 0.0),
    L.THUMB_TIP: (0.30, 0.30, 0.0),
    L.INDEX_MCP: (0.40, 0.60, 0.0),
    L.INDEX_DIP: (0.40, 0.45, 0.0),
    L.INDEX_TIP: (0.40, 0.30, 0.0),
    L.MIDDLE_MCP: (0.47, 0.60, 0.0),
    L.MIDDLE_DIP: (0.47, 0.45, 0.0),
    L.MIDDLE_TIP: (0.47, 0.28, 0.0),
    L.RING_MCP: (0.55, 0.60, 0.0),
    L.RING_DIP: (0.55, 0.45, 0.0),
    L.RING_TIP: (0.55, 0.29, 0.0),
    L.PINKY_MCP: (0.62, 0.60, 0.0),
    L.PINKY_DIP: (0.62, 0.45, 0.0),
    L.PINKY_TIP: (0.62, 0.30, 0.0),
}

# Open hand with the thumb tip touching the index tip (0.03 apart).
OK_SIGN_POINTS = dict(OPEN_HAND_POINTS)
OK_SIGN_POINTS[L.THUMB_TIP] = (0.40, 0.33, 0.0)

# Fingertips curled below their joints, close to the palm; thumb tip
# below the thumb IP joint.
FIST_POINTS = {
    L.THUMB_IP: (0.42, 0.58, 0.0),
    L.THUMB_TIP: (0.47, 0.62, 0.0),
    L.INDEX_MCP: (0.45, 0.60, 0.0),
    L.INDEX_DIP: (0.45, 0.62, 0.0),
    L.INDEX_TIP: (0.45, 0.65, 0.0),
    L.MIDDLE_MCP: (0.50, 0.60, 0.0),
    L.MIDDLE_DIP: (0.50, 0.62, 0.0),
    L.MIDDLE_TIP: (0.50, 0.65, 0.0),
    L.RING_MCP: (0.55, 0.60, 0.0),
    L.RING_DIP: (0.55, 0.62, 0.0),
    L.RING_TIP: (0.55, 0.65, 0.0),
    L.PINKY_MCP: (0.60, 0.60, 0.0),
    L.PINKY_DIP: (0.60, 0.62, 0.0),
    L.PINKY_TIP: (0.60, 0.65, 0.0),
}

# Fist with only the index finger raised.
POINTING_POINTS = dict(FIST_POINTS)
POINTING_POINTS[L.INDEX_DIP] = (0.45, 0.45, 0.0)
POINTING_POINTS[L.INDEX_TIP] = (0.45, 0.30, 0.0)


def build_points(overrides: dict) -> list:
    points = [BASE_POINT] * 21
    for index, point in overrides.items():
        points[index] = point
    return points


def build_frame(overrides: dict) -> HandLandmarks:
    return HandLandmarks.from_points(build_points(overrides))


@pytest.fixture
def make_frame():
    return build_frame


@pytest.fixture
def open_hand_frame():
    return build_frame(OPEN_HAND_POINTS)


@pytest.fixture
def ok_sign_frame():
    return build_frame(OK_SIGN_POINTS)


@pytest.fixture
def fist_frame():
    return build_frame(FIST_POINTS)


@pytest.fixture
def pointing_frame():
    return build_frame(POINTING_POINTS)


@pytest.fixture
def open_hand_points():
    return build_points(OPEN_HAND_POINTS)


@pytest.fixture
def fist_points():
    return build_points(FIST_POINTS)


@pytest.fixture
def poses():
    """Fresh copies of the landmark overrides for each synthetic pose."""
    return {
        "open": dict(OPEN_HAND_POINTS),
        "ok": dict(OK_SIGN_POINTS),
        "fist": dict(FIST_POINTS),
        "pointing": dict(POINTING_POINTS),
    }
