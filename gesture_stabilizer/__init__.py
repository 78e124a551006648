"""
gesture_stabilizer - Stable hand gesture events from noisy landmark frames.

Classifies each 21-point hand landmark frame as OPEN_HAND, FIST, OK_SIGN
or NONE and debounces the per-frame candidates into committed gesture
events.
"""

__version__ = "1.0.0"

from .config import GestureThresholds, StabilizerSettings
from .hand_landmarks import HandLandmarks, Landmark, LandmarkIndex, MalformedFrameError
from .gesture_recognizer import GestureRecognizer, GestureType, GestureResult, classify
from .gesture_state_machine import GestureStateMachine, GestureEvent, StabilizerState
from .gesture_session import GestureSession
from .profile_loader import GestureProfile, GestureMapping, ProfileLoadError, load_profile
from .scene_controller import SceneController, SceneState, TreeState, LightMode

__all__ = [
    "GestureThresholds",
    "StabilizerSettings",
    "HandLandmarks",
    "Landmark",
    "LandmarkIndex",
    "MalformedFrameError",
    "GestureRecognizer",
    "GestureType",
    "GestureResult",
    "classify",
    "GestureStateMachine",
    "GestureEvent",
    "StabilizerState",
    "GestureSession",
    "GestureProfile",
    "GestureMapping",
    "ProfileLoadError",
    "load_profile",
    "SceneController",
    "SceneState",
    "TreeState",
    "LightMode",
]
