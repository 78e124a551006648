"""
Scene controller for gesture_stabilizer.

Reference consumer of committed gesture events. Applies the profile's
gesture-to-action mapping to a small scene state: the tree is either
growing or exploded, and the light mode cycles WARM -> ICE -> NEON.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from .config import ACTION_CYCLE_LIGHT_MODE, ACTION_EXPLODE, ACTION_GROW
from .gesture_recognizer import GestureType
from .gesture_state_machine import GestureEvent
from .logger import get_logger
from .profile_loader import GestureProfile, create_default_profile

logger = get_logger("SceneController")


class TreeState(Enum):
    GROWING = "GROWING"
    EXPLODED = "EXPLODED"


class LightMode(Enum):
    WARM = "WARM"
    ICE = "ICE"
    NEON = "NEON"


LIGHT_MODE_CYCLE: dict[LightMode, LightMode] = {
    LightMode.WARM: LightMode.ICE,
    LightMode.ICE: LightMode.NEON,
    LightMode.NEON: LightMode.WARM,
}


@dataclass(frozen=True)
class SceneState:
    """Application state driven by gestures."""
    tree_state: TreeState = TreeState.GROWING
    light_mode: LightMode = LightMode.WARM
    gesture: GestureType = GestureType.NONE


class SceneController:
    """
    Maps committed gesture events to scene state changes.

    Attributes:
        profile: Profile supplying the gesture-to-action mapping.
    """

    def __init__(self, profile: Optional[GestureProfile] = None):
        self.profile = profile or create_default_profile()
        self._state = SceneState()
        self._listener: Optional[Callable[[SceneState], None]] = None

    @property
    def state(self) -> SceneState:
        return self._state

    def set_listener(self, listener: Optional[Callable[[SceneState], None]]) -> None:
        """Register a callable invoked with the new state after every event."""
        self._listener = listener

    def handle_event(self, event: GestureEvent) -> SceneState:
        """
        Apply one committed gesture event.

        Args:
            event: Event from the gesture state machine.

        Returns:
            The resulting scene state.
        """
        state = replace(self._state, gesture=event.gesture)

        action = None
        if not event.is_release:
            action = self.profile.get_action(event.gesture)

        if action == ACTION_GROW:
            state = replace(state, tree_state=TreeState.GROWING)
        elif action == ACTION_EXPLODE:
            state = replace(state, tree_state=TreeState.EXPLODED)
        elif action == ACTION_CYCLE_LIGHT_MODE:
            state = replace(state, light_mode=LIGHT_MODE_CYCLE[state.light_mode])

        if action:
            logger.info(f"{event.gesture.name} -> {action}")

        self._state = state
        if self._listener:
            try:
                self._listener(state)
            except Exception as e:
                logger.error(f"Error in scene listener: {e}")
        return state

    def reset(self) -> None:
        """Reset scene state to its initial values."""
        self._state = SceneState()
