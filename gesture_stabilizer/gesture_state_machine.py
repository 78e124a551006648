"""
Gesture state machine for gesture_stabilizer.

Debounces the per-frame gesture candidates produced by the recognizer.
A gesture is committed only after it has been the candidate continuously
for the dwell time; losing the gesture (NONE) is reported immediately.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from .config import StabilizerSettings
from .gesture_recognizer import GestureResult, GestureType
from .logger import get_logger

logger = get_logger("GestureStateMachine")


@dataclass(frozen=True)
class StabilizerState:
    """
    Debounce state.

    Attributes:
        pending: Candidate kind currently under evaluation.
        pending_since: Timestamp (ms) at which pending last changed.
        committed: Last gesture reported downstream.
    """
    pending: GestureType = GestureType.NONE
    pending_since: float = 0.0
    committed: GestureType = GestureType.NONE


@dataclass(frozen=True)
class GestureEvent:
    """Event emitted when the committed gesture changes."""
    gesture: GestureType
    confidence: Optional[float] = None
    timestamp: float = 0.0

    @property
    def is_release(self) -> bool:
        return self.gesture is GestureType.NONE


class GestureStateMachine:
    """
    Single-slot dwell debouncer.

    Holds one pending candidate and the committed gesture. Timestamps are
    supplied by the caller in milliseconds; the machine never reads a
    clock, so it is fully deterministic under test.
    """

    def __init__(
        self,
        settings: Optional[StabilizerSettings] = None,
        start_ms: float = 0.0
    ):
        """
        Initialize gesture state machine.

        Args:
            settings: Stabilizer settings. Uses defaults if None.
            start_ms: Session start timestamp in milliseconds.
        """
        self.settings = settings or StabilizerSettings()
        if self.settings.dwell_ms < 0:
            raise ValueError(f"dwell_ms must be >= 0, got {self.settings.dwell_ms}")

        self._state = StabilizerState(pending_since=start_ms)

        # Event callbacks
        self._on_commit: Optional[Callable[[GestureEvent], None]] = None
        self._on_release: Optional[Callable[[GestureEvent], None]] = None

        logger.debug(f"GestureStateMachine initialized (dwell={self.settings.dwell_ms}ms)")

    def set_callbacks(
        self,
        on_commit: Optional[Callable[[GestureEvent], None]] = None,
        on_release: Optional[Callable[[GestureEvent], None]] = None
    ) -> None:
        """
        Set event callbacks.

        Args:
            on_commit: Called when a gesture is committed.
            on_release: Called when the committed gesture drops to NONE.
        """
        self._on_commit = on_commit
        self._on_release = on_release

    @property
    def state(self) -> StabilizerState:
        return self._state

    @property
    def committed(self) -> GestureType:
        return self._state.committed

    @property
    def pending(self) -> GestureType:
        return self._state.pending

    def process_frame(self, candidate: GestureResult, now_ms: float) -> Optional[GestureEvent]:
        """
        Feed one frame's candidate into the debouncer.

        Args:
            candidate: Recognizer output for this frame.
            now_ms: Caller-supplied timestamp in milliseconds.

        Returns:
            GestureEvent on a commit or release, None otherwise.
        """
        state = self._state
        kind = candidate.gesture

        if kind != state.pending:
            self._state = replace(state, pending=kind, pending_since=now_ms)
            if kind is GestureType.NONE:
                return self._release(candidate, now_ms)
            return None

        if kind is GestureType.NONE:
            # pending and committed normally reach NONE together; clears a stale commit
            return self._release(candidate, now_ms)

        elapsed = max(0.0, now_ms - state.pending_since)
        if elapsed >= self.settings.dwell_ms and kind != state.committed:
            self._state = replace(state, committed=kind)
            event = GestureEvent(kind, candidate.confidence, now_ms)
            logger.debug(
                f"Gesture {kind.name} committed after {elapsed:.0f}ms "
                f"(confidence={candidate.confidence:.2f})"
            )
            self._fire_callback(event)
            return event

        return None

    def _release(self, candidate: GestureResult, now_ms: float) -> Optional[GestureEvent]:
        if self._state.committed is GestureType.NONE:
            return None

        previous = self._state.committed
        self._state = replace(self._state, committed=GestureType.NONE)
        event = GestureEvent(GestureType.NONE, candidate.confidence, now_ms)
        logger.debug(f"Gesture {previous.name} released")
        self._fire_callback(event)
        return event

    def _fire_callback(self, event: GestureEvent) -> None:
        """Fire appropriate callback for event."""
        try:
            if event.is_release and self._on_release:
                self._on_release(event)
            elif not event.is_release and self._on_commit:
                self._on_commit(event)
        except Exception as e:
            logger.error(f"Error in gesture callback: {e}")

    def reset(self, now_ms: float = 0.0) -> None:
        """Restore the initial state (committed NONE, pending NONE since now_ms)."""
        self._state = StabilizerState(pending_since=now_ms)
        logger.debug("GestureStateMachine reset")

