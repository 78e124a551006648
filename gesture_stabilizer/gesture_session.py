"""
Gesture session: recognizer and state machine behind one call.

The tracking collaborator hands each frame (or None for "no hand") to
GestureSession.process(); committed events come back as return values
and through the registered callback.
"""

import time
from typing import Callable, Optional

from .gesture_recognizer import NO_GESTURE, GestureRecognizer, GestureResult
from .gesture_state_machine import GestureEvent, GestureStateMachine
from .hand_landmarks import HandLandmarks
from .logger import get_logger
from .profile_loader import GestureProfile, create_default_profile

logger = get_logger("GestureSession")


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


class GestureSession:
    """
    One tracking session.

    Not thread-safe: frames must come from a single frame-processing
    flow. Events are immutable and may be handed to other threads.
    """

    def __init__(
        self,
        profile: Optional[GestureProfile] = None,
        start_ms: Optional[float] = None,
        clock: Callable[[], float] = monotonic_ms
    ):
        """
        Initialize a session.

        Args:
            profile: Profile with thresholds and dwell time. Uses defaults if None.
            start_ms: Session start timestamp. Reads clock if None.
            clock: Millisecond clock used when process() gets no timestamp.
        """
        self.profile = profile or create_default_profile()
        self._clock = clock

        self.recognizer = GestureRecognizer(self.profile.thresholds)
        self.state_machine = GestureStateMachine(
            self.profile.stabilizer,
            start_ms=self._clock() if start_ms is None else start_ms
        )

        self._last_result: GestureResult = NO_GESTURE
        self._frame_count = 0

        logger.info(f"Gesture session started (profile={self.profile.name})")

    def set_callback(self, on_event: Optional[Callable[[GestureEvent], None]]) -> None:
        """Register a callable invoked with every committed event."""
        self.state_machine.set_callbacks(on_commit=on_event, on_release=on_event)

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def last_result(self) -> GestureResult:
        """Candidate computed for the most recent frame."""
        return self._last_result

    def process(
        self,
        frame: Optional[HandLandmarks],
        now_ms: Optional[float] = None
    ) -> Optional[GestureEvent]:
        """
        Classify one frame and feed it to the debouncer.

        Args:
            frame: Landmark frame, or None for "no hand".
            now_ms: Frame timestamp in milliseconds. Reads clock if None.

        Returns:
            GestureEvent on commit or release, None otherwise.

        Raises:
            MalformedFrameError: If frame is not a valid HandLandmarks.
        """
        if now_ms is None:
            now_ms = self._clock()

        result = self.recognizer.classify(frame)
        self._last_result = result
        self._frame_count += 1

        return self.state_machine.process_frame(result, now_ms)

    def reset(self, now_ms: Optional[float] = None) -> None:
        """Restart debouncing, e.g. after the tracker was restarted."""
        self.state_machine.reset(self._clock() if now_ms is None else now_ms)
        self._frame_count = 0
