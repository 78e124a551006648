"""
Hand landmark frame types.

A frame is the 21-point hand skeleton delivered by the upstream tracker
(MediaPipe Hands layout) for a single camera image. Frames are validated
when they are built so that tracking bugs surface here instead of being
classified as "no gesture".
"""

import math
import numbers
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .config import NUM_LANDMARKS


class MalformedFrameError(ValueError):
    """Raised when a landmark frame violates the 21-point contract."""
    pass


# MediaPipe landmark indices
class LandmarkIndex:
    """MediaPipe hand landmark indices."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


@dataclass(frozen=True)
class Landmark:
    """Single hand landmark with 3D coordinates and visibility."""
    x: float  # Normalized x [0, 1]
    y: float  # Normalized y [0, 1], smaller is higher in the image
    z: float  # Relative depth
    visibility: float = 1.0

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class HandLandmarks:
    """
    Complete hand landmark data for one frame.

    Attributes:
        landmarks: Exactly 21 hand landmarks.
        handedness: 'Left', 'Right' or None when unknown.
        score: Detection confidence score reported by the tracker.
    """
    landmarks: tuple[Landmark, ...]
    handedness: Optional[str] = None
    score: float = 1.0

    def __post_init__(self) -> None:
        # Normalize lists to tuples so the frame stays immutable
        object.__setattr__(self, "landmarks", tuple(self.landmarks))
        validate_landmarks(self.landmarks)

    @classmethod
    def from_points(
        cls,
        points: Iterable[Any],
        handedness: Optional[str] = None,
        score: float = 1.0
    ) -> "HandLandmarks":
        """
        Build a frame from raw points.

        Args:
            points: 21 items, each an (x, y, z) sequence or an object with
                    x, y and z attributes (e.g. MediaPipe NormalizedLandmark).
            handedness: Optional handedness label.
            score: Detection confidence score.

        Returns:
            Validated HandLandmarks instance.

        Raises:
            MalformedFrameError: If a point cannot be read as three numbers
                or the resulting frame is invalid.
        """
        if points is None:
            raise MalformedFrameError("Malformed frame: no landmark points given")

        landmarks = []
        for i, point in enumerate(points):
            landmarks.append(_to_landmark(i, point))
        return cls(landmarks=tuple(landmarks), handedness=handedness, score=score)

    def get_landmark(self, index: int) -> Optional[Landmark]:
        """Get landmark by index."""
        if 0 <= index < len(self.landmarks):
            return self.landmarks[index]
        return None

    def __getitem__(self, index: int) -> Landmark:
        return self.landmarks[index]

    def __len__(self) -> int:
        return len(self.landmarks)

    @property
    def thumb_tip(self) -> Landmark:
        """Get thumb tip landmark."""
        return self.landmarks[LandmarkIndex.THUMB_TIP]

    @property
    def index_tip(self) -> Landmark:
        """Get index finger tip landmark."""
        return self.landmarks[LandmarkIndex.INDEX_TIP]

    @property
    def pinky_tip(self) -> Landmark:
        """Get pinky finger tip landmark."""
        return self.landmarks[LandmarkIndex.PINKY_TIP]

    @property
    def palm_center(self) -> Landmark:
        """Palm reference point (middle finger MCP)."""
        return self.landmarks[LandmarkIndex.MIDDLE_MCP]


def validate_landmarks(landmarks: tuple) -> None:
    """
    Check the 21-point frame contract.

    Raises:
        MalformedFrameError: On a wrong landmark count, a non-Landmark
            entry, or a non-numeric or non-finite coordinate.
    """
    if len(landmarks) != NUM_LANDMARKS:
        raise MalformedFrameError(
            f"Malformed frame: expected {NUM_LANDMARKS} landmarks, got {len(landmarks)}"
        )

    for i, lm in enumerate(landmarks):
        if not isinstance(lm, Landmark):
            raise MalformedFrameError(
                f"Malformed frame: landmark {i} is {type(lm).__name__}, not Landmark"
            )
        coords = lm.as_tuple()
        if not all(isinstance(v, numbers.Real) and not isinstance(v, bool) for v in coords):
            raise MalformedFrameError(
                f"Malformed frame: landmark {i} has non-numeric coordinates {coords!r}"
            )
        if not all(math.isfinite(v) for v in coords):
            raise MalformedFrameError(
                f"Malformed frame: landmark {i} has non-finite coordinates {coords}"
            )


def _to_landmark(index: int, point: Any) -> Landmark:
    if isinstance(point, Landmark):
        return point

    try:
        if hasattr(point, "x") and hasattr(point, "y") and hasattr(point, "z"):
            x, y, z = point.x, point.y, point.z
            visibility = getattr(point, "visibility", 1.0)
        else:
            if isinstance(point, (str, bytes)) or len(point) != 3:
                raise MalformedFrameError(
                    f"Malformed frame: landmark {index} must have 3 components"
                )
            x, y, z = point
            visibility = 1.0
        return Landmark(float(x), float(y), float(z), float(visibility))
    except MalformedFrameError:
        raise
    except (TypeError, ValueError) as e:
        raise MalformedFrameError(
            f"Malformed frame: landmark {index} is not numeric ({e})"
        ) from e
