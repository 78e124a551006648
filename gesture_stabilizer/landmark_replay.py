#!/usr/bin/env python3
"""
Landmark Replay

Feeds recorded hand landmark frames through a gesture session and
reports every committed gesture event.

Input is a JSON Lines file, one frame per line:

    {"t": 1200.0, "landmarks": [[x, y, z], ... 21 points ...]}
    {"t": 1233.3, "landmarks": null}

Usage:
    gesture-replay frames.jsonl [--profile <path>] [--debug]

Exit Codes:
    0 - Success
    1 - Profile error
    2 - Input error
    3 - Runtime error
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Iterator, Optional, TextIO

from .config import (
    EXIT_SUCCESS,
    EXIT_PROFILE_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_RUNTIME_ERROR,
)
from .gesture_session import GestureSession
from .gesture_state_machine import GestureEvent
from .hand_landmarks import HandLandmarks, MalformedFrameError
from .logger import setup_logging, get_logger
from .profile_loader import ProfileLoadError, create_default_profile, load_profile
from .scene_controller import SceneController, SceneState


class ReplayInputError(Exception):
    """Raised when the replay input cannot be read or parsed."""
    pass


def read_frames(path: Path) -> Iterator[tuple[float, Optional[HandLandmarks]]]:
    """
    Yield (timestamp_ms, frame) pairs from a JSON Lines recording.

    Raises:
        ReplayInputError: On unreadable files, invalid JSON or malformed
            frames; the message names the offending line.
    """
    try:
        f = open(path, "r", encoding="utf-8")
    except OSError as e:
        raise ReplayInputError(f"Cannot read input file: {e}")

    with f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue

            try:
                record = json.loads(line)
            except json.JSONDecodeError as e:
                raise ReplayInputError(f"Line {line_no}: invalid JSON ({e})")

            if not isinstance(record, dict) or "t" not in record:
                raise ReplayInputError(f"Line {line_no}: expected an object with a 't' field")

            t = record["t"]
            if isinstance(t, bool) or not isinstance(t, (int, float)):
                raise ReplayInputError(f"Line {line_no}: 't' must be a number, got {t!r}")

            points = record.get("landmarks")
            if points is None:
                yield float(t), None
                continue

            try:
                frame = HandLandmarks.from_points(
                    points,
                    handedness=record.get("handedness"),
                    score=float(record.get("score", 1.0))
                )
            except (MalformedFrameError, TypeError, ValueError) as e:
                raise ReplayInputError(f"Line {line_no}: {e}")

            yield float(t), frame


def format_event(event: GestureEvent) -> str:
    confidence = "-" if event.confidence is None else f"{event.confidence:.3f}"
    return f"t={event.timestamp:g} gesture={event.gesture.name} confidence={confidence}"


def format_scene(state: SceneState) -> str:
    return f"  scene tree={state.tree_state.name} light={state.light_mode.name}"


def replay(
    path: Path,
    session: GestureSession,
    scene: SceneController,
    out: Optional[TextIO] = None
) -> int:
    """
    Replay a recording through a session.

    Args:
        out: Report stream. Resolves sys.stdout at call time if None.

    Returns:
        Number of committed events.
    """
    if out is None:
        out = sys.stdout

    logger = get_logger("Replay")
    events = 0

    for t, frame in read_frames(path):
        event = session.process(frame, now_ms=t)
        if event is None:
            continue

        events += 1
        state = scene.handle_event(event)
        logger.debug(f"Event: {event}")
        print(format_event(event), file=out)
        print(format_scene(state), file=out)

    logger.info(f"Replayed {session.frame_count} frames, {events} events")
    return events


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gesture-replay",
        description="Replay recorded hand landmarks through the gesture stabilizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0  Success
  1  Profile error (file not found, invalid JSON, invalid mapping)
  2  Input error (unreadable recording, invalid JSON, malformed frame)
  3  Runtime error (unexpected error)

Examples:
  gesture-replay session.jsonl
  gesture-replay session.jsonl --profile living_room.json --debug
"""
    )

    parser.add_argument(
        "input",
        help="Path to JSON Lines landmark recording"
    )

    parser.add_argument(
        "--profile", "-p",
        default=None,
        help="Path to JSON profile file (default: built-in defaults)"
    )

    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Log to the console only"
    )

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code.
    """
    args = parse_args(argv)

    logger = setup_logging(debug=args.debug, log_to_file=not args.no_log_file)
    logger.info("Landmark replay starting...")

    try:
        profile = load_profile(args.profile) if args.profile else create_default_profile()
    except ProfileLoadError as e:
        logger.error(f"Failed to load profile: {e}")
        return EXIT_PROFILE_ERROR

    try:
        session = GestureSession(profile, start_ms=0.0)
        scene = SceneController(profile)
        replay(Path(args.input), session, scene)
        return EXIT_SUCCESS

    except ReplayInputError as e:
        logger.error(f"Input error: {e}")
        return EXIT_INPUT_ERROR
    except Exception as e:
        logger.exception(f"Runtime error: {e}")
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
