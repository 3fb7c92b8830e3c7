"""Replay recorded location sessions."""

from geotrack.replay.replay import (
    ReplayLocationCapability,
    ReplaySession,
    read_session_file,
    replay_session,
)

__all__ = [
    "ReplayLocationCapability",
    "ReplaySession",
    "read_session_file",
    "replay_session",
]
