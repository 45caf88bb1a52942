"""Cinema mode module."""

from .playback import EndedCallback, PlaybackHandle, StatePlaybackHandle
from .sequencer import CinemaSequencer, CinemaState

__all__ = [
    "CinemaSequencer",
    "CinemaState",
    "EndedCallback",
    "PlaybackHandle",
    "StatePlaybackHandle",
]
