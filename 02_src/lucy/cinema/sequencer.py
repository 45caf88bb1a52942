"""CinemaSequencer: auto-advancing playback over generated videos."""

from enum import Enum

from ..event_bus import IEventBus, Topic
from ..logging_config import get_logger
from ..models import Asset, CinemaPlaylist
from .playback import PlaybackHandle

logger = get_logger(__name__)


class CinemaState(str, Enum):
    """Sequencer states."""

    IDLE = "idle"
    PLAYING = "playing"


class CinemaSequencer:
    """
    Plays the playlist's videos in order, wrapping to the first after the
    last, with the background audio looping independently.

    Only `close()` leaves PLAYING; the sequence never ends on its own.
    """

    def __init__(
        self,
        video: PlaybackHandle,
        audio: PlaybackHandle,
        event_bus: IEventBus,
    ):
        self._video = video
        self._audio = audio
        self._event_bus = event_bus

        self._state = CinemaState.IDLE
        self._playlist: CinemaPlaylist | None = None
        self._index = 0

    @property
    def state(self) -> CinemaState:
        return self._state

    @property
    def index(self) -> int:
        return self._index

    @property
    def playlist(self) -> CinemaPlaylist | None:
        return self._playlist

    @property
    def current_video(self) -> Asset | None:
        if self._state != CinemaState.PLAYING:
            return None
        return self._playlist.videos[self._index]

    @property
    def progress(self) -> str | None:
        """Position label such as "2 / 3"."""
        if self._state != CinemaState.PLAYING:
            return None
        return f"{self._index + 1} / {len(self._playlist.videos)}"

    def open(self, playlist: CinemaPlaylist) -> bool:
        """Enter PLAYING(0). Return False and stay IDLE for an empty playlist."""
        if playlist.is_empty:
            logger.info("Cinema not opened: no playable videos")
            return False

        if self._state == CinemaState.PLAYING:
            self.close()

        self._playlist = playlist
        self._index = 0
        self._state = CinemaState.PLAYING

        self._video.on_ended(self.advance)
        self._play_current()

        if playlist.audio is not None:
            self._audio.load(playlist.audio.url, loop=True)
            self._audio.play()

        logger.info(
            "Cinema opened with %s videos%s",
            len(playlist.videos),
            " and background audio" if playlist.audio else "",
        )
        self._notify("opened")
        return True

    def advance(self) -> int:
        """Move to the next video (wrapping). No-op while IDLE."""
        if self._state != CinemaState.PLAYING:
            return self._index

        self._index = (self._index + 1) % len(self._playlist.videos)
        self._play_current()
        self._notify("advanced")
        return self._index

    def close(self) -> None:
        """Stop everything and return to IDLE."""
        if self._state == CinemaState.IDLE:
            return

        for handle in (self._video, self._audio):
            handle.pause()
            handle.release()

        self._state = CinemaState.IDLE
        self._playlist = None
        self._index = 0
        logger.info("Cinema closed")
        self._notify("closed")

    def _play_current(self) -> None:
        self._video.load(self._playlist.videos[self._index].url)
        self._video.play()

    def _notify(self, event: str) -> None:
        self._event_bus.publish(
            Topic.CINEMA,
            source="cinema_sequencer",
            payload={"event": event, "state": self._state.value, "index": self._index},
        )
