"""Playback handles driven by the cinema sequencer."""

from typing import Callable, Protocol

EndedCallback = Callable[[], None]


class PlaybackHandle(Protocol):
    """A media player the sequencer can drive."""

    def load(self, url: str, loop: bool = False) -> None:
        """Set the media source."""
        ...

    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def on_ended(self, callback: EndedCallback | None) -> None:
        """Register the callback fired when the current media ends."""
        ...

    def release(self) -> None:
        """Drop the source and the ended callback."""
        ...


class StatePlaybackHandle:
    """
    Player state kept in memory for a remote renderer.

    The rendering layer reads `source`/`playing`/`loop` and reports the end of
    the media through `ended()`.
    """

    def __init__(self):
        self.source: str | None = None
        self.loop = False
        self.playing = False
        self._on_ended: EndedCallback | None = None

    def load(self, url: str, loop: bool = False) -> None:
        self.source = url
        self.loop = loop
        self.playing = False

    def play(self) -> None:
        if self.source is not None:
            self.playing = True

    def pause(self) -> None:
        self.playing = False

    def on_ended(self, callback: EndedCallback | None) -> None:
        self._on_ended = callback

    def release(self) -> None:
        self.source = None
        self.loop = False
        self.playing = False
        self._on_ended = None

    def ended(self) -> None:
        """Report that the current media finished playing."""
        if self.loop:
            return
        self.playing = False
        if self._on_ended is not None:
            self._on_ended()

    def to_dict(self) -> dict:
        return {"source": self.source, "playing": self.playing, "loop": self.loop}
