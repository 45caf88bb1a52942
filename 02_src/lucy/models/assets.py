"""Generated asset data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AssetType(str, Enum):
    """Kinds of generated assets."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"


@dataclass(frozen=True)
class Asset:
    """A creative asset generated by the backend (read-only)."""

    id: str
    type: AssetType
    url: str | None
    prompt: str | None
    cost: float
    model: str
    created_at: datetime


@dataclass(frozen=True)
class CinemaPlaylist:
    """Videos to play in order plus an optional looping background track."""

    videos: tuple[Asset, ...] = ()
    audio: Asset | None = None

    @classmethod
    def build(cls, videos, audio: Asset | None = None) -> "CinemaPlaylist":
        """Keep only playable videos and drop an audio track without URL."""
        eligible = tuple(
            v for v in videos if v.type == AssetType.VIDEO and v.url
        )
        if audio is not None and not audio.url:
            audio = None
        return cls(videos=eligible, audio=audio)

    @classmethod
    def from_assets(cls, assets) -> "CinemaPlaylist":
        """Derive a playlist from a gallery snapshot (first audio asset wins)."""
        audio = next(
            (a for a in assets if a.type == AssetType.AUDIO and a.url), None
        )
        return cls.build(assets, audio)

    @property
    def is_empty(self) -> bool:
        return not self.videos
