"""Pytest configuration and fixtures."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lucy.backend import AssetsResult, CinemaResult  # noqa: E402
from lucy.models import Asset, AssetType, Message  # noqa: E402


class ManualScheduler:
    """Scheduler that only runs jobs when the test asks it to."""

    def __init__(self):
        self.jobs = []

    def call_later(self, delay, job):
        self.jobs.append((delay, job))

    def cancel_all(self):
        self.jobs.clear()

    async def run_pending(self):
        jobs, self.jobs = self.jobs, []
        for _, job in jobs:
            await job()


class RecordingPlaybackHandle:
    """PlaybackHandle that records every call."""

    def __init__(self):
        self.calls = []
        self.source = None
        self.playing = False
        self.callback = None

    def load(self, url, loop=False):
        self.calls.append(("load", url, loop))
        self.source = url

    def play(self):
        self.calls.append(("play",))
        self.playing = True

    def pause(self):
        self.calls.append(("pause",))
        self.playing = False

    def on_ended(self, callback):
        self.calls.append(("on_ended",))
        self.callback = callback

    def release(self):
        self.calls.append(("release",))
        self.source = None
        self.callback = None

    def finish(self):
        """Simulate the media reaching its end."""
        if self.callback:
            self.callback()


class FakeFile:
    """Selected file with an async read(), like UploadFile."""

    def __init__(self, content: bytes | None, content_type: str, filename: str = "file"):
        self.filename = filename
        self.content_type = content_type
        self._content = content

    async def read(self) -> bytes:
        if self._content is None:
            raise OSError("device not ready")
        return self._content


@pytest.fixture
def make_asset():
    """Factory for Asset instances."""

    def _make(asset_id: str, asset_type: str = "video", url: str | None = "auto", **kwargs):
        if url == "auto":
            url = f"https://cdn.test/{asset_id}"
        return Asset(
            id=asset_id,
            type=AssetType(asset_type),
            url=url,
            prompt=kwargs.get("prompt", f"prompt for {asset_id}"),
            cost=kwargs.get("cost", 1.0),
            model=kwargs.get("model", "test-model"),
            created_at=kwargs.get(
                "created_at", datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
            ),
        )

    return _make


@pytest.fixture
def fake_backend():
    """Create mock backend with successful defaults."""
    backend = Mock()
    backend.send_user_message = AsyncMock(
        return_value=Message(id="reply", role="model", text="Test response")
    )
    backend.get_assets = AsyncMock(return_value=AssetsResult(success=True, assets=[]))
    backend.get_cinema_data = AsyncMock(return_value=CinemaResult(success=False))
    backend.load_chat_history = AsyncMock(return_value=[])
    backend.load_chat = AsyncMock()
    backend.close = AsyncMock()
    return backend


@pytest.fixture
def event_bus():
    from lucy.event_bus import EventBus

    return EventBus()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def store(fake_backend, event_bus):
    """Create SessionStore for testing."""
    from lucy.session import SessionStore

    return SessionStore(fake_backend, event_bus, session_id="session-1")


@pytest.fixture
def gallery(fake_backend, event_bus):
    """Create AssetGallerySync for testing."""
    from lucy.gallery import AssetGallerySync

    return AssetGallerySync(fake_backend, event_bus)


@pytest.fixture
def dispatcher(store, fake_backend, gallery, scheduler):
    """Create MessageDispatcher for testing."""
    from lucy.session import MessageDispatcher

    return MessageDispatcher(
        store=store,
        backend=fake_backend,
        gallery=gallery,
        scheduler=scheduler,
    )


@pytest.fixture
def video_handle():
    return RecordingPlaybackHandle()


@pytest.fixture
def audio_handle():
    return RecordingPlaybackHandle()


@pytest.fixture
def sequencer(video_handle, audio_handle, event_bus):
    """Create CinemaSequencer for testing."""
    from lucy.cinema import CinemaSequencer

    return CinemaSequencer(video=video_handle, audio=audio_handle, event_bus=event_bus)


@pytest.fixture
def fake_file():
    """FakeFile class for building selected files."""
    return FakeFile
