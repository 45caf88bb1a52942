"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol, Sequence

from .attachments import IFileSource, PendingAttachments
from .backend import HttpBackend, IBackend
from .cinema import CinemaSequencer, StatePlaybackHandle
from .event_bus import EventBus
from .gallery import AssetGallerySync
from .logging_config import get_logger
from .models import Attachment, Message
from .scheduler import AsyncioScheduler, IScheduler
from .session import MessageDispatcher, SessionStore

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def send(self, text: str) -> Message | None:
        """Send text together with every pending attachment."""
        ...

    async def add_attachments(self, sources: Sequence[IFileSource]) -> list[Attachment]:
        ...

    async def start_new_chat(self) -> str:
        """Reset the session to a fresh chat."""
        ...

    async def load_chat(self, session_id: str) -> bool:
        ...

    async def open_cinema(self) -> bool:
        """Snapshot the playlist and start cinema mode."""
        ...

    @property
    def store(self) -> SessionStore:
        ...

    @property
    def gallery(self) -> AssetGallerySync:
        ...

    @property
    def dispatcher(self) -> MessageDispatcher:
        ...

    @property
    def pending(self) -> PendingAttachments:
        ...

    @property
    def cinema(self) -> CinemaSequencer:
        ...

    @property
    def video_handle(self) -> StatePlaybackHandle:
        ...

    @property
    def audio_handle(self) -> StatePlaybackHandle:
        ...


class Application:
    """Wires the client engine together."""

    def __init__(
        self,
        backend: IBackend | None = None,
        scheduler: IScheduler | None = None,
        api_url: str | None = None,
    ):
        self._api_url = api_url if api_url is not None else os.getenv("LUCY_BACKEND_URL")
        self._injected_backend = backend
        self._injected_scheduler = scheduler

        # Components (will be initialized in start())
        self._backend: IBackend | None = None
        self._scheduler: IScheduler | None = None
        self._event_bus: EventBus | None = None
        self._store: SessionStore | None = None
        self._gallery: AssetGallerySync | None = None
        self._dispatcher: MessageDispatcher | None = None
        self._pending: PendingAttachments | None = None
        self._video_handle: StatePlaybackHandle | None = None
        self._audio_handle: StatePlaybackHandle | None = None
        self._cinema: CinemaSequencer | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting client engine")

        # 1. Backend and scheduler (no dependencies)
        self._backend = self._injected_backend or HttpBackend(self._api_url)
        self._scheduler = self._injected_scheduler or AsyncioScheduler()

        # 2. EventBus
        self._event_bus = EventBus()

        # 3. State holders (depend on Backend + EventBus)
        self._store = SessionStore(self._backend, self._event_bus)
        self._gallery = AssetGallerySync(self._backend, self._event_bus)
        self._pending = PendingAttachments()

        # 4. Dispatcher (depends on Store, Backend, Gallery, Scheduler)
        self._dispatcher = MessageDispatcher(
            store=self._store,
            backend=self._backend,
            gallery=self._gallery,
            scheduler=self._scheduler,
        )

        # 5. Cinema (independent of the chat flow)
        self._video_handle = StatePlaybackHandle()
        self._audio_handle = StatePlaybackHandle()
        self._cinema = CinemaSequencer(
            video=self._video_handle,
            audio=self._audio_handle,
            event_bus=self._event_bus,
        )

        # Initial data
        await self._store.load_history()
        await self._gallery.refresh()
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._cinema:
            self._cinema.close()
        if self._scheduler:
            self._scheduler.cancel_all()
        if self._gallery:
            await self._gallery.close()
        if self._backend:
            await self._backend.close()
            logger.info("Backend client closed")

    async def send(self, text: str) -> Message | None:
        """Send text together with every pending attachment."""
        attachments: Sequence[Attachment] = ()
        if not self.dispatcher.is_processing:
            attachments = self.pending.take()
        return await self.dispatcher.send(text, attachments)

    async def add_attachments(self, sources: Sequence[IFileSource]) -> list[Attachment]:
        return await self.pending.add(sources)

    async def start_new_chat(self) -> str:
        """Reset the session to a fresh chat."""
        self.pending.take()
        return self.store.reset()

    async def load_chat(self, session_id: str) -> bool:
        return await self.store.load_session(session_id)

    async def open_cinema(self) -> bool:
        """Snapshot the playlist and start cinema mode."""
        playlist = await self.gallery.cinema_playlist()
        return self.cinema.open(playlist)

    @property
    def event_bus(self) -> EventBus:
        if self._event_bus is None:
            raise RuntimeError("Application not started")
        return self._event_bus

    @property
    def store(self) -> SessionStore:
        if self._store is None:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def gallery(self) -> AssetGallerySync:
        if self._gallery is None:
            raise RuntimeError("Application not started")
        return self._gallery

    @property
    def dispatcher(self) -> MessageDispatcher:
        if self._dispatcher is None:
            raise RuntimeError("Application not started")
        return self._dispatcher

    @property
    def pending(self) -> PendingAttachments:
        if self._pending is None:
            raise RuntimeError("Application not started")
        return self._pending

    @property
    def cinema(self) -> CinemaSequencer:
        if self._cinema is None:
            raise RuntimeError("Application not started")
        return self._cinema

    @property
    def video_handle(self) -> StatePlaybackHandle:
        if self._video_handle is None:
            raise RuntimeError("Application not started")
        return self._video_handle

    @property
    def audio_handle(self) -> StatePlaybackHandle:
        if self._audio_handle is None:
            raise RuntimeError("Application not started")
        return self._audio_handle
