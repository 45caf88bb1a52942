"""Lucy chat client engine."""

from .app import Application, IApplication
from .attachments import AttachmentEncoder, IFileSource, PendingAttachments
from .backend import AssetsResult, CinemaResult, HttpBackend, IBackend
from .cinema import CinemaSequencer, CinemaState, PlaybackHandle, StatePlaybackHandle
from .errors import BackendError, DecodeError, LucyError, NotFoundError, SendFailure
from .event_bus import BusMessage, EventBus, IEventBus, Topic
from .gallery import AssetGallerySync, IAssetGallery
from .models import (
    Asset,
    AssetType,
    Attachment,
    ChatSession,
    CinemaPlaylist,
    Message,
    ToolCall,
)
from .scheduler import AsyncioScheduler, IScheduler
from .session import IMessageDispatcher, ISessionStore, MessageDispatcher, SessionStore

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Message",
    "Attachment",
    "ToolCall",
    "ChatSession",
    "Asset",
    "AssetType",
    "CinemaPlaylist",
    # Errors
    "LucyError",
    "DecodeError",
    "BackendError",
    "SendFailure",
    "NotFoundError",
    # Components
    "IBackend",
    "HttpBackend",
    "AssetsResult",
    "CinemaResult",
    "IEventBus",
    "EventBus",
    "BusMessage",
    "Topic",
    "IScheduler",
    "AsyncioScheduler",
    "AttachmentEncoder",
    "IFileSource",
    "PendingAttachments",
    "ISessionStore",
    "SessionStore",
    "IMessageDispatcher",
    "MessageDispatcher",
    "IAssetGallery",
    "AssetGallerySync",
    "PlaybackHandle",
    "StatePlaybackHandle",
    "CinemaSequencer",
    "CinemaState",
]
