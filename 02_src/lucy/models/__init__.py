"""Core data models for the Lucy chat client."""

from .assets import Asset, AssetType, CinemaPlaylist
from .messages import Attachment, AttachmentKind, Message, Role, ToolCall
from .sessions import ChatSession

__all__ = [
    # Messages
    "Attachment",
    "AttachmentKind",
    "Message",
    "Role",
    "ToolCall",
    # Sessions
    "ChatSession",
    # Assets
    "Asset",
    "AssetType",
    "CinemaPlaylist",
]
