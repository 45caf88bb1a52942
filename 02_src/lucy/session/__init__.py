"""Session module."""

from .dispatcher import IMessageDispatcher, MessageDispatcher
from .store import ISessionStore, SessionStore

__all__ = ["IMessageDispatcher", "ISessionStore", "MessageDispatcher", "SessionStore"]
