"""API routes."""

from .assets import create_assets_router
from .chat import create_chat_router
from .cinema import create_cinema_router

__all__ = ["create_assets_router", "create_chat_router", "create_cinema_router"]
