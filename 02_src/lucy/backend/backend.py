"""Backend actions consumed by the client engine."""

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from ..models import Asset, Attachment, ChatSession, CinemaPlaylist, Message


@dataclass
class AssetsResult:
    """Result of getAssets."""

    success: bool
    assets: list[Asset] = field(default_factory=list)


@dataclass
class CinemaResult:
    """Result of getCinemaData."""

    success: bool
    playlist: CinemaPlaylist | None = None


class IBackend(Protocol):
    """Remote chat/generation service as seen by the client."""

    async def send_user_message(
        self,
        text: str,
        attachments: Sequence[Attachment],
        session_id: str,
    ) -> Message:
        """Run one user turn. Raise BackendError on rejection or network error."""
        ...

    async def get_assets(self, limit: int) -> AssetsResult:
        """Most-recent-first list of the user's generated assets."""
        ...

    async def get_cinema_data(self) -> CinemaResult:
        """Videos and background audio for cinema mode."""
        ...

    async def load_chat_history(self) -> list[ChatSession]:
        """All chat sessions of the user."""
        ...

    async def load_chat(self, session_id: str) -> ChatSession:
        """A single chat session with its messages."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
