"""SessionStore: canonical holder of the current chat timeline."""

import dataclasses
import uuid
from typing import Protocol, Sequence

from ..backend import IBackend
from ..constants import CHAT_LOAD_FAILED_TEXT, HISTORY_FAILED_TEXT, INTRO_MESSAGE
from ..errors import NotFoundError
from ..event_bus import IEventBus, Topic
from ..logging_config import get_logger
from ..models import Attachment, ChatSession, Message, ToolCall

logger = get_logger(__name__)

INTRO_MESSAGE_ID = "intro"


class ISessionStore(Protocol):
    """Ordered message timeline and identity of the current session."""

    @property
    def session_id(self) -> str:
        ...

    @property
    def messages(self) -> list[Message]:
        ...

    @property
    def error(self) -> str | None:
        ...

    def append_message(self, message: Message) -> str:
        """Append at the end. Return the (possibly assigned) id."""
        ...

    def update_placeholder(
        self,
        message_id: str,
        *,
        text: str | None = None,
        tool_calls: Sequence[ToolCall] | None = None,
        attachments: Sequence[Attachment] | None = None,
        is_error: bool = False,
    ) -> Message:
        """Resolve the loading placeholder. Raise NotFoundError if missing."""
        ...

    async def load_session(self, session_id: str) -> bool:
        """Replace the timeline with a freshly fetched session."""
        ...

    def reset(self) -> str:
        """Clear the timeline and start a new session identity."""
        ...

    def set_error(self, error: str | None) -> None:
        """Record the last user-facing error."""
        ...


class SessionStore:
    """In-memory timeline with subscribe/notify through the EventBus."""

    def __init__(
        self,
        backend: IBackend,
        event_bus: IEventBus,
        session_id: str | None = None,
    ):
        self._backend = backend
        self._event_bus = event_bus

        self._session_id = session_id or str(uuid.uuid4())
        self._messages: list[Message] = []
        self._chats: list[ChatSession] = []
        self._error: str | None = None

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def messages(self) -> list[Message]:
        return self._messages.copy()

    @property
    def chats(self) -> list[ChatSession]:
        return self._chats.copy()

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def placeholder(self) -> Message | None:
        """The in-flight loading message, if any."""
        return next((m for m in self._messages if m.is_loading), None)

    def display_messages(self) -> list[Message]:
        """Timeline for rendering; the intro message stands in for an empty one."""
        if self._messages:
            return self.messages
        return [Message(id=INTRO_MESSAGE_ID, role="model", text=INTRO_MESSAGE)]

    def append_message(self, message: Message) -> str:
        """Append at the end. Return the (possibly assigned) id."""
        if not message.id:
            message.id = str(uuid.uuid4())

        if any(m.id == message.id for m in self._messages):
            raise ValueError(f"Duplicate message id {message.id}")
        if message.is_loading and self.placeholder is not None:
            raise ValueError("A placeholder is already in flight for this session")

        self._messages.append(message)
        self._notify("appended", message_id=message.id)
        return message.id

    def update_placeholder(
        self,
        message_id: str,
        *,
        text: str | None = None,
        tool_calls: Sequence[ToolCall] | None = None,
        attachments: Sequence[Attachment] | None = None,
        is_error: bool = False,
    ) -> Message:
        """Resolve the loading placeholder in place. Raise NotFoundError if missing."""
        for index, message in enumerate(self._messages):
            if message.id == message_id and message.is_loading:
                break
        else:
            raise NotFoundError(message_id)

        resolved = dataclasses.replace(
            message,
            text=message.text if text is None else text,
            tool_calls=list(tool_calls or []),
            attachments=list(attachments or []),
            is_loading=False,
            is_error=is_error,
        )
        self._messages[index] = resolved
        self._notify("resolved", message_id=message_id, is_error=is_error)
        return resolved

    async def load_session(self, session_id: str) -> bool:
        """Replace the timeline with a freshly fetched session (no merge)."""
        try:
            session = await self._backend.load_chat(session_id)
        except Exception as e:
            logger.error("Failed to load chat %s: %s", session_id, e, exc_info=True)
            self.set_error(CHAT_LOAD_FAILED_TEXT)
            return False

        self._session_id = session.id
        self._messages = [
            dataclasses.replace(m, is_loading=False) for m in session.messages
        ]
        self._error = None
        logger.info(
            "Loaded chat with %s messages",
            len(self._messages),
            extra={"session_id": session.id},
        )
        self._notify("loaded")
        return True

    def reset(self) -> str:
        """Clear the timeline and start a new session identity."""
        self._session_id = str(uuid.uuid4())
        self._messages = []
        self._error = None
        logger.info("Started new chat", extra={"session_id": self._session_id})
        self._notify("reset")
        return self._session_id

    async def load_history(self) -> list[ChatSession]:
        """Fetch the user's chat sessions. Keep the previous list on failure."""
        try:
            self._chats = await self._backend.load_chat_history()
        except Exception as e:
            logger.error("Failed to load chat history: %s", e, exc_info=True)
            self.set_error(HISTORY_FAILED_TEXT)
            return self.chats

        self._notify("history", count=len(self._chats))
        return self.chats

    def set_error(self, error: str | None) -> None:
        """Record the last user-facing error."""
        self._error = error
        self._notify("error", error=error)

    def _notify(self, event: str, **payload) -> None:
        self._event_bus.publish(
            Topic.TIMELINE,
            source="session_store",
            payload={"event": event, "session_id": self._session_id, **payload},
        )
