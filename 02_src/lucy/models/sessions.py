"""Chat session data models."""

from dataclasses import dataclass, field

from .messages import Message


@dataclass
class ChatSession:
    """One chat conversation with its own id and message timeline."""

    id: str
    messages: list[Message] = field(default_factory=list)
    title: str | None = None
