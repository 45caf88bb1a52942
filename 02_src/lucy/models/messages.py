"""Message-related data models."""

from dataclasses import dataclass, field
from typing import Literal

AttachmentKind = Literal["image", "audio"]
Role = Literal["user", "model"]


@dataclass(frozen=True)
class Attachment:
    """Media attached to a message, base64 payload without data-URI prefix."""

    data: str
    mime_type: str
    kind: AttachmentKind

    @property
    def preview_uri(self) -> str:
        """Data URI for local preview only; never sent to the backend."""
        return f"data:{self.mime_type};base64,{self.data}"

    def to_wire(self) -> dict:
        return {"data": self.data, "mimeType": self.mime_type}


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation reported by the backend for a model turn."""

    name: str
    args: dict = field(default_factory=dict)
    result: dict | None = None


@dataclass
class Message:
    """A single message in the session timeline."""

    id: str
    role: Role
    text: str
    attachments: list[Attachment] = field(default_factory=list)
    tool_calls: list[ToolCall] = field(default_factory=list)
    is_loading: bool = False
    is_error: bool = False
