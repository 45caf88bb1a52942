"""Response models of the local API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from ..models import Asset, Attachment, Message


class AttachmentResponse(BaseModel):
    """Attachment as shown to the renderer."""

    mime_type: str
    kind: str
    preview_uri: str


class ToolCallResponse(BaseModel):
    name: str
    args: dict[str, Any]
    result: dict[str, Any] | None = None


class MessageResponse(BaseModel):
    """Timeline entry."""

    id: str
    role: str
    text: str
    attachments: list[AttachmentResponse]
    tool_calls: list[ToolCallResponse]
    is_loading: bool
    is_error: bool


class SessionResponse(BaseModel):
    """Current session view."""

    session_id: str
    messages: list[MessageResponse]
    is_processing: bool
    error: str | None
    pending_attachments: list[AttachmentResponse]


class SendResponse(BaseModel):
    message: MessageResponse | None


class AssetResponse(BaseModel):
    id: str
    type: str
    url: str | None
    prompt: str | None
    cost: float
    model: str
    created_at: datetime


class StatusResponse(BaseModel):
    status: str


def attachment_to_response(attachment: Attachment) -> dict:
    return {
        "mime_type": attachment.mime_type,
        "kind": attachment.kind,
        "preview_uri": attachment.preview_uri,
    }


def message_to_response(message: Message) -> dict:
    return {
        "id": message.id,
        "role": message.role,
        "text": message.text,
        "attachments": [attachment_to_response(a) for a in message.attachments],
        "tool_calls": [
            {"name": t.name, "args": t.args, "result": t.result}
            for t in message.tool_calls
        ],
        "is_loading": message.is_loading,
        "is_error": message.is_error,
    }


def asset_to_response(asset: Asset) -> dict:
    return {
        "id": asset.id,
        "type": asset.type.value,
        "url": asset.url,
        "prompt": asset.prompt,
        "cost": asset.cost,
        "model": asset.model,
        "created_at": asset.created_at,
    }
