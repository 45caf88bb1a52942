"""Conversion between backend JSON payloads and client models."""

import uuid
from datetime import datetime, timezone

from ..errors import BackendError
from ..models import (
    Asset,
    AssetType,
    Attachment,
    ChatSession,
    CinemaPlaylist,
    Message,
    ToolCall,
)


def parse_attachment(data: dict) -> Attachment:
    if not isinstance(data, dict):
        raise BackendError(f"Malformed attachment payload: {data!r}")
    mime_type = data.get("mimeType")
    if not isinstance(mime_type, str) or not mime_type:
        raise BackendError("Attachment payload has no mimeType")
    kind = data.get("type")
    if kind not in ("image", "audio"):
        kind = "image" if mime_type.startswith("image/") else "audio"
    return Attachment(data=data.get("data", ""), mime_type=mime_type, kind=kind)


def parse_tool_call(data: dict) -> ToolCall:
    if not isinstance(data, dict):
        raise BackendError(f"Malformed tool call payload: {data!r}")
    return ToolCall(
        name=data.get("name", ""),
        args=data.get("args") or {},
        result=data.get("result"),
    )


def parse_message(data: dict) -> Message:
    """Build a Message from its wire form ({id, role, text, attachments, toolCalls})."""
    if not isinstance(data, dict):
        raise BackendError(f"Malformed message payload: {data!r}")

    role = data.get("role", "model")
    if role not in ("user", "model"):
        raise BackendError(f"Unknown message role: {role}")

    return Message(
        id=data.get("id") or str(uuid.uuid4()),
        role=role,
        text=data.get("text") or "",
        attachments=[parse_attachment(a) for a in data.get("attachments") or []],
        tool_calls=[parse_tool_call(t) for t in data.get("toolCalls") or []],
        is_error=bool(data.get("isError", False)),
    )


def parse_timestamp(value) -> datetime:
    if isinstance(value, (int, float)):
        # Epoch milliseconds
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def parse_asset(data: dict) -> Asset:
    if not isinstance(data, dict):
        raise BackendError(f"Malformed asset payload: {data!r}")
    try:
        return Asset(
            id=data["id"],
            type=AssetType(data["type"]),
            url=data.get("url"),
            prompt=data.get("prompt"),
            cost=float(data.get("cost") or 0),
            model=data.get("model") or "",
            created_at=parse_timestamp(data["createdAt"]),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise BackendError(f"Malformed asset payload: {e}") from e


def parse_cinema_playlist(data: dict) -> CinemaPlaylist:
    if not isinstance(data, dict):
        raise BackendError(f"Malformed cinema payload: {data!r}")
    videos = [parse_asset(v) for v in data.get("videos") or []]
    audio = parse_asset(data["audio"]) if data.get("audio") else None
    return CinemaPlaylist.build(videos, audio)


def parse_session(data: dict) -> ChatSession:
    try:
        session_id = data["id"]
    except (KeyError, TypeError) as e:
        raise BackendError(f"Malformed chat payload: {data!r}") from e

    return ChatSession(
        id=session_id,
        messages=[parse_message(m) for m in data.get("messages") or []],
        title=data.get("title"),
    )
