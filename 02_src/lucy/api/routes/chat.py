"""Chat API routes."""

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel

from ...app import IApplication
from ...constants import PLACEHOLDER_PROMPTS
from ...logging_config import get_logger
from ..schemas import (
    SendResponse,
    SessionResponse,
    StatusResponse,
    attachment_to_response,
    message_to_response,
)


logger = get_logger(__name__)


class SendRequest(BaseModel):
    """Request model for sending a message."""

    text: str = ""


class ChatSummary(BaseModel):
    id: str
    title: str | None
    message_count: int


def create_chat_router(app: IApplication) -> APIRouter:
    """Create chat router."""
    router = APIRouter(prefix="/api", tags=["chat"])

    def ensure_idle() -> None:
        if app.dispatcher.is_processing:
            raise HTTPException(status_code=409, detail="A message is being sent")

    @router.get("/session", response_model=SessionResponse)
    async def get_session() -> dict:
        """Current timeline for rendering."""
        return {
            "session_id": app.store.session_id,
            "messages": [message_to_response(m) for m in app.store.display_messages()],
            "is_processing": app.dispatcher.is_processing,
            "error": app.store.error,
            "pending_attachments": [
                attachment_to_response(a) for a in app.pending.items
            ],
        }

    @router.post("/messages", response_model=SendResponse)
    async def send_message(request: SendRequest) -> dict:
        """Send text plus pending attachments."""
        ensure_idle()
        message = await app.send(request.text)
        return {"message": message_to_response(message) if message else None}

    @router.post("/attachments", response_model=SessionResponse)
    async def upload_attachments(files: list[UploadFile] = File(...)) -> dict:
        """Encode uploaded image/audio files into pending attachments."""
        try:
            await app.add_attachments(files)
        except Exception as e:
            logger.error("Attachment upload failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return await get_session()

    @router.delete("/attachments/{index}", response_model=SessionResponse)
    async def remove_attachment(index: int) -> dict:
        try:
            app.pending.remove(index)
        except IndexError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return await get_session()

    @router.get("/chats", response_model=list[ChatSummary])
    async def list_chats() -> list[dict]:
        try:
            chats = await app.store.load_history()
        except Exception as e:
            logger.error("Chat history failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return [
            {"id": c.id, "title": c.title, "message_count": len(c.messages)}
            for c in chats
        ]

    @router.post("/chats/new", response_model=SessionResponse)
    async def new_chat() -> dict:
        ensure_idle()
        await app.start_new_chat()
        return await get_session()

    @router.post("/chats/{session_id}/load", response_model=SessionResponse)
    async def load_chat(session_id: str) -> dict:
        ensure_idle()
        if not await app.load_chat(session_id):
            raise HTTPException(status_code=502, detail=app.store.error)
        return await get_session()

    @router.get("/prompts", response_model=list[str])
    async def get_prompts() -> list[str]:
        """Quick-start prompts offered on an empty chat."""
        return PLACEHOLDER_PROMPTS[:3]

    @router.get("/health", response_model=StatusResponse)
    async def health() -> dict:
        return {"status": "ok"}

    return router
