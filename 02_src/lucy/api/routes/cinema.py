"""Cinema mode API routes."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import IApplication
from ...logging_config import get_logger
from ..schemas import AssetResponse, asset_to_response


logger = get_logger(__name__)


class CinemaResponse(BaseModel):
    """Sequencer state plus what each player should be doing."""

    opened: bool | None = None
    state: str
    index: int
    progress: str | None
    current_video: AssetResponse | None
    video: dict[str, Any]
    audio: dict[str, Any]


def create_cinema_router(app: IApplication) -> APIRouter:
    """Create cinema router."""
    router = APIRouter(prefix="/api/cinema", tags=["cinema"])

    def cinema_state(opened: bool | None = None) -> dict:
        current = app.cinema.current_video
        return {
            "opened": opened,
            "state": app.cinema.state.value,
            "index": app.cinema.index,
            "progress": app.cinema.progress,
            "current_video": asset_to_response(current) if current else None,
            "video": app.video_handle.to_dict(),
            "audio": app.audio_handle.to_dict(),
        }

    @router.get("", response_model=CinemaResponse)
    async def get_cinema() -> dict:
        return cinema_state()

    @router.post("/open", response_model=CinemaResponse)
    async def open_cinema() -> dict:
        """Enter cinema mode; stays idle when there is nothing to play."""
        try:
            opened = await app.open_cinema()
        except Exception as e:
            logger.error("Opening cinema failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return cinema_state(opened)

    @router.post("/ended", response_model=CinemaResponse)
    async def video_ended() -> dict:
        """The renderer finished playing the current video."""
        app.video_handle.ended()
        return cinema_state()

    @router.post("/close", response_model=CinemaResponse)
    async def close_cinema() -> dict:
        app.cinema.close()
        return cinema_state()

    return router
