"""Asset gallery API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from ...app import IApplication
from ..schemas import AssetResponse, asset_to_response


class GalleryResponse(BaseModel):
    assets: list[AssetResponse]
    can_open_cinema: bool


class RefreshResponse(BaseModel):
    success: bool
    count: int


def create_assets_router(app: IApplication) -> APIRouter:
    """Create assets router."""
    router = APIRouter(prefix="/api/assets", tags=["assets"])

    @router.get("", response_model=GalleryResponse)
    async def get_assets() -> dict:
        """Cached assets, most recent first."""
        return {
            "assets": [asset_to_response(a) for a in app.gallery.assets],
            "can_open_cinema": app.gallery.can_open_cinema,
        }

    @router.post("/refresh", response_model=RefreshResponse)
    async def refresh_assets() -> dict:
        success = await app.gallery.refresh()
        return {"success": success, "count": len(app.gallery.assets)}

    return router
