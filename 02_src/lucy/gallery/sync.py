"""AssetGallerySync: cached list of the user's generated assets."""

import asyncio
from typing import Protocol

from ..backend import IBackend
from ..config import ASSET_LIMIT
from ..event_bus import IEventBus, Topic
from ..logging_config import get_logger
from ..models import Asset, AssetType, CinemaPlaylist

logger = get_logger(__name__)


class IAssetGallery(Protocol):
    """Asset cache refreshed from the backend."""

    async def refresh(self) -> bool:
        """Replace the cache on success, keep it on failure."""
        ...

    def snapshot(self) -> tuple[Asset, ...]:
        """Immutable copy of the cached assets."""
        ...


class AssetGallerySync:
    """Keeps a stale-but-available copy of the most recent assets."""

    def __init__(
        self,
        backend: IBackend,
        event_bus: IEventBus,
        limit: int = ASSET_LIMIT,
    ):
        self._backend = backend
        self._event_bus = event_bus
        self._limit = limit
        self._assets: tuple[Asset, ...] = ()
        self._inflight: asyncio.Future | None = None

    @property
    def assets(self) -> list[Asset]:
        return list(self._assets)

    @property
    def videos(self) -> list[Asset]:
        return [a for a in self._assets if a.type == AssetType.VIDEO]

    @property
    def can_open_cinema(self) -> bool:
        return any(a.url for a in self.videos)

    def snapshot(self) -> tuple[Asset, ...]:
        return self._assets

    async def refresh(self) -> bool:
        """Fetch the asset list; concurrent callers share one request."""
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._fetch())
        # A cancelled caller must not cancel the shared request
        return await asyncio.shield(self._inflight)

    async def _fetch(self) -> bool:
        try:
            result = await self._backend.get_assets(self._limit)
        except Exception as e:
            logger.error("Asset refresh failed: %s", e, exc_info=True)
            return False

        if not result.success:
            logger.warning("Asset refresh unsuccessful, keeping %s cached", len(self._assets))
            return False

        self._assets = tuple(result.assets[: self._limit])
        logger.debug("Asset cache refreshed: %s items", len(self._assets))
        self._event_bus.publish(
            Topic.ASSETS,
            source="asset_gallery",
            payload={"count": len(self._assets)},
        )
        return True

    async def cinema_playlist(self) -> CinemaPlaylist:
        """Playlist from the backend's cinema data, else from the cached snapshot."""
        try:
            result = await self._backend.get_cinema_data()
        except Exception as e:
            logger.error("Cinema data failed: %s", e, exc_info=True)
        else:
            if result.success and result.playlist is not None:
                return result.playlist
            logger.warning("Cinema data unsuccessful, using cached assets")

        return CinemaPlaylist.from_assets(self.snapshot())

    async def close(self) -> None:
        """Cancel an in-flight refresh so it does not outlive the backend."""
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
            try:
                await self._inflight
            except asyncio.CancelledError:
                pass
        self._inflight = None
