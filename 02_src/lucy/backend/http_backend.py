"""HTTP implementation of the backend actions using httpx."""

from typing import Any, Sequence

import httpx

from ..config import REQUEST_TIMEOUT, resolve_api_url
from ..errors import BackendError
from ..logging_config import get_logger
from ..models import Asset, Attachment, ChatSession, Message
from .backend import AssetsResult, CinemaResult
from .wire import parse_asset, parse_cinema_playlist, parse_message, parse_session

logger = get_logger(__name__)


class HttpBackend:
    """Calls the Lucy backend actions over JSON/HTTP."""

    def __init__(
        self,
        api_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self._api_url = resolve_api_url(api_url)
        self._client = client or httpx.AsyncClient(
            base_url=self._api_url, timeout=timeout
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise BackendError(f"{method} {path} failed: {e}") from e

        if response.status_code != 200:
            raise BackendError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{method} {path} returned invalid JSON") from e

    async def send_user_message(
        self,
        text: str,
        attachments: Sequence[Attachment],
        session_id: str,
    ) -> Message:
        data = await self._request(
            "POST",
            "/api/lucy/messages",
            json={
                "text": text,
                "attachments": [a.to_wire() for a in attachments],
                "sessionId": session_id,
            },
        )
        if not isinstance(data, dict) or "message" not in data:
            raise BackendError("Send response has no message")
        return parse_message(data["message"])

    async def get_assets(self, limit: int) -> AssetsResult:
        try:
            data = await self._request(
                "GET", "/api/lucy/assets", params={"limit": limit}
            )
            if not isinstance(data, dict) or not data.get("success"):
                return AssetsResult(success=False)
            assets: list[Asset] = [parse_asset(a) for a in data.get("assets") or []]
        except BackendError as e:
            logger.warning("getAssets failed: %s", e)
            return AssetsResult(success=False)
        return AssetsResult(success=True, assets=assets[:limit])

    async def get_cinema_data(self) -> CinemaResult:
        try:
            data = await self._request("GET", "/api/lucy/cinema")
            if not isinstance(data, dict) or not data.get("success") or not data.get("data"):
                return CinemaResult(success=False)
            playlist = parse_cinema_playlist(data["data"])
        except BackendError as e:
            logger.warning("getCinemaData failed: %s", e)
            return CinemaResult(success=False)
        return CinemaResult(success=True, playlist=playlist)

    async def load_chat_history(self) -> list[ChatSession]:
        data = await self._request("GET", "/api/lucy/chats")
        if not isinstance(data, list):
            raise BackendError("Chat history is not a list")
        return [parse_session(s) for s in data]

    async def load_chat(self, session_id: str) -> ChatSession:
        data = await self._request("GET", f"/api/lucy/chats/{session_id}")
        return parse_session(data)
