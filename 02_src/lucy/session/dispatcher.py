"""MessageDispatcher: one user turn from submission to resolved timeline."""

import uuid
from typing import Protocol, Sequence

from ..backend import IBackend
from ..config import ASSET_REFRESH_DELAY
from ..constants import GENERIC_FAILURE_TEXT, SEND_FAILED_TEXT
from ..errors import NotFoundError, SendFailure
from ..gallery import IAssetGallery
from ..logging_config import get_logger
from ..models import Attachment, Message
from ..scheduler import IScheduler
from .store import ISessionStore

logger = get_logger(__name__)


class IMessageDispatcher(Protocol):
    """Turns user submissions into send cycles."""

    @property
    def is_processing(self) -> bool:
        """True while a send is in flight; the send control must be disabled."""
        ...

    async def send(
        self, text: str, attachments: Sequence[Attachment] = ()
    ) -> Message | None:
        """Run one send cycle. Return the resolved model message, or None."""
        ...


class MessageDispatcher:
    """Single-flight send cycle with stale-response discard."""

    def __init__(
        self,
        store: ISessionStore,
        backend: IBackend,
        gallery: IAssetGallery,
        scheduler: IScheduler,
        refresh_delay: float = ASSET_REFRESH_DELAY,
    ):
        self._store = store
        self._backend = backend
        self._gallery = gallery
        self._scheduler = scheduler
        self._refresh_delay = refresh_delay
        self._processing = False

    @property
    def is_processing(self) -> bool:
        return self._processing

    async def send(
        self, text: str, attachments: Sequence[Attachment] = ()
    ) -> Message | None:
        """
        Run one send cycle.

        Appends the user message and a loading placeholder, calls the backend,
        then resolves the placeholder with the reply or an error text. The
        asset refresh is scheduled once the placeholder is resolved.

        Returns:
            The resolved model message; None when the call was a no-op, was
            rejected by the single-flight gate, or its response went stale.
        """
        attachments = list(attachments)
        if not text.strip() and not attachments:
            return None

        if self._processing:
            logger.warning("Send rejected: another send is in flight")
            return None

        self._processing = True
        session_id = self._store.session_id
        try:
            if self._store.error:
                self._store.set_error(None)

            self._store.append_message(
                Message(
                    id=str(uuid.uuid4()),
                    role="user",
                    text=text,
                    attachments=attachments,
                )
            )
            placeholder_id = self._store.append_message(
                Message(id=str(uuid.uuid4()), role="model", text="", is_loading=True)
            )

            reply: Message | None = None
            try:
                reply = await self._round_trip(text, attachments, session_id)
            except SendFailure as e:
                logger.error(
                    "Send failed: %s", e, exc_info=True, extra={"session_id": session_id}
                )

            if self._store.session_id != session_id:
                logger.debug(
                    "Discarding stale response",
                    extra={"session_id": session_id, "message_id": placeholder_id},
                )
                return None

            resolved = self._resolve(placeholder_id, reply)
            self._scheduler.call_later(self._refresh_delay, self._gallery.refresh)
            return resolved
        finally:
            self._processing = False

    async def _round_trip(
        self, text: str, attachments: list[Attachment], session_id: str
    ) -> Message:
        try:
            return await self._backend.send_user_message(text, attachments, session_id)
        except Exception as e:
            raise SendFailure(str(e)) from e

    def _resolve(self, placeholder_id: str, reply: Message | None) -> Message | None:
        try:
            if reply is None:
                return self._store.update_placeholder(
                    placeholder_id, text=SEND_FAILED_TEXT, is_error=True
                )
            return self._store.update_placeholder(
                placeholder_id,
                text=reply.text,
                tool_calls=reply.tool_calls,
                attachments=reply.attachments,
                is_error=reply.is_error,
            )
        except NotFoundError as e:
            logger.error("Placeholder missing at resolution: %s", e, exc_info=True)
            self._store.set_error(GENERIC_FAILURE_TEXT)
            return None
