"""AttachmentEncoder and the pending-attachments list."""

import asyncio
import base64
from typing import Protocol, Sequence

from ..errors import DecodeError
from ..logging_config import get_logger
from ..models import Attachment

logger = get_logger(__name__)

ACCEPTED_PREFIXES = ("image/", "audio/")


class IFileSource(Protocol):
    """A selected file. Starlette's UploadFile satisfies this."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes:
        ...


class AttachmentEncoder:
    """Turns selected files into transmissible Attachment records."""

    async def encode(self, source: IFileSource) -> Attachment:
        """Read, base64-encode and classify one file. Raise DecodeError if unusable."""
        mime_type = source.content_type or ""
        if not mime_type.startswith(ACCEPTED_PREFIXES):
            raise DecodeError(
                f"{source.filename or 'file'}: unsupported media type {mime_type!r}"
            )

        try:
            raw = await source.read()
        except Exception as e:
            raise DecodeError(f"{source.filename or 'file'}: unreadable ({e})") from e

        if not raw:
            raise DecodeError(f"{source.filename or 'file'}: empty")

        kind = "image" if mime_type.startswith("image/") else "audio"
        return Attachment(
            data=base64.b64encode(raw).decode("ascii"),
            mime_type=mime_type,
            kind=kind,
        )

    async def encode_all(self, sources: Sequence[IFileSource]) -> list[Attachment]:
        """Encode files concurrently; drop failures, keep selection order."""
        results = await asyncio.gather(
            *[self.encode(source) for source in sources],
            return_exceptions=True,
        )

        attachments = []
        for result in results:
            if isinstance(result, DecodeError):
                logger.warning("Attachment dropped: %s", result)
            elif isinstance(result, BaseException):
                raise result
            else:
                attachments.append(result)
        return attachments


class PendingAttachments:
    """Attachments selected for the next send."""

    def __init__(self, encoder: AttachmentEncoder | None = None):
        self._encoder = encoder or AttachmentEncoder()
        self._items: list[Attachment] = []

    async def add(self, sources: Sequence[IFileSource]) -> list[Attachment]:
        """Encode and append the files; return the attachments actually added."""
        added = await self._encoder.encode_all(sources)
        self._items.extend(added)
        return added

    def remove(self, index: int) -> Attachment:
        """Remove by position. Raise IndexError if out of range."""
        if not 0 <= index < len(self._items):
            raise IndexError(f"No pending attachment at {index}")
        return self._items.pop(index)

    def take(self) -> list[Attachment]:
        """Return all pending attachments and clear the list."""
        items, self._items = self._items, []
        return items

    @property
    def items(self) -> list[Attachment]:
        return self._items.copy()

    def __len__(self) -> int:
        return len(self._items)
