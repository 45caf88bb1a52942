"""Tests for AttachmentEncoder and PendingAttachments."""

import asyncio
import base64

import pytest

from lucy.attachments import AttachmentEncoder, PendingAttachments
from lucy.errors import DecodeError


class TestAttachmentEncoderEncode:
    """Tests for AttachmentEncoder.encode()."""

    @pytest.mark.asyncio
    async def test_encode_image(self, fake_file):
        att = await AttachmentEncoder().encode(fake_file(b"\x89PNG", "image/png"))

        assert att.kind == "image"
        assert att.mime_type == "image/png"
        assert base64.b64decode(att.data) == b"\x89PNG"
        assert not att.data.startswith("data:")

    @pytest.mark.asyncio
    async def test_encode_audio(self, fake_file):
        att = await AttachmentEncoder().encode(fake_file(b"ID3", "audio/mpeg"))
        assert att.kind == "audio"

    @pytest.mark.asyncio
    async def test_unreadable_source_raises_decode_error(self, fake_file):
        with pytest.raises(DecodeError, match="unreadable"):
            await AttachmentEncoder().encode(fake_file(None, "image/png"))

    @pytest.mark.asyncio
    async def test_empty_source_raises_decode_error(self, fake_file):
        with pytest.raises(DecodeError, match="empty"):
            await AttachmentEncoder().encode(fake_file(b"", "image/png"))

    @pytest.mark.asyncio
    async def test_unsupported_type_raises_decode_error(self, fake_file):
        with pytest.raises(DecodeError, match="unsupported"):
            await AttachmentEncoder().encode(fake_file(b"text", "text/plain"))


class TestAttachmentEncoderEncodeAll:
    """Tests for AttachmentEncoder.encode_all()."""

    @pytest.mark.asyncio
    async def test_keeps_selection_order(self, fake_file):
        class SlowFile(fake_file):
            async def read(self):
                await asyncio.sleep(0.01)
                return await super().read()

        files = [
            SlowFile(b"first", "image/png", "slow.png"),
            fake_file(b"second", "audio/wav", "fast.wav"),
        ]

        attachments = await AttachmentEncoder().encode_all(files)

        assert [base64.b64decode(a.data) for a in attachments] == [b"first", b"second"]

    @pytest.mark.asyncio
    async def test_drops_unreadable_sources(self, fake_file):
        files = [
            fake_file(b"one", "image/png"),
            fake_file(None, "image/png"),
            fake_file(b"three", "audio/ogg"),
        ]

        attachments = await AttachmentEncoder().encode_all(files)

        assert [base64.b64decode(a.data) for a in attachments] == [b"one", b"three"]


class TestPendingAttachments:
    """Tests for PendingAttachments."""

    @pytest.mark.asyncio
    async def test_unreadable_source_never_pending(self, fake_file):
        pending = PendingAttachments()

        added = await pending.add([fake_file(None, "image/png")])

        assert added == []
        assert len(pending) == 0

    @pytest.mark.asyncio
    async def test_add_appends_after_existing(self, fake_file):
        pending = PendingAttachments()
        await pending.add([fake_file(b"a", "image/png")])
        await pending.add([fake_file(b"b", "audio/wav")])

        assert [a.kind for a in pending.items] == ["image", "audio"]

    @pytest.mark.asyncio
    async def test_remove(self, fake_file):
        pending = PendingAttachments()
        await pending.add([fake_file(b"a", "image/png"), fake_file(b"b", "audio/wav")])

        removed = pending.remove(0)

        assert removed.kind == "image"
        assert [a.kind for a in pending.items] == ["audio"]

    def test_remove_out_of_range(self):
        with pytest.raises(IndexError):
            PendingAttachments().remove(0)

    @pytest.mark.asyncio
    async def test_take_clears(self, fake_file):
        pending = PendingAttachments()
        await pending.add([fake_file(b"a", "image/png")])

        taken = pending.take()

        assert len(taken) == 1
        assert len(pending) == 0
