"""Tests for MessageDispatcher."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from lucy.backend import AssetsResult
from lucy.config import ASSET_REFRESH_DELAY
from lucy.constants import GENERIC_FAILURE_TEXT, SEND_FAILED_TEXT
from lucy.errors import BackendError
from lucy.event_bus import Topic
from lucy.models import Attachment, ChatSession, Message


async def settle():
    """Let pending tasks run up to their next suspension point."""
    for _ in range(5):
        await asyncio.sleep(0)


def gated_reply(gate: asyncio.Event, text: str = "done"):
    async def _send(text_in, attachments, session_id):
        await gate.wait()
        return Message(id="reply", role="model", text=text)

    return AsyncMock(side_effect=_send)


class TestMessageDispatcherSend:
    """Tests for MessageDispatcher.send()."""

    @pytest.mark.asyncio
    async def test_draw_a_cat(self, dispatcher, store, fake_backend):
        gate = asyncio.Event()
        image = Attachment(data="Y2F0", mime_type="image/png", kind="image")

        async def _send(text, attachments, session_id):
            await gate.wait()
            return Message(
                id="reply", role="model", text="Here's your cat!", attachments=[image]
            )

        fake_backend.send_user_message = AsyncMock(side_effect=_send)

        task = asyncio.create_task(dispatcher.send("draw a cat"))
        await settle()

        in_flight = store.messages
        assert [(m.role, m.text, m.is_loading) for m in in_flight] == [
            ("user", "draw a cat", False),
            ("model", "", True),
        ]

        gate.set()
        resolved = await task

        assert resolved.text == "Here's your cat!"
        assert resolved.attachments == [image]
        assert resolved.is_loading is False
        assert store.messages[1] == resolved
        assert store.messages[1].id == in_flight[1].id

    @pytest.mark.asyncio
    async def test_blank_send_is_noop(self, dispatcher, store, fake_backend, scheduler):
        assert await dispatcher.send("   ") is None

        assert store.messages == []
        fake_backend.send_user_message.assert_not_awaited()
        assert scheduler.jobs == []

    @pytest.mark.asyncio
    async def test_attachments_only_send(self, dispatcher, store, fake_backend):
        audio = Attachment(data="SUQz", mime_type="audio/mpeg", kind="audio")

        await dispatcher.send("", [audio])

        assert store.messages[0].attachments == [audio]
        fake_backend.send_user_message.assert_awaited_once_with("", [audio], "session-1")

    @pytest.mark.asyncio
    async def test_backend_failure_becomes_error_message(
        self, dispatcher, store, fake_backend
    ):
        fake_backend.send_user_message.side_effect = BackendError("502 from backend")

        resolved = await dispatcher.send("make a song")

        assert resolved.is_error is True
        assert resolved.text == SEND_FAILED_TEXT
        assert "502" not in resolved.text
        assert store.placeholder is None
        fake_backend.send_user_message.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unexpected_failure_becomes_error_message(
        self, dispatcher, fake_backend
    ):
        fake_backend.send_user_message.side_effect = RuntimeError("socket closed")

        resolved = await dispatcher.send("make a song")

        assert resolved.is_error is True
        assert dispatcher.is_processing is False

    @pytest.mark.asyncio
    async def test_strict_order_alternating_pairs(self, dispatcher, store):
        for text in ["one", "two", "three"]:
            await dispatcher.send(text)

        messages = store.messages
        assert [m.role for m in messages] == ["user", "model"] * 3
        assert [m.text for m in messages[::2]] == ["one", "two", "three"]
        assert not any(m.is_loading for m in messages)


class TestMessageDispatcherSingleFlight:
    """Tests for the single-flight gate."""

    @pytest.mark.asyncio
    async def test_second_send_rejected_while_in_flight(
        self, dispatcher, store, fake_backend
    ):
        gate = asyncio.Event()
        fake_backend.send_user_message = gated_reply(gate)

        first = asyncio.create_task(dispatcher.send("one"))
        await settle()
        assert dispatcher.is_processing is True

        assert await dispatcher.send("two") is None

        gate.set()
        await first
        assert dispatcher.is_processing is False
        assert [m.text for m in store.messages] == ["one", "done"]
        assert fake_backend.send_user_message.await_count == 1


class TestMessageDispatcherStaleResponse:
    """Tests for discarding responses of a session that is no longer current."""

    @pytest.mark.asyncio
    async def test_response_after_reset_is_discarded(
        self, dispatcher, store, fake_backend, scheduler
    ):
        gate = asyncio.Event()
        fake_backend.send_user_message = gated_reply(gate)

        task = asyncio.create_task(dispatcher.send("one"))
        await settle()
        store.reset()
        store.append_message(Message(id="fresh", role="user", text="new chat"))

        gate.set()
        result = await task

        assert result is None
        assert [m.id for m in store.messages] == ["fresh"]
        assert store.error is None
        assert scheduler.jobs == []

    @pytest.mark.asyncio
    async def test_missing_placeholder_surfaces_generic_error(
        self, dispatcher, store, fake_backend, scheduler
    ):
        gate = asyncio.Event()
        fake_backend.send_user_message = gated_reply(gate)
        fake_backend.load_chat.return_value = ChatSession(
            id="session-1", messages=[Message(id="x", role="user", text="reloaded")]
        )

        task = asyncio.create_task(dispatcher.send("one"))
        await settle()
        # Same session reloaded from the server: the placeholder is gone
        await store.load_session("session-1")

        gate.set()
        result = await task

        assert result is None
        assert store.error == GENERIC_FAILURE_TEXT
        assert [m.id for m in store.messages] == ["x"]
        assert dispatcher.is_processing is False


class TestMessageDispatcherAssetRefresh:
    """Tests for the deferred asset refresh."""

    @pytest.mark.asyncio
    async def test_refresh_scheduled_after_resolution(
        self, dispatcher, store, scheduler, event_bus
    ):
        order = []
        event_bus.subscribe(
            Topic.TIMELINE, lambda msg: order.append(msg.payload["event"])
        )
        original = scheduler.call_later

        def record(delay, job):
            order.append("scheduled")
            original(delay, job)

        scheduler.call_later = record

        await dispatcher.send("draw a cat")

        assert order == ["appended", "appended", "resolved", "scheduled"]
        assert scheduler.jobs[0][0] == ASSET_REFRESH_DELAY

    @pytest.mark.asyncio
    async def test_refresh_scheduled_after_failure(
        self, dispatcher, fake_backend, scheduler
    ):
        fake_backend.send_user_message.side_effect = BackendError("down")

        await dispatcher.send("draw a cat")

        assert len(scheduler.jobs) == 1

    @pytest.mark.asyncio
    async def test_scheduled_job_refreshes_gallery(
        self, dispatcher, gallery, fake_backend, scheduler, make_asset
    ):
        fake_backend.get_assets.return_value = AssetsResult(
            success=True, assets=[make_asset("v1")]
        )

        await dispatcher.send("make a video")
        assert gallery.assets == []

        await scheduler.run_pending()

        assert [a.id for a in gallery.assets] == ["v1"]

    @pytest.mark.asyncio
    async def test_clears_previous_error_on_send(self, dispatcher, store):
        store.set_error("old error")

        await dispatcher.send("hello")

        assert store.error is None
