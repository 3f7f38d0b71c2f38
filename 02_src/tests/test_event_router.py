"""Tests for EventRouter and its helpers."""

from unittest.mock import AsyncMock

import pytest

from invitebot.events import EventRouter, classify_event, strip_mention
from invitebot.models import EventKind, InboundEvent


def make_event(kind=EventKind.DIRECT_MESSAGE, text="hi", **kwargs):
    fields = {"user_id": "UA", "channel_id": "D1"}
    fields.update(kwargs)
    return InboundEvent(kind=kind, text=text, **fields)


class TestClassifyEvent:
    """Tests for classify_event()."""

    @pytest.mark.parametrize(
        "event_type, channel_type, expected",
        [
            ("app_mention", "channel", EventKind.MENTION),
            ("message", "im", EventKind.DIRECT_MESSAGE),
            ("message", "channel", EventKind.MESSAGE),
            ("message", None, EventKind.MESSAGE),
            ("reaction_added", None, None),
        ],
    )
    def test_classify(self, event_type, channel_type, expected):
        assert classify_event(event_type, channel_type) is expected


class TestStripMention:
    """Tests for strip_mention()."""

    def test_strips_leading_mention(self):
        assert strip_mention("<@U0BOT> chris, connor") == "chris, connor"

    def test_without_marker_unchanged(self):
        assert strip_mention("chris, connor") == "chris, connor"

    def test_unclosed_marker_unchanged(self):
        assert strip_mention("<@U0BOT chris") == "<@U0BOT chris"

    def test_only_first_mention_stripped(self):
        assert strip_mention("<@U0BOT> ask <@U1>") == "ask <@U1>"

    def test_leading_whitespace_before_mention(self):
        assert strip_mention("  <@U0BOT> chris") == "chris"

    def test_trailing_mention_unchanged(self):
        assert strip_mention("chris, connor <@U0BOT>") == "chris, connor <@U0BOT>"

    def test_inline_mention_unchanged(self):
        assert strip_mention("ask <@U0BOT> about lunch") == "ask <@U0BOT> about lunch"


class TestEventRouterDispatch:
    """Tests for EventRouter.dispatch()."""

    async def test_dispatches_accepted_event(self, state_machine, store):
        router = EventRouter(state_machine)

        reply = await router.dispatch(make_event())

        assert reply is not None
        assert await store.get("UA") is not None

    async def test_bot_events_never_touch_store(self, state_machine, store):
        router = EventRouter(state_machine)
        state_machine._store = AsyncMock(wraps=store)

        reply = await router.dispatch(make_event(bot_id="B123"))

        assert reply is None
        assert state_machine._store.mock_calls == []
        assert len(store) == 0

    async def test_subtype_ignored(self, state_machine, store):
        router = EventRouter(state_machine)
        reply = await router.dispatch(make_event(subtype="message_changed"))
        assert reply is None
        assert len(store) == 0

    async def test_missing_user_ignored(self, state_machine, store):
        router = EventRouter(state_machine)
        reply = await router.dispatch(make_event(user_id=""))
        assert reply is None
        assert len(store) == 0

    async def test_unaccepted_kind_ignored(self, state_machine, store):
        """The game invite variant does not react to mentions."""
        router = EventRouter(state_machine)
        reply = await router.dispatch(make_event(kind=EventKind.MENTION))
        assert reply is None
        assert len(store) == 0

    async def test_mention_text_stripped(self, question_machine, store):
        router = EventRouter(question_machine)
        await router.dispatch(make_event(kind=EventKind.MENTION, text="<@U0BOT> hi"))

        await router.dispatch(
            make_event(kind=EventKind.MENTION, text="<@U0BOT> connor")
        )

        state = await store.get("UA")
        assert state.recipient_ids == ["U2"]

    async def test_inline_mention_kept_in_payload(
        self, question_machine, store, mock_messenger
    ):
        router = EventRouter(question_machine)
        await router.dispatch(make_event(kind=EventKind.MENTION, text="<@U0BOT> hi"))
        await router.dispatch(make_event(kind=EventKind.MENTION, text="<@U0BOT> connor"))

        await router.dispatch(
            make_event(kind=EventKind.MENTION, text="Lunch with <@U0BOT> at noon?")
        )

        mock_messenger.send.assert_any_await("U2", "Lunch with <@U0BOT> at noon?", None)
        assert await store.get("UA") is None

    async def test_errors_are_swallowed(self, state_machine, store):
        router = EventRouter(state_machine)
        state_machine.handle = AsyncMock(side_effect=RuntimeError("boom"))

        reply = await router.dispatch(make_event())

        assert reply is None
