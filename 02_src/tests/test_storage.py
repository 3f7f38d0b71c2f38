"""Tests for Storage."""

from datetime import datetime, timedelta, timezone

import pytest

from invitebot.models import TraceEvent
from invitebot.storage import Storage


def make_event(event_id, event_type="test", actor="state_machine", data=None, timestamp=None):
    return TraceEvent(
        id=event_id,
        event_type=event_type,
        actor=actor,
        data=data or {},
        timestamp=timestamp or datetime.now(timezone.utc),
    )


class TestStorageInit:
    """Tests for Storage initialization."""

    async def test_init_creates_tables(self, storage):
        """Test that init creates the trace journal table."""
        async with storage._conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        ) as cursor:
            tables = [row[0] for row in await cursor.fetchall()]
            assert "trace_events" in tables

    async def test_uninitialized_storage_raises(self):
        """Test that using storage before init() raises."""
        st = Storage(":memory:")
        with pytest.raises(RuntimeError, match="not initialized"):
            await st.save_trace_event(make_event("trace1"))

    async def test_close_is_idempotent(self):
        st = Storage(":memory:")
        await st.init()
        await st.close()
        await st.close()
        assert st._conn is None


class TestStorageTraceEvents:
    """Tests for TraceEvent storage."""

    async def test_save_and_get_trace_event(self, storage):
        """Test saving and retrieving a trace event."""
        ts = datetime.now(timezone.utc)
        await storage.save_trace_event(
            make_event(
                "trace1",
                event_type="recipients_resolved",
                data={"user_id": "UA", "recipient_ids": ["U1", "U2"]},
                timestamp=ts,
            )
        )

        events = await storage.get_trace_events()
        assert len(events) == 1
        assert events[0].id == "trace1"
        assert events[0].event_type == "recipients_resolved"
        assert events[0].data == {"user_id": "UA", "recipient_ids": ["U1", "U2"]}
        assert events[0].timestamp == ts

    async def test_get_trace_events_newest_first(self, storage):
        """Test that events come back newest first."""
        now = datetime.now(timezone.utc)
        await storage.save_trace_event(make_event("old", timestamp=now - timedelta(seconds=5)))
        await storage.save_trace_event(make_event("new", timestamp=now))

        events = await storage.get_trace_events()
        assert [e.id for e in events] == ["new", "old"]

    async def test_get_trace_events_with_limit(self, storage):
        """Test retrieving trace events with limit."""
        for i in range(10):
            await storage.save_trace_event(make_event(f"trace{i}"))

        events = await storage.get_trace_events(limit=5)
        assert len(events) == 5

    async def test_get_trace_events_by_actor(self, storage):
        """Test filtering trace events by actor."""
        await storage.save_trace_event(make_event("trace1", actor="state_machine"))
        await storage.save_trace_event(make_event("trace2", actor="dispatcher"))

        events = await storage.get_trace_events(actor="dispatcher")
        assert len(events) == 1
        assert events[0].actor == "dispatcher"

    async def test_get_trace_events_by_type(self, storage):
        """Test filtering trace events by type."""
        await storage.save_trace_event(make_event("trace1", event_type="dialogue_started"))
        await storage.save_trace_event(make_event("trace2", event_type="composer_failed"))
        await storage.save_trace_event(make_event("trace3", event_type="delivery_completed"))

        events = await storage.get_trace_events(
            event_types=["dialogue_started", "delivery_completed"]
        )
        assert {e.event_type for e in events} == {"dialogue_started", "delivery_completed"}

    async def test_get_trace_events_after(self, storage):
        """Test filtering trace events by timestamp."""
        now = datetime.now(timezone.utc)
        await storage.save_trace_event(make_event("old", timestamp=now - timedelta(minutes=1)))
        await storage.save_trace_event(make_event("new", timestamp=now))

        events = await storage.get_trace_events(after=now - timedelta(seconds=30))
        assert [e.id for e in events] == ["new"]

    async def test_clear(self, storage):
        """Test that clear removes all events."""
        await storage.save_trace_event(make_event("trace1"))
        await storage.clear()

        assert await storage.get_trace_events() == []
