"""Tests for Tracker."""

import pytest

from relay.models import EventType, PendingEvent
from relay.registration import Registrar
from relay.tracker import Tracker

from conftest import AGENT_ID, make_transport, posted


class TestTrackerTrack:
    """Tests for Tracker.track()."""

    @pytest.mark.asyncio
    async def test_track_posts_wire_event(self, tracker, transport):
        """Test the /events body shape with trace_id nested in data."""
        sent = await tracker.track(EventType.USAGE, "s1", {"trace_id": "tr_x", "input_tokens": 3})

        assert sent is True
        body = posted(transport, "/events")[0]
        assert body["agent_id"] == AGENT_ID
        assert body["type"] == "usage"
        assert body["session_id"] == "s1"
        assert body["data"] == {"input_tokens": 3, "trace_id": "tr_x"}
        assert body["timestamp"].endswith("+00:00")

    @pytest.mark.asyncio
    async def test_track_does_not_mutate_data(self, tracker):
        """Test that the caller's dict is left intact."""
        data = {"trace_id": "tr_x"}
        await tracker.track(EventType.MESSAGE, "s1", data)
        assert data == {"trace_id": "tr_x"}

    @pytest.mark.asyncio
    async def test_no_event_while_unregistered(self, context, failing_transport, settings):
        """Test that nothing reaches /events without an identity."""
        registrar = Registrar(context, failing_transport, settings)
        tracker = Tracker(context, registrar, failing_transport)

        assert await tracker.track(EventType.MESSAGE, "s1", {}) is False
        assert posted(failing_transport, "/events") == []

    @pytest.mark.asyncio
    async def test_dropped_event_reports_false(self, context, settings):
        """Test that a transport failure is reported, not raised."""
        transport = make_transport()

        async def post(path, data):
            return {"agent_id": AGENT_ID} if path == "/agents/register" else None

        transport.post.side_effect = post
        tracker = Tracker(context, Registrar(context, transport, settings), transport)

        assert await tracker.track(EventType.MESSAGE, "s1", {}) is False


class TestTrackerTrackAll:
    """Tests for Tracker.track_all()."""

    @pytest.mark.asyncio
    async def test_track_all_preserves_order(self, tracker, transport):
        """Test that pending events are sent in order."""
        events = [
            PendingEvent(EventType.TOOL_CALL, {"name": "a"}),
            PendingEvent(EventType.MESSAGE, {"content": "b"}),
        ]

        assert await tracker.track_all(events, "s1") == 2
        assert [e["type"] for e in posted(transport, "/events")] == ["tool_call", "message"]
