"""ConversationObserver: conversation hook handlers."""

from ..context import RelayContext
from ..event_bus import HookSignal, IHookBus
from ..logging_config import get_logger
from ..models import EventType, TurnCompletion
from ..tracing import TraceCorrelator, first_present, reconstruct_turn
from ..tracker import ITracker

logger = get_logger(__name__)

# Live after_tool_call field candidates, earlier names win.
LIVE_ARGUMENT_FIELDS = ("args", "arguments")
LIVE_TOOL_CALL_ID_FIELDS = ("toolCallId", "id")
LIVE_DURATION_FIELDS = ("durationMs", "duration")


class ConversationObserver:
    """Turns conversation hooks into trace-correlated telemetry events."""

    def __init__(
        self,
        context: RelayContext,
        correlator: TraceCorrelator,
        tracker: ITracker,
    ):
        self._context = context
        self._correlator = correlator
        self._tracker = tracker

    def start(self, bus: IHookBus) -> None:
        """Subscribe to conversation signals."""
        bus.subscribe(HookSignal.MESSAGE_RECEIVED, self.on_message_received)
        bus.subscribe(HookSignal.MESSAGE_SENT, self.on_message_sent)
        bus.subscribe(HookSignal.AFTER_TOOL_CALL, self.on_after_tool_call)
        bus.subscribe(HookSignal.AGENT_END, self.on_agent_end)

    async def on_message_received(self, event: dict) -> None:
        """Inbound user content; opens the turn's trace. Closed on agent_end."""
        session_key = event.get("sessionKey")
        trace_id = self._correlator.open(session_key)
        metadata = event.get("metadata") or {}

        await self._tracker.track(
            EventType.MESSAGE,
            session_key,
            {
                "trace_id": trace_id,
                "role": "user",
                "channel": event.get("channel"),
                "content": event.get("content") or "",
                "from": event.get("from") or "",
                "sender_id": metadata.get("senderId") or "",
                "sender_name": metadata.get("senderName") or "",
                "sender_username": metadata.get("senderUsername") or "",
                "id": metadata.get("messageId") or "",
                "thread_id": metadata.get("threadId") or "",
                "provider": metadata.get("provider") or "",
                "surface": metadata.get("surface") or "",
                "event_timestamp": event.get("timestamp"),
            },
        )

    async def on_message_sent(self, event: dict) -> None:
        """Best-effort live assistant message; agent_end covers hosts that skip it."""
        session_key = event.get("sessionKey")
        trace_id = self._correlator.open(session_key)

        await self._tracker.track(
            EventType.MESSAGE,
            session_key,
            {
                "trace_id": trace_id,
                "role": "assistant",
                "model": event.get("model"),
                "content": event.get("content") or "",
                "provider": event.get("provider") or "",
                "stop_reason": event.get("stopReason") or "",
                "thinking": event.get("thinking") or "",
            },
        )

    async def on_after_tool_call(self, event: dict) -> None:
        """Live tool call; may open a trace for jobs with no user message."""
        session_key = event.get("sessionKey")
        trace_id = self._correlator.open(session_key)
        is_error = bool(event.get("isError"))
        tool_name = event.get("toolName")

        if is_error:
            self._context.error_buffer.record(
                tool_name, event.get("errorMessage") or "Tool error"
            )

        await self._tracker.track(
            EventType.TOOL_CALL,
            session_key,
            {
                "trace_id": trace_id,
                "name": tool_name,
                "is_error": is_error,
                "error_message": event.get("errorMessage") if is_error else None,
                "arguments": first_present(event, LIVE_ARGUMENT_FIELDS, {}),
                "duration_ms": first_present(event, LIVE_DURATION_FIELDS),
                "tool_call_id": first_present(event, LIVE_TOOL_CALL_ID_FIELDS, ""),
            },
        )

    async def on_agent_end(self, event: dict) -> None:
        """Turn completion: reconstruct from the history snapshot, then close the trace."""
        session_key = event.get("sessionKey")
        trace_id = self._correlator.open(session_key)
        messages = event.get("messages")

        history = messages if isinstance(messages, list) else []

        try:
            turn = reconstruct_turn(history, trace_id, TurnCompletion.from_event(event))
            logger.info(
                "agent_end: turn starts at %s of %s messages, %s tool calls",
                turn.turn_start,
                len(history),
                len(turn.tool_calls),
            )
            await self._tracker.track_all(turn.events, session_key)
        finally:
            self._correlator.close(session_key)
