"""Tracker: builds OutboundEvents and sends them to the collector."""

from datetime import datetime, timezone
from typing import Protocol

from ..context import RelayContext
from ..logging_config import get_logger
from ..models import EventType, OutboundEvent, PendingEvent
from ..registration import IRegistrar
from ..transport import ITransport

logger = get_logger(__name__)


class ITracker(Protocol):
    """Sending telemetry events, gated on registration."""

    async def track(
        self, event_type: EventType, session_key: str | None, data: dict
    ) -> bool:
        """Create an OutboundEvent and post it to /events."""
        ...

    async def track_all(
        self, events: list[PendingEvent], session_key: str | None
    ) -> int:
        """Send pending events in order."""
        ...


class Tracker:
    """Creates OutboundEvents once an identity exists and posts them."""

    def __init__(
        self,
        context: RelayContext,
        registrar: IRegistrar,
        transport: ITransport,
    ):
        self._context = context
        self._registrar = registrar
        self._transport = transport

    async def track(
        self, event_type: EventType, session_key: str | None, data: dict
    ) -> bool:
        """Create an OutboundEvent and post it to /events. False if not sent."""
        if not await self._registrar.ensure_registered():
            return False

        payload = dict(data)
        event = OutboundEvent(
            type=event_type,
            agent_id=self._context.agent_id,
            session_id=session_key,
            trace_id=payload.pop("trace_id", None),
            timestamp=datetime.now(timezone.utc),
            payload=payload,
        )
        result = await self._transport.post("/events", event.to_wire())
        if result is None:
            logger.debug(
                "Event dropped",
                extra={"context": {"type": event_type.value, "trace_id": event.trace_id}},
            )
            return False
        return True

    async def track_all(
        self, events: list[PendingEvent], session_key: str | None
    ) -> int:
        """Send pending events in order; returns how many were accepted."""
        sent = 0
        for pending in events:
            if await self.track(pending.type, session_key, pending.data):
                sent += 1
        return sent
