"""Outbound telemetry event models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """Event types accepted by the collector's /events endpoint."""

    MESSAGE = "message"
    TOOL_CALL = "tool_call"
    USAGE = "usage"


@dataclass(frozen=True)
class PendingEvent:
    """An event derived from host data, not yet bound to an agent identity."""

    type: EventType
    data: dict


@dataclass(frozen=True)
class OutboundEvent:
    """The wire unit sent to the collector."""

    type: EventType
    agent_id: str
    session_id: str | None
    trace_id: str | None
    timestamp: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    def to_wire(self) -> dict:
        """Serialize to the /events body; trace_id travels inside data."""
        data = dict(self.payload)
        if self.trace_id is not None:
            data["trace_id"] = self.trace_id
        return {
            "agent_id": self.agent_id,
            "type": self.type.value,
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "data": data,
        }
