"""Turn reconstruction data models."""

from dataclasses import dataclass, field

from .events import PendingEvent


@dataclass(frozen=True)
class TurnCompletion:
    """Metadata carried by the host's agent_end signal."""

    model: str = ""
    provider: str = ""
    stop_reason: str = ""
    usage: dict | None = None  # {"input", "output", "totalTokens", "cost": {"total"}}

    @classmethod
    def from_event(cls, event: dict) -> "TurnCompletion":
        return cls(
            model=event.get("model") or "",
            provider=event.get("provider") or "",
            stop_reason=event.get("stopReason") or "",
            usage=event.get("usage") or None,
        )


@dataclass
class TurnReconstruction:
    """Result of re-deriving one turn from a message-history snapshot."""

    turn_start: int  # index of the turn's user message, -1 if none
    tool_calls: list[dict] = field(default_factory=list)
    content: str = ""
    thinking: str = ""
    events: list[PendingEvent] = field(default_factory=list)
