"""Gateway health data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ErrorRecord:
    """A single tool-call failure."""

    time: datetime
    message: str
    tool: str | None = None

    def to_dict(self) -> dict:
        return {
            "time": self.time.isoformat(),
            "message": self.message,
            "tool": self.tool,
        }


@dataclass
class GatewayStats:
    """Health block embedded into every config sync."""

    uptime_seconds: int | None
    started_at: datetime | None
    error_count: int
    recent_errors: list[ErrorRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "uptime_seconds": self.uptime_seconds,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "error_count": self.error_count,
            "recent_errors": [record.to_dict() for record in self.recent_errors],
        }
