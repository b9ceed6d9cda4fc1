"""Bounded ring of recent tool-call failures."""

from collections import deque
from datetime import datetime, timezone

from ..models import ErrorRecord

DEFAULT_CAPACITY = 10


class ErrorBuffer:
    """Keeps the most recent tool failures plus a cumulative counter."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        self._records: deque[ErrorRecord] = deque(maxlen=capacity)
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._records.maxlen or DEFAULT_CAPACITY

    @property
    def count(self) -> int:
        """Failures recorded since the last gateway (re)start."""
        return self._count

    def record(self, tool: str | None, message: str) -> ErrorRecord:
        """Append a timestamped record, evicting the oldest when full."""
        record = ErrorRecord(
            time=datetime.now(timezone.utc),
            message=message,
            tool=tool,
        )
        self._records.append(record)
        self._count += 1
        return record

    def recent(self) -> list[ErrorRecord]:
        """Retained records, oldest first."""
        return list(self._records)

    def reset(self) -> None:
        """Clear records and the counter (gateway start only)."""
        self._records.clear()
        self._count = 0
