"""Session key -> open trace id correlation."""

import secrets
import time

from ..context import RelayContext

DEFAULT_SESSION_KEY = "default"
TRACE_PREFIX = "tr_"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_trace_id() -> str:
    """Time-based prefix plus random suffix; opaque to consumers."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_BASE36) for _ in range(7))
    return f"{TRACE_PREFIX}{_to_base36(millis)}_{suffix}"


def normalize_session_key(session_key: str | None) -> str:
    return session_key or DEFAULT_SESSION_KEY


class TraceCorrelator:
    """At most one open trace per session key; opened lazily, closed on turn end."""

    def __init__(self, context: RelayContext):
        self._context = context

    def open(self, session_key: str | None) -> str:
        """Return the open trace id for the key, creating one if none is open."""
        key = normalize_session_key(session_key)
        trace_id = self._context.open_traces.get(key)
        if trace_id is None:
            trace_id = generate_trace_id()
            self._context.open_traces[key] = trace_id
        return trace_id

    def current(self, session_key: str | None) -> str | None:
        return self._context.open_traces.get(normalize_session_key(session_key))

    def close(self, session_key: str | None) -> None:
        """Drop the open trace for the key; no-op when none is open."""
        self._context.open_traces.pop(normalize_session_key(session_key), None)
