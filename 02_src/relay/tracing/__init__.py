"""Tracing module."""

from .correlator import (
    DEFAULT_SESSION_KEY,
    TraceCorrelator,
    generate_trace_id,
    normalize_session_key,
)
from .reconstructor import (
    TOOL_ARGUMENT_FIELDS,
    TOOL_CALL_ID_FIELDS,
    TOOL_NAME_FIELDS,
    find_turn_start,
    first_present,
    is_real_user_message,
    reconstruct_turn,
)

__all__ = [
    "DEFAULT_SESSION_KEY",
    "TraceCorrelator",
    "generate_trace_id",
    "normalize_session_key",
    "TOOL_ARGUMENT_FIELDS",
    "TOOL_CALL_ID_FIELDS",
    "TOOL_NAME_FIELDS",
    "find_turn_start",
    "first_present",
    "is_real_user_message",
    "reconstruct_turn",
]
