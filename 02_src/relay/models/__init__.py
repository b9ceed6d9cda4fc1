"""Core data models for Gateway Relay."""

from .events import EventType, OutboundEvent, PendingEvent
from .health import ErrorRecord, GatewayStats
from .registration import AgentIdentity, RegistrationState
from .turn import TurnCompletion, TurnReconstruction

__all__ = [
    # Events
    "EventType",
    "OutboundEvent",
    "PendingEvent",
    # Health
    "ErrorRecord",
    "GatewayStats",
    # Registration
    "AgentIdentity",
    "RegistrationState",
    # Turns
    "TurnCompletion",
    "TurnReconstruction",
]
