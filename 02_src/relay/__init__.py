"""Gateway Relay: telemetry shim between an agent gateway and a collector."""

from .app import IRelayApplication, RelayApplication
from .config import ConfigError, RelaySettings, load_settings
from .context import RelayContext
from .event_bus import HookBus, HookSignal, IHookBus
from .health import ErrorBuffer
from .models import (
    AgentIdentity,
    ErrorRecord,
    EventType,
    GatewayStats,
    OutboundEvent,
    PendingEvent,
    RegistrationState,
    TurnCompletion,
    TurnReconstruction,
)
from .observer import ConversationObserver
from .registration import IRegistrar, Registrar
from .scheduler import SyncScheduler
from .tracing import TraceCorrelator, reconstruct_turn
from .tracker import ITracker, Tracker
from .transport import HttpTransport, ITransport

__all__ = [
    # Application
    "RelayApplication",
    "IRelayApplication",
    "RelayContext",
    # Config
    "ConfigError",
    "RelaySettings",
    "load_settings",
    # Models
    "AgentIdentity",
    "ErrorRecord",
    "EventType",
    "GatewayStats",
    "OutboundEvent",
    "PendingEvent",
    "RegistrationState",
    "TurnCompletion",
    "TurnReconstruction",
    # Components
    "HookBus",
    "HookSignal",
    "IHookBus",
    "ErrorBuffer",
    "ConversationObserver",
    "IRegistrar",
    "Registrar",
    "SyncScheduler",
    "TraceCorrelator",
    "reconstruct_turn",
    "ITracker",
    "Tracker",
    "HttpTransport",
    "ITransport",
]
