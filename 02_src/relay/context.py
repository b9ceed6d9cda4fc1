"""Per-instance mutable relay state."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime

from .health import ErrorBuffer
from .models import AgentIdentity, RegistrationState


@dataclass
class RelayContext:
    """
    All mutable state of one running relay.

    Instantiated once per RelayApplication and passed explicitly to every
    component. Only touched from the event loop thread; every check and its
    matching mutation happen without an await in between.
    """

    error_buffer: ErrorBuffer = field(default_factory=ErrorBuffer)
    identity: AgentIdentity | None = None
    registration_state: RegistrationState = RegistrationState.UNREGISTERED
    registration_attempts: int = 0
    open_traces: dict[str, str] = field(default_factory=dict)  # session key -> trace id
    started_at: datetime | None = None
    sync_task: asyncio.Task | None = None
    host_config: dict = field(default_factory=dict)

    @property
    def agent_id(self) -> str | None:
        return self.identity.agent_id if self.identity else None
