"""Agent identity and registration state."""

from dataclasses import dataclass
from enum import Enum


class RegistrationState(str, Enum):
    """Registration lifecycle states."""

    UNREGISTERED = "unregistered"
    REGISTERING = "registering"
    REGISTERED = "registered"
    EXHAUSTED = "exhausted"  # retry budget spent until next fresh start


@dataclass(frozen=True)
class AgentIdentity:
    """Identity assigned by the collector on registration."""

    agent_id: str
