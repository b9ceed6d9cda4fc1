"""Registration module."""

from .registrar import AGENT_TYPE, IRegistrar, Registrar

__all__ = ["AGENT_TYPE", "IRegistrar", "Registrar"]
