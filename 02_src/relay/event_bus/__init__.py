"""HookBus module."""

from .event_bus import HookBus, HookHandler, HookSignal, IHookBus

__all__ = ["HookBus", "HookHandler", "HookSignal", "IHookBus"]
