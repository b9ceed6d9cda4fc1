"""HookBus implementation: dispatches host hook signals to subscribers."""

import asyncio
from enum import Enum
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger

logger = get_logger(__name__)


class HookSignal(str, Enum):
    """Hook signals delivered by the gateway."""

    GATEWAY_START = "gateway_start"
    GATEWAY_STOP = "gateway_stop"
    HEARTBEAT = "heartbeat"
    MESSAGE_RECEIVED = "message_received"
    MESSAGE_SENT = "message_sent"
    AFTER_TOOL_CALL = "after_tool_call"
    AGENT_END = "agent_end"


HookHandler = Callable[[dict], Awaitable[None]]


class IHookBus(Protocol):
    """In-process dispatch of host hooks."""

    def subscribe(self, signal: HookSignal, handler: HookHandler) -> None:
        """Subscribe a handler to a signal."""
        ...

    async def publish(self, signal: HookSignal, event: dict) -> None:
        """Call every handler subscribed to the signal."""
        ...


class HookBus:
    """In-memory pub/sub for hook signals."""

    def __init__(self):
        self._subscribers: dict[HookSignal, list[HookHandler]] = {
            signal: [] for signal in HookSignal
        }

    def subscribe(self, signal: HookSignal, handler: HookHandler) -> None:
        """Subscribe a handler to a signal."""
        self._subscribers[signal].append(handler)

    def handler_count(self, signal: HookSignal) -> int:
        return len(self._subscribers[signal])

    async def publish(self, signal: HookSignal, event: dict) -> None:
        """Call all handlers concurrently; handler errors are logged, never raised."""
        handlers = self._subscribers.get(signal, [])
        if not handlers:
            return

        results = await asyncio.gather(
            *[handler(event) for handler in handlers],
            return_exceptions=True,
        )

        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    "Error in %s handler %s: %s",
                    signal.value,
                    getattr(handler, "__qualname__", handler),
                    result,
                )
