"""Relay bootstrap and lifecycle management."""

from collections.abc import Mapping
from typing import Any, Protocol

from .config import ConfigError, RelaySettings, load_settings
from .context import RelayContext
from .event_bus import HookBus, HookSignal
from .health import ErrorBuffer
from .logging_config import get_logger
from .models import GatewayStats, RegistrationState
from .observer import ConversationObserver
from .registration import Registrar
from .scheduler import SyncScheduler
from .tracing import TraceCorrelator
from .tracker import Tracker
from .transport import HttpTransport, ITransport

logger = get_logger(__name__)


class IRelayApplication(Protocol):
    """Bootstrap and lifecycle."""

    @property
    def enabled(self) -> bool:
        """Whether activation succeeded."""
        ...

    @property
    def context(self) -> RelayContext:
        """Per-instance relay state."""
        ...

    async def start(self) -> None:
        """Validate settings and wire components in dependency order."""
        ...

    async def stop(self) -> None:
        """Cancel timers and close the transport."""
        ...

    async def dispatch(self, signal: HookSignal, event: dict) -> None:
        """Deliver one host hook to subscribers."""
        ...

    def update_host_config(self, config: Mapping[str, Any]) -> None:
        """Replace the live host config used by registration and sync."""
        ...

    async def sync_now(self) -> bool:
        """Run a config sync outside the schedule."""
        ...

    def stats(self) -> GatewayStats | None:
        """Uptime and recent errors, or None when disabled."""
        ...


class RelayApplication:
    """Main relay bootstrap."""

    def __init__(
        self,
        plugin_config: Mapping[str, Any] | None = None,
        host_config: Mapping[str, Any] | None = None,
        transport: ITransport | None = None,
    ):
        self._plugin_config = dict(plugin_config or {})
        self._transport: ITransport | None = transport

        self._settings: RelaySettings | None = None
        self._context = RelayContext(host_config=dict(host_config or {}))
        self._bus = HookBus()
        self._registrar: Registrar | None = None
        self._correlator: TraceCorrelator | None = None
        self._tracker: Tracker | None = None
        self._scheduler: SyncScheduler | None = None
        self._observer: ConversationObserver | None = None

    @property
    def enabled(self) -> bool:
        return self._settings is not None

    async def start(self) -> None:
        """Validate settings and wire components in dependency order."""
        if self.enabled:
            return

        try:
            settings = load_settings(self._plugin_config)
        except ConfigError as e:
            logger.error("%s - relay disabled", e)
            return

        self._settings = settings
        logger.info("Initializing with endpoint: %s", settings.endpoint)

        # 1. State and transport (no dependencies)
        self._context.error_buffer = ErrorBuffer(settings.error_buffer_size)
        if self._transport is None:
            self._transport = HttpTransport(
                settings.endpoint, settings.api_key, timeout=settings.request_timeout
            )

        # 2. Registrar gates everything that needs an identity
        self._registrar = Registrar(self._context, self._transport, settings)

        # 3. Correlation and sending
        self._correlator = TraceCorrelator(self._context)
        self._tracker = Tracker(self._context, self._registrar, self._transport)

        # 4. Subscribers
        self._scheduler = SyncScheduler(
            self._context, self._registrar, self._transport, settings
        )
        self._scheduler.start(self._bus)
        self._observer = ConversationObserver(
            self._context, self._correlator, self._tracker
        )
        self._observer.start(self._bus)

        # gateway_start may have fired before we attached
        self._scheduler.start_delayed_init()
        logger.info("Relay started, waiting for events")

    async def stop(self) -> None:
        """Cancel timers and close the transport."""
        if self._scheduler:
            await self._scheduler.stop()
        if self._transport:
            await self._transport.close()
            logger.info("Transport closed")

    async def dispatch(self, signal: HookSignal, event: dict) -> None:
        """Deliver one host hook to subscribers."""
        if not self.enabled:
            return
        await self._bus.publish(signal, event)

    def update_host_config(self, config: Mapping[str, Any]) -> None:
        """Replace the live host config used by registration and sync."""
        self._context.host_config = dict(config)

    async def sync_now(self) -> bool:
        """Run a config sync outside the schedule. False if disabled or failed."""
        if not self._scheduler:
            return False
        return await self._scheduler.sync_config()

    def stats(self) -> GatewayStats | None:
        if not self._scheduler:
            return None
        return self._scheduler.gateway_stats()

    @property
    def context(self) -> RelayContext:
        return self._context

    @property
    def registration_state(self) -> RegistrationState:
        return self._context.registration_state

    @property
    def scheduler(self) -> SyncScheduler:
        if not self._scheduler:
            raise RuntimeError("Relay not started")
        return self._scheduler
