"""SyncScheduler: lifecycle handlers and periodic config resynchronization."""

import asyncio
from datetime import datetime, timezone

from ..config import RelaySettings
from ..context import RelayContext
from ..event_bus import HookSignal, IHookBus
from ..logging_config import get_logger
from ..models import GatewayStats
from ..registration import IRegistrar
from ..sanitizer import build_config_snapshot
from ..transport import ITransport

logger = get_logger(__name__)


class SyncScheduler:
    """Drives config sync on gateway start, heartbeats and a fixed interval."""

    def __init__(
        self,
        context: RelayContext,
        registrar: IRegistrar,
        transport: ITransport,
        settings: RelaySettings,
    ):
        self._context = context
        self._registrar = registrar
        self._transport = transport
        self._settings = settings
        self._delayed_init_task: asyncio.Task | None = None

    def start(self, bus: IHookBus) -> None:
        """Subscribe lifecycle handlers."""
        bus.subscribe(HookSignal.GATEWAY_START, self.on_gateway_start)
        bus.subscribe(HookSignal.HEARTBEAT, self.on_heartbeat)
        bus.subscribe(HookSignal.GATEWAY_STOP, self.on_gateway_stop)

    async def stop(self) -> None:
        """Cancel the delayed init and the periodic timer."""
        if self._delayed_init_task:
            self._delayed_init_task.cancel()
            self._delayed_init_task = None
        self._cancel_timer()

    @property
    def timer_active(self) -> bool:
        task = self._context.sync_task
        return task is not None and not task.done()

    def gateway_stats(self) -> GatewayStats:
        ctx = self._context
        uptime = None
        if ctx.started_at:
            uptime = int((datetime.now(timezone.utc) - ctx.started_at).total_seconds())
        return GatewayStats(
            uptime_seconds=uptime,
            started_at=ctx.started_at,
            error_count=ctx.error_buffer.count,
            recent_errors=ctx.error_buffer.recent(),
        )

    async def sync_config(self) -> bool:
        """Upload a full sanitized config snapshot. False if skipped or failed."""
        if not await self._registrar.ensure_registered():
            return False

        logger.info("Syncing config")
        snapshot = build_config_snapshot(self._context.host_config, self.gateway_stats())
        result = await self._transport.post(
            f"/agents/{self._context.agent_id}/config", snapshot
        )
        return result is not None

    async def on_gateway_start(self, event: dict | None = None) -> None:
        """Fresh start: reset counters, register, sync, (re)install the timer."""
        logger.info("Gateway start event received")
        ctx = self._context
        ctx.started_at = datetime.now(timezone.utc)
        ctx.error_buffer.reset()
        self._registrar.reset()

        try:
            await self._registrar.register()
            await self.sync_config()
        except Exception as e:
            logger.error("Initial sync error: %s", e, exc_info=True)
        self._install_timer()

    async def on_heartbeat(self, event: dict | None = None) -> None:
        """Opportunistic sync; also nudges registration."""
        ctx = self._context
        if not ctx.identity:
            logger.info("Heartbeat: not registered, will attempt")
            ctx.started_at = ctx.started_at or datetime.now(timezone.utc)
        await self.sync_config()

    async def on_gateway_stop(self, event: dict | None = None) -> None:
        """Tear down the periodic timer; no final flush."""
        logger.info("Gateway stopping")
        self._cancel_timer()

    def start_delayed_init(self) -> asyncio.Task:
        """Schedule the one-shot registration for when gateway_start already fired."""
        if self._delayed_init_task is None or self._delayed_init_task.done():
            self._delayed_init_task = asyncio.create_task(self._delayed_init())
        return self._delayed_init_task

    async def _delayed_init(self) -> None:
        await asyncio.sleep(self._settings.delayed_init_seconds)

        ctx = self._context
        if ctx.identity:
            return

        logger.info("Delayed init: attempting registration")
        ctx.started_at = ctx.started_at or datetime.now(timezone.utc)
        try:
            await self._registrar.register()
            if ctx.identity:
                await self.sync_config()
        except Exception as e:
            logger.error("Delayed init error: %s", e, exc_info=True)
        if ctx.identity and not self.timer_active:
            self._install_timer()

    def _install_timer(self) -> None:
        self._cancel_timer()
        self._context.sync_task = asyncio.create_task(self._sync_loop())

    def _cancel_timer(self) -> None:
        task = self._context.sync_task
        if task:
            task.cancel()
            self._context.sync_task = None

    async def _sync_loop(self) -> None:
        """Re-run the sync every sync_interval seconds until cancelled."""
        while True:
            await asyncio.sleep(self._settings.sync_interval)
            try:
                await self.sync_config()
            except Exception as e:
                logger.error("Periodic sync error: %s", e, exc_info=True)
