"""Operator control routes: on-demand sync, relay stats, scripted host session."""

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import IRelayApplication
from ...logging_config import get_logger

logger = get_logger(__name__)

router_prefix = "/api/control"


class SyncResponse(BaseModel):
    """Response model for an on-demand sync."""

    synced: bool


class StatsResponse(BaseModel):
    """Response model for relay stats."""

    agent_id: str | None
    registration: str
    timer_active: bool
    gateway_stats: dict[str, Any]


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_control_router(relay: IRelayApplication, sim: Any = None) -> APIRouter:
    """Create control router; the sim routes answer 404 without a sim."""
    router = APIRouter(prefix=router_prefix, tags=["control"])

    def require_enabled() -> None:
        if not relay.enabled:
            raise HTTPException(status_code=503, detail="Relay disabled")

    @router.post("/sync", response_model=SyncResponse)
    async def sync_now() -> dict:
        """Push a config snapshot now instead of waiting for the timer."""
        require_enabled()
        synced = await relay.sync_now()
        if not synced:
            logger.warning("On-demand sync did not reach the collector")
        return {"synced": synced}

    @router.get("/stats", response_model=StatsResponse)
    async def get_stats() -> dict:
        """Identity, registration state and the health block sent with syncs."""
        require_enabled()
        ctx = relay.context
        return {
            "agent_id": ctx.agent_id,
            "registration": ctx.registration_state.value,
            "timer_active": ctx.sync_task is not None and not ctx.sync_task.done(),
            "gateway_stats": relay.stats().to_dict(),
        }

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start the scripted host session against this ingress."""
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await sim.start()
        return {"status": "started"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop the scripted host session."""
        if sim is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await sim.stop()
        return {"status": "stopped"}

    return router
