"""Hook ingress routes."""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, HTTPException
from pydantic import BaseModel

from ...app import IRelayApplication
from ...event_bus import HookSignal
from ...logging_config import get_logger

logger = get_logger(__name__)


class AcceptedResponse(BaseModel):
    """Response model for accepted hooks."""

    status: str
    signal: str


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class HealthResponse(BaseModel):
    """Response model for relay health."""

    enabled: bool
    registration: str
    open_traces: int


def create_hooks_router(relay: IRelayApplication) -> APIRouter:
    """Create hooks router."""
    router = APIRouter(tags=["hooks"])

    @router.post("/hooks/{signal}", status_code=202, response_model=AcceptedResponse)
    async def receive_hook(
        signal: str,
        background_tasks: BackgroundTasks,
        event: dict[str, Any] | None = Body(default=None),
    ) -> dict:
        """Accept a host hook; dispatch runs after the response is sent."""
        try:
            hook = HookSignal(signal)
        except ValueError:
            logger.warning("Unknown hook signal: %s", signal)
            raise HTTPException(status_code=404, detail=f"Unknown hook: {signal}")

        if not relay.enabled:
            raise HTTPException(status_code=503, detail="Relay disabled")

        background_tasks.add_task(relay.dispatch, hook, event or {})
        return {"status": "accepted", "signal": hook.value}

    @router.put("/host-config", response_model=StatusResponse)
    async def put_host_config(config: dict[str, Any] = Body(...)) -> dict:
        """Replace the live host config snapshot."""
        relay.update_host_config(config)
        return {"status": "ok"}

    @router.get("/health", response_model=HealthResponse)
    async def health() -> dict:
        """Relay status."""
        context = relay.context
        return {
            "enabled": relay.enabled,
            "registration": context.registration_state.value,
            "open_traces": len(context.open_traces),
        }

    return router
