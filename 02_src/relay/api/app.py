"""FastAPI hook ingress setup."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from ..app import IRelayApplication, RelayApplication
from .routes import control, hooks


def create_fastapi_app(
    application: IRelayApplication | None = None,
    sim: Any = None,
) -> FastAPI:
    """Create the ingress app around a relay instance and an optional sim."""
    relay = application or RelayApplication()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await relay.start()
        yield
        if sim is not None:
            await sim.stop()
        await relay.stop()

    fastapi_app = FastAPI(
        title="Gateway Relay",
        description="Hook ingress relaying gateway telemetry to the collector",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.relay = relay

    fastapi_app.include_router(hooks.create_hooks_router(relay))
    fastapi_app.include_router(control.create_control_router(relay, sim))

    return fastapi_app
