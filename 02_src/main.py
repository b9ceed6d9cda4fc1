"""Main entry point for Gateway Relay."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from relay import RelayApplication
from relay.api import create_fastapi_app
from relay.logging_config import setup_logging
from sim import Sim


def main():
    """Run the hook ingress."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    # Settings come from RELAY_* env vars; the host may also pass them in
    relay = RelayApplication()

    sim = Sim(api_url=f"http://{api_host}:{api_port}")
    app = create_fastapi_app(relay, sim=sim)

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
