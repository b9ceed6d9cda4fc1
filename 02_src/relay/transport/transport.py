"""HTTP transport to the telemetry collector."""

from typing import Any, Protocol

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)


class ITransport(Protocol):
    """Single outbound call primitive."""

    async def post(self, path: str, data: dict) -> Any | None:
        """POST JSON to {endpoint}{path}. Return parsed JSON or None on failure."""
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...


class HttpTransport:
    """JSON-over-HTTPS POST with bearer auth. Never raises past post()."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._endpoint = endpoint.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def post(self, path: str, data: dict) -> Any | None:
        """POST JSON to {endpoint}{path}. Return parsed JSON or None on failure."""
        if not self._api_key:
            return None

        url = f"{self._endpoint}{path}"
        try:
            response = await self._get_client().post(
                url,
                json=data,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Request to %s failed: %s", path, e)
            return None

        if not response.is_success:
            logger.warning(
                "API error %s on %s: %s",
                response.status_code,
                path,
                response.text[:200],
            )
            return None

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            logger.error("Malformed JSON from %s: %s", path, e)
            return None

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
