"""SIM implementation - scripted host replaying one gateway session."""

import asyncio
from typing import Protocol

import httpx

from relay.logging_config import get_logger

logger = get_logger(__name__)

SESSION_KEY = "sim:main"

HOST_CONFIG = {
    "meta": {"lastTouchedVersion": "2026.1.0"},
    "agents": {"defaults": {"workspace": "/tmp/sim-workspace", "model": "sim-model"}},
    "channels": {"telegram": {"botToken": "sim-secret", "dmPolicy": "pairing"}},
    "plugins": {"entries": {"memory": {"enabled": True}}},
}


def scripted_turn(question: str, answer: str, tool: str) -> list[tuple[str, dict]]:
    """Hooks the gateway delivers for one user turn with a single tool call."""
    user = {"role": "user", "content": [{"type": "text", "text": question}]}
    call = {
        "role": "assistant",
        "content": [
            {"type": "thinking", "thinking": f"Need {tool} for this."},
            {"type": "toolCall", "id": f"call_{tool}", "name": tool, "arguments": {"q": question}},
        ],
    }
    tool_result = {"role": "user", "content": [{"type": "toolResult", "toolCallId": f"call_{tool}"}]}
    reply = {"role": "assistant", "content": [{"type": "text", "text": answer}]}

    return [
        ("message_received", {"sessionKey": SESSION_KEY, "channel": "sim", "content": question}),
        ("after_tool_call", {"sessionKey": SESSION_KEY, "toolName": tool, "toolCallId": f"call_{tool}"}),
        (
            "agent_end",
            {
                "sessionKey": SESSION_KEY,
                "messages": [user, call, tool_result, reply],
                "model": "sim-model",
                "provider": "sim",
                "stopReason": "end_turn",
                "usage": {"input": 120, "output": 40, "totalTokens": 160, "cost": {"total": 0.001}},
            },
        ),
    ]


class ISim(Protocol):
    """Generate host hook traffic against the ingress."""

    async def start(self) -> None:
        """Start scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """Scripted host: start, a few turns with heartbeats, stop."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        delay: float = 1.0,
    ):
        self._api_url = api_url
        self._client = client
        self._owns_client = client is None
        self._delay = delay
        self._running = False
        self._task: asyncio.Task | None = None
        self.sent: list[str] = []

    async def start(self) -> None:
        """Start scripted scenario in the background."""
        if self._running:
            return

        self._running = True
        if self._client is None:
            self._client = httpx.AsyncClient()
        self._task = asyncio.create_task(self.run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def scenario(self) -> list[tuple[str, dict]]:
        steps: list[tuple[str, dict]] = [("gateway_start", {})]
        steps += scripted_turn("What's the weather?", "Sunny, 21C.", "weather")
        steps.append(("heartbeat", {}))
        steps += scripted_turn("And tomorrow?", "Rain expected.", "forecast")
        steps.append(("gateway_stop", {}))
        return steps

    async def run_scenario(self) -> None:
        """Push host config, then replay every scripted hook."""
        self._running = True
        try:
            await self._put_host_config()
            for signal, event in self.scenario():
                if not self._running:
                    break
                await self._send_hook(signal, event)
                await asyncio.sleep(self._delay)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    async def _put_host_config(self) -> None:
        if not self._client:
            return
        await self._client.put(f"{self._api_url}/host-config", json=HOST_CONFIG, timeout=10.0)

    async def _send_hook(self, signal: str, event: dict) -> None:
        """Send one hook via the ingress API."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}/hooks/{signal}",
                json=event,
                timeout=10.0,
            )
            if response.status_code == 202:
                self.sent.append(signal)
                logger.info("SIM: hook %s accepted", signal)
            else:
                logger.error("SIM: hook %s rejected: %s", signal, response.status_code)
        except httpx.HTTPError as e:
            logger.error("SIM: failed to send hook %s: %s", signal, e)
