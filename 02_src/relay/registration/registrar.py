"""Agent registration state machine."""

from typing import Protocol

from ..config import RelaySettings
from ..context import RelayContext
from ..logging_config import get_logger
from ..models import AgentIdentity, RegistrationState
from ..sanitizer import dig
from ..transport import ITransport

logger = get_logger(__name__)

AGENT_TYPE = "clawdbot"


class IRegistrar(Protocol):
    """Owns the agent identity lifecycle."""

    async def register(self) -> bool:
        """Attempt registration within the retry budget."""
        ...

    async def ensure_registered(self) -> bool:
        """Gate for every outbound call that needs an identity."""
        ...

    def reset(self) -> None:
        """Restore the retry budget on a fresh start."""
        ...


class Registrar:
    """
    Unregistered -> Registering -> Registered, or Exhausted after the budget.

    The attempt counter is incremented before the network call so that
    concurrent callers cannot overspend the budget.
    """

    def __init__(
        self,
        context: RelayContext,
        transport: ITransport,
        settings: RelaySettings,
    ):
        self._context = context
        self._transport = transport
        self._settings = settings

    @property
    def state(self) -> RegistrationState:
        return self._context.registration_state

    async def register(self) -> bool:
        """Attempt registration within the retry budget."""
        ctx = self._context
        max_attempts = self._settings.max_registration_attempts

        if ctx.identity:
            logger.info("Already registered: %s", ctx.identity.agent_id)
            return True

        if ctx.registration_attempts >= max_attempts:
            ctx.registration_state = RegistrationState.EXHAUSTED
            logger.warning("Max registration attempts (%s) reached", max_attempts)
            return False

        ctx.registration_attempts += 1
        ctx.registration_state = RegistrationState.REGISTERING
        logger.info(
            "Registration attempt %s/%s", ctx.registration_attempts, max_attempts
        )

        result = await self._transport.post(
            "/agents/register",
            {
                "name": self._settings.agent_name,
                "type": AGENT_TYPE,
                "metadata": {
                    "workspace": dig(ctx.host_config, "agents", "defaults", "workspace"),
                },
            },
        )

        agent_id = result.get("agent_id") if isinstance(result, dict) else None
        if ctx.identity:
            # A concurrent attempt finished first; keep the original identity.
            return True

        if isinstance(agent_id, str) and agent_id:
            ctx.identity = AgentIdentity(agent_id=agent_id)
            ctx.registration_state = RegistrationState.REGISTERED
            logger.info("Registered successfully: %s", agent_id)
            return True

        if ctx.registration_attempts >= max_attempts:
            ctx.registration_state = RegistrationState.EXHAUSTED
        else:
            ctx.registration_state = RegistrationState.UNREGISTERED
        logger.warning("Registration failed - no agent_id returned")
        return False

    async def ensure_registered(self) -> bool:
        """Return True when an identity exists, registering lazily if not."""
        if self._context.identity:
            return True
        return await self.register()

    def reset(self) -> None:
        """Restore the retry budget on a fresh start."""
        ctx = self._context
        ctx.registration_attempts = 0
        if ctx.registration_state == RegistrationState.EXHAUSTED:
            ctx.registration_state = RegistrationState.UNREGISTERED
