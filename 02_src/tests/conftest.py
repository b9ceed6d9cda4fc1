"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

API_KEY = "ad_test_key"
AGENT_ID = "agent_123"


def make_transport(register_response=None):
    """Mock transport: /agents/register answers register_response, others {}."""
    if register_response is None:
        register_response = {"agent_id": AGENT_ID}

    async def post(path, data):
        if path == "/agents/register":
            return register_response
        return {}

    transport = Mock()
    transport.post = AsyncMock(side_effect=post)
    transport.close = AsyncMock()
    return transport


def posted(transport, path):
    """Bodies posted to the given path, in call order."""
    return [c.args[1] for c in transport.post.call_args_list if c.args[0] == path]


@pytest.fixture
def settings():
    """Relay settings with a valid key."""
    from relay.config import RelaySettings

    return RelaySettings(api_key=API_KEY, endpoint="https://collector.test/api/v1")


@pytest.fixture
def context():
    """Fresh relay context."""
    from relay.context import RelayContext

    return RelayContext(
        host_config={"agents": {"defaults": {"workspace": "/srv/agent"}}}
    )


@pytest.fixture
def transport():
    """Transport whose registration succeeds."""
    return make_transport()


@pytest.fixture
def failing_transport():
    """Transport whose every call fails."""
    transport = Mock()
    transport.post = AsyncMock(return_value=None)
    transport.close = AsyncMock()
    return transport


@pytest.fixture
def registrar(context, transport, settings):
    """Registrar over the succeeding transport."""
    from relay.registration import Registrar

    return Registrar(context, transport, settings)


@pytest.fixture
def correlator(context):
    """Trace correlator."""
    from relay.tracing import TraceCorrelator

    return TraceCorrelator(context)


@pytest.fixture
def tracker(context, registrar, transport):
    """Tracker sending through the mock transport."""
    from relay.tracker import Tracker

    return Tracker(context, registrar, transport)


@pytest.fixture
def bus():
    """Empty hook bus."""
    from relay.event_bus import HookBus

    return HookBus()


@pytest.fixture
def observer(context, correlator, tracker, bus):
    """Conversation observer subscribed to the bus."""
    from relay.observer import ConversationObserver

    obs = ConversationObserver(context, correlator, tracker)
    obs.start(bus)
    return obs


@pytest.fixture
async def scheduler(context, registrar, transport, settings):
    """Sync scheduler; timers cancelled on teardown."""
    from relay.scheduler import SyncScheduler

    sch = SyncScheduler(context, registrar, transport, settings)
    yield sch
    await sch.stop()
