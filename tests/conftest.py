"""Shared test fixtures and configuration."""

import anyio
import pytest
from unittest.mock import MagicMock

from agent_swarm.clients.base import BaseLLMClient
from agent_swarm.clients.dummy import DummyClient
from agent_swarm.exceptions import ProviderConnectionError
from agent_swarm.memory import ConversationMemory
from agent_swarm.tool_providers.config import ProviderConfig, TransportKind
from agent_swarm.tool_providers.models import (
    CapabilityResult,
    CapabilitySpec,
    ContentPart,
)
from agent_swarm.tool_providers.transports import TransportStrategy


class FakeSession:
    """In-memory provider session."""

    def __init__(
        self,
        specs=(),
        results=None,
        list_error=None,
        call_error=None,
        call_delay=0.0,
        close_error=None,
        closed_order=None,
        name="",
    ):
        self.specs = list(specs)
        self.results = results or {}
        self.list_error = list_error
        self.call_error = call_error
        self.call_delay = call_delay
        self.close_error = close_error
        self.closed_order = closed_order
        self.name = name
        self.calls = []
        self.closed = False

    async def list_capabilities(self):
        if self.list_error:
            raise self.list_error
        return list(self.specs)

    async def call_capability(self, name, args):
        self.calls.append((name, args))
        if self.call_delay:
            await anyio.sleep(self.call_delay)
        if self.call_error:
            raise self.call_error
        if name in self.results:
            return self.results[name]
        return CapabilityResult(parts=(ContentPart(text=f"{name} ok"),))

    async def close(self):
        self.closed = True
        if self.closed_order is not None:
            self.closed_order.append(self.name)
        if self.close_error:
            raise self.close_error


class FakeTransport(TransportStrategy):
    """Transport that hands out FakeSessions and records every attempt."""

    kind = TransportKind.STDIO

    def __init__(self, sessions=None, failures=None):
        self.sessions = sessions or {}
        self.failures = failures or {}
        self.attempts = []

    async def connect(self, config, task_group, connection_timeout, call_timeout=None):
        self.attempts.append(config.name)
        if config.name in self.failures:
            raise ProviderConnectionError(config.name, self.failures[config.name])
        return self.sessions.setdefault(config.name, FakeSession(name=config.name))

    async def _open_streams(self, config, stack, timeout):
        raise NotImplementedError


def make_config(name, **overrides):
    """Build a stdio ProviderConfig with sensible defaults."""
    data = {"name": name, "transport": "stdio", "command": "fake-server"}
    data.update(overrides)
    return ProviderConfig.model_validate(data)


def specs(*names):
    return [CapabilitySpec(name=n, description=f"{n} description") for n in names]


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def transports(fake_transport):
    """Route every transport kind to the same fake."""
    return {kind: fake_transport for kind in TransportKind}


@pytest.fixture
def dummy_client():
    return DummyClient()


@pytest.fixture
def mock_client():
    """Create a mock LLM client."""
    client = MagicMock(spec=BaseLLMClient)
    return client


@pytest.fixture
def memory(tmp_path):
    return ConversationMemory(tmp_path / "memory.json")

