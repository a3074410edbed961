"""Tests for the single-agent tool loop."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from agent_swarm.agent import ToolAgent, extract_tool_call, format_context_messages
from agent_swarm.clients.base import BaseLLMClient
from agent_swarm.clients.dummy import DummyClient
from agent_swarm.tool_providers.manager import ToolProviderManager
from agent_swarm.tools.base import BaseTool
from agent_swarm.tools.demo import get_demo_tools
from agent_swarm.tools.registry import ToolRegistry

from conftest import FakeSession, make_config, specs


class ExplodingTool(BaseTool):
    @property
    def name(self):
        return "explode"

    @property
    def description(self):
        return "Always fails"

    async def execute(self, **kwargs):
        raise RuntimeError("kaboom")


class TestExtractToolCall:
    def test_json_action_args(self):
        assert extract_tool_call('{"action": "reverse_text", "args": {"text": "abc"}}') == (
            "reverse_text",
            {"text": "abc"},
        )

    def test_json_tool_input(self):
        assert extract_tool_call('  {"tool": "greet_user", "input": {"name": "Ada"}}  ') == (
            "greet_user",
            {"name": "Ada"},
        )

    def test_non_object_args_become_empty(self):
        assert extract_tool_call('{"action": "greet_user", "args": "Ada"}') == ("greet_user", {})

    def test_action_line(self):
        assert extract_tool_call("Thinking...\naction: mcp_health_check\nmore") == (
            "mcp_health_check",
            {},
        )

    def test_plain_answer(self):
        assert extract_tool_call("The answer is 42.") is None
        assert extract_tool_call('{"answer": 42}') is None
        assert extract_tool_call("Action:   ") is None


def test_format_context_messages():
    text = format_context_messages([
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "hi"},
    ])
    assert text == "SYSTEM: sys\nUSER: hi"


class TestAct:
    @pytest.mark.asyncio
    async def test_direct_answer(self, memory):
        client = DummyClient(responses=["Just the answer."])
        agent = ToolAgent(client, ToolRegistry(get_demo_tools()), memory)

        result = await agent.act("What is up?")

        assert result == "Just the answer."
        assert len(client.prompts) == 1
        assert "- greet_user: Greets the user by name." in client.prompts[0]
        assert client.prompts[0].endswith("Current Task: What is up?")
        assert [e["role"] for e in memory.get_history()] == ["user", "assistant"]

    @pytest.mark.asyncio
    async def test_tool_round_trip(self, memory):
        client = DummyClient(responses=[
            '{"action": "reverse_text", "args": {"text": "swarm"}}',
            "Reversed: mraws",
        ])
        agent = ToolAgent(client, ToolRegistry(get_demo_tools()), memory)

        result = await agent.act("Reverse swarm")

        assert result == "Reversed: mraws"
        follow_up = client.prompts[1]
        assert "Tool 'reverse_text' observation: mraws" in follow_up
        assert "Do not request additional tool calls." in follow_up
        assert [e["role"] for e in memory.get_history()] == ["user", "assistant", "tool", "assistant"]
        assert memory.get_history()[2]["content"] == "reverse_text output: mraws"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, memory):
        client = DummyClient(responses=["Action: teleport", "Sorry."])
        agent = ToolAgent(client, ToolRegistry(), memory)

        await agent.act("Go")

        assert "observation: Requested tool 'teleport' is not registered." in client.prompts[1]

    @pytest.mark.asyncio
    async def test_tool_error(self, memory):
        client = DummyClient(responses=['{"action": "explode"}', "It failed."])
        agent = ToolAgent(client, ToolRegistry([ExplodingTool()]), memory)

        assert await agent.act("Try") == "It failed."
        assert "Error executing tool 'explode': kaboom" in client.prompts[1]

    @pytest.mark.asyncio
    async def test_model_failure(self, memory):
        client = MagicMock(spec=BaseLLMClient)
        client.complete.side_effect = RuntimeError("quota")
        agent = ToolAgent(client, ToolRegistry(), memory)

        assert await agent.act("Anything") == "Error generating response: quota"


class TestCreate:
    @pytest.mark.asyncio
    async def test_registers_provider_capabilities(self, memory, fake_transport, transports):
        fake_transport.sessions["files"] = FakeSession(specs=specs("read"))
        manager = ToolProviderManager([make_config("files")], transports=transports)

        agent = await ToolAgent.create(
            DummyClient(), get_demo_tools(), memory=memory, provider_manager=manager
        )

        assert manager.initialized
        names = agent.registry.names()
        assert names[:2] == ["greet_user", "reverse_text"]
        assert {"list_mcp_servers", "list_mcp_tools", "mcp_health_check", "mcp_files_read"} <= set(names)
        assert "- mcp_files_read: [MCP:files] read description" in agent.build_system_prompt()

        await agent.shutdown()
        assert not manager.initialized

    @pytest.mark.asyncio
    async def test_invokes_provider_capability(self, memory, fake_transport, transports):
        session = FakeSession(specs=specs("read"))
        fake_transport.sessions["files"] = session
        manager = ToolProviderManager([make_config("files")], transports=transports)
        client = DummyClient(responses=['{"action": "mcp_files_read", "args": {"path": "a"}}', "done"])
        agent = await ToolAgent.create(client, memory=memory, provider_manager=manager)

        assert await agent.act("read a") == "done"
        assert session.calls == [("read", {"path": "a"})]
        await agent.shutdown()

    @pytest.mark.asyncio
    async def test_argument_named_self_reaches_provider(self, memory, fake_transport, transports):
        session = FakeSession(specs=specs("read"))
        fake_transport.sessions["files"] = session
        manager = ToolProviderManager([make_config("files")], transports=transports)
        client = DummyClient(responses=['{"action": "mcp_files_read", "args": {"self": "me", "path": "a"}}', "done"])
        agent = await ToolAgent.create(client, memory=memory, provider_manager=manager)

        assert await agent.act("read a") == "done"
        assert session.calls == [("read", {"self": "me", "path": "a"})]
        assert "observation: read ok" in client.prompts[1]
        await agent.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_without_manager(self, memory):
        agent = await ToolAgent.create(DummyClient(), memory=memory)
        await agent.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_awaits_manager(self, memory):
        manager = MagicMock(spec=ToolProviderManager)
        manager.shutdown = AsyncMock()
        agent = ToolAgent(DummyClient(), memory=memory, provider_manager=manager)
        await agent.shutdown()
        manager.shutdown.assert_awaited_once()
