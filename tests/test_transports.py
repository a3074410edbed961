"""Tests for the MCP-backed transport strategies, against in-process servers."""

import anyio
import pytest
from mcp import types as mcp_types
from mcp.server.lowlevel import Server
from mcp.shared.memory import create_client_server_memory_streams

from agent_swarm.exceptions import ProviderConnectionError
from agent_swarm.tool_providers.config import TransportKind
from agent_swarm.tool_providers.manager import ToolProviderManager
from agent_swarm.tool_providers.models import ConnectionState, ContentPart
from agent_swarm.tool_providers.transports import (
    McpProviderSession,
    StreamableHttpTransport,
    TransportStrategy,
    describe_error,
)

from conftest import make_config

TOOL_NAMES = ["echo", "snapshot", "fail", "noop", "spare"]
PAGE_SIZE = 2


def build_server():
    """Low-level MCP server listing its tools two per page."""
    server = Server("test-tools")
    tools = [
        mcp_types.Tool(
            name=name,
            description=f"{name} tool",
            inputSchema={"type": "object", "properties": {}},
        )
        for name in TOOL_NAMES
    ]

    async def list_tools(request):
        params = getattr(request, "params", None)
        cursor = getattr(params, "cursor", None)
        start = int(cursor) if cursor else 0
        end = start + PAGE_SIZE
        return mcp_types.ServerResult(mcp_types.ListToolsResult(
            tools=tools[start:end],
            nextCursor=str(end) if end < len(tools) else None,
        ))

    server.request_handlers[mcp_types.ListToolsRequest] = list_tools

    @server.call_tool()
    async def call_tool(name, arguments):
        if name == "echo":
            return [mcp_types.TextContent(type="text", text=arguments.get("text", ""))]
        if name == "snapshot":
            return [
                mcp_types.TextContent(type="text", text="caption"),
                mcp_types.ImageContent(type="image", data="aGVsbG8=", mimeType="image/png"),
            ]
        raise ValueError(f"{name} exploded")

    return server


class InMemoryTransport(TransportStrategy):
    """Runs a server on memory streams inside the serving task."""

    kind = TransportKind.STDIO

    def __init__(self, server=None):
        self.server = server

    async def _open_streams(self, config, stack, timeout):
        client_streams, server_streams = await stack.enter_async_context(
            create_client_server_memory_streams()
        )
        if self.server is not None:
            task_group = await stack.enter_async_context(anyio.create_task_group())
            task_group.start_soon(
                self.server.run,
                *server_streams,
                self.server.create_initialization_options(),
            )
            stack.callback(task_group.cancel_scope.cancel)
        return client_streams


class RefusingTransport(TransportStrategy):
    kind = TransportKind.STDIO

    async def _open_streams(self, config, stack, timeout):
        raise ConnectionRefusedError("connection refused")


class CollapsingTransport(TransportStrategy):
    """Transport whose writer task dies and cancels its own task group.

    This is how the SDK's HTTP clients fail when the server is unreachable.
    """

    kind = TransportKind.HTTP

    async def _open_streams(self, config, stack, timeout):
        client_streams, _server_streams = await stack.enter_async_context(
            create_client_server_memory_streams()
        )
        task_group = await stack.enter_async_context(anyio.create_task_group())

        async def writer():
            await anyio.sleep(0)
            raise OSError("post failed")

        task_group.start_soon(writer)
        return client_streams


class TestMcpProviderSession:
    @pytest.mark.asyncio
    async def test_lists_every_page(self):
        async with anyio.create_task_group() as tg:
            session = await InMemoryTransport(build_server()).connect(make_config("mem"), tg, 5)
            specs = await session.list_capabilities()
            await session.close()

        assert [s.name for s in specs] == TOOL_NAMES
        assert specs[0].description == "echo tool"
        assert specs[0].input_schema["type"] == "object"

    @pytest.mark.asyncio
    async def test_call_converts_content(self):
        async with anyio.create_task_group() as tg:
            session = await InMemoryTransport(build_server()).connect(make_config("mem"), tg, 5, 5)
            echoed = await session.call_capability("echo", {"text": "hi"})
            snapshot = await session.call_capability("snapshot", {})
            failed = await session.call_capability("fail", {})
            await session.close()

        assert echoed.parts == (ContentPart(text="hi"),)
        assert not echoed.is_error
        assert snapshot.parts[0] == ContentPart(text="caption")
        assert snapshot.parts[1].mime_type == "image/png"
        assert snapshot.parts[1].size == 5
        assert failed.is_error
        assert "fail exploded" in failed.parts[0].text

    @pytest.mark.asyncio
    async def test_close_ends_serving_task(self):
        async with anyio.create_task_group() as tg:
            session = await InMemoryTransport(build_server()).connect(make_config("mem"), tg, 5)
            assert isinstance(session, McpProviderSession)
            await session.close()
            assert session.closed

            with pytest.raises(ProviderConnectionError, match="session is closed"):
                await session.list_capabilities()


class TestConnectFailures:
    @pytest.mark.asyncio
    async def test_open_error_is_wrapped(self):
        async with anyio.create_task_group() as tg:
            with pytest.raises(ProviderConnectionError) as excinfo:
                await RefusingTransport().connect(make_config("down"), tg, 5)

        assert excinfo.value.provider_name == "down"
        assert excinfo.value.reason == "connection refused"

    @pytest.mark.asyncio
    async def test_transport_cancelling_itself_is_wrapped(self):
        async with anyio.create_task_group() as tg:
            with pytest.raises(ProviderConnectionError) as excinfo:
                await CollapsingTransport().connect(make_config("web"), tg, 5)

        assert excinfo.value.reason == "post failed"

    @pytest.mark.asyncio
    async def test_silent_server_times_out(self):
        async with anyio.create_task_group() as tg:
            with pytest.raises(ProviderConnectionError) as excinfo:
                await InMemoryTransport().connect(make_config("mute"), tg, 0.2)

        assert "timed out" in excinfo.value.reason.lower()


class TestManagerOverRealSessions:
    @pytest.mark.asyncio
    async def test_failing_http_provider_does_not_stop_the_next(self):
        transports = {
            TransportKind.HTTP: CollapsingTransport(),
            TransportKind.STDIO: InMemoryTransport(build_server()),
        }
        configs = [
            make_config("web", transport="http", url="http://127.0.0.1:1/mcp"),
            make_config("mem"),
        ]

        async with ToolProviderManager(configs, transports=transports) as manager:
            assert manager.get_connection("web").state == ConnectionState.FAILED
            assert manager.get_connection("web").last_error == "post failed"
            assert manager.get_connection("mem").state == ConnectionState.CONNECTED
            assert len(manager.get_capabilities()) == len(TOOL_NAMES)
            assert await manager.invoke("mcp_mem_echo", {"text": "hi"}) == "hi"
            assert await manager.invoke("mcp_mem_snapshot") == "caption\n[Binary data: 5 bytes]"
            assert await manager.invoke("mcp_mem_fail").startswith("Error from MCP tool 'fail':")

        assert manager.get_status()["providers"] == {}

    @pytest.mark.asyncio
    async def test_unreachable_streamable_http_url(self):
        transports = {
            TransportKind.HTTP: StreamableHttpTransport(),
            TransportKind.STDIO: InMemoryTransport(build_server()),
        }
        configs = [
            make_config("web", transport="http", url="http://127.0.0.1:1/mcp"),
            make_config("mem"),
        ]
        manager = ToolProviderManager(configs, transports=transports, connection_timeout=5)

        await manager.initialize()
        try:
            assert manager.get_connection("web").state == ConnectionState.FAILED
            assert manager.get_connection("web").last_error
            assert manager.get_connection("mem").state == ConnectionState.CONNECTED
            assert await manager.invoke("mcp_mem_echo", {"text": "still here"}) == "still here"
        finally:
            await manager.shutdown()


def test_describe_error_unwraps_groups():
    group = ExceptionGroup("outer", [ExceptionGroup("inner", [ConnectionError("refused")])])
    assert describe_error(group) == "refused"
    assert describe_error(TimeoutError()) == "TimeoutError"
