"""Transport strategies for reaching tool providers.

Strategies differ only in how a session is established. Once open, every
session offers the same contract: list capabilities, call one by name,
close. Sessions are backed by the official ``mcp`` client SDK.

Each session is served by a dedicated task in a task group supplied by the
caller, so the SDK's own task groups and cancel scopes stay inside that task.
"""

import math
import os
import re
from abc import ABC, abstractmethod
from contextlib import AsyncExitStack
from datetime import timedelta
from typing import Any, Mapping, Protocol, runtime_checkable

import anyio
from anyio.abc import TaskGroup, TaskStatus
from mcp import ClientSession, StdioServerParameters
from mcp import types as mcp_types
from mcp.client.sse import sse_client
from mcp.client.stdio import stdio_client
from mcp.client.streamable_http import streamablehttp_client

from ..exceptions import ProviderConnectionError, UnsupportedTransportError
from ..logging import get_logger
from .config import ProviderConfig, TransportKind
from .models import CapabilityResult, CapabilitySpec, ContentPart

logger = get_logger(__name__)

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def expand_env(env: Mapping[str, str] | None) -> dict[str, str]:
    """Overlay ``env`` on the current environment, expanding ``${VAR}`` references.

    References are resolved against ``os.environ``; unknown variables
    expand to an empty string.
    """
    merged = os.environ.copy()
    for key, value in (env or {}).items():
        merged[key] = _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    return merged


def describe_error(error: BaseException) -> str:
    """Readable text for an error, unwrapping exception groups to their first leaf."""
    while isinstance(error, BaseExceptionGroup) and error.exceptions:
        error = error.exceptions[0]
    return str(error) or type(error).__name__


@runtime_checkable
class ProviderSession(Protocol):
    """Open session to one provider."""

    async def list_capabilities(self) -> list[CapabilitySpec]:
        ...

    async def call_capability(self, name: str, args: dict[str, Any]) -> CapabilityResult:
        ...

    async def close(self) -> None:
        ...


def _convert_content(item: Any) -> ContentPart:
    """Convert one MCP content block to a content part."""
    if isinstance(item, mcp_types.TextContent):
        return ContentPart(text=item.text)
    if isinstance(item, (mcp_types.ImageContent, mcp_types.AudioContent)):
        return ContentPart(data=item.data, mime_type=item.mimeType)
    if isinstance(item, mcp_types.EmbeddedResource):
        resource = item.resource
        if isinstance(resource, mcp_types.TextResourceContents):
            return ContentPart(text=resource.text)
        return ContentPart(data=resource.blob, mime_type=resource.mimeType)
    uri = getattr(item, "uri", None)
    if uri is not None:
        return ContentPart(text=f"[Resource: {uri}]")
    return ContentPart(text=str(item))


class McpProviderSession:
    """Provider session over an initialized :class:`mcp.ClientSession`.

    The client session and its transport live in a serving task owned by
    the strategy that connected them. :meth:`close` asks that task to exit
    its contexts and waits until it has.
    """

    def __init__(self, name: str, call_timeout: float | None = None):
        self.name = name
        self._session: ClientSession | None = None
        self._call_timeout = timedelta(seconds=call_timeout) if call_timeout else None
        self._close_requested = anyio.Event()
        self._closed = anyio.Event()
        self._close_error: Exception | None = None

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise ProviderConnectionError(self.name, "session is closed")
        return self._session

    async def list_capabilities(self) -> list[CapabilitySpec]:
        """List every tool, following pagination cursors."""
        session = self._require_session()
        specs: list[CapabilitySpec] = []
        cursor: str | None = None
        while True:
            result = await session.list_tools(cursor=cursor) if cursor else await session.list_tools()
            for tool in result.tools:
                specs.append(CapabilitySpec(
                    name=tool.name,
                    description=tool.description or "No description provided",
                    input_schema=dict(tool.inputSchema or {}),
                ))
            cursor = result.nextCursor
            if not cursor:
                return specs

    async def call_capability(self, name: str, args: dict[str, Any]) -> CapabilityResult:
        result = await self._require_session().call_tool(
            name,
            arguments=args,
            read_timeout_seconds=self._call_timeout,
        )
        return CapabilityResult(
            parts=tuple(_convert_content(item) for item in result.content),
            is_error=bool(result.isError),
        )

    async def close(self) -> None:
        """Close the session.

        Raises:
            Exception: Whatever the transport raised while shutting down.
        """
        self._close_requested.set()
        await self._closed.wait()
        if self._close_error is not None:
            error, self._close_error = self._close_error, None
            raise error


class TransportStrategy(ABC):
    """Knows how to open a session to a provider over one transport.

    Every session is served by its own task in ``task_group``. Transport
    task groups and cancel scopes therefore never leak into the caller's
    task, and a transport that tears itself down only ends its own task.
    """

    kind: TransportKind

    async def connect(
        self,
        config: ProviderConfig,
        task_group: TaskGroup,
        connection_timeout: float,
        call_timeout: float | None = None,
    ) -> ProviderSession:
        """Open the transport, run the protocol handshake and return a session.

        Raises:
            ProviderConnectionError: If the transport or handshake fails or
                does not finish within ``connection_timeout`` seconds.
        """
        try:
            return await task_group.start(self._serve, config, connection_timeout, call_timeout)
        except ProviderConnectionError:
            raise
        except Exception as e:
            raise ProviderConnectionError(config.name, describe_error(e)) from e

    async def _serve(
        self,
        config: ProviderConfig,
        connection_timeout: float,
        call_timeout: float | None,
        *,
        task_status: TaskStatus[McpProviderSession] = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        provider_session = McpProviderSession(config.name, call_timeout)
        started = False
        try:
            with anyio.fail_after(connection_timeout) as scope:
                async with AsyncExitStack() as stack:
                    read, write = await self._open_streams(config, stack, connection_timeout)
                    session = await stack.enter_async_context(ClientSession(
                        read,
                        write,
                        read_timeout_seconds=timedelta(seconds=connection_timeout),
                    ))
                    await session.initialize()

                    # handshake done; the session stays open until closed
                    scope.deadline = math.inf
                    provider_session._session = session
                    task_status.started(provider_session)
                    started = True
                    await provider_session._close_requested.wait()
        except TimeoutError as e:
            if not started:
                raise ProviderConnectionError(
                    config.name, f"timed out after {connection_timeout}s"
                ) from e
            provider_session._close_error = e
        except Exception as e:
            if not started:
                raise ProviderConnectionError(config.name, describe_error(e)) from e
            logger.warning(f"provider '{config.name}' session ended with error: {describe_error(e)}")
            provider_session._close_error = e
        finally:
            provider_session._session = None
            provider_session._closed.set()

        if not started:
            raise ProviderConnectionError(config.name, "connection closed during handshake")

    @abstractmethod
    async def _open_streams(
        self,
        config: ProviderConfig,
        stack: AsyncExitStack,
        timeout: float,
    ) -> tuple[Any, Any]:
        """Enter the transport context on ``stack`` and return (read, write) streams."""


class StdioTransport(TransportStrategy):
    """Spawns the provider as a subprocess and talks over its standard streams."""

    kind = TransportKind.STDIO

    async def _open_streams(self, config, stack, timeout):
        if not config.command:
            raise ValueError("stdio transport requires 'command' field")
        params = StdioServerParameters(
            command=config.command,
            args=list(config.args),
            env=expand_env(config.env),
        )
        return await stack.enter_async_context(stdio_client(params))


class StreamableHttpTransport(TransportStrategy):
    """Connects to a provider over MCP streamable HTTP."""

    kind = TransportKind.STREAMABLE_HTTP

    async def _open_streams(self, config, stack, timeout):
        read, write, _get_session_id = await stack.enter_async_context(
            streamablehttp_client(
                config.url,
                headers=dict(config.headers) or None,
                timeout=timedelta(seconds=timeout),
            )
        )
        return read, write


class SseTransport(TransportStrategy):
    """Connects to a provider over server-sent events."""

    kind = TransportKind.SSE

    async def _open_streams(self, config, stack, timeout):
        return await stack.enter_async_context(
            sse_client(
                config.url,
                headers=dict(config.headers) or None,
                timeout=timeout,
            )
        )


DEFAULT_TRANSPORTS: dict[TransportKind, TransportStrategy] = {
    TransportKind.STDIO: StdioTransport(),
    TransportKind.HTTP: StreamableHttpTransport(),
    TransportKind.STREAMABLE_HTTP: StreamableHttpTransport(),
    TransportKind.SSE: SseTransport(),
}


def get_transport(
    kind: TransportKind,
    transports: Mapping[TransportKind, TransportStrategy] | None = None,
) -> TransportStrategy:
    """Look up the strategy for a transport kind.

    Raises:
        UnsupportedTransportError: If no strategy handles ``kind``.
    """
    registry = DEFAULT_TRANSPORTS if transports is None else transports
    try:
        return registry[kind]
    except KeyError:
        raise UnsupportedTransportError(getattr(kind, "value", str(kind))) from None
