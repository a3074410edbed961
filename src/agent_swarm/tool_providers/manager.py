"""Tool provider manager.

Owns one connection per configured provider, builds a registry of their
capabilities under collision-free local names, and invokes them on
request. Failures are isolated per provider and every invocation returns
text; nothing here raises into the caller once configuration is loaded.

Connections are opened one after another. Each session is served by its own
task in a task group the manager enters in :meth:`initialize` and leaves in
:meth:`shutdown`, so both must run in the same task. ``async with`` takes
care of that::

    async with ToolProviderManager(configs) as manager:
        print(await manager.invoke("mcp_files_read_file", {"path": "README.md"}))

The registry is written only by :meth:`initialize` and :meth:`shutdown`;
callers must let initialization finish before invoking anything.
"""

from contextlib import AsyncExitStack
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping

import anyio
from anyio.abc import TaskGroup

from ..config import Settings, get_settings
from ..logging import get_logger
from .config import ProviderConfig, TransportKind, load_provider_configs
from .models import (
    CapabilityDescriptor,
    CapabilityResult,
    CapabilitySpec,
    ConnectionState,
    ProviderConnection,
    make_local_name,
)
from .transports import TransportStrategy, describe_error, get_transport

if TYPE_CHECKING:
    from ..tools.providers import ProviderCapabilityTool

logger = get_logger(__name__)


def render_result(result: CapabilityResult, capability_name: str = "") -> str:
    """Flatten a capability result to plain text.

    Text parts are joined with newlines; non-textual parts become a
    ``[Binary data: N bytes]`` placeholder.
    """
    pieces = []
    for part in result.parts:
        if part.text is not None:
            pieces.append(part.text)
        elif part.data is not None:
            pieces.append(f"[Binary data: {part.size} bytes]")

    text = "\n".join(pieces)
    if result.is_error:
        return f"Error from MCP tool '{capability_name}': {text}"
    return text


class ToolProviderManager:
    """Manages connections to external tool providers.

    Each provider moves through
    ``DISCONNECTED -> CONNECTING -> CONNECTED | FAILED``; a failed provider
    is not retried. :meth:`shutdown` returns every provider to
    ``DISCONNECTED`` and clears the registry.
    """

    def __init__(
        self,
        configs: Iterable[ProviderConfig] = (),
        prefix: str = "mcp_",
        enabled: bool = True,
        connection_timeout: float = 30.0,
        call_timeout: float = 60.0,
        transports: Mapping[TransportKind, TransportStrategy] | None = None,
    ):
        """Initialize the manager. No connection is made until :meth:`initialize`.

        Args:
            configs: Provider configurations. Disabled entries are skipped.
            prefix: Prefix for local capability names.
            enabled: When False, :meth:`initialize` does nothing.
            connection_timeout: Seconds allowed for each connect and discovery.
            call_timeout: Seconds allowed for each capability call.
            transports: Strategy per transport kind; the MCP SDK transports by default.
        """
        self._configs = list(configs)
        self.prefix = prefix
        self.enabled = enabled
        self.connection_timeout = connection_timeout
        self.call_timeout = call_timeout
        self._transports = transports
        self._connections: dict[str, ProviderConnection] = {}
        self._registry: dict[str, CapabilityDescriptor] = {}
        self._initialized = False
        self._stack: AsyncExitStack | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        transports: Mapping[TransportKind, TransportStrategy] | None = None,
    ) -> "ToolProviderManager":
        """Build a manager from application settings.

        The provider config file is only read when integration is enabled.
        """
        settings = settings or get_settings()
        configs = load_provider_configs(settings.mcp_servers_config) if settings.mcp_enabled else []
        return cls(
            configs,
            prefix=settings.mcp_tool_prefix,
            enabled=settings.mcp_enabled,
            connection_timeout=settings.mcp_connection_timeout,
            call_timeout=settings.mcp_call_timeout,
            transports=transports,
        )

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def configs(self) -> list[ProviderConfig]:
        return list(self._configs)

    # lifecycle

    async def initialize(self) -> None:
        """Connect to every enabled provider and discover its capabilities.

        Idempotent. A provider that fails to connect is marked FAILED and
        the remaining providers are still attempted.
        """
        if self._initialized:
            return

        if not self.enabled:
            logger.info("tool provider integration is disabled")
            return

        if not self._configs:
            logger.info("no tool providers configured")

        self._stack = AsyncExitStack()
        task_group = await self._stack.enter_async_context(anyio.create_task_group())

        for config in self._configs:
            if not config.enabled:
                logger.debug(f"skipping disabled provider: {config.name}")
                continue
            if config.name in self._connections:
                logger.warning(f"duplicate provider name ignored: {config.name}")
                continue
            await self._connect(config, task_group)

        self._initialized = True
        connected = sum(1 for c in self._connections.values() if c.connected)
        logger.info(
            f"connected to {connected}/{len(self._connections)} tool providers, "
            f"{len(self._registry)} capabilities registered"
        )

    async def _connect(self, config: ProviderConfig, task_group: TaskGroup) -> None:
        connection = ProviderConnection(config=config, state=ConnectionState.CONNECTING)
        self._connections[config.name] = connection
        logger.info(f"connecting to provider: {config.name} ({config.transport.value})")

        try:
            transport = get_transport(config.transport, self._transports)
            session = await transport.connect(
                config, task_group, self.connection_timeout, self.call_timeout
            )
        except Exception as e:
            connection.state = ConnectionState.FAILED
            connection.last_error = getattr(e, "reason", None) or describe_error(e)
            logger.warning(f"provider '{config.name}' connection failed: {connection.last_error}")
            return

        connection.session = session
        connection.state = ConnectionState.CONNECTED

        try:
            with anyio.fail_after(self.connection_timeout):
                specs = await session.list_capabilities()
        except Exception as e:
            connection.last_error = f"capability discovery failed: {describe_error(e)}"
            logger.warning(f"provider '{config.name}': {connection.last_error}")
            return

        self._register(connection, specs)
        logger.info(f"provider '{config.name}': {len(connection.capabilities)} capabilities discovered")

    def _register(self, connection: ProviderConnection, specs: Iterable[CapabilitySpec]) -> None:
        for spec in specs:
            local_name = make_local_name(self.prefix, connection.name, spec.name)
            existing = self._registry.get(local_name)
            if existing is not None:
                logger.warning(
                    f"capability name collision on '{local_name}': keeping "
                    f"{existing.provider_name}/{existing.original_name}, "
                    f"ignoring {connection.name}/{spec.name}"
                )
                continue
            descriptor = CapabilityDescriptor(
                local_name=local_name,
                description=spec.description,
                provider_name=connection.name,
                original_name=spec.name,
                input_schema=dict(spec.input_schema),
            )
            self._registry[local_name] = descriptor
            connection.capabilities.append(descriptor)

    async def shutdown(self) -> None:
        """Close every session, newest first, and clear the registry.

        A failure closing one session is logged and does not stop the rest.
        """
        if self._connections:
            logger.info("shutting down tool provider connections")

        for connection in reversed(list(self._connections.values())):
            if connection.session is not None:
                try:
                    await connection.session.close()
                    logger.info(f"disconnected from provider: {connection.name}")
                except Exception as e:
                    logger.warning(f"error disconnecting from provider '{connection.name}': {describe_error(e)}")
            connection.session = None
            connection.capabilities.clear()
            connection.state = ConnectionState.DISCONNECTED

        self._connections.clear()
        self._registry.clear()
        self._initialized = False

        if self._stack is not None:
            stack, self._stack = self._stack, None
            await stack.aclose()

    async def __aenter__(self) -> "ToolProviderManager":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.shutdown()

    # invocation

    async def invoke(self, local_name: str, args: Mapping[str, Any] | None = None) -> str:
        """Call a capability by its local name and return its output as text.

        Unknown names, disconnected providers, timeouts and transport errors
        all come back as an error description.
        """
        descriptor = self._registry.get(local_name)
        if descriptor is None:
            return f"Error: MCP tool '{local_name}' is not registered"

        connection = self._connections.get(descriptor.provider_name)
        if connection is None or not connection.connected:
            return f"Error: MCP server '{descriptor.provider_name}' is not connected"

        try:
            with anyio.fail_after(self.call_timeout):
                result = await connection.session.call_capability(
                    descriptor.original_name, dict(args or {})
                )
        except TimeoutError:
            logger.warning(f"capability '{local_name}' timed out after {self.call_timeout}s")
            return (
                f"Error calling MCP tool '{descriptor.original_name}': "
                f"timed out after {self.call_timeout}s"
            )
        except Exception as e:
            logger.warning(f"capability '{local_name}' failed: {describe_error(e)}")
            return f"Error calling MCP tool '{descriptor.original_name}': {describe_error(e)}"

        return render_result(result, descriptor.original_name)

    # read accessors

    def get_capabilities(self) -> list[CapabilityDescriptor]:
        """Capabilities of every connected provider, in discovery order."""
        return [
            descriptor
            for connection in self._connections.values()
            if connection.connected
            for descriptor in connection.capabilities
        ]

    def get_capability(self, local_name: str) -> CapabilityDescriptor | None:
        return self._registry.get(local_name)

    def get_connection(self, name: str) -> ProviderConnection | None:
        return self._connections.get(name)

    @property
    def connections(self) -> Mapping[str, ProviderConnection]:
        return MappingProxyType(self._connections)

    def get_capability_descriptions(self) -> str:
        """``- <local name> [MCP:<provider>]: <description>`` lines."""
        lines = []
        for descriptor in self.get_capabilities():
            description = " ".join(descriptor.description.split())
            lines.append(f"- {descriptor.local_name} [MCP:{descriptor.provider_name}]: {description}")
        return "\n".join(lines)

    def get_status(self) -> dict[str, Any]:
        """Snapshot of the manager and every provider connection."""
        return {
            "enabled": self.enabled,
            "initialized": self._initialized,
            "providers": {
                name: {
                    "state": connection.state.value,
                    "transport": connection.transport.value,
                    "capabilities": len(connection.capabilities),
                    "error": connection.last_error,
                }
                for name, connection in self._connections.items()
            },
        }

    def build_tools(self) -> list["ProviderCapabilityTool"]:
        """Wrap every registered capability as a tool bound to this manager."""
        from ..tools.providers import ProviderCapabilityTool

        return [ProviderCapabilityTool(self, descriptor) for descriptor in self.get_capabilities()]

    def __repr__(self) -> str:
        return (
            f"ToolProviderManager(providers={len(self._connections)}, "
            f"capabilities={len(self._registry)}, initialized={self._initialized})"
        )
