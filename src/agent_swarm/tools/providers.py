"""Tools backed by a tool provider manager.

Every tool here receives its manager explicitly; there is no module-level
manager to configure.
"""

from typing import TYPE_CHECKING, Any

from .base import BaseTool

if TYPE_CHECKING:
    from ..tool_providers.manager import ToolProviderManager
    from ..tool_providers.models import CapabilityDescriptor

DESCRIPTION_PREVIEW_CHARS = 60


class ProviderCapabilityTool(BaseTool):
    """One discovered provider capability exposed as a tool."""

    def __init__(self, manager: "ToolProviderManager", descriptor: "CapabilityDescriptor"):
        self._manager = manager
        self._descriptor = descriptor

    @property
    def name(self) -> str:
        return self._descriptor.local_name

    @property
    def description(self) -> str:
        return self._descriptor.display_description

    @property
    def parameters(self) -> dict[str, Any]:
        return self._descriptor.input_schema or {"type": "object", "properties": {}}

    @property
    def descriptor(self) -> "CapabilityDescriptor":
        return self._descriptor

    async def execute(self, /, **kwargs) -> str:
        return await self._manager.invoke(self._descriptor.local_name, kwargs)


def _unavailable_reason(manager: "ToolProviderManager | None") -> str | None:
    if manager is None:
        return "Tool provider integration is not initialized."
    if not manager.enabled:
        return "Tool provider integration is disabled. Set MCP_ENABLED=true to enable it."
    return None


class ListProvidersTool(BaseTool):
    """Reports every configured provider and its connection state."""

    def __init__(self, manager: "ToolProviderManager | None"):
        self._manager = manager

    @property
    def name(self) -> str:
        return "list_mcp_servers"

    @property
    def description(self) -> str:
        return "List all configured MCP servers and their connection status."

    async def execute(self, /, **kwargs) -> str:
        reason = _unavailable_reason(self._manager)
        if reason:
            return reason

        providers = self._manager.get_status()["providers"]
        if not providers:
            return "No MCP servers configured. Add servers to mcp_servers.json"

        lines = ["MCP Servers Status:", ""]
        for i, (name, info) in enumerate(providers.items(), start=1):
            line = f"  {i}. {name} ({info['transport']}) - {info['state']}"
            if info["state"] == "connected":
                line += f" - {info['capabilities']} tools"
            if info["error"]:
                line += f"\n     Error: {info['error']}"
            lines.append(line)
        return "\n".join(lines)


class ListCapabilitiesTool(BaseTool):
    """Lists discovered capabilities grouped by provider."""

    def __init__(self, manager: "ToolProviderManager | None"):
        self._manager = manager

    @property
    def name(self) -> str:
        return "list_mcp_tools"

    @property
    def description(self) -> str:
        return "List all available tools from MCP servers. Args: provider_name (optional string)"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "provider_name": {
                    "type": "string",
                    "description": "Only list tools from this server",
                },
            },
        }

    async def execute(self, /, provider_name: str | None = None, **kwargs) -> str:
        reason = _unavailable_reason(self._manager)
        if reason:
            return reason

        capabilities = self._manager.get_capabilities()
        if not capabilities:
            return "No MCP tools available. Check server connections."

        grouped: dict[str, list] = {}
        for descriptor in capabilities:
            if provider_name and descriptor.provider_name != provider_name:
                continue
            grouped.setdefault(descriptor.provider_name, []).append(descriptor)

        if not grouped:
            return f"No tools found for server: {provider_name}"

        lines = ["Available MCP Tools:"]
        for provider, descriptors in grouped.items():
            lines.append(f"\n[{provider}] {len(descriptors)} tool(s):")
            for descriptor in descriptors:
                description = descriptor.description
                if len(description) > DESCRIPTION_PREVIEW_CHARS:
                    description = description[:DESCRIPTION_PREVIEW_CHARS] + "..."
                lines.append(f"  - {descriptor.local_name}")
                lines.append(f"    {description}")
        return "\n".join(lines)


class ProviderHealthCheckTool(BaseTool):
    """Summarizes which providers are healthy."""

    def __init__(self, manager: "ToolProviderManager | None"):
        self._manager = manager

    @property
    def name(self) -> str:
        return "mcp_health_check"

    @property
    def description(self) -> str:
        return "Perform a health check on all MCP connections."

    async def execute(self, /, **kwargs) -> str:
        reason = _unavailable_reason(self._manager)
        if reason:
            return reason

        providers = self._manager.get_status()["providers"]
        if not providers:
            return "No MCP servers configured."

        connected = sum(1 for info in providers.values() if info["state"] == "connected")
        lines = ["MCP Health Check", f"   Status: {connected}/{len(providers)} servers connected", ""]
        for name, info in providers.items():
            if info["state"] == "connected" and not info["error"]:
                lines.append(f"   {name}: Healthy ({info['capabilities']} tools)")
            else:
                lines.append(f"   {name}: Unhealthy - {info['error'] or 'Unknown error'}")
        return "\n".join(lines)


def get_provider_admin_tools(manager: "ToolProviderManager | None") -> list[BaseTool]:
    """Tools for inspecting the provider manager itself."""
    return [
        ListProvidersTool(manager),
        ListCapabilitiesTool(manager),
        ProviderHealthCheckTool(manager),
    ]
