"""Tool provider client manager.

Connects to external tool providers (MCP servers) over stdio, streamable
HTTP or SSE, and exposes their capabilities under unique local names.
"""

from .config import ProviderConfig, TransportKind, load_provider_configs, parse_provider_configs
from .manager import ToolProviderManager, render_result
from .models import (
    CapabilityDescriptor,
    CapabilityResult,
    CapabilitySpec,
    ConnectionState,
    ContentPart,
    ProviderConnection,
    make_local_name,
)
from .transports import (
    DEFAULT_TRANSPORTS,
    McpProviderSession,
    ProviderSession,
    SseTransport,
    StdioTransport,
    StreamableHttpTransport,
    TransportStrategy,
    expand_env,
    get_transport,
)

__all__ = [
    "ToolProviderManager",
    "ProviderConfig",
    "TransportKind",
    "load_provider_configs",
    "parse_provider_configs",
    "render_result",
    "CapabilityDescriptor",
    "CapabilityResult",
    "CapabilitySpec",
    "ConnectionState",
    "ContentPart",
    "ProviderConnection",
    "make_local_name",
    "DEFAULT_TRANSPORTS",
    "McpProviderSession",
    "ProviderSession",
    "SseTransport",
    "StdioTransport",
    "StreamableHttpTransport",
    "TransportStrategy",
    "expand_env",
    "get_transport",
]
