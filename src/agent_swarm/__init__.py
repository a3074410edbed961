"""Agent Swarm - router/worker orchestration with external tool providers.

This package provides a swarm orchestration engine that delegates tasks to
specialist workers, and a manager that connects to external tool providers
(MCP servers) and exposes their capabilities as uniformly callable tools.
"""

from .agent import ToolAgent, extract_tool_call
from .exceptions import (
    AgentError,
    ClientError,
    ToolError,
    ToolProviderError,
)
from .memory import ConversationMemory
from .swarm import (
    Delegation,
    Message,
    MessageKind,
    MessageLog,
    RouterAgent,
    SwarmOrchestrator,
    WorkerAgent,
    create_swarm,
)
from .tool_providers import (
    CapabilityDescriptor,
    ConnectionState,
    ProviderConfig,
    ToolProviderManager,
    load_provider_configs,
)
from .types import FinishReason, ModelReply, UsageStats

__all__ = [
    # swarm
    "SwarmOrchestrator",
    "RouterAgent",
    "WorkerAgent",
    "MessageLog",
    "Message",
    "MessageKind",
    "Delegation",
    "create_swarm",
    # tool providers
    "ToolProviderManager",
    "ProviderConfig",
    "CapabilityDescriptor",
    "ConnectionState",
    "load_provider_configs",
    # single agent
    "ToolAgent",
    "ConversationMemory",
    "extract_tool_call",
    # types
    "FinishReason",
    "ModelReply",
    "UsageStats",
    # exceptions
    "AgentError",
    "ClientError",
    "ToolError",
    "ToolProviderError",
]
