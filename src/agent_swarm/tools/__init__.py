"""Tool implementations.

All tools inherit from BaseTool and implement the async execute method.
"""

from .base import BaseTool
from .demo import GreetUserTool, ReverseTextTool, get_demo_tools
from .providers import (
    ListCapabilitiesTool,
    ListProvidersTool,
    ProviderCapabilityTool,
    ProviderHealthCheckTool,
    get_provider_admin_tools,
)
from .registry import ToolRegistry

__all__ = [
    "BaseTool",
    "ToolRegistry",
    "GreetUserTool",
    "ReverseTextTool",
    "ProviderCapabilityTool",
    "ListProvidersTool",
    "ListCapabilitiesTool",
    "ProviderHealthCheckTool",
    "get_demo_tools",
    "get_provider_admin_tools",
]
