"""Custom exception hierarchy for the agent swarm.

This module defines all custom exceptions used throughout the package,
organized into logical categories: client errors, tool errors and
tool provider errors.

Most of these never reach the caller of the orchestrator or the provider
manager; they are raised internally and turned into result text at the
boundaries that own failure isolation.
"""


class AgentError(Exception):
    """Base exception for all agent errors."""


# =============================================================================
# Client Errors - Issues with LLM API interactions
# =============================================================================

class ClientError(AgentError):
    """Base class for LLM client errors."""


class AuthenticationError(ClientError):
    """API key is invalid or missing."""


class RateLimitError(ClientError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: float | None = None):
        self.retry_after = retry_after
        if retry_after:
            message = f"{message}. Retry after: {retry_after}s"
        super().__init__(message)


class ProviderUnavailableError(ClientError):
    """Provider API is temporarily unavailable."""


class InvalidResponseError(ClientError):
    """Response from provider could not be parsed."""


# =============================================================================
# Tool Errors - Issues with tool registration and execution
# =============================================================================

class ToolError(AgentError):
    """Base class for tool errors."""


class ToolNotFoundError(ToolError):
    """Requested tool does not exist."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Tool not found: {tool_name}")


class ToolExecutionError(ToolError):
    """Tool execution failed."""

    def __init__(self, tool_name: str, cause: Exception | str):
        self.tool_name = tool_name
        self.cause = cause
        super().__init__(f"Tool '{tool_name}' execution failed: {cause}")


# =============================================================================
# Tool Provider Errors - Issues with external capability providers
# =============================================================================

class ToolProviderError(AgentError):
    """Base class for tool provider errors."""


class ProviderConfigError(ToolProviderError):
    """Provider configuration document is malformed."""


class ProviderConnectionError(ToolProviderError):
    """A session to a provider could not be established."""

    def __init__(self, provider_name: str, reason: str):
        self.provider_name = provider_name
        self.reason = reason
        super().__init__(f"Could not connect to provider '{provider_name}': {reason}")


class UnsupportedTransportError(ToolProviderError):
    """No transport strategy is registered for the requested kind."""

    def __init__(self, transport: str):
        self.transport = transport
        super().__init__(f"Unsupported transport: {transport}")
