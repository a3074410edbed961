"""Provider registry and client construction.

Provider SDKs are imported only when a client for that provider is built,
so a missing optional SDK only matters to the caller that asks for it.
"""

import importlib
import os
from typing import Any, NamedTuple

from .base import BaseLLMClient


class _Provider(NamedTuple):
    class_path: str
    api_key_env: str | None
    default_model: str | None


_PROVIDERS: dict[str, _Provider] = {
    "anthropic": _Provider("agent_swarm.clients.anthropic.AnthropicClient", "ANTHROPIC_API_KEY", "claude-sonnet-4-5-20250929"),
    "openai": _Provider("agent_swarm.clients.openai.OpenAIClient", "OPENAI_API_KEY", "gpt-4o"),
    "google": _Provider("agent_swarm.clients.google.GoogleClient", "GOOGLE_API_KEY", "gemini-2.0-flash"),
    "dummy": _Provider("agent_swarm.clients.dummy.DummyClient", None, None),
}


def get_available_providers() -> list[str]:
    return list(_PROVIDERS)


def _lookup(provider: str) -> _Provider:
    try:
        return _PROVIDERS[provider]
    except KeyError:
        raise ValueError(f"Unknown provider: {provider}. Available: {get_available_providers()}") from None


def get_default_model(provider: str) -> str | None:
    """Model used when ``create_client`` is given none.

    Raises:
        ValueError: If provider is unknown.
    """
    return _lookup(provider).default_model


def create_client(
    provider: str,
    model: str | None = None,
    options: dict[str, Any] | None = None,
    api_key: str | None = None,
) -> BaseLLMClient:
    """Build a client for ``provider``.

    Args:
        provider: One of :func:`get_available_providers`.
        model: Model override; the provider default otherwise.
        options: Generation options passed through to the client.
        api_key: Key override; read from the provider's env var otherwise.

    Raises:
        ValueError: If the provider is unknown, its key is missing, or an
            option is not supported by it.
    """
    entry = _lookup(provider)
    module_path, class_name = entry.class_path.rsplit(".", 1)
    client_class = getattr(importlib.import_module(module_path), class_name)

    if entry.api_key_env is None:
        return client_class(model=model) if model else client_class()

    resolved_key = api_key or os.getenv(entry.api_key_env)
    if not resolved_key:
        raise ValueError(f"{entry.api_key_env} not set in environment")
    return client_class(api_key=resolved_key, model=model or entry.default_model, options=options)
