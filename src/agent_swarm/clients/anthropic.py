"""Anthropic Messages API client.

The Messages API requires ``max_tokens``; it defaults to 4096 here.
Only ``text`` blocks of the reply are kept.
"""

import os
from typing import Any

import anthropic

from ..exceptions import AuthenticationError, ClientError, ProviderUnavailableError, RateLimitError
from ..types import FinishReason, ModelReply, UsageStats
from .base import BaseLLMClient

DEFAULT_MAX_TOKENS = 4096


class AnthropicClient(BaseLLMClient):
    provider = "anthropic"
    default_model = "claude-sonnet-4-5-20250929"
    option_keys = frozenset({"temperature", "top_p", "top_k", "max_tokens", "stop_sequences", "timeout"})

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(model or self.default_model, options)
        self.sdk = anthropic.Anthropic(
            api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"),
            **({"timeout": self.options["timeout"]} if "timeout" in self.options else {}),
        )

    def _call(self, prompt: str) -> Any:
        options = self._generation_options()
        options.setdefault("max_tokens", DEFAULT_MAX_TOKENS)
        return self.sdk.messages.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **options,
        )

    def _parse(self, raw: Any) -> ModelReply:
        text = "".join(block.text for block in raw.content if block.type == "text")
        return ModelReply(
            text=text,
            finish_reason=FinishReason.LENGTH if raw.stop_reason == "max_tokens" else FinishReason.STOP,
            usage=UsageStats(raw.usage.input_tokens, raw.usage.output_tokens),
        )

    def _map_error(self, error: Exception) -> ClientError | None:
        if isinstance(error, anthropic.AuthenticationError):
            return AuthenticationError(f"Anthropic rejected the API key: {error}")
        if isinstance(error, anthropic.RateLimitError):
            return RateLimitError("Anthropic rate limit exceeded")
        if isinstance(error, (anthropic.APIConnectionError, anthropic.InternalServerError)):
            return ProviderUnavailableError(f"Anthropic API unavailable: {error}")
        return None
