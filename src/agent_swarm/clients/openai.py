"""OpenAI chat completions client."""

import os
from typing import Any

import openai

from ..exceptions import AuthenticationError, ClientError, ProviderUnavailableError, RateLimitError
from ..types import FinishReason, ModelReply, UsageStats
from .base import BaseLLMClient


class OpenAIClient(BaseLLMClient):
    """Sends each prompt as one user message to ``chat.completions``."""

    provider = "openai"
    default_model = "gpt-4o"
    option_keys = frozenset({"temperature", "top_p", "max_tokens", "stop", "seed", "timeout"})

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(model or self.default_model, options)
        self.sdk = openai.OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            **({"timeout": self.options["timeout"]} if "timeout" in self.options else {}),
        )

    def _call(self, prompt: str) -> Any:
        return self.sdk.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **self._generation_options(),
        )

    def _parse(self, raw: Any) -> ModelReply:
        choice = raw.choices[0]
        usage = raw.usage
        return ModelReply(
            text=choice.message.content or "",
            finish_reason=FinishReason.LENGTH if choice.finish_reason == "length" else FinishReason.STOP,
            usage=UsageStats(usage.prompt_tokens, usage.completion_tokens) if usage else None,
        )

    def _map_error(self, error: Exception) -> ClientError | None:
        if isinstance(error, openai.AuthenticationError):
            return AuthenticationError(f"OpenAI rejected the API key: {error}")
        if isinstance(error, openai.RateLimitError):
            return RateLimitError("OpenAI rate limit exceeded")
        if isinstance(error, (openai.APIConnectionError, openai.InternalServerError)):
            return ProviderUnavailableError(f"OpenAI API unavailable: {error}")
        return None
