"""Google Gemini client on the google-genai SDK.

Errors are classified by HTTP status code: 401/403 is an authentication
failure, 429 a rate limit, and any server error an outage.
"""

import os
from typing import Any

from google import genai
from google.genai import errors, types

from ..exceptions import AuthenticationError, ClientError, ProviderUnavailableError, RateLimitError
from ..types import FinishReason, ModelReply, UsageStats
from .base import BaseLLMClient


class GoogleClient(BaseLLMClient):
    provider = "google"
    default_model = "gemini-2.0-flash"
    option_keys = frozenset({"temperature", "top_p", "top_k", "max_tokens", "stop_sequences"})

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        options: dict[str, Any] | None = None,
    ):
        super().__init__(model or self.default_model, options)
        key = api_key or os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY")
        if not key:
            raise ValueError("Google API key not found. Set GOOGLE_API_KEY or GEMINI_API_KEY env var.")
        self.sdk = genai.Client(api_key=key)

    def _call(self, prompt: str) -> Any:
        config = types.GenerateContentConfig(
            **self._generation_options({"max_tokens": "max_output_tokens"})
        )
        return self.sdk.models.generate_content(model=self.model, contents=prompt, config=config)

    def _parse(self, raw: Any) -> ModelReply:
        candidate = raw.candidates[0]
        parts = candidate.content.parts if candidate.content else None
        text = "".join(part.text for part in parts or [] if part.text and not part.thought)

        metadata = raw.usage_metadata
        usage = None
        if metadata is not None:
            usage = UsageStats(
                metadata.prompt_token_count or 0,
                metadata.candidates_token_count or 0,
            )

        truncated = candidate.finish_reason == types.FinishReason.MAX_TOKENS
        return ModelReply(
            text=text,
            finish_reason=FinishReason.LENGTH if truncated else FinishReason.STOP,
            usage=usage,
        )

    def _map_error(self, error: Exception) -> ClientError | None:
        if isinstance(error, errors.ClientError):
            if error.code in (401, 403):
                return AuthenticationError(f"Google rejected the API key: {error}")
            if error.code == 429:
                return RateLimitError("Google rate limit exceeded")
        if isinstance(error, errors.ServerError):
            return ProviderUnavailableError(f"Google API unavailable: {error}")
        return None
