"""Provider-neutral result of one model call.

Every client turns its SDK's response into a :class:`ModelReply`; callers
only ever see the reply text through ``BaseLLMClient.complete``.
"""

from dataclasses import dataclass
from enum import Enum


class FinishReason(Enum):
    """Why the model stopped generating."""
    STOP = "stop"
    LENGTH = "length"
    ERROR = "error"


@dataclass(frozen=True)
class UsageStats:
    """Token counts reported by the provider."""
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass(frozen=True)
class ModelReply:
    """Normalized reply to a single prompt.

    Attributes:
        text: Reply text, empty when the model produced none
        finish_reason: Why generation ended
        usage: Token counts, when the provider reports them
    """
    text: str = ""
    finish_reason: FinishReason = FinishReason.STOP
    usage: UsageStats | None = None

    @property
    def truncated(self) -> bool:
        return self.finish_reason == FinishReason.LENGTH
