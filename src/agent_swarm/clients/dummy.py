"""Offline client used in tests and demos.

The dummy client never touches the network. It replays queued responses in
order and, once they run out, either echoes the prompt back or returns a
fixed reply. Every prompt it receives is recorded for inspection.
"""

from collections import deque
from typing import Iterable

from ..types import ModelReply
from .base import BaseLLMClient


class DummyClient(BaseLLMClient):
    """Deterministic stand-in for a real model."""

    provider = "dummy"

    def __init__(
        self,
        responses: Iterable[str] | None = None,
        default_response: str = "Task completed",
        echo: bool = False,
        model: str = "dummy",
    ):
        """Initialize the dummy client.

        Args:
            responses: Replies returned in order, one per call.
            default_response: Reply once ``responses`` is exhausted.
            echo: Return the prompt itself instead of ``default_response``.
            model: Name reported in logs.
        """
        super().__init__(model)
        self._responses = deque(responses or [])
        self.default_response = default_response
        self.echo = echo
        self.prompts: list[str] = []

    def queue(self, *responses: str) -> None:
        """Append replies to the queue."""
        self._responses.extend(responses)

    def _call(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._responses:
            return self._responses.popleft()
        return prompt if self.echo else self.default_response

    def _parse(self, raw: str) -> ModelReply:
        return ModelReply(text=raw)
