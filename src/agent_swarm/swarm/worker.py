"""Worker agent for the swarm.

Workers are specialists that execute one delegated sub-task per call. They
keep no state between calls; whatever they need to know about earlier work
arrives as context messages.
"""

from typing import Iterable

from ..clients.base import BaseLLMClient
from ..logging import get_logger
from .message_log import Message

logger = get_logger(__name__)


class WorkerAgent:
    """A specialized agent for executing delegated tasks.

    Workers differ only in their name and the fixed system prompt that
    prefixes every call (e.g., coder, researcher, reviewer).
    """

    def __init__(
        self,
        name: str,
        client: BaseLLMClient,
        system_prompt: str,
        description: str = "",
    ):
        """Initialize a worker agent.

        Args:
            name: Unique identifier for this worker (e.g., "coder", "researcher").
            client: The LLM client for this worker.
            system_prompt: Role instruction prefixed to every prompt.
            description: Human-readable description for the router.
        """
        self.name = name
        self.description = description or f"Worker agent: {name}"
        self._client = client
        self._system_prompt = system_prompt

    @property
    def client(self) -> BaseLLMClient:
        return self._client

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def build_prompt(self, task: str, context: Iterable[Message] | None = None) -> str:
        """Render the single prompt sent for ``task``.

        Args:
            task: The task description.
            context: Prior messages, rendered as ``[sender]: content`` lines.

        Returns:
            Role instruction, task and (when non-empty) the context block.
        """
        parts = [self._system_prompt, f"\n\nTask: {task}"]

        messages = list(context or ())
        if messages:
            lines = "".join(f"[{msg.sender}]: {msg.content}\n" for msg in messages)
            parts.append(f"\n\nContext from other agents:\n{lines}")

        return "".join(parts)

    def execute(self, task: str, context: Iterable[Message] | None = None) -> str:
        """Execute a task and return the raw model reply.

        Exactly one model call is made. Failures propagate to the caller,
        which decides how to report them.

        Args:
            task: The task description to execute.
            context: Prior messages involving this worker.

        Returns:
            The model's reply text.
        """
        prompt = self.build_prompt(task, context)
        logger.debug(f"{self.name} executing task ({len(prompt)} prompt chars)")
        return self._client.complete(prompt).strip()

    def __repr__(self) -> str:
        return f"WorkerAgent(name='{self.name}')"
