"""Coder worker agent factory.

Creates a worker specialized for writing and modifying code.
"""

from ...clients.base import BaseLLMClient
from ..prompts import CODER_PROMPT
from ..worker import WorkerAgent


def create_coder_worker(client: BaseLLMClient) -> WorkerAgent:
    """Create a coder worker agent.

    Args:
        client: LLM client for the worker (coding-optimized model recommended).

    Returns:
        Configured coder WorkerAgent.
    """
    return WorkerAgent(
        name="coder",
        client=client,
        system_prompt=CODER_PROMPT,
        description="Writes and refactors code, creates files, implements features",
    )
