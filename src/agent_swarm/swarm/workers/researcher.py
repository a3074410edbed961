"""Researcher worker agent factory.

Creates a worker specialized for gathering information.
"""

from ...clients.base import BaseLLMClient
from ..prompts import RESEARCHER_PROMPT
from ..worker import WorkerAgent


def create_researcher_worker(client: BaseLLMClient) -> WorkerAgent:
    """Create a researcher worker agent.

    Args:
        client: LLM client for the worker.

    Returns:
        Configured researcher WorkerAgent.
    """
    return WorkerAgent(
        name="researcher",
        client=client,
        system_prompt=RESEARCHER_PROMPT,
        description="Gathers information, performs web searches, analyzes data",
    )
