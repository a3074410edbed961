"""Reviewer worker agent factory."""

from ...clients.base import BaseLLMClient
from ..prompts import REVIEWER_PROMPT
from ..worker import WorkerAgent


def create_reviewer_worker(client: BaseLLMClient) -> WorkerAgent:
    """Create a reviewer worker for code quality and security analysis."""
    return WorkerAgent(
        name="reviewer",
        client=client,
        system_prompt=REVIEWER_PROMPT,
        description="Reviews code quality, checks for security issues, analyzes logs",
    )
