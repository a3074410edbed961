"""Delegation plan parsing, keyword fallback and synthesis prompt building.

Everything here is pure: the router feeds it model output and task text,
and gets back deterministic results.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

AGENT_PREFIX = "- agent:"
TASK_PREFIX = "- task:"

# scanned in this order; each matching set yields one delegation
FALLBACK_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("coder", ("code", "implement", "build", "create", "write")),
    ("reviewer", ("review", "check", "security", "quality", "analyze")),
    ("researcher", ("research", "search", "find", "information", "learn")),
)

DEFAULT_WORKER = "coder"
NO_RESULT = "No result"


@dataclass(frozen=True)
class Delegation:
    """One sub-task assigned to one worker."""
    worker: str
    task: str


def parse_delegation_plan(text: str) -> list[Delegation]:
    """Parse ``- agent:`` / ``- task:`` line pairs out of a planning response.

    A pending delegation is committed only once both fields were seen. An
    agent line arriving before the pending one got its task discards it.
    Lines outside that shape are ignored.

    Args:
        text: Raw planning response.

    Returns:
        Delegations in the order they appear.
    """
    delegations: list[Delegation] = []
    agent: str | None = None
    task: str | None = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(AGENT_PREFIX):
            if agent and task:
                delegations.append(Delegation(worker=agent, task=task))
            agent = line[len(AGENT_PREFIX):].strip() or None
            task = None
        elif line.startswith(TASK_PREFIX) and agent:
            task = line[len(TASK_PREFIX):].strip() or None

    if agent and task:
        delegations.append(Delegation(worker=agent, task=task))

    return delegations


def keyword_delegations(task: str) -> list[Delegation]:
    """Derive delegations from keywords in the task text.

    Matching is a case-insensitive substring test. Every delegation carries
    the original task text. When nothing matches, the coder gets the task.
    """
    lowered = task.lower()
    delegations = [
        Delegation(worker=worker, task=task)
        for worker, keywords in FALLBACK_KEYWORDS
        if any(keyword in lowered for keyword in keywords)
    ]
    return delegations or [Delegation(worker=DEFAULT_WORKER, task=task)]


def build_synthesis_prompt(
    delegations: Sequence[Delegation],
    results: Sequence[str],
) -> str:
    """Enumerate each delegation with its result for the synthesis call.

    A result that is missing or empty is rendered as ``No result``.
    """
    parts = ["Synthesize a final response based on the following agent outputs:\n\n"]
    for i, delegation in enumerate(delegations):
        result = results[i] if i < len(results) else None
        parts.append(f"{i + 1}. [{delegation.worker}] {delegation.task}\n")
        parts.append(f"   Result: {result or NO_RESULT}\n\n")
    parts.append("Provide a concise final report summarizing what was accomplished.")
    return "".join(parts)


def format_results(delegations: Iterable[Delegation], results: Sequence[str]) -> str:
    """Plain enumeration of results, used when synthesis itself fails."""
    lines = []
    for i, delegation in enumerate(delegations):
        result = results[i] if i < len(results) else None
        lines.append(f"{i + 1}. [{delegation.worker}] {result or NO_RESULT}")
    return "\n".join(lines)
