"""Swarm orchestration engine.

A router decomposes a task into delegations, the orchestrator runs them one
after another against specialist workers, and the router synthesizes the
results. Every delegation and result is recorded in a message log.

Architecture:
    SwarmOrchestrator
        |
        +-- RouterAgent.plan_delegations(task)
        +-- for each delegation: WorkerAgent.execute(subtask, context)
        +-- RouterAgent.synthesize(delegations, results)
        |
        v
    MessageLog (task / result messages)

Example usage:
    from agent_swarm.clients import create_client
    from agent_swarm.swarm import create_swarm

    swarm = create_swarm(create_client("anthropic"))
    report = swarm.execute("Implement a CSV parser and review it")
"""

from .message_log import Message, MessageKind, MessageLog
from .orchestrator import SwarmOrchestrator, create_swarm
from .planning import (
    Delegation,
    build_synthesis_prompt,
    keyword_delegations,
    parse_delegation_plan,
)
from .router import RouterAgent
from .worker import WorkerAgent
from .workers import (
    create_coder_worker,
    create_researcher_worker,
    create_reviewer_worker,
)

__all__ = [
    # core classes
    "SwarmOrchestrator",
    "RouterAgent",
    "WorkerAgent",
    "MessageLog",
    "Message",
    "MessageKind",
    "Delegation",
    # planning helpers
    "build_synthesis_prompt",
    "keyword_delegations",
    "parse_delegation_plan",
    # factory functions
    "create_swarm",
    "create_coder_worker",
    "create_researcher_worker",
    "create_reviewer_worker",
]
