"""Swarm orchestrator.

Composes the router, the worker registry and the message log into the
end-to-end protocol: plan, delegate sequentially, synthesize.
"""

from types import MappingProxyType
from typing import Mapping

from ..clients.base import BaseLLMClient
from ..logging import get_logger
from .message_log import Message, MessageKind, MessageLog
from .planning import format_results
from .router import ROUTER_NAME, RouterAgent
from .worker import WorkerAgent
from .workers import (
    create_coder_worker,
    create_researcher_worker,
    create_reviewer_worker,
)

logger = get_logger(__name__)


class SwarmOrchestrator:
    """Runs tasks through the router and its workers.

    The orchestrator:
    1. Asks the router for a delegation plan
    2. Executes each delegation in order, logging task and result messages
    3. Turns unknown workers and worker failures into result strings
    4. Asks the router to synthesize the final report

    A partial failure never aborts a run.
    """

    def __init__(
        self,
        router: RouterAgent,
        workers: Mapping[str, WorkerAgent],
        message_log: MessageLog | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            router: Router used for planning and synthesis.
            workers: Mapping of worker names to worker instances. Copied
                and frozen; the registry cannot change afterwards.
            message_log: Log to record messages into. A fresh one by default.
        """
        self.router = router
        self._workers = MappingProxyType(dict(workers))
        self._log = message_log if message_log is not None else MessageLog()
        logger.info(f"swarm initialized with {len(self._workers)} worker(s)")

    @property
    def workers(self) -> Mapping[str, WorkerAgent]:
        """Read-only worker registry."""
        return self._workers

    @property
    def message_log(self) -> MessageLog:
        return self._log

    def execute(self, task: str) -> str:
        """Run a task through the swarm and return the final report.

        Args:
            task: The user's task or request.

        Returns:
            The synthesized report, or an error report if synthesis failed.
        """
        logger.info(f"task received: {task}")
        delegations = self.router.plan_delegations(task)

        results: list[str] = []
        for i, delegation in enumerate(delegations, start=1):
            name = delegation.worker
            logger.info(f"delegating {i}/{len(delegations)} to {name}: {delegation.task}")
            self._log.append(ROUTER_NAME, name, MessageKind.TASK, delegation.task)

            worker = self._workers.get(name)
            if worker is None:
                logger.warning(f"delegation addressed to unknown worker '{name}'")
                results.append(f"Error: Unknown agent '{name}'")
                continue

            context = self._log.query(name)
            try:
                result = worker.execute(delegation.task, context)
            except Exception as e:
                logger.warning(f"worker '{name}' failed: {e}")
                result = f"Error executing task: {e}"

            results.append(result)
            self._log.append(name, ROUTER_NAME, MessageKind.RESULT, result)
            logger.info(f"worker '{name}' finished")

        try:
            return self.router.synthesize(delegations, results)
        except Exception as e:
            logger.warning(f"synthesis failed: {e}")
            return f"Error synthesizing results: {e}\n\n{format_results(delegations, results)}"

    def get_message_log(self) -> tuple[Message, ...]:
        """Get the complete message log in append order."""
        return self._log.all()

    def reset(self) -> None:
        """Clear the message log."""
        self._log.reset()


def create_swarm(
    client: BaseLLMClient,
    worker_clients: Mapping[str, BaseLLMClient] | None = None,
    message_log: MessageLog | None = None,
) -> SwarmOrchestrator:
    """Build an orchestrator with the router and the three default workers.

    Args:
        client: Client shared by the router and every worker.
        worker_clients: Optional per-role overrides, keyed by worker name
            ("router", "coder", "reviewer", "researcher").
        message_log: Optional log to record into.

    Returns:
        Configured SwarmOrchestrator.
    """
    overrides = dict(worker_clients or {})

    def client_for(role: str) -> BaseLLMClient:
        return overrides.get(role, client)

    workers = {
        worker.name: worker
        for worker in (
            create_coder_worker(client_for("coder")),
            create_reviewer_worker(client_for("reviewer")),
            create_researcher_worker(client_for("researcher")),
        )
    }
    worker_descriptions = "\n".join(
        f"- {name}: {worker.description}" for name, worker in workers.items()
    )
    router = RouterAgent(client_for(ROUTER_NAME), worker_descriptions)
    return SwarmOrchestrator(router, workers, message_log=message_log)
