"""Router agent: plans delegations and synthesizes their results."""

from typing import Sequence

from ..clients.base import BaseLLMClient
from ..logging import get_logger
from .planning import (
    Delegation,
    build_synthesis_prompt,
    keyword_delegations,
    parse_delegation_plan,
)
from .prompts import format_router_prompt
from .worker import WorkerAgent

logger = get_logger(__name__)

ROUTER_NAME = "router"


class RouterAgent(WorkerAgent):
    """Coordinator of the swarm.

    The router is itself a worker: planning sends the user task through
    :meth:`execute`, and synthesis sends an enumeration of results through
    the same client.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        worker_descriptions: str | None = None,
    ):
        """Initialize the router.

        Args:
            client: LLM client used for planning and synthesis.
            worker_descriptions: ``- name: description`` lines listing the
                workers the router may delegate to.
        """
        super().__init__(
            name=ROUTER_NAME,
            client=client,
            system_prompt=format_router_prompt(worker_descriptions),
            description="Analyzes tasks, delegates to specialists and synthesizes results",
        )

    def plan_delegations(self, task: str) -> list[Delegation]:
        """Turn a task into an ordered, non-empty list of delegations.

        A failed planning call counts as an empty plan. An empty plan falls
        back to keyword matching on the task text.
        """
        try:
            analysis = self.execute(task)
        except Exception as e:
            logger.warning(f"planning call failed, using keyword fallback: {e}")
            analysis = ""

        delegations = parse_delegation_plan(analysis)
        if not delegations:
            delegations = keyword_delegations(task)
            logger.info(f"no delegation plan parsed, keyword fallback chose {len(delegations)}")
        else:
            logger.info(f"delegation plan parsed with {len(delegations)} step(s)")

        return delegations

    def synthesize(self, delegations: Sequence[Delegation], results: Sequence[str]) -> str:
        """Merge per-delegation results into one report.

        Returns the model output verbatim. Model failures propagate.
        """
        prompt = build_synthesis_prompt(delegations, results)
        return self._client.complete(prompt)
