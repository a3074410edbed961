"""Tests for the router agent."""

from agent_swarm.clients.dummy import DummyClient
from agent_swarm.swarm.planning import Delegation
from agent_swarm.swarm.router import RouterAgent


class TestPlanDelegations:
    def test_uses_parsed_plan(self):
        client = DummyClient(responses=[
            "DELEGATION:\n- agent: coder\n- task: write X\n- agent: reviewer\n- task: review X"
        ])
        router = RouterAgent(client)

        assert router.plan_delegations("build X") == [
            Delegation("coder", "write X"),
            Delegation("reviewer", "review X"),
        ]

    def test_planning_prompt_contains_role_and_task(self):
        client = DummyClient()
        RouterAgent(client).plan_delegations("build X")
        prompt = client.prompts[0]
        assert "You are the Router Agent" in prompt
        assert "- agent: <agent_name>" in prompt
        assert prompt.endswith("Task: build X")

    def test_falls_back_to_keywords(self):
        router = RouterAgent(DummyClient(responses=["no plan here"]))
        task = "review this function for security issues"
        assert router.plan_delegations(task) == [Delegation("reviewer", task)]

    def test_planning_failure_falls_back(self, mock_client):
        mock_client.complete.side_effect = RuntimeError("offline")
        router = RouterAgent(mock_client)
        assert router.plan_delegations("anything") == [Delegation("coder", "anything")]

    def test_custom_worker_descriptions(self):
        client = DummyClient()
        RouterAgent(client, "- tester: runs tests").plan_delegations("x")
        assert "- tester: runs tests" in client.prompts[0]


class TestSynthesize:
    def test_returns_model_output_verbatim(self):
        client = DummyClient(responses=["  final report  "])
        router = RouterAgent(client)
        result = router.synthesize([Delegation("coder", "a")], ["done"])
        assert result == "  final report  "
        assert "1. [coder] a\n   Result: done" in client.prompts[0]
