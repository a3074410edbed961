"""Tests for worker agents and their factories."""

import pytest

from agent_swarm.clients.dummy import DummyClient
from agent_swarm.swarm.message_log import MessageKind, MessageLog
from agent_swarm.swarm.prompts import CODER_PROMPT, RESEARCHER_PROMPT, REVIEWER_PROMPT
from agent_swarm.swarm.worker import WorkerAgent
from agent_swarm.swarm.workers import (
    create_coder_worker,
    create_researcher_worker,
    create_reviewer_worker,
)


class TestWorkerAgent:
    def test_prompt_without_context(self, dummy_client):
        worker = WorkerAgent("coder", dummy_client, "ROLE")
        assert worker.build_prompt("do it") == "ROLE\n\nTask: do it"

    def test_no_context_same_as_empty_context(self, dummy_client):
        worker = WorkerAgent("coder", dummy_client, "ROLE")
        assert worker.build_prompt("do it", None) == worker.build_prompt("do it", [])

    def test_prompt_renders_context(self, dummy_client):
        log = MessageLog()
        log.append("router", "coder", MessageKind.TASK, "write X")
        log.append("coder", "router", MessageKind.RESULT, "wrote X")
        worker = WorkerAgent("coder", dummy_client, "ROLE")

        prompt = worker.build_prompt("refine X", log.query("coder"))

        assert prompt == (
            "ROLE\n\nTask: refine X"
            "\n\nContext from other agents:\n"
            "[router]: write X\n"
            "[coder]: wrote X\n"
        )

    def test_execute_makes_one_call(self, mock_client):
        mock_client.complete.return_value = "  result text \n"
        worker = WorkerAgent("coder", mock_client, "ROLE")

        assert worker.execute("do it") == "result text"
        mock_client.complete.assert_called_once_with("ROLE\n\nTask: do it")

    def test_execute_propagates_failures(self, mock_client):
        mock_client.complete.side_effect = RuntimeError("model down")
        worker = WorkerAgent("coder", mock_client, "ROLE")
        with pytest.raises(RuntimeError, match="model down"):
            worker.execute("do it")

    def test_default_description(self, dummy_client):
        assert WorkerAgent("x", dummy_client, "p").description == "Worker agent: x"


class TestWorkerFactories:
    @pytest.mark.parametrize(
        "factory,name,prompt",
        [
            (create_coder_worker, "coder", CODER_PROMPT),
            (create_reviewer_worker, "reviewer", REVIEWER_PROMPT),
            (create_researcher_worker, "researcher", RESEARCHER_PROMPT),
        ],
    )
    def test_factory(self, factory, name, prompt):
        client = DummyClient()
        worker = factory(client)
        assert worker.name == name
        assert worker.system_prompt == prompt
        assert worker.client is client
        assert worker.description
