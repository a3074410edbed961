"""Single-agent think/act loop with tool calls.

The agent asks the model for an answer, lets it request at most one tool
per task, feeds the observation back and records everything in
conversation memory. Provider capabilities become tools through an
explicit, awaited registration step in :meth:`ToolAgent.create`.
"""

import json
from typing import Any, Iterable

from anyio import to_thread

from .clients.base import BaseLLMClient
from .exceptions import ToolExecutionError, ToolNotFoundError
from .logging import get_logger
from .memory import ConversationMemory
from .tool_providers.manager import ToolProviderManager
from .tools.base import BaseTool
from .tools.providers import get_provider_admin_tools
from .tools.registry import ToolRegistry

logger = get_logger(__name__)

TOOL_SYSTEM_PROMPT = """You are an expert AI agent following the Think-Act-Reflect loop.
You have access to the following tools:
{tool_descriptions}

If you need a tool, respond ONLY with a JSON object using the schema:
{{"action": "<tool_name>", "args": {{"param": "value"}}}}
If no tool is needed, reply directly with the final answer."""


def extract_tool_call(text: str) -> tuple[str, dict[str, Any]] | None:
    """Find a tool request in a model reply.

    Accepts a JSON object with ``action`` or ``tool`` plus ``args`` or
    ``input``, or a line starting with ``Action:`` (no arguments).

    Returns:
        ``(tool_name, args)``, or None when the reply requests no tool.
    """
    cleaned = text.strip()

    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        payload = None

    if isinstance(payload, dict):
        action = payload.get("action") or payload.get("tool")
        args = payload.get("args") or payload.get("input") or {}
        if action:
            return str(action), args if isinstance(args, dict) else {}

    for line in cleaned.splitlines():
        if line.lower().startswith("action:"):
            action = line.split(":", 1)[1].strip()
            if action:
                return action, {}

    return None


def format_context_messages(messages: Iterable[dict[str, str]]) -> str:
    """Flatten context messages to ``ROLE: content`` lines."""
    return "\n".join(f"{(m.get('role') or '').upper()}: {m.get('content') or ''}" for m in messages)


class ToolAgent:
    """Agent that answers tasks, optionally through one tool call each.

    Build it with :meth:`create` when provider capabilities are wanted, so
    they are registered before the first task runs.
    """

    def __init__(
        self,
        client: BaseLLMClient,
        registry: ToolRegistry | None = None,
        memory: ConversationMemory | None = None,
        max_context_messages: int = 10,
        provider_manager: ToolProviderManager | None = None,
    ):
        """Initialize the agent.

        Args:
            client: Model client.
            registry: Tools available to the agent.
            memory: Conversation memory; defaults to ``agent_memory.json``.
            max_context_messages: History entries shown before summarizing.
            provider_manager: Manager to shut down with the agent.
        """
        self.client = client
        self.registry = registry if registry is not None else ToolRegistry()
        self.memory = memory if memory is not None else ConversationMemory()
        self.max_context_messages = max_context_messages
        self.provider_manager = provider_manager

    @classmethod
    async def create(
        cls,
        client: BaseLLMClient,
        tools: Iterable[BaseTool] = (),
        memory: ConversationMemory | None = None,
        provider_manager: ToolProviderManager | None = None,
        max_context_messages: int = 10,
    ) -> "ToolAgent":
        """Build an agent with every tool registered up front.

        When a provider manager is given it is initialized here, and its
        capabilities and admin tools are registered before returning.
        """
        registry = ToolRegistry(tools)

        if provider_manager is not None:
            await provider_manager.initialize()
            registry.register_all(get_provider_admin_tools(provider_manager))
            for tool in provider_manager.build_tools():
                if tool.name in registry:
                    logger.warning(f"provider tool '{tool.name}' shadows a local tool, skipping")
                    continue
                registry.register(tool)

        logger.info(f"agent ready with {len(registry)} tools: {', '.join(registry.names())}")
        return cls(
            client,
            registry=registry,
            memory=memory,
            max_context_messages=max_context_messages,
            provider_manager=provider_manager,
        )

    def build_system_prompt(self) -> str:
        descriptions = self.registry.descriptions() or "(no tools available)"
        return TOOL_SYSTEM_PROMPT.format(tool_descriptions=descriptions)

    async def _complete(self, prompt: str) -> str:
        return await to_thread.run_sync(self.client.complete, prompt)

    async def run_tool(self, name: str, args: dict[str, Any]) -> str:
        """Run one tool and return its observation text."""
        try:
            return await self.registry.execute(name, args)
        except ToolNotFoundError:
            return f"Requested tool '{name}' is not registered."
        except ToolExecutionError as e:
            logger.warning(str(e))
            return f"Error executing tool '{name}': {e.cause}"

    async def act(self, task: str) -> str:
        """Answer a task, running at most one requested tool.

        Returns:
            The final answer, or ``Error generating response: ...`` if a
            model call fails.
        """
        self.memory.add_entry("user", task)
        system_prompt = self.build_system_prompt()

        try:
            context = self.memory.get_context_window(system_prompt, self.max_context_messages)
            first_reply = await self._complete(f"{format_context_messages(context)}\n\nCurrent Task: {task}")

            final_response = first_reply
            tool_call = extract_tool_call(first_reply)
            if tool_call is not None:
                name, args = tool_call
                logger.info(f"running tool '{name}'")
                observation = await self.run_tool(name, args)

                self.memory.add_entry("assistant", first_reply)
                self.memory.add_entry("tool", f"{name} output: {observation}")

                context = self.memory.get_context_window(system_prompt, self.max_context_messages)
                follow_up = (
                    f"{format_context_messages(context)}\n\n"
                    f"Tool '{name}' observation: {observation}\n"
                    "Use the observation above to craft the final answer for the user. "
                    "Do not request additional tool calls."
                )
                final_response = await self._complete(follow_up)
        except Exception as e:
            logger.error(f"model call failed: {e}")
            return f"Error generating response: {e}"

        self.memory.add_entry("assistant", final_response)
        return final_response

    async def shutdown(self) -> None:
        """Close the provider manager, if any."""
        if self.provider_manager is not None:
            await self.provider_manager.shutdown()
