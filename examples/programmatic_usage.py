import anyio

from agent_swarm.clients import create_client
from agent_swarm.config import get_settings
from agent_swarm.logging import setup_logging
from agent_swarm.memory import ConversationMemory
from agent_swarm.swarm import create_swarm
from agent_swarm.agent import ToolAgent
from agent_swarm.tool_providers import ToolProviderManager
from agent_swarm.tools.demo import get_demo_tools


def build_client(settings):
    # Pick whichever provider has a key; fall back to the offline dummy client
    provider = settings.detect_provider() or "dummy"
    return create_client(
        provider,
        model=settings.llm_model,
        api_key=settings.get_api_key_for_provider(provider),
    )


def run_swarm(client):
    """Delegate one task across the coder, reviewer and researcher workers."""
    swarm = create_swarm(client)

    result = swarm.execute("Implement a function to validate email addresses, then review it for security issues")
    print("Swarm result:")
    print(result)

    # Every task and result that passed between agents
    print("\nMessage log:")
    for message in swarm.get_message_log():
        print(f"  {message.sender} -> {message.recipient} [{message.kind.value}]: {message.content[:60]}")


async def run_tool_agent(client, settings):
    """Answer a question with local tools plus any configured MCP servers."""
    # Reads mcp_servers.json only when MCP_ENABLED=true
    manager = ToolProviderManager.from_settings(settings)

    agent = await ToolAgent.create(
        client,
        tools=get_demo_tools(),
        memory=ConversationMemory(settings.memory_file),
        provider_manager=manager,
        max_context_messages=settings.memory_max_messages,
    )
    try:
        print("\nAvailable tools:", ", ".join(agent.registry.names()))
        answer = await agent.act("Please greet Ada and tell her which MCP servers are connected.")
        print(f"Agent answer: {answer}")
    finally:
        await agent.shutdown()


def main():
    settings = get_settings()
    setup_logging(settings.log_level)

    client = build_client(settings)
    run_swarm(client)
    anyio.run(run_tool_agent, client, settings)


if __name__ == "__main__":
    main()
