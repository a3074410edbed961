"""Small local tools for demos and smoke tests."""

from typing import Any

from .base import BaseTool


class GreetUserTool(BaseTool):
    """Greets the user by name."""

    @property
    def name(self) -> str:
        return "greet_user"

    @property
    def description(self) -> str:
        return "Greets the user by name. Args: name (string)"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Name of the person to greet"},
            },
            "required": ["name"],
        }

    async def execute(self, /, name: str = "there", **kwargs) -> str:
        return f"Hello, {name}! Welcome to the agent swarm."


class ReverseTextTool(BaseTool):
    """Reverses a string."""

    @property
    def name(self) -> str:
        return "reverse_text"

    @property
    def description(self) -> str:
        return "Reverses the given text string. Args: text (string)"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "text": {"type": "string", "description": "Text to reverse"},
            },
            "required": ["text"],
        }

    async def execute(self, /, text: str = "", **kwargs) -> str:
        return text[::-1]


def get_demo_tools() -> list[BaseTool]:
    """Get the local demo tools."""
    return [GreetUserTool(), ReverseTextTool()]
