from abc import ABC, abstractmethod
from typing import Any


class BaseTool(ABC):
    """Abstract base class for all tools.

    Tools are invoked by the tool agent with keyword arguments parsed from
    the model's reply and return text observations.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Return the tool description."""
        pass

    @property
    def parameters(self) -> dict[str, Any]:
        """Return the JSON schema for tool parameters."""
        return {"type": "object", "properties": {}}

    @abstractmethod
    async def execute(self, /, **kwargs) -> Any:
        """Execute the tool with the given arguments."""
        pass

    def to_schema(self) -> dict[str, Any]:
        """Return the tool schema for LLM function calling."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }
