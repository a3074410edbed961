"""Static registry of the tools an agent may call."""

from typing import Any, Iterable, Iterator, Mapping

from ..exceptions import ToolExecutionError, ToolNotFoundError
from ..logging import get_logger
from .base import BaseTool

logger = get_logger(__name__)


class ToolRegistry:
    """Mapping of tool name to tool, populated explicitly before use."""

    def __init__(self, tools: Iterable[BaseTool] = ()):
        self._tools: dict[str, BaseTool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: BaseTool) -> None:
        """Add a tool.

        Raises:
            ValueError: If a tool with the same name is already registered.
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool
        logger.debug(f"registered tool: {tool.name}")

    def register_all(self, tools: Iterable[BaseTool]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> BaseTool | None:
        return self._tools.get(name)

    def require(self, name: str) -> BaseTool:
        """Look up a tool that must exist.

        Raises:
            ToolNotFoundError: If no tool has that name.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        return tool

    async def execute(self, name: str, args: Mapping[str, Any] | None = None) -> str:
        """Run a tool by name and return its output as text.

        Raises:
            ToolNotFoundError: If no tool has that name.
            ToolExecutionError: If the tool itself fails.
        """
        tool = self.require(name)
        try:
            return str(await tool.execute(**dict(args or {})))
        except Exception as e:
            raise ToolExecutionError(name, e) from e

    def names(self) -> list[str]:
        return list(self._tools)

    def descriptions(self) -> str:
        """``- name: description`` lines, one per tool."""
        return "\n".join(f"- {tool.name}: {tool.description}" for tool in self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[BaseTool]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
