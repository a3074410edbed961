"""JSON-file conversation memory with a summarizing context window.

The file holds ``{"summary": str, "history": [{"role", "content", "metadata"}]}``.
Older files that are a bare list of entries are still read.
"""

import json
from pathlib import Path
from typing import Any, Callable

from .logging import get_logger

logger = get_logger(__name__)

Summarizer = Callable[[list[dict[str, Any]], str], str]


def default_summarizer(old_messages: list[dict[str, Any]], previous_summary: str) -> str:
    """Fold old messages into the summary as ``role: content`` lines."""
    lines = []
    if previous_summary:
        lines.append(previous_summary.strip())
    for message in old_messages:
        lines.append(f"{message.get('role') or 'unknown'}: {message.get('content') or ''}")
    return "\n".join(lines).strip()


class ConversationMemory:
    """Append-only conversation history persisted after every change."""

    def __init__(self, memory_file: str | Path = "agent_memory.json"):
        self.memory_file = Path(memory_file)
        self.summary = ""
        self._history: list[dict[str, Any]] = []
        self._load()

    def _load(self) -> None:
        self.summary = ""
        self._history = []
        if not self.memory_file.exists():
            return

        try:
            data = json.loads(self.memory_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"could not decode memory file {self.memory_file}, starting fresh: {e}")
            return

        if isinstance(data, dict):
            self.summary = data.get("summary") or ""
            history = data.get("history")
            self._history = history if isinstance(history, list) else []
        elif isinstance(data, list):
            # legacy format
            self._history = data
        else:
            logger.warning(f"unexpected memory format in {self.memory_file}, starting fresh")

    def save(self) -> None:
        """Write summary and history to the memory file."""
        payload = {"summary": self.summary, "history": self._history}
        self.memory_file.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def add_entry(self, role: str, content: str, metadata: dict[str, Any] | None = None) -> None:
        """Append an entry and persist."""
        self._history.append({"role": role, "content": content, "metadata": metadata or {}})
        self.save()

    def get_history(self) -> list[dict[str, Any]]:
        """Full history, oldest first."""
        return list(self._history)

    def get_context_window(
        self,
        system_prompt: str,
        max_messages: int,
        summarizer: Summarizer | None = None,
    ) -> list[dict[str, str]]:
        """Build the messages to show the model.

        Returns the system message, then (when history exceeds
        ``max_messages``) a summary of everything older, then the most recent
        ``max_messages`` entries. A changed summary is persisted.

        Raises:
            ValueError: If ``system_prompt`` is empty or ``max_messages < 1``.
            TypeError: If the summarizer returns something other than a string.
        """
        if not system_prompt:
            raise ValueError("system_prompt is required to build the context window.")
        if max_messages < 1:
            raise ValueError("max_messages must be at least 1.")

        system_message = {"role": "system", "content": system_prompt}
        if len(self._history) <= max_messages:
            return [system_message] + [self._as_context(m) for m in self._history]

        older = [dict(m) for m in self._history[:-max_messages]]
        recent = self._history[-max_messages:]

        new_summary = (summarizer or default_summarizer)(older, self.summary)
        if not isinstance(new_summary, str):
            raise TypeError("Summarizer must return a string.")

        new_summary = new_summary.strip()
        if new_summary != self.summary:
            self.summary = new_summary
            self.save()

        summary_message = {"role": "system", "content": f"Previous Summary: {self.summary}"}
        return [system_message, summary_message] + [self._as_context(m) for m in recent]

    @staticmethod
    def _as_context(entry: dict[str, Any]) -> dict[str, str]:
        return {"role": entry.get("role", ""), "content": entry.get("content", "")}

    def clear(self) -> None:
        """Forget all history and the summary."""
        self._history = []
        self.summary = ""
        self.save()
