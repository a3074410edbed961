"""Append-only log of messages exchanged between swarm agents."""

import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class MessageKind(Enum):
    """What a logged message carries."""
    TASK = "task"
    RESULT = "result"


@dataclass(frozen=True)
class Message:
    """One inter-agent message.

    Attributes:
        sender: Identity of the agent that sent the message
        recipient: Identity of the agent the message is addressed to
        kind: Whether the message delegates a task or reports a result
        content: Message text
        timestamp: Nanosecond timestamp, strictly increasing within a log
    """
    sender: str
    recipient: str
    kind: MessageKind
    content: str
    timestamp: int = field(default_factory=time.time_ns)

    def involves(self, identity: str) -> bool:
        """Whether ``identity`` sent or received this message."""
        return self.sender == identity or self.recipient == identity

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary representation."""
        return {
            "from": self.sender,
            "to": self.recipient,
            "kind": self.kind.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }


class _Selection:
    """Lazy view over the log filtered by one identity.

    Each iteration starts over from the beginning of the log, so the
    same selection can be walked several times.
    """

    def __init__(self, log: "MessageLog", identity: str):
        self._log = log
        self._identity = identity

    def __iter__(self) -> Iterator[Message]:
        for message in self._log.all():
            if message.involves(self._identity):
                yield message

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        return f"_Selection(identity='{self._identity}')"


class MessageLog:
    """Thread-safe append-only message store.

    Appends are serialized under a lock so timestamps stay strictly
    increasing in append order even when the wall clock does not advance.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._lock = threading.Lock()
        self._last_timestamp = 0

    def append(
        self,
        sender: str,
        recipient: str,
        kind: MessageKind,
        content: str,
    ) -> Message:
        """Record a message and return it."""
        with self._lock:
            timestamp = max(time.time_ns(), self._last_timestamp + 1)
            self._last_timestamp = timestamp
            message = Message(
                sender=sender,
                recipient=recipient,
                kind=kind,
                content=content,
                timestamp=timestamp,
            )
            self._messages.append(message)
            return message

    def query(self, identity: str) -> _Selection:
        """Messages sent by or addressed to ``identity``, in append order."""
        return _Selection(self, identity)

    def all(self) -> tuple[Message, ...]:
        """Snapshot of every message in append order."""
        with self._lock:
            return tuple(self._messages)

    def reset(self) -> None:
        """Remove every message."""
        with self._lock:
            self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)
