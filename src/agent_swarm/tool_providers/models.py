"""Data types for tool providers and their capabilities."""

import base64
import binascii
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .config import ProviderConfig, TransportKind


class ConnectionState(str, Enum):
    """Connection lifecycle state for a provider."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


def make_local_name(prefix: str, provider_name: str, original_name: str) -> str:
    """Build the registry name of a capability: ``<prefix><provider>_<original>``."""
    return f"{prefix}{provider_name}_{original_name}"


@dataclass(frozen=True)
class CapabilitySpec:
    """A capability as a provider lists it, before normalization."""
    name: str
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CapabilityDescriptor:
    """Normalized description of one discovered capability.

    Attributes:
        local_name: Registry name, unique across all providers
        description: Human-readable description
        provider_name: Name of the provider exposing it
        original_name: Name the provider knows it by
        input_schema: JSON schema for the arguments
    """
    local_name: str
    description: str
    provider_name: str
    original_name: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    @property
    def display_description(self) -> str:
        """Description tagged with its provider."""
        return f"[MCP:{self.provider_name}] {self.description}"


@dataclass(frozen=True)
class ContentPart:
    """One part of a capability result.

    Exactly one of ``text`` or ``data`` is set. ``data`` holds the encoded
    payload of a non-textual part (image, audio, blob).
    """
    text: str | None = None
    data: str | bytes | None = None
    mime_type: str | None = None

    @property
    def size(self) -> int:
        """Byte count of the payload; base64 text is measured decoded."""
        if self.data is None:
            return 0
        if isinstance(self.data, bytes):
            return len(self.data)
        try:
            return len(base64.b64decode(self.data, validate=True))
        except (binascii.Error, ValueError):
            return len(self.data)


@dataclass(frozen=True)
class CapabilityResult:
    """Structured result of one capability call."""
    parts: tuple[ContentPart, ...] = ()
    is_error: bool = False


@dataclass
class ProviderConnection:
    """Mutable connection record for one configured provider.

    Only the manager mutates it.
    """
    config: ProviderConfig
    session: Any | None = None
    capabilities: list[CapabilityDescriptor] = field(default_factory=list)
    state: ConnectionState = ConnectionState.DISCONNECTED
    last_error: str | None = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def transport(self) -> TransportKind:
        return self.config.transport

    @property
    def connected(self) -> bool:
        return self.state == ConnectionState.CONNECTED and self.session is not None
