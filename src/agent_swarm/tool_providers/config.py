"""Tool provider configuration.

Providers are declared in a JSON document with a ``servers`` array::

    {
      "servers": [
        {"name": "files", "transport": "stdio", "command": "npx",
         "args": ["-y", "@modelcontextprotocol/server-filesystem", "."]},
        {"name": "search", "transport": "http", "url": "http://localhost:8000/mcp"}
      ]
    }

Loading never raises: a malformed document is logged and treated as an
empty provider set.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..exceptions import ProviderConfigError
from ..logging import get_logger

logger = get_logger(__name__)


class TransportKind(str, Enum):
    """Mechanism used to reach a provider."""
    STDIO = "stdio"
    HTTP = "http"
    STREAMABLE_HTTP = "streamable-http"
    SSE = "sse"


class ProviderConfig(BaseModel):
    """Configuration for one tool provider."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1, description="Unique name for the provider")
    transport: TransportKind = Field(default=TransportKind.STDIO)
    command: str | None = Field(default=None, description="Command to run for stdio transport")
    args: list[str] = Field(default_factory=list, description="Arguments for the command")
    url: str | None = Field(default=None, description="URL for http/sse transports")
    env: dict[str, str] = Field(default_factory=dict, description="Extra environment for stdio")
    headers: dict[str, str] = Field(default_factory=dict, description="HTTP headers for http/sse")
    enabled: bool = Field(default=True)

    @model_validator(mode="after")
    def _check_transport_fields(self) -> "ProviderConfig":
        if self.transport == TransportKind.STDIO and not self.command:
            raise ValueError("stdio transport requires 'command' field")
        if self.transport != TransportKind.STDIO and not self.url:
            raise ValueError(f"{self.transport.value} transport requires 'url' field")
        return self


def parse_provider_configs(data: Any) -> list[ProviderConfig]:
    """Validate a decoded configuration document.

    Entries with ``enabled: false`` are dropped before validation.

    Raises:
        ProviderConfigError: If the document shape, an entry, or the set of
            provider names is invalid.
    """
    if not isinstance(data, dict):
        raise ProviderConfigError("configuration must be a JSON object")

    servers = data.get("servers", [])
    if not isinstance(servers, list):
        raise ProviderConfigError("'servers' must be a list")

    configs: list[ProviderConfig] = []
    seen: set[str] = set()
    for index, entry in enumerate(servers):
        if isinstance(entry, dict) and entry.get("enabled") is False:
            continue
        try:
            config = ProviderConfig.model_validate(entry)
        except ValidationError as e:
            raise ProviderConfigError(f"invalid provider entry #{index}: {e}") from e
        if config.name in seen:
            raise ProviderConfigError(f"duplicate provider name: {config.name}")
        seen.add(config.name)
        configs.append(config)

    return configs


def load_provider_configs(path: str | Path) -> list[ProviderConfig]:
    """Load enabled provider configurations from a JSON file.

    Args:
        path: Path to the configuration document.

    Returns:
        Validated configurations, empty when the file is missing or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.is_file():
        logger.warning(f"tool provider config file not found: {config_path}")
        return []

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error(f"invalid JSON in tool provider config {config_path}: {e}")
        return []
    except OSError as e:
        logger.error(f"could not read tool provider config {config_path}: {e}")
        return []

    try:
        configs = parse_provider_configs(data)
    except ProviderConfigError as e:
        logger.error(f"error loading tool provider config {config_path}: {e}")
        return []

    logger.info(f"loaded {len(configs)} tool provider config(s) from {config_path}")
    return configs
