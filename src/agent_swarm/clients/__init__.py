"""Model clients.

Every client answers one prompt with one block of text through
:meth:`BaseLLMClient.complete`. Provider SDKs are imported lazily through
:func:`create_client`.
"""

from .base import BaseLLMClient, backoff_delays, with_retry
from .dummy import DummyClient
from .factory import create_client, get_available_providers, get_default_model

__all__ = [
    "BaseLLMClient",
    "DummyClient",
    "backoff_delays",
    "create_client",
    "get_available_providers",
    "get_default_model",
    "with_retry",
]
