"""The model-call contract shared by every provider.

Agents depend on exactly one method, :meth:`BaseLLMClient.complete`: a
prompt goes in, reply text comes out. A provider supplies three hooks:

- ``_call(prompt)`` sends the prompt through its SDK and returns the raw response
- ``_parse(raw)`` turns that response into a :class:`ModelReply`
- ``_map_error(error)`` translates an SDK exception into one of ours

Rate limits and unavailable providers are retried with backoff; every other
failure reaches the caller.
"""

import functools
import random
import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable, TypeVar

from ..exceptions import (
    ClientError,
    InvalidResponseError,
    ProviderUnavailableError,
    RateLimitError,
)
from ..logging import get_logger
from ..types import ModelReply

logger = get_logger(__name__)

T = TypeVar("T")

RETRYABLE_ERRORS = (RateLimitError, ProviderUnavailableError)


def backoff_delays(
    retries: int,
    initial_delay: float,
    max_delay: float,
    factor: float,
    jitter: bool,
) -> Iterator[float]:
    """Yield the pause before each retry, growing by ``factor`` up to ``max_delay``."""
    delay = initial_delay
    for _ in range(retries):
        pause = min(delay, max_delay)
        yield pause * (0.5 + random.random()) if jitter else pause
        delay *= factor


def with_retry(
    max_retries: int = 3,
    initial_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a call on rate limits and provider outages.

    Example:
        @with_retry(max_retries=2)
        def ask():
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            pauses = backoff_delays(max_retries, initial_delay, max_delay, exponential_base, jitter)
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    pause = next(pauses, None)
                    if pause is None:
                        logger.warning(f"{func.__name__} still failing after {max_retries} retries: {e}")
                        raise
                    attempt += 1
                    logger.info(f"{func.__name__} retry {attempt}/{max_retries} in {pause:.1f}s: {e}")
                    time.sleep(pause)

        return wrapper
    return decorator


class BaseLLMClient(ABC):
    """One model, reached through one provider SDK.

    Subclasses list the generation options they forward in ``option_keys``;
    anything else in ``options`` is rejected at construction.
    """

    provider: str = ""
    option_keys: frozenset[str] = frozenset()

    def __init__(self, model: str, options: dict[str, Any] | None = None):
        self.model = model
        self.options = dict(options or {})
        unknown = set(self.options) - self.option_keys
        if unknown:
            raise ValueError(f"Unsupported options for {self.provider or type(self).__name__}: {sorted(unknown)}")

    @with_retry()
    def complete(self, prompt: str) -> str:
        """Send one prompt and return the reply text, possibly empty."""
        with self._translated_errors():
            raw = self._call(prompt)

        try:
            reply = self._parse(raw)
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise InvalidResponseError(f"Could not read {self.provider} response: {e}") from e

        if reply.usage:
            logger.debug(f"{self.provider}/{self.model} used {reply.usage.total_tokens} tokens")
        if reply.truncated:
            logger.warning(f"{self.provider}/{self.model} reply was cut off at the token limit")
        return reply.text

    def _generation_options(self, renames: dict[str, str] | None = None) -> dict[str, Any]:
        """Configured options to forward to the SDK, optionally renamed."""
        renames = renames or {}
        return {renames.get(key, key): value for key, value in self.options.items() if key != "timeout"}

    @contextmanager
    def _translated_errors(self) -> Iterator[None]:
        try:
            yield
        except ClientError:
            raise
        except Exception as e:
            mapped = self._map_error(e)
            if mapped is None:
                raise
            raise mapped from e

    @abstractmethod
    def _call(self, prompt: str) -> Any:
        """Send the prompt as a single user turn and return the SDK response."""

    @abstractmethod
    def _parse(self, raw: Any) -> ModelReply:
        """Normalize an SDK response."""

    def _map_error(self, error: Exception) -> ClientError | None:
        """Our exception for an SDK error, or None to let it propagate unchanged."""
        return None
