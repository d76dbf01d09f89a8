"""Retry logic for opening provider connections, with exponential backoff.

Only establishing a request is retried (rate limiting, 5xx, timeouts while
connecting). Once a stream has started delivering events, a failure ends
the turn: there is no partial-turn resume.
"""

import asyncio
import random
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, ParamSpec, TypeVar

import structlog

from services.qwen_adapter.core.config.constants import LOG_PREVIEW_CHARS, RETRYABLE_STATUS_CODES
from services.qwen_adapter.core.config.settings import RetrySettings
from services.qwen_adapter.core.llm.exceptions import TransportError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


@dataclass
class RetryConfig:
    """Backoff policy for opening a provider request.

    ``max_retries`` counts attempts, not retries: 3 means one initial try
    plus two retries. Delays grow by ``exponential_base`` from
    ``initial_delay_seconds`` up to ``max_delay_seconds``, plus up to
    ``jitter_factor`` of random extra when ``jitter`` is on.
    """

    max_retries: int = 3
    initial_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True
    jitter_factor: float = 0.25
    retryable_status_codes: set[int] = field(default_factory=lambda: set(RETRYABLE_STATUS_CODES))

    @classmethod
    def from_settings(cls, settings: RetrySettings) -> "RetryConfig":
        return cls(
            max_retries=settings.max_retries,
            initial_delay_seconds=settings.initial_delay_seconds,
            max_delay_seconds=settings.max_delay_seconds,
        )


DEFAULT_RETRY_CONFIG = RetryConfig()


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Backoff delay in seconds for a 0-indexed retry attempt."""
    base = min(config.initial_delay_seconds * config.exponential_base**attempt, config.max_delay_seconds)
    if not config.jitter:
        return base
    return base * (1 + config.jitter_factor * random.random())


def is_retryable_error(error: Exception, config: RetryConfig) -> bool:
    """Whether a failure to open a request is worth another attempt.

    HTTP failures are judged by status code; network failures (no status)
    by the flag the transport set when mapping the httpx error. Anything
    that is not a TransportError is a bug or a caller error and is never
    retried.
    """
    if not isinstance(error, TransportError):
        return False
    if error.status_code is not None:
        return error.status_code in config.retryable_status_codes
    return error.retryable


def extract_retry_after(error: Exception) -> float | None:
    """Extract the Retry-After value recorded on a TransportError, if any."""
    details = getattr(error, "details", None) or {}
    retry_after = details.get("retry_after")
    if retry_after is None:
        return None
    try:
        return float(retry_after)
    except (TypeError, ValueError):
        return None


def next_delay(error: Exception, attempt: int, config: RetryConfig) -> float:
    """Delay before retry number ``attempt`` (1-indexed).

    A server-provided Retry-After wins over backoff, capped at
    max_delay_seconds.
    """
    retry_after = extract_retry_after(error)
    if retry_after:
        return min(retry_after, config.max_delay_seconds)
    return calculate_delay(attempt - 1, config)


def with_retry(
    config: RetryConfig | None = None,
    operation: str = "request",
) -> Callable[[Callable[P, Coroutine[Any, Any, T]]], Callable[P, Coroutine[Any, Any, T]]]:
    """Decorator retrying an async transport operation on retryable TransportErrors.

    Args:
        config: Retry configuration. Uses DEFAULT_RETRY_CONFIG if not provided.
        operation: Label for log events, e.g. "post_json" or "open_stream".

    Example:
        @with_retry(RetryConfig(max_retries=3), operation="open_stream")
        async def open_stream():
            ...
    """
    config = config or DEFAULT_RETRY_CONFIG

    def decorator(
        func: Callable[P, Coroutine[Any, Any, T]],
    ) -> Callable[P, Coroutine[Any, Any, T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            waited = 0.0
            for attempt in range(1, config.max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except TransportError as e:
                    if not is_retryable_error(e, config):
                        raise
                    if attempt == config.max_retries:
                        logger.error(
                            "transport_retries_exhausted",
                            operation=operation,
                            provider=e.provider,
                            status_code=e.status_code,
                            attempts=attempt,
                            waited_seconds=round(waited, 2),
                        )
                        raise

                    delay = next_delay(e, attempt, config)
                    waited += delay
                    logger.warning(
                        "transport_retry_scheduled",
                        operation=operation,
                        provider=e.provider,
                        status_code=e.status_code,
                        attempt=attempt,
                        max_retries=config.max_retries,
                        delay_seconds=round(delay, 2),
                        error=e.message[:LOG_PREVIEW_CHARS],
                    )
                    await asyncio.sleep(delay)

            # max_retries < 1 disables retrying
            return await func(*args, **kwargs)

        return wrapper

    return decorator
