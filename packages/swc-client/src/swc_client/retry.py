"""Configurable retry policies with tenacity.

This module provides:
- Async retry decorator factory using tenacity
- Exponential backoff with jitter between attempts
- An overall deadline for the whole attempt sequence
- Classification of transient HTTP statuses
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from swc_client.config import RetryConfig
from swc_client.observability import record_attempt, record_retry

P = ParamSpec("P")
R = TypeVar("R")

# Statuses worth another attempt; anything else is a definitive answer
RETRYABLE_STATUS_CODES: frozenset[int] = frozenset(
    {408, 413, 429, 500, 502, 503, 504, 521, 522, 524}
)


class TransientStatusError(Exception):
    """Raised inside an attempt when the response status is retryable.

    Carries the response so the last one can be handed back to the caller
    once attempts run out.
    """

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"Transient HTTP status {response.status_code}")
        self.response = response


# Default exceptions that trigger retry
DEFAULT_RETRY_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TransportError,
    TransientStatusError,
)


def raise_for_transient_status(response: httpx.Response) -> httpx.Response:
    """Raise TransientStatusError if the response status is retryable.

    Args:
        response: Response of one attempt.

    Returns:
        The response unchanged when its status is definitive.
    """
    if response.status_code in RETRYABLE_STATUS_CODES:
        raise TransientStatusError(response)
    return response


def create_retry_decorator(
    config: RetryConfig,
    *,
    retry_exceptions: tuple[type[Exception], ...] | None = None,
    operation_name: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Create an async retry decorator with the specified configuration.

    The wrapped coroutine is attempted up to ``config.max_attempts`` times
    while it raises one of ``retry_exceptions``. The attempt sequence as a
    whole is cancelled after ``config.deadline_seconds``, which surfaces as
    ``asyncio.TimeoutError``. When attempts run out the last exception is
    re-raised.

    Args:
        config: RetryConfig with retry policy settings.
        retry_exceptions: Exception types that trigger retry.
            Defaults to transport errors and transient HTTP statuses.
        operation_name: Name for logging purposes.

    Returns:
        Decorator function that adds retry behavior.

    Example:
        >>> @create_retry_decorator(RetryConfig(), operation_name="submit")
        ... async def post_code(text: str) -> httpx.Response:
        ...     return raise_for_transient_status(await http.post(url, json={"code": text}))
    """
    exceptions = retry_exceptions or DEFAULT_RETRY_EXCEPTIONS

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        op_name = operation_name or func.__name__

        async def attempts(*args: P.args, **kwargs: P.kwargs) -> R:
            last_exception: Exception | None = None

            try:
                async for attempt_state in AsyncRetrying(
                    retry=retry_if_exception_type(exceptions),
                    stop=stop_after_attempt(config.max_attempts),
                    wait=wait_exponential_jitter(
                        multiplier=config.initial_wait_seconds,
                        max=config.max_wait_seconds,
                        jitter=config.jitter_seconds,
                    ),
                    reraise=False,
                ):
                    with attempt_state:
                        attempt = attempt_state.retry_state.attempt_number
                        record_attempt(attempt)
                        try:
                            return await func(*args, **kwargs)
                        except exceptions as exc:
                            last_exception = exc
                            if attempt < config.max_attempts:
                                record_retry(
                                    operation=op_name,
                                    attempt=attempt,
                                    max_attempts=config.max_attempts,
                                    error=str(exc),
                                )
                            raise
            except RetryError:
                if last_exception is not None:
                    raise last_exception from None
                raise

            raise RuntimeError("Unexpected retry state")  # pragma: no cover

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            return await asyncio.wait_for(
                attempts(*args, **kwargs),
                timeout=config.deadline_seconds,
            )

        return wrapper

    return decorator
