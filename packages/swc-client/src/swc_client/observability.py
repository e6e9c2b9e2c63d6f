"""Structured logging and OpenTelemetry spans for swc-client.

This module provides:
- Structured logging setup via structlog, written through a dedicated
  handler on the ``swc.client`` stdlib logger
- One CLIENT span per compiler service request, annotated with the job,
  poll number, attempt count and final HTTP status
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TextIO

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

# Module-level logger, tracer and the handler installed by configure_logging
_logger: BoundLogger | None = None
_tracer: Tracer | None = None
_handler: logging.Handler | None = None

TRACER_NAME = "swc.client"

ATTR_OPERATION = "compiler.operation"
ATTR_JOB_ID = "compiler.job_id"
ATTR_POLL = "compiler.poll"
ATTR_ATTEMPTS = "compiler.attempts"
ATTR_URL = "http.url"
ATTR_STATUS_CODE = "http.status_code"


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Example:
        >>> get_logger().info("submit_completed", job_id="job42")
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(TRACER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def get_tracer() -> Tracer:
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Route swc-client log events to a stream.

    Safe to call repeatedly: each call replaces the handler installed by the
    previous one, so the latest level and stream always win, whatever the
    host has done to the root logger.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        json_format: If True, output JSON lines. If False, key=value text.
        add_timestamp: If True, add ISO timestamp to log entries.
        stream: Destination stream (default: stdout).
    """
    global _handler

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
    ]
    if add_timestamp:
        processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    stdlib_logger = logging.getLogger(TRACER_NAME)
    if _handler is not None:
        stdlib_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(stream or sys.stdout)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    stdlib_logger.addHandler(_handler)
    stdlib_logger.setLevel(getattr(logging, log_level.upper()))
    stdlib_logger.propagate = False


@contextmanager
def service_operation(
    operation: str,
    *,
    url: str,
    job_id: str | None = None,
    poll: int | None = None,
) -> Iterator[Span]:
    """Open the CLIENT span for one compiler service request.

    The caller records the response status with record_status(); the retry
    policy records attempts on the same span through record_attempt().

    Args:
        operation: "submit" or "status".
        url: Endpoint URL.
        job_id: Job being polled (status requests only).
        poll: 1-based poll number within the job's poll loop.

    Yields:
        The active span.

    Example:
        >>> with service_operation("status", url=url, job_id="job42", poll=3) as s:
        ...     response = await http.post(url, json={"filename": "job42"})
        ...     record_status(s, response.status_code)
    """
    attrs: dict[str, Any] = {ATTR_OPERATION: operation, ATTR_URL: url}
    if job_id is not None:
        attrs[ATTR_JOB_ID] = job_id
    if poll is not None:
        attrs[ATTR_POLL] = poll

    with get_tracer().start_as_current_span(
        f"compiler.{operation}",
        kind=SpanKind.CLIENT,
        attributes=attrs,
        record_exception=False,
        set_status_on_exception=False,
    ) as s:
        try:
            yield s
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            get_logger().debug("service_call_failed", operation=operation, error=str(exc))
            raise
        s.set_status(Status(StatusCode.OK))


def record_status(span: Span, status_code: int) -> None:
    """Record the HTTP status of the response the caller acted on."""
    span.set_attribute(ATTR_STATUS_CODE, status_code)


def record_attempt(attempt: int) -> None:
    """Record the attempt number on the current request span."""
    trace.get_current_span().set_attribute(ATTR_ATTEMPTS, attempt)


def record_retry(operation: str, attempt: int, max_attempts: int, error: str) -> None:
    """Log a failed attempt that will be retried and mark it on the span."""
    trace.get_current_span().add_event(
        "retry", {"attempt": attempt, "error": error}
    )
    get_logger().warning(
        "operation_retry",
        operation=operation,
        attempt=attempt,
        max_attempts=max_attempts,
        error=error,
    )
