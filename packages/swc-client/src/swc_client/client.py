"""Compiler service HTTP client.

This module provides CompilerClient, a thin async wrapper around
``httpx.AsyncClient`` that speaks the compiler service's two endpoints
with per-request retry, timeouts and tracing.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from swc_client.config import CompilerServiceConfig
from swc_client.errors import MalformedResponseError, RemoteError, ServiceConnectionError
from swc_client.models import (
    CODE_DONE,
    CODE_FAILED,
    CODE_PENDING,
    PollResult,
    PollStatus,
    SourcePayload,
    StatusResponseBody,
    SubmissionResult,
    SubmitData,
    SubmitResponseBody,
)
from swc_client.observability import get_logger, record_status, service_operation
from swc_client.retry import (
    TransientStatusError,
    create_retry_decorator,
    raise_for_transient_status,
)

if TYPE_CHECKING:
    from types import TracebackType

    from structlog.stdlib import BoundLogger

BodyT = TypeVar("BodyT", bound=BaseModel)


class CompilerClient:
    """Async client for the remote compiler service.

    Every call is one logical request: transient failures (transport errors,
    retryable HTTP statuses) are retried according to ``config.retry``, while
    definitive answers are returned or raised as-is.

    Attributes:
        config: Service configuration.

    Example:
        >>> async with CompilerClient(CompilerServiceConfig()) as client:
        ...     submission = await client.submit(payload)
        ...     result = await client.check_status(submission.job_id)
    """

    def __init__(
        self,
        config: CompilerServiceConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize CompilerClient.

        Args:
            config: Service configuration.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self.config = config
        self._log: BoundLogger = get_logger()
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(config.retry.response_timeout_seconds),
            transport=transport,
        )
        self._senders = {
            operation: create_retry_decorator(config.retry, operation_name=operation)(
                self._post_once
            )
            for operation in ("submit", "status")
        }

    async def __aenter__(self) -> CompilerClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def submit(self, payload: SourcePayload) -> SubmissionResult:
        """Upload source text and obtain a job identifier.

        Args:
            payload: Source text to compile.

        Returns:
            SubmissionResult carrying the job identifier.

        Raises:
            RemoteError: Non-200 status or nonzero application code.
            MalformedResponseError: Body could not be parsed.
            ServiceConnectionError: Service unreachable after all attempts.
        """
        url = self.config.submit_url
        with service_operation("submit", url=url) as span:
            response = await self._send("submit", url, {"code": payload.text})
            record_status(span, response.status_code)

            if response.status_code != 200:
                raise RemoteError(
                    f"request status error: {response.status_code}",
                    status_code=response.status_code,
                    body=response.text,
                )

            body = _parse_body(response, SubmitResponseBody)
            if body.code != CODE_DONE:
                raise RemoteError(
                    f"request data error: {response.text}",
                    status_code=response.status_code,
                    code=body.code,
                    body=response.text,
                )

            try:
                data = SubmitData.model_validate(body.data)
            except ValidationError as exc:
                raise MalformedResponseError(
                    f"submission accepted without a usable job identifier: {exc.error_count()} error(s)",
                    status_code=response.status_code,
                    body=response.text,
                ) from exc

        self._log.info("submit_completed", job_id=data.filename)
        return SubmissionResult(
            status_code=response.status_code,
            code=body.code,
            job_id=data.filename,
        )

    async def check_status(self, job_id: str, *, poll: int | None = None) -> PollResult:
        """Ask the service how a job is doing.

        Application codes and non-200 statuses are classified into a
        PollResult rather than raised; the poll loop decides what to do.

        Args:
            job_id: Job identifier from submit().
            poll: Poll number within the caller's loop, recorded on the span.

        Returns:
            PollResult for this single check.

        Raises:
            MalformedResponseError: Body could not be parsed, or a finished
                job carried no artifact text.
            ServiceConnectionError: Service unreachable after all attempts.
        """
        url = self.config.status_url
        with service_operation("status", url=url, job_id=job_id, poll=poll) as span:
            response = await self._send("status", url, {"filename": job_id})
            record_status(span, response.status_code)

            if response.status_code != 200:
                return PollResult(
                    status=PollStatus.HTTP_ERROR,
                    status_code=response.status_code,
                    body=response.text,
                )

            body = _parse_body(response, StatusResponseBody)
            return _classify(body, response)

    async def _post_once(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        response = await self._http.post(url, json=payload)
        return raise_for_transient_status(response)

    async def _send(self, operation: str, url: str, payload: dict[str, Any]) -> httpx.Response:
        """Run one logical request through the retry policy."""
        try:
            return await self._senders[operation](url, payload)
        except TransientStatusError as exc:
            # Attempts exhausted on a retryable status: report the status itself
            return exc.response
        except httpx.TransportError as exc:
            raise ServiceConnectionError(
                url=url,
                cause=str(exc) or type(exc).__name__,
            ) from exc
        except asyncio.TimeoutError as exc:
            raise ServiceConnectionError(
                "Compiler service request deadline exceeded",
                url=url,
                cause=f"deadline {self.config.retry.deadline_seconds}s",
            ) from exc


def _parse_body(response: httpx.Response, model: type[BodyT]) -> BodyT:
    """Decode a JSON body into the given wire model."""
    try:
        return model.model_validate(response.json())
    except ValueError as exc:
        # Covers both invalid JSON and pydantic ValidationError
        raise MalformedResponseError(
            status_code=response.status_code,
            body=response.text,
        ) from exc


def _classify(body: StatusResponseBody, response: httpx.Response) -> PollResult:
    """Map an application code onto a PollStatus."""
    if body.code == CODE_DONE:
        if not isinstance(body.data, str):
            raise MalformedResponseError(
                "finished job carried no artifact text",
                status_code=response.status_code,
                body=response.text,
            )
        return PollResult(
            status=PollStatus.DONE,
            status_code=response.status_code,
            code=body.code,
            artifact=body.data,
            body=response.text,
        )

    if body.code == CODE_PENDING:
        status = PollStatus.PENDING
    elif body.code == CODE_FAILED:
        status = PollStatus.FAILED
    else:
        status = PollStatus.UNKNOWN

    return PollResult(
        status=status,
        status_code=response.status_code,
        code=body.code,
        body=response.text,
    )
