"""Custom exceptions for swc-client.

This module defines the exception hierarchy:
- CompilerServiceError (base)
- InputError
- RemoteError
  - MalformedResponseError
- ServiceConnectionError
- PollTransientError
"""

from __future__ import annotations


class CompilerServiceError(Exception):
    """Base exception for all swc-client operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     await run_compile("main.js")
        ... except CompilerServiceError as e:
        ...     print(f"Compile error: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize CompilerServiceError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class InputError(CompilerServiceError):
    """The local source file is missing or unreadable.

    Raised before any network activity takes place.

    Example:
        >>> try:
        ...     read_source("/does/not/exist")
        ... except InputError as e:
        ...     print(e.path)
        /does/not/exist
    """

    def __init__(self, path: str, message: str | None = None, *, cause: str | None = None) -> None:
        """Initialize InputError.

        Args:
            path: The path that could not be read.
            message: Optional custom error message.
            cause: The underlying cause of the failure.
        """
        msg = message or f"File not found: {path}"
        details = {"cause": cause} if cause else {}
        super().__init__(msg, details=details)
        self.path = path
        self.cause = cause


class RemoteError(CompilerServiceError):
    """The compiler service rejected a request.

    Raised when:
    - The service answers with a non-200 HTTP status
    - The service answers 200 with a nonzero application ``code``

    Attributes:
        status_code: HTTP status of the response, if one was received.
        code: Application-level ``code`` from the response body, if any.
        body: Raw response body text, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialize RemoteError.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code of the response.
            code: Application-level code from the response body.
            body: Raw response body text.
        """
        details: dict[str, str] = {}
        if status_code is not None:
            details["status_code"] = str(status_code)
        if code is not None:
            details["code"] = str(code)
        super().__init__(message, details=details)
        self.status_code = status_code
        self.code = code
        self.body = body


class MalformedResponseError(RemoteError):
    """The compiler service answered with a body that could not be understood."""

    def __init__(
        self,
        message: str = "Malformed response from compiler service",
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """Initialize MalformedResponseError.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code of the response.
            body: Raw response body text.
        """
        super().__init__(message, status_code=status_code, body=body)


class ServiceConnectionError(CompilerServiceError):
    """Failed to reach the compiler service after all retry attempts.

    Raised when:
    - The endpoint is unreachable or refuses connections
    - Every attempt timed out
    - The overall request deadline expired
    """

    def __init__(
        self,
        message: str = "Failed to connect to compiler service",
        *,
        url: str | None = None,
        cause: str | None = None,
    ) -> None:
        """Initialize ServiceConnectionError.

        Args:
            message: Human-readable error description.
            url: The endpoint that was unreachable.
            cause: The underlying cause of the connection failure.
        """
        details: dict[str, str] = {}
        if url:
            details["url"] = url
        if cause:
            details["cause"] = cause
        super().__init__(message, details=details)
        self.url = url
        self.cause = cause


class PollTransientError(CompilerServiceError):
    """A single status poll did not produce a usable answer.

    The poller absorbs these and keeps polling; they are surfaced only
    through logging and as the last error of a timed-out run.
    """

    def __init__(self, job_id: str, reason: str) -> None:
        """Initialize PollTransientError.

        Args:
            job_id: The job being polled.
            reason: Why the poll was not conclusive.
        """
        super().__init__(f"Status check for {job_id} inconclusive: {reason}")
        self.job_id = job_id
        self.reason = reason
