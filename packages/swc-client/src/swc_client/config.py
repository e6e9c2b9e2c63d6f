"""Pydantic configuration models for swc-client.

This module provides:
- RetryConfig: Per-call retry and timeout policy
- PollConfig: Status polling cadence and optional cutoff
- CompilerServiceConfig: Remote compiler service endpoints and output location
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "http://34.92.175.137"


class RetryConfig(BaseModel):
    """Retry policy for a single logical request to the compiler service.

    One logical request (a submission or a status check) is attempted up to
    ``max_attempts`` times on transient failures. Each attempt waits at most
    ``response_timeout_seconds`` for the server, and the whole attempt
    sequence is cut off after ``deadline_seconds``.

    Attributes:
        max_attempts: Maximum attempts per logical request (1-10, default 5).
        response_timeout_seconds: Per-attempt response timeout (default 15s).
        deadline_seconds: Overall deadline for the attempt sequence (default 30s).
        initial_wait_seconds: Initial backoff wait between attempts (default 0.5s).
        max_wait_seconds: Maximum backoff wait between attempts (default 5s).
        jitter_seconds: Random jitter added to the backoff (default 0.5s).

    Example:
        >>> config = RetryConfig(max_attempts=3)
        >>> config.deadline_seconds
        30.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_attempts: int = Field(
        default=5,
        ge=1,
        le=10,
        description="Maximum attempts per logical request",
    )
    response_timeout_seconds: float = Field(
        default=15.0,
        gt=0.0,
        le=300.0,
        description="Per-attempt response timeout in seconds",
    )
    deadline_seconds: float = Field(
        default=30.0,
        gt=0.0,
        le=3600.0,
        description="Overall deadline for all attempts of one request",
    )
    initial_wait_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=30.0,
        description="Initial backoff wait time in seconds",
    )
    max_wait_seconds: float = Field(
        default=5.0,
        ge=0.0,
        le=300.0,
        description="Maximum backoff wait time in seconds",
    )
    jitter_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Random jitter range in seconds",
    )

    @field_validator("deadline_seconds")
    @classmethod
    def deadline_must_cover_response_timeout(cls, v: float, info: object) -> float:
        """Validate that deadline_seconds >= response_timeout_seconds."""
        data = getattr(info, "data", {})
        timeout = data.get("response_timeout_seconds", 15.0)
        if v < timeout:
            msg = f"deadline_seconds ({v}) must be >= response_timeout_seconds ({timeout})"
            raise ValueError(msg)
        return v

    @field_validator("max_wait_seconds")
    @classmethod
    def max_wait_must_exceed_initial(cls, v: float, info: object) -> float:
        """Validate that max_wait_seconds >= initial_wait_seconds."""
        data = getattr(info, "data", {})
        initial = data.get("initial_wait_seconds", 0.5)
        if v < initial:
            msg = f"max_wait_seconds ({v}) must be >= initial_wait_seconds ({initial})"
            raise ValueError(msg)
        return v


class PollConfig(BaseModel):
    """Status polling policy.

    With both limits unset the poller keeps asking until the service reports
    the job as done. Setting either limit turns the loop into a bounded one
    that ends in the ``timed_out`` state.

    Attributes:
        interval_seconds: Sleep after a "still compiling" answer (default 2s).
        max_polls: Maximum status checks before giving up (None = unbounded).
        max_duration_seconds: Maximum time spent polling (None = unbounded).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    interval_seconds: float = Field(
        default=2.0,
        ge=0.0,
        le=600.0,
        description="Delay after a pending status in seconds",
    )
    max_polls: int | None = Field(
        default=None,
        ge=1,
        description="Maximum number of status checks (None = unbounded)",
    )
    max_duration_seconds: float | None = Field(
        default=None,
        gt=0.0,
        description="Maximum polling duration in seconds (None = unbounded)",
    )

    @property
    def bounded(self) -> bool:
        """Whether any polling cutoff is configured."""
        return self.max_polls is not None or self.max_duration_seconds is not None


class CompilerServiceConfig(BaseModel):
    """Remote compiler service configuration.

    Attributes:
        base_url: Service root URL (http:// or https://).
        submit_path: Path of the source submission endpoint.
        status_path: Path of the job status endpoint.
        output_dir: Directory the compiled artifact is written to.
        retry: Per-request retry policy.
        poll: Status polling policy.

    Example:
        >>> config = CompilerServiceConfig(base_url="http://localhost:8080/")
        >>> config.submit_url
        'http://localhost:8080/code'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=1,
        description="Compiler service root URL",
    )
    submit_path: str = Field(
        default="/code",
        description="Submission endpoint path",
    )
    status_path: str = Field(
        default="/status",
        description="Status endpoint path",
    )
    output_dir: str = Field(
        default=".",
        min_length=1,
        description="Directory for compiled artifacts",
    )
    retry: RetryConfig = Field(
        default_factory=RetryConfig,
        description="Retry policy configuration",
    )
    poll: PollConfig = Field(
        default_factory=PollConfig,
        description="Polling policy configuration",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url_format(cls, v: str) -> str:
        """Validate URL format (must be http:// or https://)."""
        if not v.startswith(("http://", "https://")):
            msg = f"base_url must start with http:// or https://, got: {v}"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("submit_path", "status_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate endpoint paths are absolute."""
        if not v.startswith("/"):
            msg = f"endpoint path must start with '/', got: {v}"
            raise ValueError(msg)
        return v

    @property
    def submit_url(self) -> str:
        """Full URL of the submission endpoint."""
        return f"{self.base_url}{self.submit_path}"

    @property
    def status_url(self) -> str:
        """Full URL of the status endpoint."""
        return f"{self.base_url}{self.status_path}"
