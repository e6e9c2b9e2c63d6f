"""Data models for one compile run.

Wire models validate the JSON bodies returned by the compiler service;
the remaining models are the values handed between the run phases and
returned to callers.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Application-level codes returned by the service
CODE_DONE = 0
CODE_PENDING = 1
CODE_FAILED = -1


class SubmitData(BaseModel):
    """``data`` member of a submission response."""

    model_config = ConfigDict(extra="ignore")

    filename: str = Field(..., description="Opaque job identifier")

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Job identifiers become file names, so they must be one path component."""
        if not v or v in (".", "..") or "/" in v or "\\" in v or "\x00" in v:
            msg = f"job identifier is not a valid file name: {v!r}"
            raise ValueError(msg)
        return v


class SubmitResponseBody(BaseModel):
    """Body of ``POST /code``.

    ``data`` is only required when ``code`` is zero; rejected submissions
    may carry anything (or nothing) there.
    """

    model_config = ConfigDict(extra="ignore")

    code: int
    data: Any = None


class StatusResponseBody(BaseModel):
    """Body of ``POST /status``.

    ``data`` holds the compiled artifact text when ``code`` is zero.
    """

    model_config = ConfigDict(extra="ignore")

    code: int
    data: Any = None


class SourcePayload(BaseModel):
    """Source text read from the local file."""

    model_config = ConfigDict(frozen=True)

    path: Path
    text: str


class SubmissionResult(BaseModel):
    """Accepted submission.

    Attributes:
        status_code: HTTP status of the submission response.
        code: Application-level code (always 0 for an accepted submission).
        job_id: Opaque job identifier used for polling and the output name.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    code: int
    job_id: str


class PollStatus(str, Enum):
    """Classification of a single status response."""

    DONE = "done"
    PENDING = "pending"
    FAILED = "failed"
    HTTP_ERROR = "http_error"
    UNKNOWN = "unknown"


class PollResult(BaseModel):
    """Answer to one status check.

    Attributes:
        status: What the answer means for the poll loop.
        status_code: HTTP status of the response.
        code: Application-level code, when the body carried one.
        artifact: Compiled output, only set when ``status`` is DONE.
        body: Raw response text, kept for logging.
    """

    model_config = ConfigDict(frozen=True)

    status: PollStatus
    status_code: int
    code: int | None = None
    artifact: str | None = None
    body: str = ""

    @property
    def is_terminal(self) -> bool:
        """Whether this answer ends the poll loop."""
        return self.status is PollStatus.DONE


class Artifact(BaseModel):
    """Compiled output written to disk."""

    model_config = ConfigDict(frozen=True)

    job_id: str
    path: Path
    content: str


class RunStatus(str, Enum):
    """Terminal state of a compile run."""

    DONE = "done"
    REMOTE_ERROR = "remote_error"
    TIMED_OUT = "timed_out"


class RunOutcome(BaseModel):
    """Result of :func:`swc_client.workflow.run_compile`.

    Attributes:
        status: Terminal state reached.
        job_id: Job identifier, once the submission was accepted.
        artifact: Written artifact, only when ``status`` is DONE.
        error: Human-readable reason for REMOTE_ERROR or TIMED_OUT.
        polls: Number of status checks performed.
    """

    model_config = ConfigDict(frozen=True)

    status: RunStatus
    job_id: str | None = None
    artifact: Artifact | None = None
    error: str | None = None
    polls: int = 0

    @property
    def succeeded(self) -> bool:
        """Whether the artifact was produced."""
        return self.status is RunStatus.DONE
