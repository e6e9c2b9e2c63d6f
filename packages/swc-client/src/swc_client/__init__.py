"""swc-client: client for the SecurityWorker remote compiler service.

This package uploads a source file to the compiler service, polls the job
until the compiled artifact is ready and writes it next to the caller:
- Configurable per-request retry and timeouts via tenacity
- Optional cutoff for the otherwise unbounded status poll
- Structured logging via structlog
- OpenTelemetry span tracing

Example:
    >>> import asyncio
    >>> from swc_client import run_compile, CompilerServiceConfig
    >>> outcome = asyncio.run(run_compile("main.js", CompilerServiceConfig()))
    >>> outcome.status
    <RunStatus.DONE: 'done'>
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    # Workflow
    "run_compile",
    # Client and building blocks
    "CompilerClient",
    "poll_until_done",
    "read_source",
    "write_artifact",
    # Configuration models
    "CompilerServiceConfig",
    "PollConfig",
    "RetryConfig",
    # Data models
    "Artifact",
    "PollResult",
    "PollStatus",
    "RunOutcome",
    "RunStatus",
    "SourcePayload",
    "SubmissionResult",
    # Exceptions
    "CompilerServiceError",
    "InputError",
    "MalformedResponseError",
    "PollTransientError",
    "RemoteError",
    "ServiceConnectionError",
]

_LOCATIONS = {
    "run_compile": "swc_client.workflow",
    "CompilerClient": "swc_client.client",
    "poll_until_done": "swc_client.poller",
    "read_source": "swc_client.artifacts",
    "write_artifact": "swc_client.artifacts",
    "CompilerServiceConfig": "swc_client.config",
    "PollConfig": "swc_client.config",
    "RetryConfig": "swc_client.config",
    "Artifact": "swc_client.models",
    "PollResult": "swc_client.models",
    "PollStatus": "swc_client.models",
    "RunOutcome": "swc_client.models",
    "RunStatus": "swc_client.models",
    "SourcePayload": "swc_client.models",
    "SubmissionResult": "swc_client.models",
    "CompilerServiceError": "swc_client.errors",
    "InputError": "swc_client.errors",
    "MalformedResponseError": "swc_client.errors",
    "PollTransientError": "swc_client.errors",
    "RemoteError": "swc_client.errors",
    "ServiceConnectionError": "swc_client.errors",
}


def __getattr__(name: str) -> object:
    """Lazy import of public API members."""
    module_name = _LOCATIONS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
