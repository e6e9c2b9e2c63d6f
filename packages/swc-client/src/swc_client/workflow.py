"""End-to-end compile run: read, submit, poll, write.

The run returns a RunOutcome for every remote result, so callers decide
what a rejected submission or an abandoned poll means for them. Only a
missing or unreadable input file raises, and it does so before any
network activity.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx

from swc_client.artifacts import read_source, write_artifact
from swc_client.client import CompilerClient
from swc_client.config import CompilerServiceConfig
from swc_client.errors import RemoteError, ServiceConnectionError
from swc_client.models import RunOutcome, RunStatus
from swc_client.observability import get_logger
from swc_client.poller import SleepFunc, poll_until_done

EventCallback = Callable[[str, dict[str, Any]], None]

# Progress events passed to on_event
EVENT_UPLOADING = "uploading"
EVENT_SUBMITTED = "submitted"
EVENT_ARTIFACT_WRITTEN = "artifact_written"


def _emit(on_event: EventCallback | None, name: str, **fields: Any) -> None:
    if on_event is not None:
        on_event(name, fields)


async def run_compile(
    path: str | Path,
    config: CompilerServiceConfig | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    sleep: SleepFunc = asyncio.sleep,
    on_event: EventCallback | None = None,
) -> RunOutcome:
    """Compile one source file through the remote service.

    Args:
        path: Source file to compile.
        config: Service configuration (defaults apply when omitted).
        transport: Optional httpx transport for the client.
        sleep: Coroutine used for the delay between pending polls.
        on_event: Optional progress callback ``(event, fields)``.

    Returns:
        RunOutcome with status DONE, REMOTE_ERROR or TIMED_OUT.

    Raises:
        InputError: The source file is missing or unreadable.

    Example:
        >>> outcome = asyncio.run(run_compile("main.js"))
        >>> outcome.artifact.path
        PosixPath('job42.js')
    """
    cfg = config or CompilerServiceConfig()
    log = get_logger()

    payload = read_source(path)

    async with CompilerClient(cfg, transport=transport) as client:
        _emit(on_event, EVENT_UPLOADING, url=cfg.submit_url)
        try:
            submission = await client.submit(payload)
        except (RemoteError, ServiceConnectionError) as exc:
            log.error("submit_failed", error=str(exc))
            return RunOutcome(status=RunStatus.REMOTE_ERROR, error=exc.message)

        job_id = submission.job_id
        _emit(on_event, EVENT_SUBMITTED, job_id=job_id)

        polled = await poll_until_done(client, job_id, cfg.poll, sleep=sleep)

    if polled.status is RunStatus.TIMED_OUT or polled.result is None:
        return RunOutcome(
            status=RunStatus.TIMED_OUT,
            job_id=job_id,
            error=polled.last_error,
            polls=polled.polls,
        )

    artifact = write_artifact(job_id, polled.result.artifact or "", cfg.output_dir)
    _emit(on_event, EVENT_ARTIFACT_WRITTEN, job_id=job_id, path=str(artifact.path))
    return RunOutcome(
        status=RunStatus.DONE,
        job_id=job_id,
        artifact=artifact,
        polls=polled.polls,
    )
