"""Status polling loop.

Polls the compiler service for one job until it reports the artifact as
done. Every inconclusive answer (service-side error, non-200 status,
unknown code, transport failure, malformed body) is logged and followed by
another poll; only "still compiling" answers are followed by a delay.

The loop is unbounded by default. ``PollConfig.max_polls`` and
``PollConfig.max_duration_seconds`` turn it into a bounded loop that ends
in the ``timed_out`` state.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from swc_client.config import PollConfig
from swc_client.errors import PollTransientError
from swc_client.models import PollResult, PollStatus, RunStatus
from swc_client.observability import get_logger

if TYPE_CHECKING:
    from swc_client.client import CompilerClient

SleepFunc = Callable[[float], Awaitable[None]]
ClockFunc = Callable[[], float]


class PollOutcome(BaseModel):
    """How the poll loop ended.

    Attributes:
        status: DONE or TIMED_OUT.
        result: The terminal PollResult, only when DONE.
        polls: Number of status checks performed.
        last_error: Most recent inconclusive answer, if any.
    """

    model_config = ConfigDict(frozen=True)

    status: RunStatus
    result: PollResult | None = None
    polls: int = 0
    last_error: str | None = None


def _limit_reached(config: PollConfig, polls: int, elapsed: float) -> bool:
    if config.max_polls is not None and polls >= config.max_polls:
        return True
    return config.max_duration_seconds is not None and elapsed >= config.max_duration_seconds


def _inconclusive(job_id: str, result: PollResult) -> PollTransientError:
    if result.status is PollStatus.FAILED:
        reason = f"request data error: {result.body}"
    elif result.status is PollStatus.HTTP_ERROR:
        reason = f"request status error: {result.status_code}"
    else:
        reason = f"unexpected code {result.code}: {result.body}"
    return PollTransientError(job_id, reason)


async def poll_until_done(
    client: CompilerClient,
    job_id: str,
    config: PollConfig | None = None,
    *,
    sleep: SleepFunc = asyncio.sleep,
    clock: ClockFunc = time.monotonic,
) -> PollOutcome:
    """Poll a job until the service returns its artifact.

    Args:
        client: Client used for status checks.
        job_id: Job identifier from the submission.
        config: Polling policy (defaults to unbounded, 2s pending delay).
        sleep: Coroutine used for the pending delay.
        clock: Monotonic clock used for the duration limit.

    Returns:
        PollOutcome with status DONE, or TIMED_OUT when a configured limit
        was reached first.
    """
    cfg = config or PollConfig()
    log = get_logger().bind(job_id=job_id)
    started = clock()
    polls = 0
    last_error: str | None = None

    while True:
        if _limit_reached(cfg, polls, clock() - started):
            log.warning("poll_timed_out", polls=polls, last_error=last_error)
            return PollOutcome(status=RunStatus.TIMED_OUT, polls=polls, last_error=last_error)

        polls += 1
        try:
            result = await client.check_status(job_id, poll=polls)
        except Exception as exc:  # noqa: BLE001 - any single-poll failure is retried
            last_error = str(exc) or type(exc).__name__
            log.debug("poll_attempt_failed", poll=polls, error=last_error)
            continue

        if result.status is PollStatus.DONE:
            log.info("poll_completed", polls=polls)
            return PollOutcome(status=RunStatus.DONE, result=result, polls=polls)

        if result.status is PollStatus.PENDING:
            await sleep(cfg.interval_seconds)
            continue

        error = _inconclusive(job_id, result)
        last_error = error.reason
        if result.status is PollStatus.UNKNOWN:
            log.warning("poll_unknown_code", poll=polls, code=result.code, body=result.body)
        else:
            log.error(
                "poll_remote_error",
                poll=polls,
                status_code=result.status_code,
                error=error.reason,
            )
