"""CLI entry point for swc.

Uploads one source file to the SecurityWorker compiler service, waits for
the remote compile to finish and writes ``<job>.js`` to the output
directory.
"""

from __future__ import annotations

import asyncio
from typing import Any

import click
import rich_click as rclick
from pydantic import ValidationError as PydanticValidationError
from swc_client.config import DEFAULT_BASE_URL, CompilerServiceConfig, PollConfig
from swc_client.errors import InputError
from swc_client.models import RunOutcome, RunStatus
from swc_client.observability import configure_logging
from swc_client.workflow import EVENT_SUBMITTED, EVENT_UPLOADING, run_compile

from swc_cli import __version__
from swc_cli.errors import (
    EXIT_SUCCESS,
    exit_code_for,
    handle_input_error,
    handle_validation_error,
    handle_write_error,
)
from swc_cli.output import error, info, set_no_color, success, warning

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _report_progress(event: str, fields: dict[str, Any]) -> None:
    if event == EVENT_UPLOADING:
        info("Uploading code to SecurityWorker compiler server...")
    elif event == EVENT_SUBMITTED:
        info(f"Upload successful, compiling {fields['job_id']}...")


def _report_outcome(outcome: RunOutcome) -> None:
    if outcome.status is RunStatus.DONE and outcome.artifact is not None:
        success(f"Code written to {outcome.artifact.path}")
    elif outcome.status is RunStatus.TIMED_OUT:
        warning(
            f"Gave up waiting for {outcome.job_id} after {outcome.polls} status checks"
            + (f": {outcome.error}" if outcome.error else "")
        )
    else:
        error(outcome.error or "Compiler service rejected the request")


@click.command(cls=rclick.RichCommand)
@click.version_option(version=__version__, prog_name="swc")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.argument("file_path", metavar="FILE", type=click.Path(), required=False)
@click.option(
    "--endpoint",
    "endpoint",
    type=str,
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="Compiler service base URL.",
)
@click.option(
    "-o",
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False),
    default=".",
    help="Directory for the compiled file [default: .]",
)
@click.option(
    "--max-polls",
    "max_polls",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many status checks [default: unlimited]",
)
@click.option(
    "--max-duration",
    "max_duration",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Stop polling after this many seconds [default: unlimited]",
)
@click.option(
    "--fail-on-remote-error",
    is_flag=True,
    default=False,
    help="Exit with status 3 when the service rejects the upload.",
)
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level for client log events.",
)
def cli(
    file_path: str | None,
    endpoint: str,
    output_dir: str,
    max_polls: int | None,
    max_duration: float | None,
    fail_on_remote_error: bool,
    log_level: str,
) -> None:
    """SecurityWorker compiler client.

    Uploads FILE to the compiler service, polls until the compiled code is
    ready and writes it to `<job>.js`.

    Status polling has no limit unless `--max-polls` or `--max-duration`
    is given. A rejected upload exits 0 unless `--fail-on-remote-error`
    is set.

    Examples:

        swc main.js

        swc main.js --output-dir dist/ --max-duration 600
    """
    configure_logging(log_level=log_level, json_format=False, add_timestamp=False)

    if file_path is None:
        handle_input_error(InputError("", "File not found: no FILE given"))

    try:
        config = CompilerServiceConfig(
            base_url=endpoint,
            output_dir=output_dir,
            poll=PollConfig(max_polls=max_polls, max_duration_seconds=max_duration),
        )
    except PydanticValidationError as err:
        handle_validation_error(err)

    try:
        outcome = asyncio.run(run_compile(file_path, config, on_event=_report_progress))
    except InputError as err:
        handle_input_error(err)
    except OSError as err:
        handle_write_error(err, output_dir)

    _report_outcome(outcome)

    code = exit_code_for(outcome, fail_on_remote_error=fail_on_remote_error)
    if code != EXIT_SUCCESS:
        raise SystemExit(code)


if __name__ == "__main__":
    cli()
