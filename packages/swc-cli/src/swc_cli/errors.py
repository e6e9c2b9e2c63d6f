"""CLI error handling for swc-cli.

This module maps swc-client results and exceptions onto user-facing
messages and process exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError
from swc_client.models import RunOutcome, RunStatus

from swc_cli.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails
    from swc_client.errors import InputError


EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Missing/unreadable input, invalid option values
EXIT_SYSTEM_ERROR = 2  # Artifact could not be written
EXIT_REMOTE_ERROR = 3  # Service rejected the submission (only with --fail-on-remote-error)
EXIT_TIMED_OUT = 4  # Poll cutoff reached before the artifact was ready


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - base_url: Value error, base_url must start with..."
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        msg = e["msg"]
        lines.append(f"  - {loc}: {msg}")

    return "\n".join(lines)


def handle_validation_error(err: PydanticValidationError) -> NoReturn:
    """Handle invalid option combinations rejected by the config models.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(f"Invalid configuration:\n{format_pydantic_error(err)}")


def handle_input_error(err: InputError) -> NoReturn:
    """Handle a missing or unreadable source file.

    Raises:
        CLIError: Always raises with exit code 1.
    """
    raise CLIError(str(err), exit_code=EXIT_USER_ERROR)


def handle_write_error(err: OSError, output_dir: str) -> NoReturn:
    """Handle failure to write the compiled artifact.

    Raises:
        CLIError: Always raises with exit code 2.
    """
    reason = err.strerror or type(err).__name__
    raise CLIError(f"Cannot write to {output_dir}: {reason}", exit_code=EXIT_SYSTEM_ERROR)


def exit_code_for(outcome: RunOutcome, *, fail_on_remote_error: bool = False) -> int:
    """Choose the process exit code for a finished run.

    A rejected submission exits 0 unless ``fail_on_remote_error`` is set.

    Args:
        outcome: Result of the compile run.
        fail_on_remote_error: Treat a remote rejection as a failure.

    Returns:
        Process exit code.
    """
    if outcome.status is RunStatus.DONE:
        return EXIT_SUCCESS
    if outcome.status is RunStatus.TIMED_OUT:
        return EXIT_TIMED_OUT
    return EXIT_REMOTE_ERROR if fail_on_remote_error else EXIT_SUCCESS
