"""Unit tests for swc_cli.errors module."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from swc_cli.errors import (
    EXIT_REMOTE_ERROR,
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    EXIT_TIMED_OUT,
    EXIT_USER_ERROR,
    CLIError,
    exit_code_for,
    format_pydantic_error,
    handle_input_error,
    handle_validation_error,
    handle_write_error,
)
from swc_client.errors import InputError
from swc_client.models import Artifact, RunOutcome, RunStatus


class TestCLIError:
    """Tests for CLIError exception."""

    def test_cli_error_message(self) -> None:
        error = CLIError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_cli_error_default_exit_code(self) -> None:
        assert CLIError("Test error").exit_code == EXIT_USER_ERROR

    def test_cli_error_custom_exit_code(self) -> None:
        assert CLIError("Test error", exit_code=EXIT_SYSTEM_ERROR).exit_code == EXIT_SYSTEM_ERROR


class TestFormatPydanticError:
    """Tests for format_pydantic_error function."""

    def test_format_nested_error(self) -> None:
        class NestedModel(BaseModel):
            value: int

        class ParentModel(BaseModel):
            nested: NestedModel

        with pytest.raises(PydanticValidationError) as exc_info:
            ParentModel(nested={"value": "not_an_int"})

        formatted = format_pydantic_error(exc_info.value)
        assert formatted.startswith("Validation failed:")
        assert "nested.value" in formatted

    def test_handle_validation_error(self) -> None:
        class TestModel(BaseModel):
            name: str

        with pytest.raises(PydanticValidationError) as pydantic_exc:
            TestModel()  # type: ignore[call-arg]

        with pytest.raises(CLIError) as exc_info:
            handle_validation_error(pydantic_exc.value)

        assert "Invalid configuration" in str(exc_info.value)
        assert exc_info.value.exit_code == EXIT_USER_ERROR


class TestHandlers:
    """Tests for input and write error handlers."""

    def test_input_error_exits_1(self) -> None:
        with pytest.raises(CLIError) as exc_info:
            handle_input_error(InputError("/does/not/exist"))

        assert exc_info.value.exit_code == EXIT_USER_ERROR
        assert "/does/not/exist" in str(exc_info.value)

    def test_write_error_exits_2(self) -> None:
        with pytest.raises(CLIError) as exc_info:
            handle_write_error(PermissionError(13, "Permission denied"), "dist")

        assert exc_info.value.exit_code == EXIT_SYSTEM_ERROR
        assert "Cannot write to dist: Permission denied" in str(exc_info.value)


class TestExitCodeFor:
    """Tests for mapping run outcomes to exit codes."""

    def test_done(self) -> None:
        outcome = RunOutcome(
            status=RunStatus.DONE,
            job_id="job42",
            artifact=Artifact(job_id="job42", path=Path("job42.js"), content="x"),
        )

        assert exit_code_for(outcome) == EXIT_SUCCESS

    def test_remote_error_is_soft_by_default(self) -> None:
        outcome = RunOutcome(status=RunStatus.REMOTE_ERROR, error="request status error: 500")

        assert exit_code_for(outcome) == EXIT_SUCCESS

    def test_remote_error_opt_in(self) -> None:
        outcome = RunOutcome(status=RunStatus.REMOTE_ERROR, error="request status error: 500")

        assert exit_code_for(outcome, fail_on_remote_error=True) == EXIT_REMOTE_ERROR

    def test_timed_out(self) -> None:
        outcome = RunOutcome(status=RunStatus.TIMED_OUT, job_id="job42", polls=10)

        assert exit_code_for(outcome) == EXIT_TIMED_OUT
