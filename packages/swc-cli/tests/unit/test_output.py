"""Unit tests for swc_cli.output module."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from swc_cli import output


@pytest.fixture
def plain_console() -> Iterator[None]:
    """Swap in a colorless console for the duration of a test."""
    original_console = output.console
    output.console = output.create_console(no_color=True)
    try:
        yield
    finally:
        output.console = original_console


class TestCreateConsole:
    """Tests for create_console function."""

    def test_create_console_no_color(self) -> None:
        console = output.create_console(no_color=True)
        assert console.no_color is True


@pytest.mark.usefixtures("plain_console")
class TestMessages:
    """Tests for the message helpers."""

    def test_success_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.success("Code written to job42.js")
        captured = capsys.readouterr()
        assert "Code written to job42.js" in captured.out
        assert "✓" in captured.out

    def test_error_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.error("request status error: 500")
        captured = capsys.readouterr()
        assert "request status error: 500" in captured.out
        assert "✗" in captured.out

    def test_warning_message(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.warning("Gave up waiting")
        captured = capsys.readouterr()
        assert "⚠" in captured.out

    def test_remote_body_not_treated_as_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test JSON bodies with brackets are printed verbatim."""
        output.error('request data error: {"data":[1,2],"msg":"[bold]x[/bold]"}')
        captured = capsys.readouterr()
        assert '[bold]x[/bold]' in captured.out


class TestSetNoColor:
    """Tests for set_no_color."""

    def test_replaces_console(self) -> None:
        original_console = output.console
        try:
            output.set_no_color(True)
            assert output.console is not original_console
            assert output.console.no_color is True
        finally:
            output.console = original_console
