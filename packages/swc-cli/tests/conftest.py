"""Shared test fixtures for swc-cli tests.

Provides CliRunner fixtures and a hook that points the CLI's compile run
at the scripted compiler service.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from swc_client.config import RetryConfig
from swc_client.workflow import run_compile
from testing.fixtures.compiler_service import RecordingSleep, ScriptedService


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def source_file(isolated_runner: CliRunner) -> Path:
    """Create main.js in the isolated filesystem."""
    path = Path("main.js")
    path.write_text("console.log('hello');\n")
    return path


@pytest.fixture
def use_service(monkeypatch: pytest.MonkeyPatch) -> Callable[[ScriptedService], RecordingSleep]:
    """Route the CLI's compile run through a scripted service.

    The CLI's retry policy is swapped for one without backoff.

    Returns:
        Function installing the service; it returns the sleep recorder used
        for pending polls.
    """
    no_backoff = RetryConfig(initial_wait_seconds=0.0, max_wait_seconds=0.0, jitter_seconds=0.0)

    def _install(service: ScriptedService) -> RecordingSleep:
        sleep = RecordingSleep()

        def _run(path: Any, config: Any, **kwargs: Any) -> Any:
            config = config.model_copy(update={"retry": no_backoff})
            return run_compile(path, config, transport=service.transport, sleep=sleep, **kwargs)

        monkeypatch.setattr("swc_cli.main.run_compile", _run)
        return sleep

    return _install
