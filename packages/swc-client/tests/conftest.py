"""Shared test fixtures for swc-client tests.

Provides configs with zero retry backoff pointed at the scripted
compiler service, a recording sleep, a source file to submit and a
buffer receiving client log output.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from swc_client.config import CompilerServiceConfig, PollConfig, RetryConfig
from swc_client.observability import configure_logging
from testing.fixtures.compiler_service import BASE_URL, RecordingSleep


@pytest.fixture
def fast_retry() -> RetryConfig:
    """Retry policy with default attempts and timeouts but no backoff."""
    return RetryConfig(initial_wait_seconds=0.0, max_wait_seconds=0.0, jitter_seconds=0.0)


@pytest.fixture
def service_config(fast_retry: RetryConfig, tmp_path: Path) -> CompilerServiceConfig:
    """Service config pointing at the scripted service, writing into tmp_path."""
    return CompilerServiceConfig(
        base_url=BASE_URL,
        output_dir=str(tmp_path),
        retry=fast_retry,
        poll=PollConfig(),
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """A small source file to submit."""
    path = tmp_path / "main.js"
    path.write_text("console.log('hello');\n")
    return path


@pytest.fixture
def log_stream() -> io.StringIO:
    """Route client log events at DEBUG level into a buffer."""
    stream = io.StringIO()
    configure_logging(log_level="DEBUG", json_format=True, add_timestamp=False, stream=stream)
    return stream
