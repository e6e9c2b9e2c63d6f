"""Local file I/O: reading the source and writing the compiled artifact."""

from __future__ import annotations

from pathlib import Path

from swc_client.errors import InputError
from swc_client.models import Artifact, SourcePayload
from swc_client.observability import get_logger

ARTIFACT_SUFFIX = ".js"


def read_source(path: str | Path) -> SourcePayload:
    """Read the source file to submit.

    Bytes that are not valid UTF-8 are replaced rather than rejected.

    Args:
        path: Path to the source file.

    Returns:
        SourcePayload with the file's text.

    Raises:
        InputError: The path is missing, not a regular file, or unreadable.
    """
    source = Path(path)
    if not source.exists():
        raise InputError(str(path))
    if not source.is_file():
        raise InputError(str(path), f"Not a file: {path}")

    try:
        text = source.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise InputError(str(path), f"Cannot read: {path}", cause=exc.strerror) from exc

    return SourcePayload(path=source, text=text)


def artifact_path(job_id: str, output_dir: str | Path = ".") -> Path:
    """Return where the artifact for ``job_id`` is written."""
    return Path(output_dir) / f"{job_id}{ARTIFACT_SUFFIX}"


def write_artifact(job_id: str, content: str, output_dir: str | Path = ".") -> Artifact:
    """Write compiled output to ``<output_dir>/<job_id>.js``.

    An existing file is overwritten, so writing the same content twice
    leaves identical bytes on disk.

    Args:
        job_id: Job identifier the artifact belongs to.
        content: Compiled output text, written verbatim.
        output_dir: Target directory, created if missing.

    Returns:
        Artifact describing the written file.
    """
    target = artifact_path(job_id, output_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8", newline="")
    get_logger().info("artifact_written", job_id=job_id, path=str(target))
    return Artifact(job_id=job_id, path=target, content=content)
