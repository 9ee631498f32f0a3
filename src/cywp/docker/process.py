"""Run the container runtime CLI and collect its output."""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

from cywp.errors import ExecutionError, LaunchError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def find_executable(executable: str) -> str | None:
    """Return the full path of ``executable`` on PATH, or None if missing."""
    return shutil.which(executable)


async def run_process(
    executable: str,
    args: Sequence[str],
    on_complete: Callable[[str, str], T],
    env: dict[str, str] | None = None,
    cwd: Path | str | None = None,
) -> T:
    """Run one process to completion and convert its output.

    Both output streams are read until the process exits and decoded with
    invalid bytes replaced; callers never see partial output. No retries or
    timeouts are applied here.

    Args:
        executable: Program to run (e.g. "docker").
        args: Arguments after the program name.
        on_complete: Called with (stdout, stderr) when the process exits with
            status zero. Its return value is returned.
        env: Full environment for the process. None inherits the current one.
        cwd: Working directory for the process.

    Returns:
        Whatever ``on_complete`` returns.

    Raises:
        LaunchError: If the process could not be started.
        ExecutionError: If the process exited with a non-zero status.
    """
    cmd = [executable, *args]
    logger.debug("Running: %s", cmd)

    # create_subprocess_exec passes arguments verbatim (no shell)
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
            cwd=cwd,
        )
    except OSError as e:
        raise LaunchError(executable, e) from e

    try:
        stdout_bytes, stderr_bytes = await process.communicate()
    except asyncio.CancelledError:
        process.kill()
        await process.wait()
        raise

    returncode = process.returncode
    logger.debug("Process %s exited with code %s", cmd, returncode)

    # Invalid bytes become U+FFFD; the exit code alone decides failure
    stdout = stdout_bytes.decode(errors="replace") if stdout_bytes else ""
    stderr = stderr_bytes.decode(errors="replace") if stderr_bytes else ""

    if returncode != 0:
        logger.warning("Command %s failed with code %s: %s", cmd, returncode, stderr.strip())
        raise ExecutionError.from_result(cmd, returncode, stdout, stderr)

    return on_complete(stdout, stderr)
