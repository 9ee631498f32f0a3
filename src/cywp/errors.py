"""Error types for cywp.

All errors inherit from CywpError for easy catching at framework level.
Configuration problems, failed commands and failed launches are separate
classes so callers never need to match on message text.
"""

from __future__ import annotations

from collections.abc import Sequence


class CywpError(Exception):
    """Base class for all cywp errors."""

    pass


class ConfigurationError(CywpError):
    """Raised when resource options are missing or malformed.

    Raised before any process is spawned.
    """

    def __init__(
        self,
        message: str,
        example: str | None = None,
        option: str | None = None,
    ) -> None:
        self.message = message
        self.example = example
        self.option = option
        if example:
            message = f"{message}\nexample:\n{example}"
        super().__init__(message)


class ExecutionError(CywpError):
    """Raised when the container runtime exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        args: Sequence[str] = (),
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = list(args)  # Named command to avoid collision with Exception.args
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)

    @classmethod
    def from_result(
        cls,
        args: Sequence[str],
        returncode: int,
        stdout: str,
        stderr: str,
    ) -> ExecutionError:
        """Build the error for a finished process, using stderr as the message."""
        message = stderr if stderr else f"Command exited with code {returncode}"
        return cls(message, args=args, returncode=returncode, stdout=stdout, stderr=stderr)


class OutputError(ExecutionError):
    """Raised when a command succeeded but its output cannot be used."""

    pass


class LaunchError(CywpError):
    """Raised when the container runtime executable cannot be started."""

    def __init__(self, executable: str, cause: Exception | None = None) -> None:
        self.executable = executable
        self.cause = cause
        msg = f"Cannot launch '{executable}'"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)
