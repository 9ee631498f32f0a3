"""Test fixtures for cywp."""

import asyncio
from typing import Any

import pytest


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process with canned output."""

    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self._final_returncode = returncode
        self.returncode: int | None = None
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        self.returncode = self._final_returncode
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True

    async def wait(self) -> int:
        return self._final_returncode


class FakeRuntime:
    """Records spawned commands and answers with a queued FakeProcess."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.kwargs: list[dict[str, Any]] = []
        self._responses: list[FakeProcess] = []

    def respond(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> FakeProcess:
        process = FakeProcess(stdout=stdout, stderr=stderr, returncode=returncode)
        self._responses.append(process)
        return process

    async def create_subprocess_exec(self, *args: str, **kwargs: Any) -> FakeProcess:
        self.calls.append(list(args))
        self.kwargs.append(kwargs)
        if self._responses:
            return self._responses.pop(0)
        return FakeProcess()


@pytest.fixture
def fake_runtime(monkeypatch: pytest.MonkeyPatch) -> FakeRuntime:
    """Replace process spawning with a recorder."""
    runtime = FakeRuntime()
    monkeypatch.setattr(asyncio, "create_subprocess_exec", runtime.create_subprocess_exec)
    return runtime
