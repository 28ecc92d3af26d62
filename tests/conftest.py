"""Shared fixtures for codex-session-bridge tests.

``RecordingRunner`` stands in for the codex executable: it records every
call and replays queued results, so no process is ever spawned.
"""
from __future__ import annotations

from typing import Sequence

import pytest

from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.execution.runner import ExecutionResult
from codex_session_bridge.session.store import SessionStore
from codex_session_bridge.storage.async_memory import AsyncInMemoryBackend


class RecordingRunner:
    """Fake ``CommandRunner`` that records calls and replays results."""

    def __init__(self, stdout: str = "Test response", stderr: str = "") -> None:
        self.default = ExecutionResult(stdout=stdout, stderr=stderr)
        self.calls: list[tuple[str, list[str]]] = []
        self.error: Exception | None = None
        self._queued: list[ExecutionResult] = []

    def queue(self, stdout: str = "", stderr: str = "") -> None:
        """Return this result from the next call only."""
        self._queued.append(ExecutionResult(stdout=stdout, stderr=stderr))

    async def run(self, command: str, args: Sequence[str]) -> ExecutionResult:
        self.calls.append((command, list(args)))
        if self.error is not None:
            raise self.error
        if self._queued:
            return self._queued.pop(0)
        return self.default

    @property
    def last_args(self) -> list[str]:
        return self.calls[-1][1]

    def clear(self) -> None:
        self.calls.clear()


@pytest.fixture()
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture()
def backend() -> AsyncInMemoryBackend:
    return AsyncInMemoryBackend()


@pytest.fixture()
def store(backend: AsyncInMemoryBackend) -> SessionStore:
    return SessionStore(backend)


@pytest.fixture()
def dispatcher(store: SessionStore, runner: RecordingRunner) -> CommandDispatcher:
    return CommandDispatcher(store, runner)
