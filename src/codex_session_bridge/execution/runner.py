"""External command execution.

The dispatcher depends only on the narrow ``CommandRunner`` protocol: run a
named executable with an argument list and hand back its captured output,
or raise ``ExecutionError``.  ``SubprocessRunner`` is the production
implementation; tests substitute a fake.

Classes
-------
- ExecutionResult   — captured stdout/stderr of one run
- CommandRunner     — protocol consumed by the dispatcher
- SubprocessRunner  — asyncio subprocess implementation
"""
from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from codex_session_bridge.errors import ExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """Raw output of one command run."""

    stdout: str
    stderr: str

    def to_dict(self) -> dict[str, str]:
        return {"stdout": self.stdout, "stderr": self.stderr}


class CommandRunner(Protocol):
    """Runs ``command`` with ``args`` and returns its captured output.

    Implementations raise ``ExecutionError`` when the command cannot be
    started or reports failure.
    """

    async def run(self, command: str, args: Sequence[str]) -> ExecutionResult: ...


class SubprocessRunner:
    """Run commands as child processes via ``asyncio.create_subprocess_exec``.

    No shell is involved; ``args`` are passed to the executable verbatim.

    Parameters
    ----------
    cwd:
        Working directory for the child.  Defaults to the current directory.
    env:
        Extra environment variables layered over ``os.environ``.
    timeout:
        Seconds to wait before killing the child and raising
        ``ExecutionError``.  ``None`` waits indefinitely.
    """

    def __init__(
        self,
        cwd: str | os.PathLike[str] | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        self.cwd = cwd
        self.env = dict(env) if env else None
        self.timeout = timeout

    async def run(self, command: str, args: Sequence[str]) -> ExecutionResult:
        argv = list(args)
        env = {**os.environ, **self.env} if self.env else None
        logger.debug("SubprocessRunner: spawning %s with %d args", command, len(argv))

        try:
            process = await asyncio.create_subprocess_exec(
                command,
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.cwd,
                env=env,
            )
        except OSError as exc:
            raise ExecutionError(
                f"Failed to start {command!r}: {exc}",
                command=command,
                args=argv,
            ) from exc

        try:
            raw_out, raw_err = await asyncio.wait_for(process.communicate(), self.timeout)
        except asyncio.TimeoutError:
            await _reap(process)
            raise ExecutionError(
                f"{command!r} timed out after {self.timeout} seconds",
                command=command,
                args=argv,
                returncode=process.returncode,
            ) from None
        except BaseException:
            # Cancelled by the caller: the child must not outlive the call.
            await _reap(process)
            raise

        stdout = raw_out.decode("utf-8", errors="replace")
        stderr = raw_err.decode("utf-8", errors="replace")

        if process.returncode != 0:
            detail = stderr.strip() or stdout.strip() or "no output"
            raise ExecutionError(
                f"{command!r} exited with status {process.returncode}: {detail}",
                command=command,
                args=argv,
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return ExecutionResult(stdout=stdout, stderr=stderr)

    def __repr__(self) -> str:
        return f"SubprocessRunner(cwd={self.cwd!r}, timeout={self.timeout!r})"


async def _reap(process: asyncio.subprocess.Process) -> None:
    """Kill ``process`` if it is still running and wait for it to exit."""
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


__all__ = ["CommandRunner", "ExecutionResult", "SubprocessRunner"]
