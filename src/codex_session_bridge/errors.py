"""Exception hierarchy for codex-session-bridge.

Every error raised deliberately by the bridge derives from ``BridgeError``
so that callers can catch the whole family in one place.  Each concrete
error also inherits from the closest built-in exception so that generic
handlers (``except KeyError``) keep working.

Classes
-------
- BridgeError           — root of the hierarchy
- ValidationError       — malformed invocation request
- SessionNotFoundError  — unknown session identifier
- ExecutionError        — the external command failed
- UnknownToolError      — tool-call surface lookup failure
- CorruptSessionError   — unreadable stored session payload
- ConfigError           — unreadable or invalid configuration
"""
from __future__ import annotations

from typing import Sequence


class BridgeError(Exception):
    """Base class for all codex-session-bridge errors."""


class ValidationError(BridgeError, ValueError):
    """Raised when an invocation request fails validation.

    Raised before any session lookup or subprocess execution, so an invalid
    request never has side effects.

    Parameters
    ----------
    message:
        Human-readable summary.
    errors:
        Optional list of ``(location, message)`` pairs, one per failing
        field.
    """

    def __init__(
        self,
        message: str,
        errors: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        self.errors: list[tuple[str, str]] = list(errors or [])
        super().__init__(message)


class SessionNotFoundError(BridgeError, KeyError):
    """Raised when a requested session does not exist in the store."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session {session_id!r} not found.")

    def __str__(self) -> str:
        return str(self.args[0])


class ExecutionError(BridgeError, RuntimeError):
    """Raised when the external command cannot be run or exits with failure.

    Parameters
    ----------
    message:
        Human-readable summary.
    command:
        The executable that was invoked.
    args:
        The argument vector passed to the executable.
    returncode:
        Process exit status, or None if the process never completed.
    stdout:
        Captured standard output, if any.
    stderr:
        Captured standard error, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        args: Sequence[str] = (),
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.command = command
        self.command_args: list[str] = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class CorruptSessionError(BridgeError, ValueError):
    """Raised when a stored session payload cannot be decoded or fails its checks."""

    def __init__(self, message: str, *, session_id: str | None = None) -> None:
        self.session_id = session_id
        if session_id is not None:
            message = f"Session {session_id!r}: {message}"
        super().__init__(message)


class UnknownToolError(BridgeError, KeyError):
    """Raised when the tool registry has no handler for a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool {name!r}.")

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigError(BridgeError, ValueError):
    """Raised when a configuration source cannot be read or validated."""


__all__ = [
    "BridgeError",
    "ConfigError",
    "CorruptSessionError",
    "ExecutionError",
    "SessionNotFoundError",
    "UnknownToolError",
    "ValidationError",
]
