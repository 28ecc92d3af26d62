"""External command execution subpackage.

Public surface
--------------
- CommandRunner     — protocol the dispatcher depends on
- ExecutionResult   — captured stdout/stderr
- SubprocessRunner  — asyncio subprocess implementation
"""
from __future__ import annotations

from codex_session_bridge.execution.runner import (
    CommandRunner,
    ExecutionResult,
    SubprocessRunner,
)

__all__ = ["CommandRunner", "ExecutionResult", "SubprocessRunner"]
