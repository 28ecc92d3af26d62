"""Shared bootstrap for codex-session-bridge benchmarks."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
_SRC = _REPO_ROOT / "src"
_BENCHMARKS = _REPO_ROOT / "benchmarks"

for _path in [str(_SRC), str(_BENCHMARKS)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.session.store import SessionStore
from codex_session_bridge.storage.async_memory import AsyncInMemoryBackend

__all__ = ["CommandDispatcher", "SessionStore", "AsyncInMemoryBackend"]
