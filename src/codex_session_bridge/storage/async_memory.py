"""Async in-memory session storage backend.

The default backend for the dispatcher: sessions live in a dict owned by
the backend instance and disappear with it.  Durability is not a
requirement of the bridge, so this is what ``SessionStore`` uses unless a
different backend is injected.

Classes
-------
- AsyncInMemoryBackend  — dict-backed ephemeral async storage
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from codex_session_bridge.storage.async_base import AsyncStorageBackend


class AsyncInMemoryBackend(AsyncStorageBackend):
    """Ephemeral async storage backed by a Python dict.

    Individual operations hold an ``asyncio.Lock``.  The lock does not span
    a caller's load-then-save sequence.

    Parameters
    ----------
    initial_data:
        Optional mapping of session IDs to raw payloads.  Copied, never
        mutated.
    """

    def __init__(self, initial_data: dict[str, str] | None = None) -> None:
        self._payloads: dict[str, str] = dict(initial_data or {})
        self._lock = asyncio.Lock()

    async def save(self, session_id: str, payload: str) -> None:
        async with self._lock:
            self._payloads[session_id] = payload

    async def load(self, session_id: str) -> str:
        async with self._lock:
            try:
                return self._payloads[session_id]
            except KeyError:
                raise KeyError(
                    f"Session {session_id!r} not found in AsyncInMemoryBackend."
                ) from None

    async def list_sessions(self) -> Sequence[str]:
        """Return stored session IDs in insertion order."""
        async with self._lock:
            return list(self._payloads)

    async def delete(self, session_id: str) -> bool:
        async with self._lock:
            return self._payloads.pop(session_id, None) is not None

    async def exists(self, session_id: str) -> bool:
        async with self._lock:
            return session_id in self._payloads

    async def clear(self) -> None:
        """Drop every stored session."""
        async with self._lock:
            self._payloads.clear()

    def __len__(self) -> int:
        return len(self._payloads)

    def __repr__(self) -> str:
        return f"AsyncInMemoryBackend(sessions={len(self._payloads)})"


__all__ = ["AsyncInMemoryBackend"]
