"""Storage backend subpackage.

All backends implement the ``AsyncStorageBackend`` ABC and exchange raw
UTF-8 payloads keyed by session ID.

Public surface
--------------
- AsyncStorageBackend  — abstract base class
- AsyncInMemoryBackend — dict-backed ephemeral storage (the default)
- AsyncSQLiteBackend   — aiosqlite-backed file storage (used by the CLI)
"""
from __future__ import annotations

from codex_session_bridge.storage.async_base import AsyncStorageBackend
from codex_session_bridge.storage.async_memory import AsyncInMemoryBackend
from codex_session_bridge.storage.async_sqlite import AsyncSQLiteBackend

__all__ = [
    "AsyncInMemoryBackend",
    "AsyncSQLiteBackend",
    "AsyncStorageBackend",
]
