"""Async SQLite session storage backend built on aiosqlite.

Used by the CLI so that sessions survive between separate
``codex-session-bridge`` invocations.

Classes
-------
- AsyncSQLiteBackend  — aiosqlite-backed async session storage
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Sequence

import aiosqlite

from codex_session_bridge.storage.async_base import AsyncStorageBackend

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH: Path = Path.home() / ".codex-session-bridge" / "sessions.db"

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS bridge_sessions (
    session_id TEXT PRIMARY KEY,
    payload    TEXT NOT NULL,
    saved_at   TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
)
"""

_UPSERT_SQL = """
INSERT INTO bridge_sessions (session_id, payload, saved_at)
VALUES (?, ?, strftime('%Y-%m-%d %H:%M:%f', 'now'))
ON CONFLICT(session_id) DO UPDATE SET
    payload  = excluded.payload,
    saved_at = excluded.saved_at
"""


class AsyncSQLiteBackend(AsyncStorageBackend):
    """Persists session payloads in a local SQLite file.

    Parameters
    ----------
    db_path:
        Path to the SQLite file.  Defaults to
        ``~/.codex-session-bridge/sessions.db``.  The parent directory and
        table are created on first use.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        self._db_path: Path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH
        self._schema_initialised = False

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _connect(self) -> AsyncIterator[aiosqlite.Connection]:
        if not self._schema_initialised:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(str(self._db_path)) as conn:
            if not self._schema_initialised:
                await conn.execute("PRAGMA journal_mode=WAL")
                await conn.execute(_CREATE_TABLE_SQL)
                await conn.commit()
                self._schema_initialised = True
                logger.debug("AsyncSQLiteBackend: initialised schema at %s", self._db_path)
            yield conn

    # ------------------------------------------------------------------
    # AsyncStorageBackend interface
    # ------------------------------------------------------------------

    async def save(self, session_id: str, payload: str) -> None:
        async with self._connect() as conn:
            await conn.execute(_UPSERT_SQL, (session_id, payload))
            await conn.commit()

    async def load(self, session_id: str) -> str:
        async with self._connect() as conn:
            async with conn.execute(
                "SELECT payload FROM bridge_sessions WHERE session_id = ?", (session_id,)
            ) as cursor:
                row = await cursor.fetchone()
        if row is None:
            raise KeyError(f"Session {session_id!r} not found in AsyncSQLiteBackend.")
        return str(row[0])

    async def list_sessions(self) -> Sequence[str]:
        """Return session IDs, most recently saved first."""
        async with self._connect() as conn:
            async with conn.execute(
                "SELECT session_id FROM bridge_sessions ORDER BY saved_at DESC"
            ) as cursor:
                rows = await cursor.fetchall()
        return [str(row[0]) for row in rows]

    async def delete(self, session_id: str) -> bool:
        async with self._connect() as conn:
            cursor = await conn.execute(
                "DELETE FROM bridge_sessions WHERE session_id = ?", (session_id,)
            )
            await conn.commit()
        return cursor.rowcount > 0

    async def exists(self, session_id: str) -> bool:
        async with self._connect() as conn:
            async with conn.execute(
                "SELECT 1 FROM bridge_sessions WHERE session_id = ?", (session_id,)
            ) as cursor:
                row = await cursor.fetchone()
        return row is not None

    def __repr__(self) -> str:
        return f"AsyncSQLiteBackend(db_path={str(self._db_path)!r})"


__all__ = ["AsyncSQLiteBackend", "DEFAULT_DB_PATH"]
