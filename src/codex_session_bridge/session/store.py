"""Session lifecycle management.

Provides ``SessionStore``, the owner of every ``ConversationSession``.  The
store is an ordinary object handed to the dispatcher at construction time;
there is no process-wide registry.

Classes
-------
- SessionStore  — create / look up / update sessions over an async backend
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from codex_session_bridge.errors import SessionNotFoundError
from codex_session_bridge.session.serializer import SessionSerializer
from codex_session_bridge.session.state import ConversationSession
from codex_session_bridge.storage.async_base import AsyncStorageBackend
from codex_session_bridge.storage.async_memory import AsyncInMemoryBackend

logger = logging.getLogger(__name__)


class SessionStore:
    """Create, look up, and update conversation sessions.

    Persistence is delegated to an ``AsyncStorageBackend``; serialisation to
    a ``SessionSerializer``.  Every mutating operation is a load, modify,
    save sequence that is *not* atomic across concurrent callers.

    Parameters
    ----------
    backend:
        Storage backend.  Defaults to a fresh ``AsyncInMemoryBackend``.
    serializer:
        Optional custom serializer.  Defaults to a ``SessionSerializer``
        with checksum validation enabled.
    """

    def __init__(
        self,
        backend: AsyncStorageBackend | None = None,
        serializer: SessionSerializer | None = None,
    ) -> None:
        self._backend = backend if backend is not None else AsyncInMemoryBackend()
        self._serializer = serializer or SessionSerializer()

    @property
    def backend(self) -> AsyncStorageBackend:
        return self._backend

    # ------------------------------------------------------------------
    # Creation and lookup
    # ------------------------------------------------------------------

    async def create_session(self) -> str:
        """Create and persist an empty session.

        Returns
        -------
        str
            The new session's identifier.
        """
        now = datetime.now(timezone.utc)
        session = ConversationSession(created_at=now, updated_at=now)
        await self._save(session)
        logger.debug("SessionStore: created session %r", session.session_id)
        return session.session_id

    async def get_session(self, session_id: str) -> ConversationSession | None:
        """Return the session for ``session_id``, or None if there is none.

        Raises
        ------
        CorruptSessionError
            If the stored payload cannot be decoded or fails its checksum.
        """
        try:
            raw = await self._backend.load(session_id)
        except KeyError:
            return None
        return self._serializer.loads(raw, session_id=session_id)

    async def session_exists(self, session_id: str) -> bool:
        return await self._backend.exists(session_id)

    async def list_sessions(self) -> list[ConversationSession]:
        """Return every stored session, most recently updated first."""
        sessions: list[ConversationSession] = []
        for session_id in await self._backend.list_sessions():
            session = await self.get_session(session_id)
            if session is not None:
                sessions.append(session)
        sessions.sort(key=lambda s: s.updated_at, reverse=True)
        return sessions

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    async def update_conversation_id(self, session_id: str, conversation_id: str) -> None:
        """Set or overwrite the conversation id recorded for ``session_id``.

        Raises
        ------
        SessionNotFoundError
            If ``session_id`` does not exist.
        """
        session = await self._require(session_id)
        previous = session.conversation_id
        session.set_conversation_id(conversation_id)
        await self._save(session)
        if previous != conversation_id:
            logger.debug(
                "SessionStore: session %r conversation id %r -> %r",
                session_id,
                previous,
                conversation_id,
            )

    async def touch(self, session_id: str) -> None:
        """Record one use of ``session_id`` (refreshes ``updated_at``).

        Raises
        ------
        SessionNotFoundError
            If ``session_id`` does not exist.
        """
        session = await self._require(session_id)
        session.touch()
        await self._save(session)

    async def reset_session(self, session_id: str) -> None:
        """Forget the conversation id so the next call starts a new conversation.

        Raises
        ------
        SessionNotFoundError
            If ``session_id`` does not exist.
        """
        session = await self._require(session_id)
        session.set_conversation_id(None)
        await self._save(session)
        logger.debug("SessionStore: reset session %r", session_id)

    async def delete_session(self, session_id: str) -> bool:
        """Remove ``session_id``.  Returns False if it did not exist."""
        deleted = await self._backend.delete(session_id)
        if deleted:
            logger.debug("SessionStore: deleted session %r", session_id)
        return deleted

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _require(self, session_id: str) -> ConversationSession:
        session = await self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def _save(self, session: ConversationSession) -> None:
        await self._backend.save(session.session_id, self._serializer.dumps(session))

    def __repr__(self) -> str:
        return f"SessionStore(backend={self._backend!r})"
