"""Abstract base class for async session storage backends.

Backends move opaque UTF-8 payloads (serialised ``ConversationSession``
documents) in and out of a keyed store.  They know nothing about sessions,
conversation ids, or the dispatcher.

Classes
-------
- AsyncStorageBackend  — abstract base for all async backends
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class AsyncStorageBackend(ABC):
    """Async keyed store for raw session payloads.

    Each method is atomic on its own.  Sequences of calls (load, modify,
    save) are not; callers that need that guarantee must serialise access
    per key themselves.
    """

    @abstractmethod
    async def save(self, session_id: str, payload: str) -> None:
        """Persist ``payload`` under ``session_id``, overwriting any previous value."""

    @abstractmethod
    async def load(self, session_id: str) -> str:
        """Return the payload stored under ``session_id``.

        Raises
        ------
        KeyError
            If no entry exists for ``session_id``.
        """

    @abstractmethod
    async def list_sessions(self) -> Sequence[str]:
        """Return all stored session IDs.  Order is implementation-defined."""

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Remove the entry for ``session_id``.

        Returns
        -------
        bool
            True if the entry existed and was deleted, False otherwise.
        """

    @abstractmethod
    async def exists(self, session_id: str) -> bool:
        """Return True if an entry for ``session_id`` exists."""


__all__ = ["AsyncStorageBackend"]
