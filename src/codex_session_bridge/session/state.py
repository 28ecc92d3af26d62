"""Session state domain model.

A ``ConversationSession`` binds one caller-visible session identifier to
the conversation identifier issued by the ``codex`` executable.  The type
is a Pydantic BaseModel so that it can be validated, serialised and
checksummed when it passes through a storage backend.

Classes
-------
- ConversationSession  — one logical multi-turn conversation
"""
from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from typing import ClassVar
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ConversationSession(BaseModel):
    """One logical multi-turn conversation as seen by the caller.

    Parameters
    ----------
    session_id:
        Opaque unique identifier generated at creation.  Frozen: assigning
        to it raises ``pydantic.ValidationError``.
    conversation_id:
        The executable's own conversation identifier.  ``None`` until the
        first successful invocation that announces one.
    turn_count:
        Number of successful dispatches made against this session.
    schema_version:
        Storage schema version used for forward/backward compatibility.
    created_at:
        Creation timestamp (UTC).
    updated_at:
        Timestamp of the most recent use (UTC).
    checksum:
        SHA-256 of the session's canonical JSON (excluding this field).
    """

    SCHEMA_VERSION: ClassVar[str] = "1.0"

    session_id: str = Field(default_factory=lambda: str(uuid4()), frozen=True)
    conversation_id: str | None = None
    turn_count: int = Field(default=0, ge=0)
    schema_version: str = "1.0"
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    checksum: str = ""

    model_config = {"frozen": False}

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------

    @property
    def is_resumable(self) -> bool:
        """True once the executable has announced a conversation id."""
        return self.conversation_id is not None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def touch(self) -> None:
        """Record one use of the session."""
        self.turn_count += 1
        self.updated_at = _utcnow()

    def set_conversation_id(self, conversation_id: str | None) -> None:
        """Overwrite (or clear) the conversation id and refresh ``updated_at``."""
        self.conversation_id = conversation_id
        self.updated_at = _utcnow()

    # ------------------------------------------------------------------
    # Checksum
    # ------------------------------------------------------------------

    def _canonical_dict(self) -> dict[str, object]:
        """Return a stable dict suitable for checksum computation.

        The ``checksum`` field itself is excluded to avoid circularity.
        """
        data = self.model_dump(mode="json")
        data.pop("checksum", None)
        return data  # type: ignore[return-value]

    def compute_checksum(self) -> str:
        """Compute, store and return the SHA-256 checksum of this session.

        Returns
        -------
        str
            64-character lowercase hex SHA-256 digest.
        """
        canonical_json = json.dumps(self._canonical_dict(), sort_keys=True)
        digest = hashlib.sha256(canonical_json.encode()).hexdigest()
        self.checksum = digest
        return digest

    def verify_checksum(self) -> bool:
        """Return True if the stored checksum matches the computed one."""
        return self.checksum == self.compute_checksum()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def _ensure_schema_version(self) -> "ConversationSession":
        if not self.schema_version:
            self.schema_version = self.SCHEMA_VERSION
        return self
