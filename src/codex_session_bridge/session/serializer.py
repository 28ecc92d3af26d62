"""Session payload encoding.

Storage backends only ever see strings.  ``SessionSerializer`` turns a
``ConversationSession`` into the compact JSON payload the store writes, and
turns a stored payload back into a session after checking its envelope:
well-formed JSON object, supported ``schema_version``, valid fields and a
matching checksum.  Any failure surfaces as ``CorruptSessionError`` naming
the session key, so callers never see a raw ``json`` or ``pydantic`` error.

``export`` renders a session as a human-readable JSON or YAML document for
``codex-session-bridge session show``.

Classes
-------
- SchemaVersionError  — payload written by an unsupported schema version
- SessionSerializer   — storage payload codec plus JSON/YAML export
"""
from __future__ import annotations

import json
from typing import Any, Literal

import pydantic
import yaml

from codex_session_bridge.errors import CorruptSessionError
from codex_session_bridge.session.state import ConversationSession

SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({ConversationSession.SCHEMA_VERSION})

ExportFormat = Literal["json", "yaml"]


class SchemaVersionError(CorruptSessionError):
    """Raised when a stored payload declares a schema version we cannot read."""

    def __init__(self, version: str, session_id: str | None = None) -> None:
        self.version = version
        supported = ", ".join(sorted(SUPPORTED_SCHEMA_VERSIONS))
        super().__init__(
            f"Unsupported schema version {version!r} (supported: {supported})",
            session_id=session_id,
        )


class SessionSerializer:
    """Encode sessions for storage and decode them back.

    Parameters
    ----------
    validate_checksum:
        When True (default), ``loads`` rejects payloads whose embedded
        SHA-256 checksum does not match their content.
    """

    def __init__(self, validate_checksum: bool = True) -> None:
        self.validate_checksum = validate_checksum

    def dumps(self, session: ConversationSession) -> str:
        """Stamp a fresh checksum on ``session`` and return its storage payload."""
        session.compute_checksum()
        return json.dumps(session.model_dump(mode="json"), sort_keys=True)

    def loads(self, raw: str, *, session_id: str | None = None) -> ConversationSession:
        """Decode a storage payload.

        Parameters
        ----------
        raw:
            Payload previously produced by ``dumps``.
        session_id:
            Storage key the payload was read from; used in error messages
            and checked against the payload's own ``session_id``.

        Raises
        ------
        SchemaVersionError
            If the payload's ``schema_version`` is not supported.
        CorruptSessionError
            For any other malformed, tampered or mismatched payload.
        """
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CorruptSessionError(f"Payload is not JSON: {exc}", session_id=session_id) from exc
        if not isinstance(data, dict):
            raise CorruptSessionError("Payload is not a JSON object", session_id=session_id)

        version = data.get("schema_version")
        if version not in SUPPORTED_SCHEMA_VERSIONS:
            raise SchemaVersionError(str(version), session_id=session_id)

        try:
            session = ConversationSession.model_validate(data)
        except pydantic.ValidationError as exc:
            raise CorruptSessionError(
                f"Payload fields are invalid: {exc.error_count()} error(s)",
                session_id=session_id,
            ) from exc

        if session_id is not None and session.session_id != session_id:
            raise CorruptSessionError(
                f"Payload belongs to session {session.session_id!r}",
                session_id=session_id,
            )
        if self.validate_checksum and not session.verify_checksum():
            raise CorruptSessionError("Checksum mismatch", session_id=session_id)
        return session

    def export(self, session: ConversationSession, format: ExportFormat = "json") -> str:
        """Render ``session`` for people: indented JSON or block-style YAML."""
        data = session.model_dump(mode="json")
        if format == "yaml":
            return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
        return json.dumps(data, indent=2)


__all__ = ["SUPPORTED_SCHEMA_VERSIONS", "SchemaVersionError", "SessionSerializer"]
