"""Session management subpackage.

Public surface
--------------
- ConversationSession — caller session bound to a codex conversation id
- SessionStore        — create / look up / update sessions
- SessionSerializer   — storage payload codec and JSON/YAML export
- SchemaVersionError  — unsupported stored schema version
"""
from __future__ import annotations

from codex_session_bridge.session.serializer import SchemaVersionError, SessionSerializer
from codex_session_bridge.session.state import ConversationSession
from codex_session_bridge.session.store import SessionStore

__all__ = [
    "ConversationSession",
    "SchemaVersionError",
    "SessionSerializer",
    "SessionStore",
]
