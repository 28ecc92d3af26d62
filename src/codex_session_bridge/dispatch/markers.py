"""Conversation id extraction from codex output.

codex announces the conversation it created on standard error, on a line of
the form ``conversation id: <token>``.  The format is not a documented
contract of the executable, so all knowledge of it lives here.
"""
from __future__ import annotations

import re

CONVERSATION_ID_PATTERN = re.compile(r"\bconversation id:[ \t]*(\S+)", re.IGNORECASE)


def extract_conversation_id(text: str) -> str | None:
    """Return the conversation id announced in ``text``, or None.

    The marker is matched case-insensitively.  The id is the run of
    non-whitespace characters after the marker on the same line.  When the
    marker appears more than once, the last announcement wins.
    """
    if not text:
        return None
    matches = CONVERSATION_ID_PATTERN.findall(text)
    return matches[-1] if matches else None


__all__ = ["CONVERSATION_ID_PATTERN", "extract_conversation_id"]
