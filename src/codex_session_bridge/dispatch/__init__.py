"""Command dispatch subpackage.

Public surface
--------------
- CommandDispatcher        — session-aware dispatcher
- InvocationRequest        — validated request model
- build_argument_vector    — pure argument assembly
- extract_conversation_id  — conversation id marker parsing
"""
from __future__ import annotations

from codex_session_bridge.dispatch.arguments import (
    CODEX_COMMAND,
    DEFAULT_MODEL,
    SKIP_GIT_REPO_CHECK_FLAG,
    build_argument_vector,
)
from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.dispatch.markers import extract_conversation_id
from codex_session_bridge.dispatch.request import InvocationRequest

__all__ = [
    "CODEX_COMMAND",
    "DEFAULT_MODEL",
    "SKIP_GIT_REPO_CHECK_FLAG",
    "CommandDispatcher",
    "InvocationRequest",
    "build_argument_vector",
    "extract_conversation_id",
]
