"""Tool-call surface subpackage.

Public surface
--------------
- ToolHandler            — base class for tools
- ToolRegistry           — name -> handler lookup
- build_default_registry — codex, create_session, list_sessions, ping, help
"""
from __future__ import annotations

from codex_session_bridge.tools.handlers import (
    CodexToolHandler,
    CreateSessionHandler,
    HelpHandler,
    ListSessionsHandler,
    PingHandler,
    ToolHandler,
    ToolRegistry,
    build_default_registry,
)

__all__ = [
    "CodexToolHandler",
    "CreateSessionHandler",
    "HelpHandler",
    "ListSessionsHandler",
    "PingHandler",
    "ToolHandler",
    "ToolRegistry",
    "build_default_registry",
]
