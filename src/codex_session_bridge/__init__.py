"""codex-session-bridge — session-aware dispatch of the codex CLI.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import codex_session_bridge
>>> codex_session_bridge.__version__
'0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

# Errors
from codex_session_bridge.errors import (
    BridgeError,
    ConfigError,
    CorruptSessionError,
    ExecutionError,
    SessionNotFoundError,
    UnknownToolError,
    ValidationError,
)

# Session core
from codex_session_bridge.session.state import ConversationSession
from codex_session_bridge.session.serializer import SchemaVersionError, SessionSerializer
from codex_session_bridge.session.store import SessionStore

# Storage backends
from codex_session_bridge.storage.async_base import AsyncStorageBackend
from codex_session_bridge.storage.async_memory import AsyncInMemoryBackend
from codex_session_bridge.storage.async_sqlite import AsyncSQLiteBackend

# Execution
from codex_session_bridge.execution.runner import (
    CommandRunner,
    ExecutionResult,
    SubprocessRunner,
)

# Dispatch
from codex_session_bridge.dispatch.arguments import (
    CODEX_COMMAND,
    DEFAULT_MODEL,
    build_argument_vector,
)
from codex_session_bridge.dispatch.dispatcher import CommandDispatcher
from codex_session_bridge.dispatch.markers import extract_conversation_id
from codex_session_bridge.dispatch.request import InvocationRequest

# Tool-call surface
from codex_session_bridge.tools.handlers import ToolHandler, ToolRegistry, build_default_registry

# Configuration and convenience
from codex_session_bridge.config import BridgeConfig
from codex_session_bridge.convenience import Codex

__all__ = [
    "__version__",
    # Errors
    "BridgeError",
    "ConfigError",
    "CorruptSessionError",
    "ExecutionError",
    "SchemaVersionError",
    "SessionNotFoundError",
    "UnknownToolError",
    "ValidationError",
    # Session core
    "ConversationSession",
    "SessionSerializer",
    "SessionStore",
    # Storage
    "AsyncInMemoryBackend",
    "AsyncSQLiteBackend",
    "AsyncStorageBackend",
    # Execution
    "CommandRunner",
    "ExecutionResult",
    "SubprocessRunner",
    # Dispatch
    "CODEX_COMMAND",
    "DEFAULT_MODEL",
    "CommandDispatcher",
    "InvocationRequest",
    "build_argument_vector",
    "extract_conversation_id",
    # Tools
    "ToolHandler",
    "ToolRegistry",
    "build_default_registry",
    # Config / convenience
    "BridgeConfig",
    "Codex",
]
